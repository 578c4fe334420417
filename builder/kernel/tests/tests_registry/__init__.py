"""Component registry tests: catalog content, schema consistency, palette grouping."""
