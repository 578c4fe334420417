"""Document model tests: placement order, ID uniqueness, update and remove semantics."""
