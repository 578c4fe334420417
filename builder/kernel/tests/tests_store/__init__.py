"""Store tests: event dispatch, selection coupling, subscriber notification."""
