"""SQLite persistence for the record saver."""
