"""Infrastructure: SQLite persistence, recipient cache, permission gate."""
