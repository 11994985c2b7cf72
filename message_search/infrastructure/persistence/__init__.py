"""Local SQLite store (engine, schema, repositories)."""
