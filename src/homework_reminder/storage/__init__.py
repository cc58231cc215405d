"""Shared key-value namespace backends (SQLite file, in-memory)."""
