"""Execution adapters – in-memory, SQLAlchemy and MongoDB query sources."""
