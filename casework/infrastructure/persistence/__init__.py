"""Persistence: SQLAlchemy engine and models, SQL and in-memory repositories."""
