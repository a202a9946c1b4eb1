"""Persistence layer: async SQLAlchemy engine, models and repositories."""
