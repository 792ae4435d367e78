"""Persistence layer: units of work and repositories over the async SQLAlchemy session."""
