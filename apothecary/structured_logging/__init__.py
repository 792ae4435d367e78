"""Structured logging for the Apothecary service (structlog over stdlib logging)."""
