"""Utility helpers shared across the Apothecary service."""
