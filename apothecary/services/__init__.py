"""Cross-cutting service helpers."""
