"""API helpers."""
