"""Index domain models."""
