"""Redis-backed caching for the model layer."""
