"""Business logic for entities and their private settings."""
