"""Operational tools for managing SocialDB."""
