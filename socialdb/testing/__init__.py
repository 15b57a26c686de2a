"""Test resources and doubles for SocialDB."""
