"""SQL statements and patches for the SocialDB databases."""
