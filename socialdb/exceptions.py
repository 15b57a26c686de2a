class FeatureError(Exception):
    """Raised when a feature is used in an unsupported way."""
