class InvalidConfiguration(ValueError):
    """Raised when input cannot be turned into a point, duration, or interval."""
