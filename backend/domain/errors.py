"""
Exceptions raised by the game engine.
"""


class ConfigurationError(ValueError):
    """Raised when a board cannot be set up, e.g. too small or too full to place every entity."""
