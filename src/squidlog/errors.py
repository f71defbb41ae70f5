"""Exceptions raised by squidlog."""


class ConfigurationError(ValueError):
    """
    Raised when the logger is misconfigured.

    Examples: setting a level on a sink that was never registered, or a
    config file naming an unknown sink type. These are programming mistakes
    and are never swallowed.
    """
