"""
Exceptions raised by the weather generator.
"""


class WeatherError(Exception):
    """Base class for all weather generator errors."""

    pass


class ConfigError(WeatherError):
    """Raised for an unknown month/terrain key or an invalid location or date."""

    pass


class ParseError(WeatherError):
    """Raised when a dice expression cannot be parsed."""

    pass


class GenerationCancelled(WeatherError):
    """Raised when the user aborts the settings prompt before generation."""

    pass
