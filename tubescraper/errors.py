class TubescraperError(Exception):
    """Base class for errors raised by tubescraper itself."""


class ConfigError(TubescraperError):
    """Invalid run input or settings."""
