"""
Exception types for NetLocator.

Only configuration problems are fatal. Probe and capability failures are
logged and recovered locally, so they rarely surface as exceptions.
"""


class NetLocatorError(Exception):
    """Base class for all NetLocator errors."""


class ConfigError(NetLocatorError):
    """Raised when required classification parameters are missing or invalid."""

