"""
NetLocator - work/non-work network location switching for macOS.

Watches for changes in the host's network attachment, classifies the
network as work or non-work, and applies location-specific system settings
once per genuine transition.
"""

__version__ = "0.1.0"
__license__ = "MIT"

from . import config, logging_config

__all__ = ["config", "logging_config"]
