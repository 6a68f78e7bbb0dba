"""
Utility functions for NetLocator.
"""

from .commands import run_command

__all__ = ["run_command"]
