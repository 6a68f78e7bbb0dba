"""
Location classification for NetLocator.
"""

from .classifier import LocationDecision, Mode, classify, is_ipv4_address

__all__ = [
    "LocationDecision",
    "Mode",
    "classify",
    "is_ipv4_address",
]
