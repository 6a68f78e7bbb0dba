"""
Persisted run state for NetLocator.
"""

from .marker import (
    NetworkMarker,
    clear_marker,
    is_throttled,
    marker_age,
    read_marker,
    run_lock,
    touch_marker,
    write_marker,
)

__all__ = [
    "NetworkMarker",
    "clear_marker",
    "is_throttled",
    "marker_age",
    "read_marker",
    "run_lock",
    "touch_marker",
    "write_marker",
]
