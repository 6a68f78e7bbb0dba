"""
Last-known-network marker for NetLocator.

The marker is the only state that survives between invocations. It holds a
single line "<device> <address>", or nothing at all when a restart is
pending. A missing file means there is no prior state; the file may be
deleted by someone else at any time.
"""

import fcntl
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..logging_config import get_logger

# Get module logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class NetworkMarker:
    device: str = ""
    address: str = ""

    @classmethod
    def empty(cls) -> "NetworkMarker":
        """The "restart pending" sentinel."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.device or self.address)

    @classmethod
    def parse(cls, text: str) -> "NetworkMarker":
        fields = text.split()
        if len(fields) != 2:
            if fields:
                logger.warning(f"Ignoring malformed marker contents: {text.strip()!r}")
            return cls.empty()
        return cls(device=fields[0], address=fields[1])

    def serialize(self) -> str:
        return "" if self.is_empty else f"{self.device} {self.address}\n"

    def __str__(self):
        return "(restart pending)" if self.is_empty else f"{self.device} {self.address}"


def read_marker(path: Path) -> Optional[NetworkMarker]:
    """Read the marker, returning None when there is no prior state."""
    try:
        return NetworkMarker.parse(Path(path).read_text())
    except FileNotFoundError:
        logger.debug(f"No marker at {path}")
        return None
    except OSError as e:
        logger.warning(f"Could not read marker {path}: {e}")
        return None


def write_marker(path: Path, marker: NetworkMarker) -> None:
    """Overwrite the marker in a single replace."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(marker.serialize())
    os.replace(tmp_path, path)
    logger.debug(f"Marker written: {marker}")


def touch_marker(path: Path) -> None:
    """Record a run without changing what the marker says."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()


def clear_marker(path: Path) -> bool:
    """Delete the marker so the next run re-applies its decision."""
    try:
        Path(path).unlink()
    except FileNotFoundError:
        return False
    return True


def marker_age(path: Path, now: Optional[float] = None) -> Optional[float]:
    """Seconds since the marker was last written, or None if it is missing."""
    try:
        mtime = Path(path).stat().st_mtime
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning(f"Could not stat marker {path}: {e}")
        return None
    return (time.time() if now is None else now) - mtime


def is_throttled(path: Path, seconds: float, now: Optional[float] = None) -> bool:
    """True when the marker was written less than `seconds` ago."""
    if seconds <= 0:
        return False
    age = marker_age(path, now)
    return age is not None and age < seconds


@contextmanager
def run_lock(path: Path):
    """
    Hold an exclusive, non-blocking lock for the duration of a run.

    Yields True when the lock was acquired and False when another invocation
    holds it. If the lock file cannot be created at all, the run goes ahead
    unlocked and True is yielded.
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handle = open(path, "w")
    except OSError as e:
        logger.warning(f"Could not open run lock {path}, continuing without it: {e}")
        yield True
        return

    with handle:
        try:
            fcntl.flock(handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            yield False
            return
        try:
            yield True
        finally:
            fcntl.flock(handle, fcntl.LOCK_UN)
