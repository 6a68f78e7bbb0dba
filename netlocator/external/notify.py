"""
Desktop notifications for NetLocator.
"""

try:
    import rumps
except ImportError:
    rumps = None

from ..logging_config import get_logger
from ..utils import run_command

# Get module logger
logger = get_logger(__name__)


def _applescript_string(text):
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notify(title, message, subtitle=""):
    """
    Post a user notification.

    Falls back to osascript when rumps is unavailable or cannot post outside
    an application bundle. Returns False if the notification was not shown.
    """
    if rumps is not None:
        try:
            rumps.notification(title=title, subtitle=subtitle, message=message)
            return True
        except Exception as e:
            logger.debug(f"rumps notification failed, trying osascript: {e}")

    script = f"display notification {_applescript_string(message)} with title {_applescript_string(title)}"
    if subtitle:
        script += f" subtitle {_applescript_string(subtitle)}"
    if run_command(["osascript", "-e", script]):
        return True

    logger.warning(f"Could not post notification '{title}'")
    return False
