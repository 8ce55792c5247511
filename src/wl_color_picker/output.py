"""Writing the picked color to its destinations.

Handles:
- Printing to stdout
- Copying to the clipboard with wl-copy
- Desktop notifications
"""

import logging
import subprocess
from typing import Iterable

from .config import DESTINATIONS, Config, ConfigError

log = logging.getLogger(__name__)

COPIED_CAPTION = "copied to clipboard"
PICKED_CAPTION = "color picked"


class DestinationError(ConfigError):
    """Raised for a destination that is neither stdout nor clipboard."""

    def __init__(self, destination: str):
        super().__init__(f"Invalid destination: {destination}")
        self.destination = destination


class OutputError(Exception):
    """Raised when a destination cannot be written."""
    pass


class NotificationError(Exception):
    """Raised when the desktop notification cannot be shown."""
    pass


def _copy_to_clipboard(text: str, config: Config) -> None:
    """Copy text to the clipboard using wl-copy, without a trailing newline."""
    try:
        subprocess.run([config.wl_copy, "-n"], input=text, text=True, check=True)
    except FileNotFoundError:
        raise OutputError(f"Missing required tools: {config.wl_copy}")
    except subprocess.CalledProcessError as e:
        raise OutputError(f"Failed to copy to clipboard: {config.wl_copy} exited with status {e.returncode}")
    log.debug("Copied to clipboard")


def write_color(text: str, destinations: Iterable[str], config: Config) -> None:
    """Write the color to every destination, in order.

    Earlier destinations are not rolled back when a later one is invalid.

    Raises:
        DestinationError: On an unknown destination
        OutputError: If the clipboard cannot be written
    """
    for destination in destinations:
        if destination not in DESTINATIONS:
            raise DestinationError(destination)
        if destination == "stdout":
            print(text, flush=True)
        else:
            _copy_to_clipboard(text, config)


def notification_body(destinations: Iterable[str]) -> str:
    if "clipboard" in destinations:
        return COPIED_CAPTION
    return PICKED_CAPTION


def show_notification(summary: str, body: str) -> None:
    """Show a desktop notification through libnotify.

    Raises:
        NotificationError: If libnotify is unavailable or the notification fails
    """
    try:
        import gi
        gi.require_version("Notify", "0.7")
        from gi.repository import GLib, Notify
    except (ImportError, ValueError) as e:
        raise NotificationError(f"Desktop notifications unavailable: {e}")

    if not Notify.init("wl-color-picker"):
        raise NotificationError("Could not initialize libnotify")
    notification = Notify.Notification.new(summary, body, "color-select")
    try:
        notification.show()
    except GLib.Error as e:
        raise NotificationError(f"Could not show notification: {e}")


def notify_picked(text: str, destinations: Iterable[str]) -> None:
    """Announce the final color; the summary is the color itself."""
    show_notification(text, notification_body(destinations))
