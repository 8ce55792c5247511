"""Interactive color adjustment with zenity."""

import logging
import subprocess

from .color import rgb_to_hex
from .config import Config
from .outcome import Outcome

log = logging.getLogger(__name__)


def adjust_color(color: str, config: Config) -> Outcome:
    """Let the user tweak the sampled color in a zenity color dialog.

    A dialog that exits non-zero was cancelled. One that exits cleanly
    without printing anything leaves the sampled color unchanged.

    Returns:
        Outcome with the (possibly new) hex color
    """
    try:
        result = subprocess.run(
            [
                config.zenity,
                "--color-selection",
                "--title=Adjust Color",
                f"--color={color}",
            ],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return Outcome.failed(f"Color dialog not found: {config.zenity}")

    if result.returncode != 0:
        log.debug("Color dialog cancelled (exit status %d)", result.returncode)
        return Outcome.cancelled()

    rgb = result.stdout.strip()
    if not rgb:
        # Nothing chosen but not cancelled either: keep the sampled color
        return Outcome.success(color)

    adjusted = rgb_to_hex(rgb)
    log.debug("Adjusted %s -> %s (%s)", color, adjusted, rgb)
    return Outcome.success(adjusted)
