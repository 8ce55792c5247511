"""Region selection and pixel capture.

Uses slurp to let the user point at a pixel and grim piped into the selected
converter to read that pixel back as a hex color. Every function returns an
Outcome; cancellation by the user is not an error.
"""

import logging
import subprocess

from .config import Config
from .converter import ConverterVariant
from .outcome import Outcome

log = logging.getLogger(__name__)

# Fully transparent selection overlay, so the picked pixel is not tinted
OVERLAY_COLOR = "00000000"


def select_region(config: Config) -> Outcome:
    """Ask the user for a point with slurp.

    Returns:
        Outcome with the geometry string, or cancelled if slurp failed or
        printed nothing
    """
    try:
        result = subprocess.run(
            [config.slurp, "-b", OVERLAY_COLOR, "-p"],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return Outcome.failed(f"Region selector not found: {config.slurp}")

    geometry = result.stdout.strip()
    if result.returncode != 0 or not geometry:
        log.debug("Selection cancelled (exit status %d)", result.returncode)
        return Outcome.cancelled()

    log.debug("Selected %s", geometry)
    return Outcome.success(geometry)


def grab_color(geometry: str, converter: ConverterVariant, config: Config) -> Outcome:
    """Capture the selected pixel and convert it to a hex color.

    grim writes a PNG to a pipe read directly by the converter. A non-zero
    exit from either tool is only logged; whatever color could be extracted
    is passed on, even an empty one.

    Returns:
        Outcome with the hex color, or failed if a tool could not be run
    """
    try:
        grabber = subprocess.Popen(
            [config.grim, "-g", geometry, "-t", "png", "-"],
            stdout=subprocess.PIPE,
        )
    except FileNotFoundError:
        return Outcome.failed(f"Screenshot grabber not found: {config.grim}")

    try:
        conversion = subprocess.Popen(
            converter.argv(),
            stdin=grabber.stdout,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
        )
    except FileNotFoundError:
        grabber.kill()
        grabber.wait()
        return Outcome.failed(f"Missing required tools: {converter.command[0]}")
    finally:
        # Let grim see a broken pipe if the converter exits early
        grabber.stdout.close()

    try:
        output, errors = conversion.communicate(timeout=config.capture_timeout)
        grabber.wait(timeout=config.capture_timeout)
    except subprocess.TimeoutExpired:
        conversion.kill()
        grabber.kill()
        conversion.communicate()
        grabber.wait()
        return Outcome.failed("Color capture timed out")

    if grabber.returncode != 0:
        log.warning("%s exited with status %d", config.grim, grabber.returncode)
    if conversion.returncode != 0:
        log.warning("%s failed: %s", converter.command[0], errors.strip())

    color = converter.extract(output)
    log.debug("Captured color %r with %s", color, converter.name)
    return Outcome.success(color)
