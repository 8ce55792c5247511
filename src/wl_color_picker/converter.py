"""Pixel-format converter selection.

GraphicsMagick and ImageMagick both print the pixel as an X11 style text
descriptor, but with different column layouts. Each supported variant is a
small record holding its command line and the column rule used to pull the
hex color out of the last output line.
"""

import logging
import os
import shutil
from dataclasses import dataclass
from typing import Callable

from .config import Config

log = logging.getLogger(__name__)

PIXEL_FORMAT = "%[pixel:p{0,0}]"


def last_field(line: str) -> str:
    """Last space-separated field (GraphicsMagick layout)."""
    return line.split(" ")[-1]


def fourth_field(line: str) -> str:
    """Fourth space-separated field, empty fields included (ImageMagick layout).

    ``0,0: (18,52,86)  #123456  srgb(18,52,86)`` has an empty third field, so
    the color lands in the fourth one.
    """
    fields = line.split(" ")
    if len(fields) == 1:
        # cut prints lines without the delimiter unchanged
        return line
    if len(fields) < 4:
        return ""
    return fields[3]


@dataclass(frozen=True)
class ConverterVariant:
    """One supported converter and how to read its output."""

    name: str
    command: tuple[str, ...]
    extract_field: Callable[[str], str]

    def argv(self) -> list[str]:
        """Command reading a PNG on stdin and printing the pixel at (0,0)."""
        return [*self.command, "-", "-format", PIXEL_FORMAT, "txt:-"]

    def extract(self, output: str) -> str:
        """Pull the color out of the converter's text output.

        Only the last line is looked at. Nothing is validated: an empty or
        malformed value is returned as is.
        """
        lines = output.splitlines()
        if not lines:
            return ""
        return self.extract_field(lines[-1])


def graphicsmagick(config: Config) -> ConverterVariant:
    return ConverterVariant("graphicsmagick", (config.gm_path, "convert"), last_field)


def imagemagick(config: Config) -> ConverterVariant:
    return ConverterVariant("imagemagick", (config.magick,), fourth_field)


def imagemagick_legacy(config: Config) -> ConverterVariant:
    return ConverterVariant("imagemagick-legacy", (config.convert,), fourth_field)


def detect_converter(config: Config) -> ConverterVariant:
    """Pick the converter to use, in order of preference.

    GraphicsMagick at its fixed path wins, then ImageMagick 7 ``magick`` from
    PATH. The legacy ``convert`` is the fallback and is not checked here; a
    missing binary shows up when the capture pipe is started.
    """
    if os.path.isfile(config.gm_path) and os.access(config.gm_path, os.X_OK):
        variant = graphicsmagick(config)
    elif shutil.which(config.magick):
        variant = imagemagick(config)
    else:
        variant = imagemagick_legacy(config)

    log.debug("Using %s converter: %s", variant.name, " ".join(variant.command))
    return variant
