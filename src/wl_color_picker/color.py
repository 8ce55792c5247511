"""Picked color value and conversions."""

import re
from dataclasses import dataclass
from typing import Optional

_DIGIT_RUN = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class PickResult:
    """A picked color, optionally annotated with a human-readable name."""

    hex: str
    name: Optional[str] = None

    def with_name(self, name: Optional[str]) -> "PickResult":
        return PickResult(self.hex, name)

    @property
    def bare_hex(self) -> str:
        """Hex digits without the leading '#'."""
        return self.hex.removeprefix("#")

    def __str__(self) -> str:
        if self.name:
            return f"{self.hex} ({self.name})"
        return self.hex


def rgb_to_hex(text: str) -> str:
    """Convert dialog output such as ``rgb(18,52,86)`` to ``#123456``.

    The first three runs of decimal digits are used as the red, green and
    blue channels.
    """
    values = _DIGIT_RUN.findall(text)[:3]
    return "#" + "".join(f"{int(value):02x}" for value in values)
