"""Optional color name lookup through thecolorapi.com.

Best effort only: any failure leaves the color without a name.
"""

import logging
import re
from typing import Optional

import requests

from .color import PickResult
from .config import Config

log = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r'"name"\s*:\s*\{\s*"value"\s*:\s*"([^"]*)"')


def extract_name(body: str) -> Optional[str]:
    """Find the color name in the API response without a full JSON parse."""
    match = _NAME_PATTERN.search(body)
    if not match:
        return None
    name = match.group(1)
    if not name or name == "null":
        return None
    return name


def lookup_name(hex_value: str, config: Config) -> Optional[str]:
    """Ask the naming service for the name of a hex color (without '#').

    Returns:
        The name, or None on any error or when the service has no name
    """
    try:
        response = requests.get(
            config.name_api_url,
            params={"hex": hex_value},
            timeout=config.name_lookup_timeout,
        )
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        log.debug("Color name lookup failed: %s", e)
        return None

    return extract_name(response.text)


def annotate(result: PickResult, config: Config) -> PickResult:
    """Attach the color name to the result when lookups are enabled."""
    if not config.name_lookup:
        return result

    name = lookup_name(result.bare_hex, config)
    if name is None:
        return result
    log.debug("%s is named %r", result.hex, name)
    return result.with_name(name)
