"""Runtime environment checks done before anything is captured."""

import logging
import os
import shutil
from typing import Mapping, Optional

from .config import Config

log = logging.getLogger(__name__)

SESSION_ENV = "WAYLAND_DISPLAY"


class EnvironmentCheckError(Exception):
    """Raised when the session or a required tool is missing.

    ``summary`` and ``body`` are what the desktop notification shows.
    """

    def __init__(self, message: str, summary: str = "Error", body: Optional[str] = None):
        super().__init__(message)
        self.summary = summary
        self.body = body or message


def has_session(environ: Optional[Mapping[str, str]] = None) -> bool:
    environ = os.environ if environ is None else environ
    return bool(environ.get(SESSION_ENV, ""))


def missing_tools(config: Config) -> list[str]:
    """Return the required tools that cannot be found on PATH, in check order."""
    return [tool for tool in (config.slurp, config.grim) if shutil.which(tool) is None]


def check_environment(config: Config, environ: Optional[Mapping[str, str]] = None) -> None:
    """Verify that a pick can be attempted at all.

    Only the region selector and the screenshot grabber are required up
    front. The clipboard writer, dialog and notifier are checked when used.

    Raises:
        EnvironmentCheckError: If there is no Wayland session or a tool is missing
    """
    environ = os.environ if environ is None else environ

    if not has_session(environ):
        raise EnvironmentCheckError(
            "No wayland session found.",
            summary="No wayland session found.",
            body="This color picker must be run under a valid wayland session.",
        )

    missing = missing_tools(config)
    if missing:
        raise EnvironmentCheckError(f"Missing required tools: {' '.join(missing)}")

    log.debug("Environment OK (%s=%s)", SESSION_ENV, environ.get(SESSION_ENV))
