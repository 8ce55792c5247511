"""Shared fixtures: stand-in executables for the external tools."""

import os
import stat
from pathlib import Path
from typing import Callable

import pytest
from wl_color_picker.config import Config


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[[str, str], str]:
    """Write an executable shell script and return its path."""
    bin_dir = tmp_path / 'bin'
    bin_dir.mkdir(exist_ok=True)

    def _make(name: str, body: str) -> str:
        script = bin_dir / name
        script.write_text('#!/bin/sh\n' + body + '\n')
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config that never finds a real GraphicsMagick or ImageMagick."""
    return Config(
        delay=0.0,
        gm_path=str(tmp_path / 'no-gm'),
        magick=str(tmp_path / 'no-magick'),
        convert=str(tmp_path / 'no-convert'),
    )


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's config file and environment out of the tests."""
    for key in list(os.environ):
        if key.startswith('WL_COLOR_PICKER_'):
            monkeypatch.delenv(key)
    monkeypatch.delenv('WL_PICKER_API', raising=False)
    config_file = tmp_path / 'config.yaml'
    monkeypatch.setenv('WL_COLOR_PICKER_CONFIG', str(config_file))
    return config_file
