"""Detection of the current project's name and location."""

from __future__ import annotations

import os
import re
from pathlib import Path

_CARGO_NAME = re.compile(r'^name\s*=\s*"([^"]+)"', re.MULTILINE)


def get_project_name() -> str | None:
    """Return the detected project name."""
    return detect_project_name()


def detect_project_name() -> str | None:
    """Detect the project name from the environment, project files or folder name."""
    from_env = os.environ.get("LOTAR_PROJECT", "")
    if from_env:
        return from_env
    return _detect_from_project_files() or _current_folder_name() or "default"


def _current_dir() -> Path | None:
    try:
        return Path.cwd()
    except OSError:
        return None


def _detect_from_project_files() -> str | None:
    current = _current_dir()
    if current is None:
        return None
    return _read_cargo_toml_name(current)


def _read_cargo_toml_name(directory: Path) -> str | None:
    manifest = directory / "Cargo.toml"
    if not manifest.exists():
        return None
    try:
        content = manifest.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    match = _CARGO_NAME.search(content)
    return match.group(1) if match else None


def _current_folder_name() -> str | None:
    current = _current_dir()
    if current is None:
        return None
    name = current.name
    if not name or name in ("/", "."):
        return None
    return name


def get_project_path() -> Path:
    """Return the current working directory as the project path."""
    return Path.cwd()