"""Simple .env file loader.

Loads environment variables from .env files without external dependencies.
Priority order (highest to lowest):
1. Existing environment variables (never overwritten)
2. .env in current working directory
3. .env in config directory (~/.config/shellhelper/.env)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable

from .files import read_text_file


def parse_env_text(content: str) -> Dict[str, str]:
    """Parse .env content into key-value pairs.

    Handles comments, blank lines, ``export KEY=value`` and values wrapped in
    single or double quotes.
    """
    result: Dict[str, str] = {}

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("export "):
            line = line[7:].strip()

        key, sep, value = line.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
            value = value[1:-1]

        if key:
            result[key] = value

    return result


def parse_env_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        return {}
    try:
        return parse_env_text(read_text_file(path))
    except (OSError, UnicodeDecodeError):
        return {}


def load_env_files(paths: Iterable[Path]) -> Dict[str, str]:
    """Load .env files into ``os.environ``.

    Later files override earlier ones; variables already present in the
    environment are never overwritten. Returns the variables that were set.
    """
    combined: Dict[str, str] = {}
    for env_file in paths:
        combined.update(parse_env_file(env_file))

    applied: Dict[str, str] = {}
    for key, value in combined.items():
        if key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


def default_env_files(config_dir: Path) -> list[Path]:
    return [config_dir / ".env", Path.cwd() / ".env"]
