from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from .env import default_env_files, load_env_files
from .files import read_text_file, write_text_file
from .ports import DEFAULT_NETSTAT_COMMAND

APP = "shellhelper"
ENV_PREFIX = "SHELLHELPER_"

_TRUE = {"1", "true", "yes", "on", "y"}
_FALSE = {"0", "false", "no", "off", "n"}


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\shellhelper
      - macOS/Linux: $XDG_CONFIG_HOME/shellhelper or ~/.config/shellhelper
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


def _as_bool(value: object, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return default


def _as_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


@dataclass
class Settings:
    exit_code: int = 1          # status used by fatal errors
    echo_stdout: bool = True    # echo child stdout while it runs
    netstat_command: str = DEFAULT_NETSTAT_COMMAND
    color: bool = True

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        # Priority: config dir .env < current dir .env < existing env vars
        load_env_files(default_env_files(config_dir()))

        data: dict = {}
        if path.exists():
            try:
                data = json.loads(read_text_file(path))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}

        s = Settings(
            exit_code=_as_int(data.get("exit_code"), Settings.exit_code),
            echo_stdout=_as_bool(data.get("echo_stdout", Settings.echo_stdout), Settings.echo_stdout),
            netstat_command=str(data.get("netstat_command", Settings.netstat_command)),
            color=_as_bool(data.get("color", Settings.color), Settings.color),
        )

        # Environment overrides (highest priority)
        env = os.environ
        s.exit_code = _as_int(env.get(ENV_PREFIX + "EXIT_CODE"), s.exit_code)
        s.echo_stdout = _as_bool(env.get(ENV_PREFIX + "ECHO_STDOUT", s.echo_stdout), s.echo_stdout)
        s.netstat_command = env.get(ENV_PREFIX + "NETSTAT_COMMAND", s.netstat_command)
        s.color = _as_bool(env.get(ENV_PREFIX + "COLOR", s.color), s.color)
        if "NO_COLOR" in env:
            s.color = False

        # fatal errors must never report success
        if s.exit_code == 0:
            s.exit_code = 1

        return s

    def save(self, path: Optional[Path] = None) -> Path:
        path = path or config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        write_text_file(path, json.dumps(asdict(self), indent=2))
        return path
