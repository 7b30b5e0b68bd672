"""shellhelper: console, prompt, directory-stack, file and process helpers."""

from .config import Settings
from .console import Reporter
from .helper import ShellHelper
from .location import LocationHistory
from .process import CommandError, CommandResult, SpawnError

__all__ = [
    "CommandError",
    "CommandResult",
    "LocationHistory",
    "Reporter",
    "Settings",
    "ShellHelper",
    "SpawnError",
]
