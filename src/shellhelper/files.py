from __future__ import annotations

import os
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def read_text_file(path: PathLike) -> str:
    """Return the whole file decoded as UTF-8. Line endings are kept as stored."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_file(path: PathLike, data: str) -> None:
    """Overwrite ``path`` with ``data`` encoded as UTF-8."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(data)
