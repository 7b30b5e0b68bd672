"""Colorized console reporting.

Every line the helper prints goes through a :class:`Reporter`:

- info    -> cyan, also sets the terminal title
- success -> green
- warning -> yellow
- error   -> red, exits the process unless told otherwise
"""

from __future__ import annotations

import threading
from typing import Optional

from rich.console import COLOR_SYSTEMS, Console
from rich.control import Control
from rich.style import Style
from rich.text import Text

INFO_STYLE = "cyan"
SUCCESS_STYLE = "green"
WARNING_STYLE = "yellow"
ERROR_STYLE = "red"


class Reporter:
    def __init__(self, console: Optional[Console] = None, exit_code: int = 1):
        self.console = console or Console()
        self.exit_code = exit_code or 1
        self._echo_lock = threading.Lock()

    def _line(self, message: str, style: str) -> None:
        self.console.print(Text(str(message), style=style), soft_wrap=True)

    def show_message(self, message: str) -> None:
        self._line(message, INFO_STYLE)
        self.set_title(message)

    def show_success(self, message: str) -> None:
        self._line(message, SUCCESS_STYLE)

    def show_warning(self, message: str) -> None:
        self._line(message, WARNING_STYLE)

    def show_error(self, message: str, exit_on_error: bool = True) -> None:
        """Print an error line.

        With ``exit_on_error`` (the default) this raises ``SystemExit`` after
        printing, so nothing after the call runs.
        """
        self._line(message, ERROR_STYLE)
        if exit_on_error:
            raise SystemExit(self.exit_code)

    def report_exit(self, error_level: object, location: Optional[str] = None) -> None:
        """Fatally report a non-empty error level, optionally naming where it happened."""
        if not error_level:
            return
        message = f"ERROR: {error_level}"
        if location:
            message += f" in {location}"
        self.show_error(message)

    def set_title(self, title: str) -> None:
        # OSC 0: ESC ] 0 ; title BEL
        self.console.control(Control.title(str(title)))

    def echo(self, text: str, style: Optional[str] = None) -> None:
        """Write raw child-process output.

        The text goes to the console file untouched so carriage returns, tabs and
        other control characters reach the terminal. ``style`` is only applied
        when the console renders color.
        """
        console = self.console
        if style and console.is_terminal and not console.no_color and console.color_system:
            text = Style.parse(style).render(text, color_system=COLOR_SYSTEMS[console.color_system])
        with self._echo_lock:
            console.file.write(text)
            console.file.flush()
