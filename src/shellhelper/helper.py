"""ShellHelper: one object bundling the console, prompt, directory stack,
file and process helpers.

Build one at startup and hand it to whatever needs it::

    helper = ShellHelper(Settings.load())
    with helper.in_location("build"):
        helper.run_command("make all")
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import AsyncContextManager, ContextManager, Optional, Union

from rich.console import Console

from . import files, ports, process
from .config import Settings
from .console import Reporter
from .location import LocationHistory
from .process import Args, CommandResult
from .prompt import ask


class ShellHelper:
    def __init__(self, settings: Optional[Settings] = None, reporter: Optional[Reporter] = None):
        self.settings = settings or Settings()
        self.reporter = reporter or Reporter(
            Console(no_color=not self.settings.color),
            exit_code=self.settings.exit_code,
        )
        self.locations = LocationHistory(self.reporter)

    @property
    def console(self) -> Console:
        return self.reporter.console

    # Console

    def show_message(self, message: str) -> None:
        self.reporter.show_message(message)

    def show_success(self, message: str) -> None:
        self.reporter.show_success(message)

    def show_warning(self, message: str) -> None:
        self.reporter.show_warning(message)

    def show_error(self, message: str, exit_on_error: bool = True) -> None:
        self.reporter.show_error(message, exit_on_error=exit_on_error)

    def report_exit(self, error_level: object, location: Optional[str] = None) -> None:
        self.reporter.report_exit(error_level, location)

    # Prompt

    def ask(self, question: str, default: Optional[str] = None) -> Union[bool, str]:
        return ask(self.reporter, question, default)

    # Directory stack

    def push_location(self, path: str) -> None:
        self.locations.push(path)

    def pop_location(self) -> Optional[str]:
        return self.locations.pop()

    def in_location(self, path: str) -> ContextManager[str]:
        return self.locations.in_location(path)

    def in_location_async(self, path: str) -> AsyncContextManager[str]:
        return self.locations.in_location_async(path)

    # Files

    def read_text_file(self, path: Union[str, Path]) -> str:
        return files.read_text_file(path)

    def write_text_file(self, path: Union[str, Path], data: str) -> None:
        files.write_text_file(path, data)

    # Processes

    def _echo(self, echo_stdout: Optional[bool]) -> bool:
        return self.settings.echo_stdout if echo_stdout is None else echo_stdout

    def run_command(
        self,
        command: str,
        args: Args = None,
        *,
        echo_stdout: Optional[bool] = None,
        cwd: Optional[str] = None,
    ) -> CommandResult:
        return process.run_command(
            command, args, reporter=self.reporter, echo_stdout=self._echo(echo_stdout), cwd=cwd
        )

    async def run_command_async(
        self,
        command: str,
        args: Args = None,
        *,
        echo_stdout: Optional[bool] = None,
        cwd: Optional[str] = None,
    ) -> CommandResult:
        return await process.run_command_async(
            command, args, reporter=self.reporter, echo_stdout=self._echo(echo_stdout), cwd=cwd
        )

    def run_command_no_wait(self, command: str, args: Args = None) -> subprocess.Popen:
        return process.run_command_no_wait(command, args)

    async def delay(self, seconds: float) -> None:
        await process.delay(seconds)

    def get_process_id_by_port(self, port: Union[int, str]) -> Union[str, bool]:
        return ports.get_process_id_by_port(
            port, reporter=self.reporter, netstat_command=self.settings.netstat_command
        )
