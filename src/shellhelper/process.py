"""Child process helpers.

``run_command`` and ``run_command_async`` capture both output streams while
echoing them live; a non-zero exit raises :class:`CommandError`, and a command
that cannot be started raises :class:`SpawnError` through the same channel.
``run_command_no_wait`` starts a detached process and forgets about it.
"""

from __future__ import annotations

import asyncio
import codecs
import os
import subprocess
import threading
from dataclasses import dataclass
from typing import IO, Callable, List, Optional, Sequence, Union

from .console import ERROR_STYLE, WARNING_STYLE, Reporter

Args = Union[str, Sequence[str], None]

CHUNK_SIZE = 4096


@dataclass(frozen=True)
class CommandResult:
    stdout: str
    stderr: str
    exit_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return not self.exit_code


class CommandError(Exception):
    """A command finished with a non-zero exit code."""

    def __init__(self, exit_code: Optional[int], stdout: str = "", stderr: str = "", command: Sequence[str] = ()):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.command = list(command)
        super().__init__(self._describe())

    def _describe(self) -> str:
        cmd = " ".join(self.command) or "command"
        return f"{cmd} exited with code {self.exit_code}"

    @property
    def result(self) -> CommandResult:
        return CommandResult(self.stdout, self.stderr, self.exit_code)


class SpawnError(CommandError):
    """A command could not be started at all."""

    def __init__(self, message: str, command: Sequence[str] = ()):
        super().__init__(None, "", message, command)

    def _describe(self) -> str:
        cmd = " ".join(self.command) or "command"
        return f"{cmd} could not be started: {self.stderr}"


def split_command(command: str, args: Args = None) -> List[str]:
    """Normalize ``command``/``args`` into an argv list.

    Without args the command string itself is split on whitespace; a string
    of args is split the same way.
    """
    if not args:
        return command.split() or [command]
    if isinstance(args, str):
        return [command, *args.split()]
    return [command, *args]


def stderr_style(chunk: str) -> str:
    return WARNING_STYLE if "warn" in chunk.lower() else ERROR_STYLE


class _Collector:
    """Accumulates decoded chunks of one stream and echoes them."""

    def __init__(self, echo: Optional[Callable[[str], None]]):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._parts: List[str] = []
        self._echo = echo

    def feed(self, data: bytes, final: bool = False) -> None:
        text = self._decoder.decode(data, final=final)
        if not text:
            return
        self._parts.append(text)
        if self._echo:
            self._echo(text)

    @property
    def text(self) -> str:
        return "".join(self._parts)


def _collectors(reporter: Reporter, echo_stdout: bool) -> "tuple[_Collector, _Collector]":
    out = _Collector(reporter.echo if echo_stdout else None)
    err = _Collector(lambda text: reporter.echo(text, style=stderr_style(text)))
    return out, err


def _finish(argv: List[str], code: int, out: _Collector, err: _Collector) -> CommandResult:
    if code:
        raise CommandError(code, out.text, err.text, argv)
    return CommandResult(out.text, err.text, code)


def _spawn_failed(reporter: Reporter, argv: List[str], exc: OSError) -> SpawnError:
    message = exc.strerror or str(exc)
    reporter.echo(f"{message}\n", style=ERROR_STYLE)
    return SpawnError(message, argv)


def _pump(stream: IO[bytes], collector: _Collector) -> None:
    read = getattr(stream, "read1", stream.read)
    for chunk in iter(lambda: read(CHUNK_SIZE), b""):
        collector.feed(chunk)
    collector.feed(b"", final=True)


def run_command(
    command: str,
    args: Args = None,
    *,
    reporter: Reporter,
    echo_stdout: bool = True,
    cwd: Optional[str] = None,
) -> CommandResult:
    """Run a command to completion, streaming its output.

    Returns:
        CommandResult with the captured output on exit code 0

    Raises:
        CommandError: the command exited non-zero
        SpawnError: the command could not be started
    """
    argv = split_command(command, args)
    try:
        proc = subprocess.Popen(argv, stdout=subprocess.PIPE, stderr=subprocess.PIPE, cwd=cwd)
    except OSError as e:
        raise _spawn_failed(reporter, argv, e) from e

    out, err = _collectors(reporter, echo_stdout)
    readers = [
        threading.Thread(target=_pump, args=(proc.stdout, out), name="shellhelper-stdout", daemon=True),
        threading.Thread(target=_pump, args=(proc.stderr, err), name="shellhelper-stderr", daemon=True),
    ]
    for t in readers:
        t.start()
    for t in readers:
        t.join()
    code = proc.wait()
    proc.stdout.close()
    proc.stderr.close()
    return _finish(argv, code, out, err)


async def _pump_async(stream: asyncio.StreamReader, collector: _Collector) -> None:
    while True:
        chunk = await stream.read(CHUNK_SIZE)
        if not chunk:
            break
        collector.feed(chunk)
    collector.feed(b"", final=True)


async def run_command_async(
    command: str,
    args: Args = None,
    *,
    reporter: Reporter,
    echo_stdout: bool = True,
    cwd: Optional[str] = None,
) -> CommandResult:
    """Awaitable form of :func:`run_command`."""
    argv = split_command(command, args)
    try:
        proc = await asyncio.create_subprocess_exec(
            *argv,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except OSError as e:
        raise _spawn_failed(reporter, argv, e) from e

    out, err = _collectors(reporter, echo_stdout)
    await asyncio.gather(_pump_async(proc.stdout, out), _pump_async(proc.stderr, err))
    code = await proc.wait()
    return _finish(argv, code, out, err)


def run_command_no_wait(command: str, args: Args = None) -> subprocess.Popen:
    """Start a detached command through the shell and return immediately."""
    argv = split_command(command, args)
    kwargs: dict = {}
    if os.name == "nt":
        kwargs["creationflags"] = subprocess.DETACHED_PROCESS | subprocess.CREATE_NEW_PROCESS_GROUP
    else:
        kwargs["start_new_session"] = True
    return subprocess.Popen(
        " ".join(argv),
        shell=True,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        **kwargs,
    )


async def delay(seconds: float) -> None:
    await asyncio.sleep(seconds)
