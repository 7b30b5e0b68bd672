"""shellhelper CLI.

Usage:
    shellhelper run COMMAND...         # Run a command, streaming its output
    shellhelper spawn COMMAND...       # Start a detached command
    shellhelper in DIR COMMAND...      # Run a command inside DIR
    shellhelper port PORT              # Print the pid listening on 0.0.0.0:PORT
    shellhelper ask QUESTION           # Ask a yes/no (or --default) question
    shellhelper cat FILE               # Print a UTF-8 text file
    shellhelper write FILE TEXT        # Overwrite FILE with TEXT
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from .config import Settings
from .helper import ShellHelper
from .process import CommandError, SpawnError

# exit status used by shells for "command not found"
SPAWN_FAILED_EXIT = 127


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellhelper",
        description="Console, prompt, directory and process helpers",
    )
    sub = parser.add_subparsers(dest="subcmd")

    p_run = sub.add_parser("run", help="Run a command and wait for it")
    p_run.add_argument("--quiet", action="store_true", help="Do not echo the command's stdout")
    p_run.add_argument("command", nargs=argparse.REMAINDER)

    p_spawn = sub.add_parser("spawn", help="Start a detached command")
    p_spawn.add_argument("command", nargs=argparse.REMAINDER)

    p_in = sub.add_parser("in", help="Run a command inside a directory")
    p_in.add_argument("directory")
    p_in.add_argument("command", nargs=argparse.REMAINDER)

    p_port = sub.add_parser("port", help="Find the process listening on a port")
    p_port.add_argument("port")

    p_ask = sub.add_parser("ask", help="Ask a question")
    p_ask.add_argument("question")
    p_ask.add_argument("--default", help="Default answer (turns off yes/no mode)")

    p_cat = sub.add_parser("cat", help="Print a text file")
    p_cat.add_argument("file")

    p_write = sub.add_parser("write", help="Overwrite a text file")
    p_write.add_argument("file")
    p_write.add_argument("text")

    return parser


def _run(helper: ShellHelper, command: List[str], echo_stdout: Optional[bool] = None) -> int:
    if not command:
        helper.show_error("No command given", exit_on_error=False)
        return 2
    try:
        helper.run_command(command[0], command[1:], echo_stdout=echo_stdout)
    except SpawnError:
        return SPAWN_FAILED_EXIT
    except CommandError as e:
        return e.exit_code or 1
    return 0


def run_cli(argv: Optional[List[str]] = None, helper: Optional[ShellHelper] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    helper = helper or ShellHelper(Settings.load())

    if args.subcmd == "run":
        return _run(helper, args.command, echo_stdout=False if args.quiet else None)

    if args.subcmd == "in":
        try:
            with helper.in_location(args.directory):
                return _run(helper, args.command)
        except OSError as e:
            helper.show_error(f"Cannot enter {args.directory}: {e.strerror or e}", exit_on_error=False)
            return 1

    if args.subcmd == "spawn":
        if not args.command:
            helper.show_error("No command given", exit_on_error=False)
            return 2
        proc = helper.run_command_no_wait(args.command[0], args.command[1:])
        helper.show_success(f"Started pid {proc.pid}")
        return 0

    if args.subcmd == "port":
        try:
            pid = helper.get_process_id_by_port(args.port)
        except SpawnError:
            helper.show_error(f"Cannot run {helper.settings.netstat_command!r}", exit_on_error=False)
            return SPAWN_FAILED_EXIT
        except CommandError as e:
            helper.show_error(f"Port lookup failed: {e}", exit_on_error=False)
            return e.exit_code or 1
        if pid is False:
            helper.show_warning(f"Nothing is listening on port {args.port}")
            return 1
        helper.console.print(pid, markup=False, highlight=False)
        return 0

    if args.subcmd == "ask":
        answer = helper.ask(args.question, args.default)
        helper.console.print(str(answer), markup=False, highlight=False)
        return 0

    if args.subcmd == "cat":
        helper.console.print(helper.read_text_file(args.file), end="", markup=False, highlight=False)
        return 0

    if args.subcmd == "write":
        helper.write_text_file(args.file, args.text)
        helper.show_success(f"Wrote {args.file}")
        return 0

    parser.print_help()
    return 0


def main() -> None:
    raise SystemExit(run_cli())
