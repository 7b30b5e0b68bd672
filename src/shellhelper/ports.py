"""Find which process owns a listening port by parsing ``netstat -ano`` output.

The expected line format is the Windows one::

    TCP    0.0.0.0:8080    0.0.0.0:0    LISTENING    4321
"""

from __future__ import annotations

import re
from typing import Union

from .console import Reporter
from .process import run_command

DEFAULT_NETSTAT_COMMAND = "netstat -ano"

_LINE_SPLIT = re.compile(r"[\r\n]+")
_TRAILING_PID = re.compile(r"\d+$")


def find_pid_in_netstat(text: str, port: Union[int, str]) -> Union[str, bool]:
    """Return the pid of the first line listening on ``0.0.0.0:<port>``, or False."""
    # the port must end at a non-digit so :80 does not match :8080
    wildcard = re.compile(r"0\.0\.0\.0:" + re.escape(str(port)) + r"(?!\d)")
    for line in _LINE_SPLIT.split(text):
        if wildcard.search(line):
            m = _TRAILING_PID.search(line.rstrip())
            return m.group(0) if m else False
    return False


def get_process_id_by_port(
    port: Union[int, str],
    *,
    reporter: Reporter,
    netstat_command: str = DEFAULT_NETSTAT_COMMAND,
) -> Union[str, bool]:
    result = run_command(netstat_command, reporter=reporter, echo_stdout=False)
    return find_pid_in_netstat(result.stdout, port)
