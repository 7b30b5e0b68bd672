"""Interactive yes/no and default-value prompts."""

from __future__ import annotations

from typing import Optional, Union

from .console import Reporter

YES_NO_HINT = "[Y/n]"


def _read_line(reporter: Reporter, prompt_text: str) -> Optional[str]:
    """Read one line of input.

    Returns:
        The raw answer, or None on EOF (Ctrl+D) / interrupt (Ctrl+C)
    """
    try:
        return reporter.console.input(prompt_text, markup=False, emoji=False)
    except (EOFError, KeyboardInterrupt):
        return None


def ask(reporter: Reporter, question: str, default: Optional[str] = None) -> Union[bool, str]:
    """Ask the user a question.

    Without a default this is a yes/no question: an empty answer or ``Y``
    means True, anything else False. With a default the upper-cased answer is
    returned, falling back to the upper-cased default on an empty answer.
    """
    default = (default or "").strip()
    if default:
        default = default.upper()
        question = f"{question} Default={default}"
    else:
        question = f"{question} {YES_NO_HINT}"

    answer = _read_line(reporter, question + " ")
    if answer is None:
        reporter.show_error("Terminated by user")

    answer = answer.strip().upper()
    if not default:
        return answer in ("", "Y")
    return answer or default
