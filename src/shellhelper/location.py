"""Working-directory stack.

``push``/``pop`` change the process working directory and remember where we
came from. The context managers pair them so the previous directory is always
restored, whether the body returns, raises or (for the async form) is
cancelled.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager, contextmanager
from typing import AsyncIterator, Awaitable, Callable, Iterator, List, Optional, Tuple, TypeVar

from .console import Reporter

T = TypeVar("T")

EMPTY_STACK_MESSAGE = "There is no location to pop"


class LocationHistory:
    """Stack of previously visited working directories."""

    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self._stack: List[str] = []

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._stack)

    def push(self, path: str) -> None:
        self._stack.append(os.getcwd())
        try:
            os.chdir(path)
        except OSError:
            self._stack.pop()
            raise

    def pop(self) -> Optional[str]:
        if not self._stack:
            self.reporter.show_error(EMPTY_STACK_MESSAGE, exit_on_error=False)
            return None
        wd = self._stack.pop()
        os.chdir(wd)
        return wd

    @contextmanager
    def in_location(self, path: str) -> Iterator[str]:
        self.push(path)
        try:
            yield os.getcwd()
        finally:
            self.pop()

    @asynccontextmanager
    async def in_location_async(self, path: str) -> AsyncIterator[str]:
        self.push(path)
        try:
            yield os.getcwd()
        finally:
            self.pop()

    def run_in_location(self, path: str, action: Callable[[], T]) -> T:
        with self.in_location(path):
            return action()

    async def run_in_location_async(self, path: str, action: Callable[[], Awaitable[T]]) -> T:
        async with self.in_location_async(path):
            return await action()
