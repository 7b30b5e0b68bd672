"""Shared fixtures for shellhelper tests."""

import io

import pytest
from rich.console import Console

from shellhelper.console import Reporter


@pytest.fixture
def console():
    return Console(file=io.StringIO(), force_terminal=False, width=200)


@pytest.fixture
def reporter(console):
    return Reporter(console)


@pytest.fixture
def output(console):
    """Return a callable giving everything printed so far."""
    return lambda: console.file.getvalue()
