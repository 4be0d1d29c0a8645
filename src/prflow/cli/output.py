"""Output utilities for CLI commands with clear intent.

user_output() is for human-facing messages and goes to stderr so that
machine_output() on stdout stays parseable (e.g., `prflow state --json`).
"""

from typing import Any

import click


def user_output(message: Any = "", nl: bool = True) -> None:
    """Output informational message for human users (stderr)."""
    click.echo(message, nl=nl, err=True)


def machine_output(message: Any = "", nl: bool = True) -> None:
    """Output structured data for scripts and agents (stdout)."""
    click.echo(message, nl=nl)
