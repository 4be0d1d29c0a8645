"""CLI error handling utilities with styled output.

All errors use a red "Error:" prefix and exit with status 1.
"""

from typing import NoReturn, TypeVar

import click

from prflow.cli.output import user_output

T = TypeVar("T")


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def fail(error_message: str) -> NoReturn:
        """Output a styled error and exit.

        Raises:
            SystemExit: Always (with exit code 1)
        """
        user_output(click.style("Error: ", fg="red") + error_message)
        raise SystemExit(1)

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            Ensure.fail(error_message)

    @staticmethod
    def not_none(value: T | None, error_message: str) -> T:
        """Ensure value is not None, otherwise output styled error and exit.

        Provides type narrowing: takes `T | None` and returns `T`.

        Raises:
            SystemExit: If value is None (with exit code 1)
        """
        if value is None:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)
        return value
