import logging
import os

import click

from prflow.cli.commands.config import config_group
from prflow.cli.commands.new import new_cmd
from prflow.cli.commands.state import state_cmd
from prflow.core.context import create_context

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

DEBUG_ENV_VAR = "PRFLOW_DEBUG"


def configure_logging(debug: bool) -> None:
    """Enable DEBUG logging when --debug or PRFLOW_DEBUG is set."""
    if debug or os.getenv(DEBUG_ENV_VAR):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="prflow")
@click.option("--debug", is_flag=True, help="Log the facts and decisions behind each step.")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """Classify repository state and create PR branches safely."""
    configure_logging(debug)
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        ctx.obj = create_context()


cli.add_command(state_cmd)
cli.add_command(new_cmd)
cli.add_command(config_group)


def main() -> None:
    """CLI entry point used by the `prflow` console script."""
    cli()
