"""Config commands: show effective settings and change the base branch."""

import click

from prflow.cli.ensure import Ensure
from prflow.cli.output import machine_output, user_output
from prflow.core.config import global_config_path, write_base_branch
from prflow.core.context import PrflowContext


@click.group("config")
def config_group() -> None:
    """Show or change prflow configuration."""


@config_group.command("show")
@click.pass_obj
def show_cmd(ctx: PrflowContext) -> None:
    """Print the effective configuration."""
    config = ctx.config
    user_output(click.style("Global config:", bold=True) + f" {global_config_path()}")
    if ctx.repo_root is not None:
        user_output(click.style("Repository:", bold=True) + f" {ctx.repo_root / 'pyproject.toml'}")
    user_output()
    machine_output(f"base_branch={config.base_branch}")
    machine_output(f"remote={config.remote}")
    machine_output(f"worktree_pattern={config.worktree_pattern}")
    machine_output(f"worktree_parent={config.worktree_parent}")
    machine_output(f"draft_pr={str(config.draft_pr).lower()}")
    machine_output(f"branch_prefix={config.branch_prefix}")


@config_group.command("set-base")
@click.argument("branch")
@click.pass_obj
def set_base_cmd(ctx: PrflowContext, branch: str) -> None:
    """Set the base branch in the repository's pyproject.toml."""
    repo_root = Ensure.not_none(ctx.repo_root, "Not inside a git repository")
    Ensure.invariant(bool(branch.strip()), "Branch name must not be empty")

    write_base_branch(repo_root, branch)
    user_output(f"Set base_branch = {branch} in {repo_root / 'pyproject.toml'}")
