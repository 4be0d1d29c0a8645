"""Configuration data structures and loading.

Global settings live in ~/.prflow/config.toml; a repository may override them
in the [tool.prflow] table of its pyproject.toml. Both are read once at the
CLI entry point and stored in PrflowContext.
"""

import re
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import tomlkit

DEFAULT_BASE_BRANCH = "main"
DEFAULT_REMOTE = "origin"
DEFAULT_WORKTREE_PATTERN = "{repo}.pr{number}"
DEFAULT_WORKTREE_PARENT = ".."
DEFAULT_BRANCH_PREFIX = "feat"


@dataclass(frozen=True)
class PrflowConfig:
    """Immutable configuration.

    Fields:
        base_branch: Trunk branch PRs target and state is compared against
        remote: Remote whose tracking branch of base_branch is the reference
        worktree_pattern: Directory name for PR worktrees; supports
            {repo}, {number} and {branch} placeholders
        worktree_parent: Where worktrees are created, relative to the repo root
        draft_pr: Create PRs as drafts by default
        branch_prefix: Prefix for branch names derived from a description
    """

    base_branch: str = DEFAULT_BASE_BRANCH
    remote: str = DEFAULT_REMOTE
    worktree_pattern: str = DEFAULT_WORKTREE_PATTERN
    worktree_parent: str = DEFAULT_WORKTREE_PARENT
    draft_pr: bool = False
    branch_prefix: str = DEFAULT_BRANCH_PREFIX


_FIELD_TYPES = {f.name: f.type for f in fields(PrflowConfig)}


def global_config_path() -> Path:
    """Get the path to the global config file."""
    return Path.home() / ".prflow" / "config.toml"


def _validate(data: dict[str, Any], source: Path) -> dict[str, Any]:
    for key, value in data.items():
        if key not in _FIELD_TYPES:
            raise ValueError(f"Unknown config key '{key}' in {source}")
        expected = bool if _FIELD_TYPES[key] is bool else str
        if not isinstance(value, expected):
            raise ValueError(
                f"Config key '{key}' in {source} must be {expected.__name__}, "
                f"got {type(value).__name__}"
            )
    return data


def read_pyproject_section(repo_root: Path) -> dict[str, Any]:
    """Read the [tool.prflow] table from the repository's pyproject.toml.

    Returns:
        The table contents, or an empty dict if absent
    """
    pyproject_path = repo_root / "pyproject.toml"
    if not pyproject_path.exists():
        return {}

    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    section = data.get("tool", {}).get("prflow")
    if section is None:
        return {}
    return _validate(dict(section), pyproject_path)


def load_config(repo_root: Path | None, global_path: Path | None = None) -> PrflowConfig:
    """Load configuration: defaults, then global file, then repository overrides.

    Args:
        repo_root: Repository root whose pyproject.toml is consulted, or None
        global_path: Global config file (defaults to ~/.prflow/config.toml)

    Returns:
        PrflowConfig with all layers applied

    Raises:
        ValueError: If a config file contains unknown keys or wrong types
    """
    config = PrflowConfig()

    config_path = global_path if global_path is not None else global_config_path()
    if config_path.exists():
        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        config = replace(config, **_validate(data, config_path))

    if repo_root is not None:
        config = replace(config, **read_pyproject_section(repo_root))

    return config


def write_base_branch(repo_root: Path, branch: str) -> None:
    """Write base_branch to [tool.prflow] in pyproject.toml.

    Creates or updates the section, preserving existing formatting and
    comments using tomlkit.
    """
    pyproject_path = repo_root / "pyproject.toml"

    if pyproject_path.exists():
        with pyproject_path.open("r", encoding="utf-8") as f:
            doc = tomlkit.load(f)
    else:
        doc = tomlkit.document()

    if "tool" not in doc:
        doc["tool"] = tomlkit.table()  # type: ignore[index]

    if "prflow" not in doc["tool"]:  # type: ignore[operator]
        doc["tool"]["prflow"] = tomlkit.table()  # type: ignore[index]

    doc["tool"]["prflow"]["base_branch"] = branch  # type: ignore[index]

    with pyproject_path.open("w", encoding="utf-8") as f:
        tomlkit.dump(doc, f)


def worktree_name_regex(pattern: str) -> re.Pattern[str]:
    """Compile a worktree pattern into a regex matching directory names.

    Example:
        >>> worktree_name_regex("{repo}.pr{number}").fullmatch("app.pr12") is not None
        True
    """
    placeholders = {
        "{repo}": r".+",
        "{number}": r"\d+",
        "{branch}": r".+",
    }
    parts = re.split(r"(\{repo\}|\{number\}|\{branch\})", pattern)
    return re.compile("".join(placeholders.get(part, re.escape(part)) for part in parts))


def render_worktree_path(
    config: PrflowConfig,
    repo_root: Path,
    repo_name: str,
    *,
    number: int | None,
    branch: str,
) -> Path:
    """Compute where the worktree for a PR branch is created.

    When no PR number is known, {number} falls back to the branch slug.
    """
    branch_slug = branch.replace("/", "-")
    name = (
        config.worktree_pattern.replace("{repo}", repo_name)
        .replace("{number}", str(number) if number is not None else branch_slug)
        .replace("{branch}", branch_slug)
    )
    return (repo_root / config.worktree_parent / name).resolve()


def slugify_branch_name(prefix: str, description: str) -> str:
    """Derive a branch name such as 'feat/add-login-page' from a description."""
    slug = re.sub(r"[^a-z0-9]+", "-", description.lower()).strip("-")
    slug = slug[:50].rstrip("-")
    if not slug:
        slug = "change"
    return f"{prefix}/{slug}" if prefix else slug
