"""Dry-run GitHub wrapper: delegates reads, prints write intentions."""

from pathlib import Path

from prflow.cli.output import user_output
from prflow.core.github.abc import GitHub
from prflow.core.github.types import PullRequestInfo


class DryRunGitHub(GitHub):
    """Wrapper that prints PR creation instead of executing it."""

    def __init__(self, wrapped: GitHub) -> None:
        self._wrapped = wrapped

    def get_pr_for_branch(self, repo_root: Path, branch: str) -> PullRequestInfo | None:
        return self._wrapped.get_pr_for_branch(repo_root, branch)

    def create_pr(
        self,
        repo_root: Path,
        *,
        title: str,
        body: str,
        base: str,
        head: str,
        draft: bool,
    ) -> PullRequestInfo:
        draft_flag = " --draft" if draft else ""
        user_output(
            f'[DRY RUN] Would run: gh pr create --title "{title}" --base {base} '
            f"--head {head}{draft_flag}"
        )
        return PullRequestInfo(
            number=0,
            state="OPEN",
            url="(dry run)",
            is_draft=draft,
            title=title,
            head_branch=head,
        )
