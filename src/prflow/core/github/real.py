"""Production GitHub implementation over the gh CLI."""

import json
import logging
from pathlib import Path

from prflow.core.github.abc import GitHub
from prflow.core.github.types import PullRequestInfo
from prflow.core.subprocess import run_subprocess_with_context

logger = logging.getLogger(__name__)

PR_JSON_FIELDS = "number,state,url,isDraft,title,headRefName"


def parse_pr_json(pr: dict) -> PullRequestInfo:
    """Convert one gh PR JSON object into PullRequestInfo."""
    return PullRequestInfo(
        number=pr["number"],
        state=pr["state"],
        url=pr["url"],
        is_draft=pr.get("isDraft", False),
        title=pr.get("title"),
        head_branch=pr["headRefName"],
    )


def parse_pr_list(json_str: str) -> PullRequestInfo | None:
    """Parse `gh pr list --json` output, returning the first PR if any."""
    prs_data = json.loads(json_str)
    if not prs_data:
        return None
    return parse_pr_json(prs_data[0])


class RealGitHub(GitHub):
    """Production implementation using the gh CLI."""

    def get_pr_for_branch(self, repo_root: Path, branch: str) -> PullRequestInfo | None:
        """Get the most recent PR for a branch.

        Note: Uses try/except as an acceptable error boundary for handling gh CLI
        availability and authentication. We cannot reliably check gh installation
        and authentication status a priori without duplicating gh's logic.
        """
        cmd = [
            "gh",
            "pr",
            "list",
            "--head",
            branch,
            "--state",
            "all",
            "--json",
            PR_JSON_FIELDS,
            "--limit",
            "1",
        ]
        try:
            result = run_subprocess_with_context(
                cmd,
                operation_context=f"look up PR for branch '{branch}'",
                cwd=repo_root,
            )
        except RuntimeError as e:
            logger.debug("PR lookup for %s failed: %s", branch, e)
            return None

        return parse_pr_list(result.stdout)

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
        """Create a PR with gh, then read it back for structured details."""
        cmd = [
            "gh",
            "pr",
            "create",
            "--title",
            title,
            "--body",
            body,
            "--base",
            base,
            "--head",
            head,
        ]
        if draft:
            cmd.append("--draft")

        run_subprocess_with_context(
            cmd,
            operation_context=f"create PR for branch '{head}'",
            cwd=repo_root,
        )

        result = run_subprocess_with_context(
            ["gh", "pr", "view", head, "--json", PR_JSON_FIELDS],
            operation_context=f"read back PR for branch '{head}'",
            cwd=repo_root,
        )
        return parse_pr_json(json.loads(result.stdout))
