"""Abstract interface for the GitHub operations prflow delegates to."""

from abc import ABC, abstractmethod
from pathlib import Path

from prflow.core.github.types import PullRequestInfo


class GitHub(ABC):
    """Abstract interface for GitHub operations.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def get_pr_for_branch(self, repo_root: Path, branch: str) -> PullRequestInfo | None:
        """Get the most recent PR whose head is branch.

        Returns:
            PullRequestInfo, or None if no PR exists or gh is unavailable
        """
        ...

    @abstractmethod
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
        """Create a pull request.

        Raises:
            RuntimeError: If the PR could not be created
        """
        ...
