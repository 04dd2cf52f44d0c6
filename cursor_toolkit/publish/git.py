"""
Git — Thin wrapper over the git CLI for the publish workflow.

Queries return plain values and never raise on a non-zero exit; they are
asked fresh each time. Mutations (init, checkout, add, commit, push) raise
ExternalToolError when git fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..errors import ExternalToolError
from ..runner import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"
FALLBACK_BRANCH = "main"


@dataclass(frozen=True)
class RepoState:
    """Snapshot of the repository as seen at one point in a phase."""

    is_repo: bool
    has_origin: bool
    current_branch: Optional[str]
    target_branch: Optional[str]
    has_staged_changes: bool
    has_commits: bool


class Git:
    """git commands run in the project directory."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def _run(self, *args: str, step: Optional[str] = None, capture: bool = True) -> CommandResult:
        return self.runner.run(["git", *args], step=step, capture=capture)

    def _query(self, *args: str) -> CommandResult:
        return self.runner.run(["git", *args], check=False)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_repo(self) -> bool:
        return self._query("rev-parse", "--is-inside-work-tree").ok

    def has_commits(self) -> bool:
        return self._query("rev-parse", "--verify", "--quiet", "HEAD").ok

    def remote_url(self, remote: str = DEFAULT_REMOTE) -> Optional[str]:
        result = self._query("remote", "get-url", remote)
        return result.output if result.ok and result.output else None

    def has_remote(self, remote: str = DEFAULT_REMOTE) -> bool:
        return self.remote_url(remote) is not None

    def local_branches(self) -> List[str]:
        result = self._query("branch", "--format=%(refname:short)")
        if not result.ok:
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def branch_listing(self) -> str:
        """`git branch` output as the operator would see it."""
        result = self._query("branch")
        return result.stdout.rstrip() if result.ok else ""

    def current_branch(self) -> Optional[str]:
        """
        Name of the checked-out branch.

        Works on an unborn branch (fresh repo, no commits yet), where
        `rev-parse --abbrev-ref HEAD` would fail.
        """
        result = self._query("branch", "--show-current")
        if result.ok and result.output:
            return result.output
        # Detached HEAD
        result = self._query("rev-parse", "--abbrev-ref", "HEAD")
        return result.output if result.ok and result.output else None

    def branch_exists(self, name: str) -> bool:
        return self._query("show-ref", "--verify", "--quiet", f"refs/heads/{name}").ok

    def has_staged_changes(self) -> bool:
        """True when the index differs from HEAD (or from empty, before the first commit)."""
        result = self._query("diff", "--cached", "--quiet")
        if result.returncode == 0:
            return False
        if result.returncode == 1:
            return True
        raise ExternalToolError(
            "Failed to inspect staged changes (git diff --cached)",
            result.stderr.strip() or None,
        )

    def head_hash(self) -> Optional[str]:
        result = self._query("rev-parse", "HEAD")
        return result.output if result.ok and result.output else None

    def last_commit_message(self) -> Optional[str]:
        result = self._query("log", "-1", "--pretty=%B")
        return result.output if result.ok and result.output else None

    def state(self, target_branch: Optional[str] = None) -> RepoState:
        is_repo = self.is_repo()
        if not is_repo:
            return RepoState(False, False, None, target_branch, False, False)
        return RepoState(
            is_repo=True,
            has_origin=self.has_remote(),
            current_branch=self.current_branch(),
            target_branch=target_branch,
            has_staged_changes=self.has_staged_changes(),
            has_commits=self.has_commits(),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def init(self) -> None:
        self._run("init", step="Failed to initialize git repository (git init)", capture=False)

    def create_branch(self, name: str) -> None:
        logger.info(f"[git] Creating branch {name}")
        self._run("checkout", "-b", name, step=f"Failed to create branch '{name}'", capture=False)

    def checkout(self, name: str) -> None:
        self._run("checkout", name, step=f"Failed to switch to branch '{name}'", capture=False)

    def show_status(self) -> None:
        self._run("status", "--short", step="Failed to read working tree status", capture=False)

    def add_all(self) -> None:
        self._run("add", ".", step="Failed to stage changes (git add .)")

    def commit(self, message: str) -> None:
        self._run("commit", "-m", message, step="Failed to create commit", capture=False)

    def push(self, branch: str, remote: str = DEFAULT_REMOTE) -> None:
        logger.info(f"[git] Pushing {branch} to {remote}")
        self._run(
            "push", "-u", remote, branch,
            step=f"Failed to push to {remote}/{branch}",
            capture=False,
        )
