"""
Publish Workflow — Commit the project, push it to GitHub, optionally deploy.

Phases run in order and each returns an updated PublishContext:

    1. repo setup        git init, gh install/login, create origin if missing
    2. branch & commit   pick/create branch, stage, commit, push
    3. summary           origin URL, branch, latest commit (best-effort)
    4. deploy            optional ssh update of a configured host

Any failed external command ends the run with the repository left as git
left it. Nothing is rolled back or retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import click

from ..errors import UserDeclined
from ..prompt import Prompter
from ..runner import CommandRunner
from .config import DeployTarget
from .git import DEFAULT_REMOTE, FALLBACK_BRANCH, Git
from .github import GitHubCLI
from .remote import RemoteProcedure, run_remote_procedure

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
NO_REMOTE = "<none>"
DEFAULT_COMMIT_MESSAGE = "update"


@dataclass(frozen=True)
class PublishContext:
    """Everything one phase hands to the next."""

    project_root: Path
    repo_name: Optional[str] = None
    branch: Optional[str] = None
    committed: bool = False
    pushed: bool = False
    remote_url: Optional[str] = None
    commit_hash: Optional[str] = None
    commit_message: Optional[str] = None
    deployed: bool = False


class Publisher:
    """Runs the publish phases against one project directory."""

    def __init__(
        self,
        project_root: Path,
        prompter: Prompter,
        runner: Optional[CommandRunner] = None,
        deploy_target: Optional[DeployTarget] = None,
    ) -> None:
        self.project_root = Path(project_root)
        self.prompter = prompter
        self.runner = runner or CommandRunner(self.project_root)
        self.git = Git(self.runner)
        self.gh = GitHubCLI(self.runner)
        self.deploy_target = deploy_target

    def run(self) -> PublishContext:
        click.echo("[commit-to-git] Starting...")

        ctx = PublishContext(project_root=self.project_root)
        ctx = self.phase_repo_setup(ctx)
        ctx = self.phase_branch_and_commit(ctx)
        ctx = self.phase_summary(ctx)
        ctx = self.phase_deploy(ctx)

        click.echo("[commit-to-git] Done.")
        return ctx

    # ------------------------------------------------------------------
    # Phase 1
    # ------------------------------------------------------------------

    def phase_repo_setup(self, ctx: PublishContext) -> PublishContext:
        click.secho("[phase 1] Repository setup", bold=True)

        if self.git.is_repo():
            click.echo("  - Detected existing git repository.")
        else:
            click.echo("  - No git repository detected. Initializing...")
            self.git.init()

        self.gh.ensure_installed(self.prompter)
        self.gh.ensure_authenticated(self.prompter)

        if self.git.has_remote(DEFAULT_REMOTE):
            click.echo(f"  - Found existing '{DEFAULT_REMOTE}' remote.")
            return ctx

        click.echo(
            f"  - No '{DEFAULT_REMOTE}' remote found. "
            "Creating private GitHub repository via 'gh repo create'..."
        )
        repo_name = self.prompter.ask("GitHub repo name", default=self.project_root.name)

        has_commits = self.git.has_commits()
        self.gh.create_repo(repo_name, push=has_commits)
        if has_commits:
            click.echo(
                f"  - Created GitHub repo '{repo_name}', set '{DEFAULT_REMOTE}', "
                "and pushed initial commit(s)."
            )
        else:
            click.echo(
                f"  - Created GitHub repo '{repo_name}' and set '{DEFAULT_REMOTE}' "
                "(no commits to push yet)."
            )

        return replace(ctx, repo_name=repo_name)

    # ------------------------------------------------------------------
    # Phase 2
    # ------------------------------------------------------------------

    def phase_branch_and_commit(self, ctx: PublishContext) -> PublishContext:
        click.secho("[phase 2] Branch selection & commit", bold=True)

        click.echo("  - Local branches:")
        click.echo(self.git.branch_listing() or "    (no branches yet)")

        if not self.git.local_branches() and self.git.current_branch() != FALLBACK_BRANCH:
            click.echo(f"  - No current branch. Creating '{FALLBACK_BRANCH}'...")
            self.git.create_branch(FALLBACK_BRANCH)

        current = self.git.current_branch() or FALLBACK_BRANCH
        click.echo(f"  - Current branch: {current}")

        branch = self.prompter.ask("Branch to commit to", default=current)
        if branch != current:
            if self.git.branch_exists(branch):
                self.git.checkout(branch)
            else:
                click.echo(f"  - Branch '{branch}' does not exist. Creating...")
                self.git.create_branch(branch)
        elif self.git.branch_exists(branch):
            self.git.checkout(branch)

        click.echo("  - Staging changes...")
        self.git.show_status()
        if not self.prompter.confirm(
            "Proceed with 'git add .' and commit all shown changes?",
            default=True,
        ):
            raise UserDeclined("Aborted by user.")

        self.git.add_all()
        message = self.prompter.ask("Commit message", default=DEFAULT_COMMIT_MESSAGE)

        state = self.git.state(branch)
        logger.debug(f"[publish] {state}")

        committed = False
        if state.has_staged_changes:
            self.git.commit(message)
            committed = True
        else:
            click.echo("  - No staged changes to commit.")

        pushed = False
        if committed or state.has_commits:
            click.echo(f"  - Pushing to {DEFAULT_REMOTE}/{branch}...")
            self.git.push(branch, DEFAULT_REMOTE)
            pushed = True
        else:
            click.echo(f"  - Branch '{branch}' has no commits yet; nothing to push.")
            logger.warning(f"[publish] Skipped push of empty branch {branch}")

        return replace(ctx, branch=branch, committed=committed, pushed=pushed)

    # ------------------------------------------------------------------
    # Phase 3
    # ------------------------------------------------------------------

    def phase_summary(self, ctx: PublishContext) -> PublishContext:
        click.secho("[phase 3] Summary", bold=True)

        ctx = replace(
            ctx,
            remote_url=self.git.remote_url(DEFAULT_REMOTE),
            commit_hash=self.git.head_hash(),
            commit_message=self.git.last_commit_message(),
        )

        click.echo("  - Repository:")
        click.echo(f"      {DEFAULT_REMOTE}: {ctx.remote_url or NO_REMOTE}")
        click.echo("  - Branch & commit:")
        click.echo(f"      branch: {ctx.branch}")
        click.echo(f"      commit: {ctx.commit_hash or NOT_AVAILABLE}")
        click.echo(f"      message: {ctx.commit_message or NOT_AVAILABLE}")
        click.echo("  - Next actions (suggested):")
        click.echo("      - Open the GitHub repo (if configured) and review the commit.")

        return ctx

    # ------------------------------------------------------------------
    # Phase 4
    # ------------------------------------------------------------------

    def phase_deploy(self, ctx: PublishContext) -> PublishContext:
        click.secho("[phase 4] Post action - optional cloud deployment", bold=True)

        target = self.deploy_target
        if target is None:
            click.echo("  - No cloud deployment target configured (CLOUD_DEPLOY_HOST unset). Skipping.")
            return ctx

        click.echo(f"  - Detected deployment target: {target.display_name}")

        if not self.prompter.interactive:
            click.echo("  - Skipping cloud deployment (non-interactive mode).")
            return ctx

        if not self.prompter.confirm(
            f"Deploy latest '{ctx.branch}' to this cloud instance?",
            default=False,
        ):
            click.echo("  - Skipping cloud deployment.")
            return ctx

        procedure = RemoteProcedure.for_deploy(target, ctx.branch or FALLBACK_BRANCH)
        run_remote_procedure(self.runner, target, procedure)
        click.echo("  - Cloud deployment step completed (see remote logs for details).")

        return replace(ctx, deployed=True)
