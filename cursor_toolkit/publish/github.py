"""
GitHub CLI — Make sure `gh` is installed and logged in, create repos.

All GitHub access goes through the `gh` command; installation goes through
Homebrew. Any failure or refusal here is fatal to the run.
"""

from __future__ import annotations

import logging

import click

from ..errors import ExternalToolError, UserDeclined
from ..prompt import Prompter
from ..runner import CommandRunner

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"


class GitHubCLI:
    """`gh` (and `brew` for installing it)."""

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner

    def is_installed(self) -> bool:
        return self.runner.which("gh") is not None

    def is_authenticated(self) -> bool:
        return self.runner.run(["gh", "auth", "status"], check=False).ok

    def ensure_installed(self, prompter: Prompter) -> None:
        """Install gh through Homebrew after asking, or fail."""
        if self.is_installed():
            return

        click.echo("  - GitHub CLI ('gh') is not installed.")

        if self.runner.which("brew") is None:
            raise ExternalToolError(
                "Homebrew not found. Please install GitHub CLI manually "
                f"(e.g., from {GH_INSTALL_URL}) and rerun."
            )

        if not prompter.interactive:
            raise UserDeclined(
                "GitHub CLI is required but cannot be installed automatically in "
                "non-interactive mode. Please install it manually (e.g., 'brew install gh' "
                f"or from {GH_INSTALL_URL}) and rerun."
            )

        if not prompter.confirm("Install GitHub CLI using 'brew install gh'?", default=True):
            raise UserDeclined("GitHub CLI is required but will not be installed. Aborting.")

        click.echo("  - Installing GitHub CLI via Homebrew...")
        self.runner.run(
            ["brew", "install", "gh"],
            step="Failed to install GitHub CLI via Homebrew. Please install it manually and rerun.",
            capture=False,
        )

    def ensure_authenticated(self, prompter: Prompter) -> None:
        """Run `gh auth login` after asking, or fail."""
        if self.is_authenticated():
            return

        click.echo("  - You are not logged in to GitHub CLI.")

        if not prompter.interactive:
            raise UserDeclined(
                "GitHub CLI is not authenticated and this command is running "
                "non-interactively. Please run 'gh auth login' manually and rerun."
            )

        if not prompter.confirm("Run 'gh auth login' now?", default=True):
            raise UserDeclined("GitHub CLI is not authenticated. Aborting.")

        self.runner.run(
            ["gh", "auth", "login"],
            step="'gh auth login' failed. Please fix authentication and rerun.",
            capture=False,
        )

        if not self.is_authenticated():
            raise ExternalToolError(
                "GitHub authentication still not configured correctly. Aborting."
            )

    def create_repo(self, name: str, push: bool) -> None:
        """
        Create a private repo from the current directory and attach it as origin.

        push=True also pushes the existing commits.
        """
        args = ["gh", "repo", "create", name, "--private", "--source", ".", "--remote", "origin"]
        if push:
            args.append("--push")

        logger.info(f"[github] Creating private repository {name} (push={push})")
        self.runner.run(
            args,
            step="Failed to create GitHub repo via 'gh repo create'.",
            capture=False,
        )
