"""
CLI commit command — commit, push to GitHub, optionally deploy.

Usage:
    commit-to-git [--project-dir DIR] [--non-interactive]
    cursor-toolkit commit [...]

Environment:
    CLOUD_DEPLOY_HOST / CLOUD_DEPLOY_USER / CLOUD_DEPLOY_PATH
    (also read from <project-dir>/.env)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from ..errors import ToolkitError
from ..prompt import detect_prompter
from ..publish import DeployTarget, Publisher


@click.command("commit")
@click.option(
    "--project-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project to publish (default: current directory)",
)
@click.option(
    "--non-interactive",
    is_flag=True,
    help="Never prompt; use defaults and skip deployment",
)
@click.argument("extra", nargs=-1)
def commit(
    project_dir: Optional[Path],
    non_interactive: bool,
    extra: Tuple[str, ...],
) -> None:
    """Commit all changes, push to GitHub and optionally deploy."""
    project_root = (project_dir or Path.cwd()).resolve()

    # Existing environment variables take precedence over the project .env
    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    publisher = Publisher(
        project_root=project_root,
        prompter=detect_prompter(non_interactive),
        deploy_target=DeployTarget.from_env(),
    )

    try:
        publisher.run()
    except ToolkitError as exc:
        click.secho(f"  - {exc}", fg="red", err=True)
        raise SystemExit(1)
