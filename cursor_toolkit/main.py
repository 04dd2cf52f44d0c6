"""
Cursor Toolkit — CLI Entry Point

Usage:
    cursor-toolkit bootstrap [--source DIR] [--dest DIR] [--non-interactive]
    cursor-toolkit commit [--project-dir DIR] [--non-interactive]

The same commands are installed as the standalone scripts
`bootstrap-project` and `commit-to-git`.
"""

from __future__ import annotations

# Load .env file FIRST, before any other imports that might read env vars
from pathlib import Path
from dotenv import load_dotenv

# The operator runs the tools from the project root
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

import click

from .cli.bootstrap import bootstrap
from .cli.commit import commit
from .logging_config import setup_logging

# Initialize logging
setup_logging()


@click.group()
def cli() -> None:
    """Cursor Toolkit — project bootstrap and git publishing helpers."""


cli.add_command(bootstrap)
cli.add_command(commit)

# Standalone console scripts
bootstrap_project = bootstrap
commit_to_git = commit


if __name__ == "__main__":
    cli()
