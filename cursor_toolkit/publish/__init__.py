"""
Publish Module — Commit, push to GitHub, and optionally deploy over ssh.
"""

from .config import DeployTarget
from .git import Git, RepoState
from .github import GitHubCLI
from .remote import (
    ChangeDirectory,
    ContainerNotice,
    PullIfCheckout,
    RemoteProcedure,
    run_remote_procedure,
)
from .workflow import PublishContext, Publisher

__all__ = [
    "Publisher",
    "PublishContext",
    "DeployTarget",
    "Git",
    "RepoState",
    "GitHubCLI",
    "RemoteProcedure",
    "ChangeDirectory",
    "PullIfCheckout",
    "ContainerNotice",
    "run_remote_procedure",
]
