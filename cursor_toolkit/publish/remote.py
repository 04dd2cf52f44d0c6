"""
Remote Procedure — The fixed sequence of steps run on a deploy host.

The procedure is a tuple of typed steps rendered into a bash script and
fed to `ssh <user>@<host> bash -s` on stdin. Every value taken from
configuration is shell-quoted when rendered.

Steps:
    ChangeDirectory   cd into the deploy path
    PullIfCheckout    git pull the pushed branch when the path is a checkout,
                      otherwise report that a manual rsync/scp step is needed
    ContainerNotice   report (without acting on) Docker configuration
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from typing import List, Tuple, Union

import click

from ..runner import CommandRunner
from .config import DeployTarget

logger = logging.getLogger(__name__)

CONTAINER_FILES = ("Dockerfile", "docker-compose.yml")


@dataclass(frozen=True)
class ChangeDirectory:
    path: str

    def render(self) -> List[str]:
        return [f"cd {shlex.quote(self.path)}"]


@dataclass(frozen=True)
class PullIfCheckout:
    branch: str
    path: str

    def render(self) -> List[str]:
        branch = shlex.quote(self.branch)
        missing = shlex.quote(f"[remote] No git repo detected at {self.path}.")
        return [
            "if command -v git >/dev/null 2>&1 && [ -d .git ]; then",
            '  echo "[remote] Using git pull..."',
            f"  git pull origin {branch}",
            "else",
            f"  echo {missing}",
            '  echo "[remote] No automated deployment path; add an rsync/scp step."',
            "fi",
        ]


@dataclass(frozen=True)
class ContainerNotice:
    files: Tuple[str, ...] = CONTAINER_FILES

    def render(self) -> List[str]:
        tests = " || ".join(f"[ -f {shlex.quote(name)} ]" for name in self.files)
        return [
            f"if {tests}; then",
            '  echo "[remote] Docker configuration detected."',
            '  echo "[remote] (placeholder) Rebuild and restart Docker containers..."',
            "fi",
        ]


RemoteStep = Union[ChangeDirectory, PullIfCheckout, ContainerNotice]


@dataclass(frozen=True)
class RemoteProcedure:
    steps: Tuple[RemoteStep, ...]

    @classmethod
    def for_deploy(cls, target: DeployTarget, branch: str) -> "RemoteProcedure":
        return cls(
            steps=(
                ChangeDirectory(target.path),
                PullIfCheckout(branch=branch, path=target.path),
                ContainerNotice(),
            )
        )

    def render(self) -> str:
        lines = ["set -euo pipefail"]
        for step in self.steps:
            lines.extend(step.render())
        return "\n".join(lines) + "\n"


def run_remote_procedure(
    runner: CommandRunner,
    target: DeployTarget,
    procedure: RemoteProcedure,
) -> None:
    """Execute the procedure over ssh; a non-zero exit is fatal."""
    click.echo("  - Connecting via SSH and updating remote code...")
    logger.info(f"[deploy] Running {len(procedure.steps)} step(s) on {target.destination}")
    runner.run(
        ["ssh", target.destination, "bash", "-s"],
        step=f"Remote deployment on {target.destination} failed",
        capture=False,
        input_text=procedure.render(),
    )
