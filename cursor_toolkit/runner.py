"""
Command Runner — Invoke external tools with explicit argument lists.

Every call to git, gh, brew or ssh goes through CommandRunner so that
logging and failure handling live in one place. Arguments are always
passed as a list; nothing is interpolated into a shell string.

No timeouts are applied: a hung push or ssh session blocks the run until
the operator interrupts it.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .errors import ExternalToolError

logger = logging.getLogger(__name__)

# Exit status reported when the executable itself cannot be started
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command."""

    args: Tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Stripped stdout, the usual payload of a lookup command."""
        return self.stdout.strip()


class CommandRunner:
    """Run external commands synchronously from a fixed working directory."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = Path(cwd) if cwd else None

    def which(self, name: str) -> Optional[str]:
        """Return the resolved path of an executable, or None if absent."""
        return shutil.which(name)

    def run(
        self,
        args: Sequence[str],
        *,
        step: Optional[str] = None,
        check: bool = True,
        capture: bool = True,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        """
        Run one command and return its result.

        Args:
            args: Executable followed by its arguments.
            step: Human-readable description used in the error on failure.
            check: Raise ExternalToolError on a non-zero exit.
            capture: Capture stdout/stderr. When False, output streams
                     straight to the operator's terminal.
            input_text: Text fed to the command's stdin.
        """
        cmd = [str(a) for a in args]
        description = step or f"Command failed: {' '.join(cmd)}"
        logger.debug(f"[cmd] {' '.join(cmd)}", extra={"command": cmd[0]})

        try:
            completed = subprocess.run(
                cmd,
                cwd=str(self.cwd) if self.cwd else None,
                capture_output=capture,
                text=True,
                input=input_text,
                check=False,
            )
        except FileNotFoundError as exc:
            if check:
                raise ExternalToolError(description, f"{cmd[0]}: not found") from exc
            return CommandResult(tuple(cmd), COMMAND_NOT_FOUND, "", str(exc))

        result = CommandResult(
            args=tuple(cmd),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if not result.ok:
            logger.debug(f"[cmd] {cmd[0]} exited {result.returncode}: {result.stderr.strip()}")
            if check:
                details = result.stderr.strip() or result.stdout.strip() or None
                raise ExternalToolError(description, details)

        return result
