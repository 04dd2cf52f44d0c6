"""
Bootstrap Models — Plan and result of one tooling-directory copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

# Only these parts of the tooling directory are carried into projects
DEFAULT_SUBTREES: Tuple[str, ...] = ("commands", "scripts", "rules")

CONTEXT_LABEL = "cursor"


class ConflictPolicy(str, Enum):
    """How to treat a destination file that already exists."""

    INTERACTIVE = "interactive"          # ask, default skip
    NON_INTERACTIVE = "non-interactive"  # abort the whole copy


class ConflictDecision(str, Enum):
    OVERWRITE = "overwrite"
    SKIP = "skip"
    ABORT = "abort"


@dataclass(frozen=True)
class CopyPlan:
    """What to copy, where, and how conflicts are resolved."""

    source_root: Path
    dest_root: Path
    policy: ConflictPolicy = ConflictPolicy.INTERACTIVE
    subtrees: Tuple[str, ...] = DEFAULT_SUBTREES

    @classmethod
    def default(cls, policy: ConflictPolicy, project_root: Optional[Path] = None) -> "CopyPlan":
        """~/.cursor into <project>/.cursor."""
        project_root = project_root or Path.cwd()
        return cls(
            source_root=Path.home() / ".cursor",
            dest_root=project_root / ".cursor",
            policy=policy,
        )


@dataclass
class CopyResult:
    """
    Running tally of a copy.

    Counters only grow; copied + skipped is the number of files visited.
    """

    copied: int = 0
    skipped: int = 0
    abort_reason: Optional[str] = None
    aborted_at: Optional[Path] = field(default=None, compare=False)

    @property
    def visited(self) -> int:
        return self.copied + self.skipped

    @property
    def aborted(self) -> bool:
        return self.abort_reason is not None

    @property
    def status(self) -> str:
        if self.abort_reason:
            return f"Aborted ({self.abort_reason})"
        return "Success"

    def record_copy(self) -> None:
        self.copied += 1

    def record_skip(self) -> None:
        self.skipped += 1

    def abort(self, reason: str, path: Optional[Path] = None) -> None:
        self.abort_reason = reason
        self.aborted_at = path
