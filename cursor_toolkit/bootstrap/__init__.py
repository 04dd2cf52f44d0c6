"""
Bootstrap — Copy the user's tooling directory into a project.
"""

from .copier import iter_files, resolve_conflict, run_copy, validate_plan
from .models import (
    DEFAULT_SUBTREES,
    ConflictDecision,
    ConflictPolicy,
    CopyPlan,
    CopyResult,
)

__all__ = [
    "DEFAULT_SUBTREES",
    "ConflictDecision",
    "ConflictPolicy",
    "CopyPlan",
    "CopyResult",
    "iter_files",
    "resolve_conflict",
    "run_copy",
    "validate_plan",
]
