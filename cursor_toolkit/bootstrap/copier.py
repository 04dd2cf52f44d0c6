"""
Tree Copier — Mirror tooling subtrees into a project with conflict handling.

Files missing from the destination are copied. Files already present are
never overwritten without a decision: interactively the operator is asked
(default: skip), non-interactively the whole copy stops at the first
conflict. Copies made before the stop are kept.

Identical files still count as conflicts; contents are not compared.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Iterator

import click

from ..errors import ConflictAbort, PreconditionError
from ..prompt import Prompter
from .models import ConflictDecision, ConflictPolicy, CopyPlan, CopyResult

logger = logging.getLogger(__name__)


def validate_plan(plan: CopyPlan) -> None:
    """Fail before touching anything if the source tree is missing or is the destination."""
    if not plan.source_root.is_dir():
        raise PreconditionError(
            "source-missing",
            f"No tooling directory found at {plan.source_root}",
        )
    if plan.source_root.resolve() == plan.dest_root.resolve():
        raise PreconditionError(
            "same-directory",
            f"Source and destination are the same directory: {plan.source_root}",
        )


def _sort_key(entry: os.DirEntry) -> str:
    # A directory sorts as "name/" so its files land where their paths sort
    return entry.name + "/" if entry.is_dir(follow_symlinks=False) else entry.name


def iter_files(root: Path) -> Iterator[Path]:
    """
    Yield every file below root, lazily, in lexical order of relative path.

    `a/x.sh` comes before `b.sh`: a directory's files are yielded at the
    point its path sorts, not after the files next to it. Symlinked
    directories are not descended into.
    """
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=_sort_key)

    for entry in ordered:
        if entry.is_dir(follow_symlinks=False):
            yield from iter_files(Path(entry.path))
        elif entry.is_file():
            yield Path(entry.path)


def resolve_conflict(
    plan: CopyPlan,
    prompter: Prompter,
    dest_path: Path,
) -> ConflictDecision:
    """Decide what to do with a destination file that already exists."""
    if plan.policy is ConflictPolicy.NON_INTERACTIVE:
        return ConflictDecision.ABORT

    click.echo(f"  - Conflict: {dest_path} already exists.")
    overwrite = prompter.confirm(
        f"Overwrite with version from {plan.source_root}?",
        default=False,
    )
    return ConflictDecision.OVERWRITE if overwrite else ConflictDecision.SKIP


def copy_subtree(
    src_root: Path,
    dest_root: Path,
    plan: CopyPlan,
    prompter: Prompter,
    result: CopyResult,
) -> None:
    """
    Copy one subtree, updating result as files are visited.

    Raises ConflictAbort on the first conflict under a non-interactive plan.
    """
    if not src_root.is_dir():
        logger.debug(f"[bootstrap] No {src_root.name}/ under source, nothing to copy")
        return

    for src_path in iter_files(src_root):
        rel_path = src_path.relative_to(src_root)
        dest_path = dest_root / rel_path

        dest_path.parent.mkdir(parents=True, exist_ok=True)

        if not dest_path.exists():
            shutil.copy2(src_path, dest_path)
            result.record_copy()
            logger.debug(f"[bootstrap] Copied {rel_path}")
            continue

        decision = resolve_conflict(plan, prompter, dest_path)
        if decision is ConflictDecision.OVERWRITE:
            shutil.copy2(src_path, dest_path)
            result.record_copy()
        elif decision is ConflictDecision.SKIP:
            click.echo(f"    Skipping {dest_path}")
            result.record_skip()
        else:
            raise ConflictAbort(dest_path)


def run_copy(plan: CopyPlan, prompter: Prompter) -> CopyResult:
    """
    Copy every configured subtree of the plan.

    The source must exist (see validate_plan). A non-interactive conflict is
    recorded on the returned result rather than raised, so the caller can
    still print a summary.
    """
    validate_plan(plan)
    result = CopyResult()

    plan.dest_root.mkdir(parents=True, exist_ok=True)

    try:
        for name in plan.subtrees:
            copy_subtree(
                plan.source_root / name,
                plan.dest_root / name,
                plan,
                prompter,
                result,
            )
    except ConflictAbort as exc:
        click.echo(f"  - {exc}")
        click.echo("    Re-run interactively or resolve manually, then re-run.")
        logger.warning(f"[bootstrap] Aborted at {exc.path}")
        result.abort(exc.reason, exc.path)

    return result
