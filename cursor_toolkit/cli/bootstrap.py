"""
CLI bootstrap command — copy ~/.cursor tooling into the project.

Usage:
    bootstrap-project [--source DIR] [--dest DIR] [--non-interactive]
    cursor-toolkit bootstrap [...]
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

import click

from ..bootstrap import ConflictPolicy, CopyPlan, CopyResult, run_copy, validate_plan
from ..bootstrap.models import CONTEXT_LABEL
from ..errors import PreconditionError
from ..prompt import detect_prompter


def _print_summary(plan: CopyPlan, result: CopyResult) -> None:
    click.secho("[phase 3] Summary", bold=True)
    click.echo(f"  - Context: {CONTEXT_LABEL}")
    click.echo(f"  - Source: {plan.source_root}")
    click.echo(f"  - Destination: {plan.dest_root}")
    click.echo(f"  - Files copied: {result.copied}")
    click.echo(f"  - Files skipped: {result.skipped}")
    color = "red" if result.aborted else "green"
    click.secho(f"  - Status: {result.status}", fg=color)


@click.command("bootstrap")
@click.option(
    "--source",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Tooling directory to copy from (default: ~/.cursor)",
)
@click.option(
    "--dest",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory to copy into (default: ./.cursor)",
)
@click.option(
    "--non-interactive",
    is_flag=True,
    help="Never prompt; abort on the first conflicting file",
)
@click.argument("extra", nargs=-1)
def bootstrap(
    source: Optional[Path],
    dest: Optional[Path],
    non_interactive: bool,
    extra: Tuple[str, ...],
) -> None:
    """Copy commands/, scripts/ and rules/ from ~/.cursor into ./.cursor."""
    click.echo("[bootstrap-project] Starting...")

    prompter = detect_prompter(non_interactive)
    policy = ConflictPolicy.INTERACTIVE if prompter.interactive else ConflictPolicy.NON_INTERACTIVE

    plan = CopyPlan.default(policy)
    if source is not None:
        plan = CopyPlan(source.expanduser(), plan.dest_root, policy)
    if dest is not None:
        plan = CopyPlan(plan.source_root, dest.expanduser(), policy)

    click.secho("[phase 1] Detect environment & resolve paths", bold=True)
    click.echo(f"  - Source: {plan.source_root}")
    click.echo(f"  - Destination: {plan.dest_root}")

    try:
        validate_plan(plan)
    except PreconditionError as exc:
        click.secho(f"  - {exc}", fg="red", err=True)
        _print_summary(plan, CopyResult(abort_reason=exc.reason))
        raise SystemExit(1)

    click.secho("[phase 2] Copy rules & scripts with conflict handling", bold=True)
    result = run_copy(plan, prompter)

    _print_summary(plan, result)
    if result.aborted:
        raise SystemExit(1)

    click.echo("[bootstrap-project] Done.")
