"""
Tests for the tree copier — plain copies, conflicts, and abort behaviour.

Runs against real temporary directories; prompts are scripted.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cursor_toolkit.bootstrap import (
    ConflictDecision,
    ConflictPolicy,
    CopyPlan,
    CopyResult,
    iter_files,
    resolve_conflict,
    run_copy,
    validate_plan,
)
from cursor_toolkit.errors import PreconditionError
from tests.conftest import read_tree, write_tree

ALL_FILES = {
    "commands/commit-to-git.json",
    "scripts/bootstrap-project.sh",
    "scripts/commit-to-git.sh",
    "rules/general.mdc",
    "rules/python/style.mdc",
}


def _plan(tooling, policy=ConflictPolicy.INTERACTIVE) -> CopyPlan:
    source, dest = tooling
    return CopyPlan(source_root=source, dest_root=dest, policy=policy)


# -- iter_files ---------------------------------------------------------------


class TestIterFiles:
    """File enumeration order and laziness."""

    def test_lexical_path_order(self, tmp_path: Path):
        write_tree(tmp_path, {"b.txt": "", "a/z.txt": "", "a/y.txt": "", "c/x.txt": "", "a.txt": ""})

        rels = [p.relative_to(tmp_path).as_posix() for p in iter_files(tmp_path)]

        assert rels == ["a.txt", "a/y.txt", "a/z.txt", "b.txt", "c/x.txt"]

    def test_nested_files_before_later_siblings(self, tmp_path: Path):
        write_tree(tmp_path, {"z.sh": "", "a/x.sh": ""})

        rels = [p.relative_to(tmp_path).as_posix() for p in iter_files(tmp_path)]

        assert rels == ["a/x.sh", "z.sh"]

    def test_is_lazy(self, tmp_path: Path):
        write_tree(tmp_path, {"a.txt": ""})
        files = iter_files(tmp_path)

        assert next(files).name == "a.txt"
        with pytest.raises(StopIteration):
            next(files)


# -- Preconditions ------------------------------------------------------------


class TestValidatePlan:

    def test_missing_source_raises(self, tmp_path: Path):
        plan = CopyPlan(tmp_path / "nope", tmp_path / "dest")

        with pytest.raises(PreconditionError) as excinfo:
            validate_plan(plan)

        assert excinfo.value.reason == "source-missing"

    def test_missing_source_leaves_destination_alone(self, tmp_path: Path, make_prompter):
        plan = CopyPlan(tmp_path / "nope", tmp_path / "dest")

        with pytest.raises(PreconditionError):
            run_copy(plan, make_prompter())

        assert not (tmp_path / "dest").exists()

    def test_same_directory_rejected(self, tmp_path: Path):
        write_tree(tmp_path / ".cursor", {"rules/general.mdc": "x"})
        plan = CopyPlan(tmp_path / ".cursor", tmp_path / "." / ".cursor")

        with pytest.raises(PreconditionError) as excinfo:
            validate_plan(plan)

        assert excinfo.value.reason == "same-directory"


# -- Copies without conflicts -------------------------------------------------


class TestCleanCopy:

    def test_copies_named_subtrees_only(self, tooling, make_prompter):
        source, dest = tooling
        result = run_copy(_plan(tooling), make_prompter())

        assert set(read_tree(dest)) == ALL_FILES
        assert result.copied == len(ALL_FILES)
        assert result.skipped == 0
        assert result.status == "Success"

    def test_contents_preserved(self, tooling, make_prompter):
        source, dest = tooling
        run_copy(_plan(tooling), make_prompter())

        assert (dest / "rules/python/style.mdc").read_text() == "use ruff\n"

    def test_missing_subtree_is_empty(self, tmp_path: Path, make_prompter):
        source = tmp_path / "src"
        write_tree(source, {"rules/only.mdc": "x"})
        plan = CopyPlan(source, tmp_path / "dest", ConflictPolicy.NON_INTERACTIVE)

        result = run_copy(plan, make_prompter(interactive=False))

        assert result.copied == 1
        assert not result.aborted

    def test_creates_destination_root(self, tmp_path: Path, make_prompter):
        source = tmp_path / "src"
        source.mkdir()
        dest = tmp_path / "deep" / "dest"

        result = run_copy(CopyPlan(source, dest), make_prompter())

        assert dest.is_dir()
        assert result.visited == 0


# -- Conflicts ----------------------------------------------------------------


class TestNonInteractiveConflict:
    """First conflict aborts the whole copy; earlier copies stay."""

    def test_aborts_at_first_conflict(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"scripts/commit-to-git.sh": "local edit\n"})
        prompter = make_prompter(interactive=False)

        result = run_copy(_plan(tooling, ConflictPolicy.NON_INTERACTIVE), prompter)

        assert result.abort_reason == "conflict-noninteractive"
        assert result.status == "Aborted (conflict-noninteractive)"
        assert result.aborted_at == dest / "scripts/commit-to-git.sh"
        assert result.copied == 2
        assert result.skipped == 0
        assert prompter.asked == []

    def test_keeps_files_before_conflict_only(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"scripts/commit-to-git.sh": "local edit\n"})

        run_copy(_plan(tooling, ConflictPolicy.NON_INTERACTIVE), make_prompter(interactive=False))

        assert read_tree(dest) == {
            "commands/commit-to-git.json": '{"name": "commit-to-git"}',
            "scripts/bootstrap-project.sh": "#!/usr/bin/env bash\n",
            "scripts/commit-to-git.sh": "local edit\n",
        }

    def test_nothing_after_nested_conflict_is_copied(self, tmp_path: Path, make_prompter):
        source = tmp_path / "src"
        dest = tmp_path / "dest"
        write_tree(source, {"scripts/a/x.sh": "new\n", "scripts/z.sh": "new\n"})
        write_tree(dest, {"scripts/a/x.sh": "old\n"})
        plan = CopyPlan(source, dest, ConflictPolicy.NON_INTERACTIVE)

        result = run_copy(plan, make_prompter(interactive=False))

        assert result.aborted_at == dest / "scripts/a/x.sh"
        assert result.copied == 0
        assert not (dest / "scripts" / "z.sh").exists()

    def test_identical_file_still_conflicts(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"commands/commit-to-git.json": '{"name": "commit-to-git"}'})

        result = run_copy(_plan(tooling, ConflictPolicy.NON_INTERACTIVE), make_prompter(interactive=False))

        assert result.aborted
        assert result.copied == 0


class TestInteractiveConflict:

    def test_no_leaves_destination_unchanged(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {
            "scripts/commit-to-git.sh": "mine\n",
            "rules/general.mdc": "my rules\n",
        })
        prompter = make_prompter(answers={"Overwrite": False})

        result = run_copy(_plan(tooling), prompter)

        assert (dest / "scripts/commit-to-git.sh").read_text() == "mine\n"
        assert (dest / "rules/general.mdc").read_text() == "my rules\n"
        assert result.skipped == 2
        assert result.copied == len(ALL_FILES) - 2
        assert len(prompter.asked) == 2

    def test_default_answer_is_skip(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"rules/general.mdc": "my rules\n"})

        result = run_copy(_plan(tooling), make_prompter())

        assert result.skipped == 1
        assert (dest / "rules/general.mdc").read_text() == "my rules\n"

    def test_yes_overwrites(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"rules/general.mdc": "my rules\n"})

        result = run_copy(_plan(tooling), make_prompter(answers={"Overwrite": True}))

        assert (dest / "rules/general.mdc").read_text() == "be nice\n"
        assert result.copied == len(ALL_FILES)
        assert result.skipped == 0

    def test_prompt_names_source_root(self, tooling, make_prompter):
        source, dest = tooling
        write_tree(dest, {"rules/general.mdc": "x"})
        prompter = make_prompter()

        run_copy(_plan(tooling), prompter)

        assert prompter.asked == [f"Overwrite with version from {source}?"]

    def test_rerun_with_yes_is_idempotent(self, tooling, make_prompter):
        source, dest = tooling
        prompter = make_prompter(answers={"Overwrite": True})

        run_copy(_plan(tooling), prompter)
        first = read_tree(dest)
        second_result = run_copy(_plan(tooling), prompter)

        assert read_tree(dest) == first
        assert second_result.copied == len(ALL_FILES)


class TestResolveConflict:

    def test_non_interactive_policy_aborts(self, tooling, make_prompter):
        plan = _plan(tooling, ConflictPolicy.NON_INTERACTIVE)
        decision = resolve_conflict(plan, make_prompter(), Path("x"))
        assert decision is ConflictDecision.ABORT

    def test_interactive_policy_asks(self, tooling, make_prompter):
        plan = _plan(tooling)
        assert resolve_conflict(plan, make_prompter(answers={"Overwrite": True}), Path("x")) is ConflictDecision.OVERWRITE
        assert resolve_conflict(plan, make_prompter(), Path("x")) is ConflictDecision.SKIP


class TestCopyResult:

    def test_counts_and_status(self):
        result = CopyResult()
        result.record_copy()
        result.record_skip()
        result.record_copy()

        assert (result.copied, result.skipped, result.visited) == (2, 1, 3)
        assert result.status == "Success"

        result.abort("conflict-noninteractive")
        assert result.status == "Aborted (conflict-noninteractive)"
