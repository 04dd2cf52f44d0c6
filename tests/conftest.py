"""
Shared fixtures for toolkit tests.

Provides a scripted CommandRunner (no real git/gh/ssh is ever spawned by the
workflow tests), a scripted Prompter, and helpers for building tooling trees
on disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest

from cursor_toolkit.errors import ExternalToolError
from cursor_toolkit.prompt import Prompter
from cursor_toolkit.runner import CommandResult, CommandRunner


class FakeRunner(CommandRunner):
    """
    CommandRunner that answers from a script instead of spawning processes.

    Responses are keyed by the exact argument tuple. Several responses for
    one key are consumed in order; the last one repeats. Unscripted commands
    succeed with empty output.
    """

    def __init__(self, installed: Iterable[str] = ("git", "gh", "brew", "ssh")) -> None:
        super().__init__(None)
        self.installed = set(installed)
        self.calls: List[Tuple[str, ...]] = []
        self.inputs: Dict[Tuple[str, ...], Optional[str]] = {}
        self._responses: Dict[Tuple[str, ...], List[CommandResult]] = {}

    def respond(self, *args: str, returncode=0, stdout: str = "", stderr: str = "") -> "FakeRunner":
        """Script the result(s) for one command. A list of return codes/stdouts queues several."""
        codes = returncode if isinstance(returncode, list) else [returncode]
        outs = stdout if isinstance(stdout, list) else [stdout] * len(codes)
        if len(outs) > len(codes):
            codes = codes + [codes[-1]] * (len(outs) - len(codes))
        self._responses[tuple(args)] = [
            CommandResult(tuple(args), code, out, stderr) for code, out in zip(codes, outs)
        ]
        return self

    def which(self, name: str) -> Optional[str]:
        return f"/usr/local/bin/{name}" if name in self.installed else None

    def run(
        self,
        args: Sequence[str],
        *,
        step: Optional[str] = None,
        check: bool = True,
        capture: bool = True,
        input_text: Optional[str] = None,
    ) -> CommandResult:
        key = tuple(args)
        self.calls.append(key)
        self.inputs[key] = input_text

        queue = self._responses.get(key)
        if queue:
            result = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            result = CommandResult(key, 0)

        if check and not result.ok:
            raise ExternalToolError(step or f"Command failed: {' '.join(key)}", result.stderr or None)
        return result

    def called(self, *args: str) -> bool:
        return tuple(args) in self.calls

    def called_with_prefix(self, *prefix: str) -> List[Tuple[str, ...]]:
        return [c for c in self.calls if c[: len(prefix)] == prefix]


class ScriptedPrompter(Prompter):
    """
    Prompter with canned answers.

    `answers` maps a question prefix to the answer; unmatched questions get
    their default, like an operator pressing Enter.
    """

    def __init__(self, interactive: bool = True, answers: Optional[dict] = None) -> None:
        self.interactive = interactive
        self.answers = dict(answers or {})
        self.asked: List[str] = []

    def _answer(self, question, default):
        self.asked.append(question)
        for prefix, answer in self.answers.items():
            if question.startswith(prefix):
                return answer
        return default

    def confirm(self, question: str, default: bool) -> bool:
        return self._answer(question, default)

    def ask(self, question: str, default: str) -> str:
        return self._answer(question, default)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_prompter():
    """Factory: make_prompter(interactive=True, answers={...})."""
    return ScriptedPrompter


def write_tree(root: Path, files: Dict[str, str]) -> None:
    """Create files (relative path -> content) under root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def read_tree(root: Path) -> Dict[str, str]:
    """Map of relative path -> content for every file under root."""
    return {
        p.relative_to(root).as_posix(): p.read_text(encoding="utf-8")
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tooling(tmp_path: Path):
    """A ~/.cursor-like source dir and an empty project .cursor destination."""
    source = tmp_path / "home" / ".cursor"
    dest = tmp_path / "project" / ".cursor"
    write_tree(
        source,
        {
            "commands/commit-to-git.json": '{"name": "commit-to-git"}',
            "scripts/bootstrap-project.sh": "#!/usr/bin/env bash\n",
            "scripts/commit-to-git.sh": "#!/usr/bin/env bash\n",
            "rules/python/style.mdc": "use ruff\n",
            "rules/general.mdc": "be nice\n",
            "ignored/notes.txt": "not copied\n",
        },
    )
    return source, dest
