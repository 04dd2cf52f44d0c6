"""
Prompting — Ask the operator questions, or answer them with defaults.

The workflows never check for a terminal themselves. They receive a
Prompter chosen once per run: an InteractivePrompter reading from the
attached terminal, or a NonInteractivePrompter that answers every question
with its default and says so on the console.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Optional, TextIO

import click


class Prompter(ABC):
    """Question-asking capability injected into the workflows."""

    interactive: bool = False

    @abstractmethod
    def confirm(self, question: str, default: bool) -> bool:
        """Ask a yes/no question."""

    @abstractmethod
    def ask(self, question: str, default: str) -> str:
        """Ask for a free-text answer; an empty answer means the default."""


class InteractivePrompter(Prompter):
    """Read answers from the terminal via click."""

    interactive = True

    def confirm(self, question: str, default: bool) -> bool:
        return click.confirm(f"  > {question}", default=default)

    def ask(self, question: str, default: str) -> str:
        answer = click.prompt(
            f"  > {question}",
            default=default,
            show_default=True,
        )
        return answer.strip() or default


class NonInteractivePrompter(Prompter):
    """Answer every question with its default, echoing what was chosen."""

    interactive = False

    def confirm(self, question: str, default: bool) -> bool:
        hint = "[Y/n]" if default else "[y/N]"
        answer = "y" if default else "n"
        click.echo(f"  > {question} {hint}: {answer} (non-interactive default)")
        return default

    def ask(self, question: str, default: str) -> str:
        click.echo(f"  > {question} [{default}]: {default} (non-interactive default)")
        return default


def detect_prompter(
    non_interactive: bool = False,
    stream: Optional[TextIO] = None,
) -> Prompter:
    """
    Pick the prompter for this run.

    Interactive only when a terminal is attached to stdin and the operator
    did not ask for --non-interactive.
    """
    if non_interactive:
        return NonInteractivePrompter()

    stream = stream if stream is not None else sys.stdin
    try:
        attached = stream.isatty()
    except (AttributeError, ValueError):
        attached = False

    return InteractivePrompter() if attached else NonInteractivePrompter()
