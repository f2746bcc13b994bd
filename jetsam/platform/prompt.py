"""Interactive console prompts."""

from __future__ import annotations

from collections.abc import Sequence

import typer

__all__ = ["YES_NO", "confirm", "get_input"]

YES_NO = ("yes", "no")


def _read_line(text: str) -> str:
    return typer.prompt(text, default="", show_default=False, prompt_suffix=" ")


def _format_question(question: str, choices: Sequence[str] | None, default: str | None) -> str:
    text = question
    if choices:
        text += f" ({'/'.join(choices)})"
    if default:
        text += f" [{default}]"
    return f"{text}?"


def get_input(
    question: str,
    choices: Sequence[str] | None = None,
    default: str | None = None,
) -> str:
    """Read one answer from the console.

    Empty input selects ``default`` when there is one. When ``choices`` is
    given the question is repeated until the answer is one of them.
    """
    text = _format_question(question, choices, default)
    while True:
        answer = _read_line(text).strip()
        if not answer and default is not None:
            answer = default
        if not choices or answer in choices:
            return answer


def confirm(question: str) -> bool:
    """Ask a yes/no question."""
    return get_input(question, YES_NO) == "yes"
