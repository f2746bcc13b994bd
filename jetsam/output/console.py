"""Console output abstraction.

Commands narrate progress on stdout and report problems on stderr with an
``Error:`` prefix. Services talk to a ``ConsoleProtocol`` so tests can swap
in ``MockConsole`` and assert on what would have been printed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "BANNER_WIDTH",
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]

BANNER_WIDTH = 78


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message on stdout with optional styling."""
        ...

    def success(self, message: str) -> None:
        """Print a success message on stdout."""
        ...

    def info(self, message: str) -> None:
        """Print an ``Info:`` message on stdout."""
        ...

    def error(self, message: str) -> None:
        """Print an ``Error:`` message on stderr."""
        ...

    def banner(self, message: str) -> None:
        """Print a section banner announcing the next phase."""
        ...


def banner_lines(message: str) -> list[str]:
    return ["", "#" * BANNER_WIDTH, f"# {message}", "#", ""]


class RichConsole:
    """Console implementation using Rich.

    Two Rich consoles are kept so that errors can be redirected separately
    from normal output.
    """

    def __init__(self) -> None:
        from rich.console import Console

        self._out = Console(highlight=False)
        self._err = Console(stderr=True, highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._out.print(message, style=rich_style, markup=False)
        else:
            self._out.print(message, markup=False)

    def success(self, message: str) -> None:
        self._out.print(message, style="green", markup=False)

    def info(self, message: str) -> None:
        from rich.markup import escape

        self._out.print(f"[green]Info[/green]: {escape(message)}")

    def error(self, message: str) -> None:
        from rich.markup import escape

        self._err.print(f"[red bold]Error[/red bold]: {escape(message)}")

    def banner(self, message: str) -> None:
        for line in banner_lines(message):
            self._out.print(line, style="blue bold", markup=False)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style
    stderr: bool = False


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.SUCCESS))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"Info: {message}", Style.INFO))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"Error: {message}", Style.ERROR, stderr=True))

    def banner(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    @property
    def errors(self) -> list[str]:
        """Messages written to stderr."""
        return [o.message for o in self.outputs if o.stderr]

    @property
    def banners(self) -> list[str]:
        return [o.message for o in self.outputs if o.style == Style.HEADER]

    def has_error(self) -> bool:
        """Check if any error was printed."""
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
