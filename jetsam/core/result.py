"""Result type for explicit error handling.

Every step of a jetsam command that can fail returns a ``Result``: either
``Ok(value)`` or ``Err(error)``. A chain of steps stops at the first ``Err``
and hands it back to the CLI layer, which turns it into an exit status.

Usage:
    def read_version(path: Path) -> Result[str, str]:
        if not path.exists():
            return Err(f"missing: {path}")
        return Ok(path.read_text().strip())

    match read_version(Path("VERSION")):
        case Ok(version):
            print(version)
        case Err(error):
            print(f"Error: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result holding ``value``."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result holding ``error``."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
