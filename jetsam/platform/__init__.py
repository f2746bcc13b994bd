"""Platform layer: child processes and console prompts."""

from .process import (
    ProcessError,
    run,
    run_live,
    run_silent,
)
from .prompt import confirm, get_input

__all__ = [
    # process
    "ProcessError",
    "run",
    "run_live",
    "run_silent",
    # prompt
    "confirm",
    "get_input",
]
