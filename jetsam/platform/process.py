"""Subprocess execution with Result-based error handling.

Three stream modes are offered:

- ``run``: capture stdout and return it; a non-zero exit is an ``Err``.
- ``run_live``: inherit the parent's streams and return the exit status.
- ``run_silent``: discard every stream and return the exit status. Meant for
  probes such as "does this tag exist?" whose failure is an answer, not a
  problem worth reporting.

For ``run_live`` and ``run_silent`` a non-zero exit status is a normal
``Ok`` value. Only a launch failure (e.g. executable not found) is an ``Err``.

Usage:
    match run_live(["git", "push"], cwd=root):
        case Ok(0):
            print("pushed")
        case Ok(status):
            print(f"push exited with {status}")
        case Err(error):
            print(f"could not start git: {error.stderr}")
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from jetsam.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_live", "run_silent"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, or -1 if it never started.
        stdout: Standard output (may be empty).
        stderr: Standard error, or the launch error message.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def launched(self) -> bool:
        """False when the process could not be started at all."""
        return self.returncode >= 0

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.launched:
            return f"{cmd_str} could not be started: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


def _launch_error(cmd: list[str], e: OSError) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))


def run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        Ok(stdout) on exit 0, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return _launch_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    stdout = proc.stdout
    if stdout.endswith("\n"):
        stdout = stdout[:-1]
    return Ok(stdout)


def run_live(cmd: list[str], cwd: Path) -> Result[int, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Returns:
        Ok(exit status) once the process finished, Err(ProcessError) if it
        could not be started.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), check=False)
    except OSError as e:
        return _launch_error(cmd, e)
    return Ok(proc.returncode)


def run_silent(cmd: list[str], cwd: Path) -> Result[int, ProcessError]:
    """Execute a command with every stream discarded.

    Same result contract as ``run_live``.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        return _launch_error(cmd, e)
    return Ok(proc.returncode)
