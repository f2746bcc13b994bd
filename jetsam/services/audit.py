"""Dependency audit with a failure threshold.

``yarn audit`` exits with a bit-mask: each bit flags that issues of one
severity were found. Everything is shown to the operator, but the run only
fails when the mask reaches the bit of the requested minimum severity.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from jetsam.core.errors import ErrorCode
from jetsam.core.result import Err
from jetsam.output.console import ConsoleProtocol
from jetsam.platform.process import run_live


class Severity(str, Enum):
    info = "info"
    low = "low"
    moderate = "moderate"
    high = "high"
    critical = "critical"


# Bits as reported by the audit tool. critical shares the value of every
# lower bit combined rather than having a bit of its own.
SEVERITY_BITS: dict[Severity, int] = {
    Severity.info: 0x01,
    Severity.low: 0x02,
    Severity.moderate: 0x04,
    Severity.high: 0x08,
    Severity.critical: 0x0F,
}


def audit_command(
    package_manager: str,
    *,
    level: Severity | None = None,
    json_output: bool = False,
) -> list[str]:
    cmd = [package_manager, "audit"]
    if level is not None:
        cmd += ["--level", level.value]
    if json_output:
        cmd.append("--json")
    return cmd


def apply_minimum(status: int, minimum: Severity | None) -> int:
    """Map ``status`` to 0 when every flagged severity is below ``minimum``.

    A negative status means the audit was killed before it could report and
    always fails with ``FAILURE``.
    """
    if status < 0:
        return int(ErrorCode.FAILURE)
    if minimum is None or status == 0:
        return status
    if status < SEVERITY_BITS[minimum]:
        return 0
    return status


def run_audit(
    *,
    project_root: Path,
    package_manager: str,
    console: ConsoleProtocol,
    level: Severity | None = None,
    json_output: bool = False,
    minimum: Severity | None = None,
) -> int:
    """Run the audit and return the exit status jetsam should use."""
    cmd = audit_command(package_manager, level=level, json_output=json_output)
    result = run_live(cmd, cwd=project_root)
    if isinstance(result, Err):
        console.error(f"Failed to run {package_manager} audit: {result.error}")
        return int(ErrorCode.FAILURE)

    status = result.value
    if status < 0:
        console.error(f"{package_manager} audit was terminated by signal {-status}")
    suppressed = apply_minimum(status, minimum)
    if status > 0 and suppressed == 0 and minimum is not None:
        console.info(f'Ignoring issues found below severity "{minimum.value}" as requested')
    return suppressed
