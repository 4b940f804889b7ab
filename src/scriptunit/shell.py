"""Running shell commands from test cases."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("scriptunit.shell")

# Exit status used by coreutils `timeout` when the command is killed
TIMEOUT_EXIT_CODE = 124


@dataclass
class CommandResult:
    """Captured result of a shell command.

    ``output`` is stdout with trailing newlines removed, the way command
    substitution (``$(...)``) presents it.
    """

    output: str
    returncode: int
    stderr: str = ""

    def __str__(self) -> str:
        return self.output


def sh(
    command: str,
    *,
    cwd: str | Path | None = None,
    timeout: float | None = None,
    env: dict[str, str] | None = None,
) -> CommandResult:
    """Run ``command`` through the shell and capture its result."""
    logger.debug(f"Running: {command}")

    try:
        result = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            env=env,
            timeout=timeout,
            capture_output=True,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        logger.warning(f"Command timed out after {timeout}s: {command}")
        return CommandResult(
            output=_decode(e.stdout).rstrip("\n"),
            returncode=TIMEOUT_EXIT_CODE,
            stderr=_decode(e.stderr),
        )

    logger.debug(f"Command exited with code {result.returncode}")
    if result.stderr:
        logger.debug(f"stderr: {_decode(result.stderr)}")

    return CommandResult(
        output=_decode(result.stdout).rstrip("\n"),
        returncode=result.returncode,
        stderr=_decode(result.stderr),
    )


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")
