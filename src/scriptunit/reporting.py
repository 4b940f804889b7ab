"""Terminal output for assertion results and run summaries."""

from __future__ import annotations

from typing import IO, Literal

import typer

from scriptunit.assertions.base import AssertionResult, Outcome
from scriptunit.state import RunState, Verbosity

ColorMode = Literal["auto", "always", "never"]

USAGE = """\
Usage: <testscript> [options...]

Options:
  -v, --verbose  Print expected and provided values
  -s, --summary  Only print summary omitting individual test results
  -q, --quiet    Do not print anything to standard output
  -h, --help     Show usage screen"""

_OUTCOME_COLORS = {
    Outcome.PASSED: typer.colors.GREEN,
    Outcome.FAILED: typer.colors.RED,
    Outcome.SKIPPED: typer.colors.YELLOW,
}


class Reporter:
    """Writes result lines to a stream, gated by verbosity.

    With ``color="auto"`` styling is emitted only when the stream is a
    terminal; click strips the escape sequences otherwise.
    """

    def __init__(
        self,
        stream: IO[str] | None = None,
        verbosity: Verbosity = Verbosity.NORMAL,
        color: ColorMode = "auto",
    ):
        self.stream = stream
        self.verbosity = verbosity
        self.color = color

    @property
    def _color(self) -> bool | None:
        if self.color == "always":
            return True
        if self.color == "never":
            return False
        return None

    def _echo(self, message: str) -> None:
        typer.echo(message, file=self.stream, color=self._color)

    def result(self, test_name: str, line: int, result: AssertionResult) -> None:
        """Emit ``name:line:Word`` and, for verbose failures, the operands."""
        if self.verbosity < Verbosity.NORMAL:
            return
        name = typer.style(test_name, fg=typer.colors.WHITE, bold=True)
        word = typer.style(result.outcome.value, fg=_OUTCOME_COLORS[result.outcome])
        self._echo(f"{name}:{line}:{word}")

        if self.verbosity >= Verbosity.VERBOSE and result.outcome is Outcome.FAILED:
            expected = typer.style("Expected", fg=typer.colors.RED)
            provided = typer.style("Provided", fg=typer.colors.RED)
            detail = f" ({result.error})" if result.error else ""
            self._echo(f"{expected}: {result.expected}{detail}")
            self._echo(f"{provided}: {result.provided}")

    def summary(self, state: RunState) -> None:
        if self.verbosity < Verbosity.SUMMARY:
            return
        self._echo(
            f"Done. {state.passed} passed. "
            f"{state.failed} failed. "
            f"{state.skipped} skipped."
        )

    def usage(self) -> None:
        # Usage is requested output, so verbosity does not gate it
        self._echo(USAGE)
