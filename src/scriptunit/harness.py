"""The harness: recording assertions and running test cases in order.

A ``Harness`` owns the run counters and a reporter. Each assertion is
attributed to the line that made it inside the running test function,
and a test case that raises is logged without stopping the run.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from types import FrameType
from typing import IO, Iterable

from scriptunit.assertions import (
    AssertionResult,
    check_equal,
    check_matches,
    check_not_equal,
    check_not_matches,
    check_not_return,
    check_return,
    check_starts_with,
    skipped,
)
from scriptunit.discovery import Registry, TestCase
from scriptunit.reporting import ColorMode, Reporter
from scriptunit.shell import CommandResult
from scriptunit.state import RunState, Verbosity

_PACKAGE = __name__.split(".")[0]


def _in_package(frame: FrameType) -> bool:
    module = frame.f_globals.get("__name__", "")
    return module == _PACKAGE or module.startswith(f"{_PACKAGE}.")


class Harness:
    """Runs test cases and records the assertions they make.

    Each harness owns one ``RunState``; assertion methods update its
    counters and report the outcome straight away. Failed assertions are
    recorded, never raised, so a test case always runs to its end.
    """

    def __init__(
        self,
        state: RunState | None = None,
        reporter: Reporter | None = None,
        logger: logging.Logger | None = None,
    ):
        self.state = state or RunState()
        self.reporter = reporter or Reporter(verbosity=self.state.verbosity)
        self.logger = logger or logging.getLogger(_PACKAGE)
        self.registry = Registry()

    def configure(
        self,
        verbosity: Verbosity | None = None,
        color: ColorMode | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        """Set output options; call before the first test case runs."""
        if verbosity is not None:
            self.state.verbosity = verbosity
            self.reporter.verbosity = verbosity
        if color is not None:
            self.reporter.color = color
        if stream is not None:
            self.reporter.stream = stream

    def reset(self) -> None:
        """Zero the counters, keeping verbosity and registered cases."""
        self.state = RunState(verbosity=self.state.verbosity)

    # -- assertion primitives ------------------------------------------------

    def assert_equal(self, output: str, expected: str) -> None:
        self._record(check_equal(output, expected))

    def assert_not_equal(self, output: str, expected: str) -> None:
        self._record(check_not_equal(output, expected))

    def assert_matches(self, output: str, pattern: str) -> None:
        self._record(check_matches(output, pattern))

    def assert_not_matches(self, output: str, pattern: str) -> None:
        self._record(check_not_matches(output, pattern))

    def assert_starts_with(self, output: str, pattern: str) -> None:
        self._record(check_starts_with(output, pattern))

    def assert_return(self, status: CommandResult | int, expected: int | str) -> None:
        self._record(check_return(status, expected))

    def assert_not_return(
        self, status: CommandResult | int, expected: int | str
    ) -> None:
        self._record(check_not_return(status, expected))

    def skip(self) -> None:
        self._record(skipped())

    def _record(self, result: AssertionResult) -> None:
        name, line = self._call_site()
        self.state.record(result.outcome)
        self.logger.debug(
            f"{name}:{line} {result.name} {result.outcome.value}: {result.message}"
        )
        self.reporter.result(name, line, result)

    def _call_site(self) -> tuple[str, int]:
        """Name and line of the test code that made the current assertion.

        Prefers the frame of the running test function itself, so helpers
        called from a test report the line inside the test. Outside a run,
        or for functions whose code cannot be found on the stack, the
        nearest frame outside this package is used.
        """
        case = self.state.current
        target = None
        if case is not None and case.func is not None:
            target = getattr(inspect.unwrap(case.func), "__code__", None)

        frame = inspect.currentframe()
        fallback: FrameType | None = None
        try:
            while frame is not None:
                if target is not None and frame.f_code is target:
                    return case.name, frame.f_lineno
                if fallback is None and not _in_package(frame):
                    fallback = frame
                frame = frame.f_back

            if fallback is None:
                return (case.name if case else "<unknown>"), 0
            name = case.name if case is not None else fallback.f_code.co_name
            return name, fallback.f_lineno
        finally:
            del frame, fallback

    # -- running ---------------------------------------------------------------

    def run(self, cases: Iterable[TestCase]) -> int:
        """Run ``cases`` in order and return the process exit code.

        With no cases the usage text is printed and 0 returned without
        touching the counters.
        """
        cases = list(cases)
        if not cases:
            self.logger.debug("No test cases found")
            self.reporter.usage()
            return 0

        self.logger.debug(f"Running {len(cases)} test case(s)")
        for case in cases:
            self._run_case(case)

        self.logger.debug(
            f"Finished: {self.state.passed} passed, {self.state.failed} failed, "
            f"{self.state.skipped} skipped"
        )
        self.reporter.summary(self.state)
        return self.state.exit_code

    def _run_case(self, case: TestCase) -> None:
        if case.func is None:
            raise ValueError(f"Test case '{case.name}' has no function to call")

        self.logger.debug(f"Running {case.name} (line {case.lineno})")
        self.state.current = case
        try:
            if inspect.iscoroutinefunction(inspect.unwrap(case.func)):
                asyncio.run(case.func())
            else:
                case.func()
        except Exception:
            # The run goes on; the counters only reflect assertions made
            self.logger.exception(f"Test case '{case.name}' raised an exception")
        finally:
            self.state.current = None
