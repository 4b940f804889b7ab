"""Per-run counters and verbosity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

from scriptunit.assertions.base import Outcome

if TYPE_CHECKING:
    from scriptunit.discovery import TestCase

# POSIX exit statuses are a single byte
MAX_EXIT_CODE = 255


class Verbosity(IntEnum):
    QUIET = 0
    SUMMARY = 1
    NORMAL = 2
    VERBOSE = 3


@dataclass
class RunState:
    """Counters shared by every test case of one run.

    Attributes:
        passed: Number of assertions that passed.
        failed: Number of assertions that failed.
        skipped: Number of ``skip()`` calls.
        verbosity: Output detail level, fixed before the first test runs.
        current: The test case currently executing, if any.
    """

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    verbosity: Verbosity = Verbosity.NORMAL
    current: TestCase | None = None

    def record(self, outcome: Outcome) -> None:
        """Increment exactly one counter for ``outcome``."""
        if outcome is Outcome.PASSED:
            self.passed += 1
        elif outcome is Outcome.FAILED:
            self.failed += 1
        else:
            self.skipped += 1

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def exit_code(self) -> int:
        return min(self.failed, MAX_EXIT_CODE)
