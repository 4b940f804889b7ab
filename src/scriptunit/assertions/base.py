"""Base data structures for the assertion system."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Outcome(str, Enum):
    PASSED = "Passed"
    FAILED = "Failed"
    SKIPPED = "Skipped"


@dataclass
class AssertionResult:
    """Result of evaluating a single assertion.

    Attributes:
        name: Identifier for the check (e.g. "equal", "return").
        outcome: Whether the assertion passed, failed or was skipped.
        expected: The expected value as the caller gave it.
        provided: The value actually observed.
        message: Human-readable detail about the result.
        error: Set when the check could not be evaluated (e.g. a bad
            regex); such checks always fail.
    """

    name: str
    outcome: Outcome
    expected: str = ""
    provided: str = ""
    message: str = ""
    error: str | None = None

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASSED
