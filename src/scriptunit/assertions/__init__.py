"""Assertion system for checking script output and return codes."""

from scriptunit.assertions.base import AssertionResult, Outcome
from scriptunit.assertions.checks import (
    check_equal,
    check_matches,
    check_not_equal,
    check_not_matches,
    check_not_return,
    check_return,
    check_starts_with,
    skipped,
)

__all__ = [
    "AssertionResult",
    "Outcome",
    "check_equal",
    "check_matches",
    "check_not_equal",
    "check_not_matches",
    "check_not_return",
    "check_return",
    "check_starts_with",
    "skipped",
]
