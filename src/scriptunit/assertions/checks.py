"""Verdict checks behind the assertion primitives.

Every check is pure: it compares its operands and returns an
``AssertionResult``. Counting and printing happen in the harness.
"""

from __future__ import annotations

import re

from scriptunit.assertions.base import AssertionResult, Outcome
from scriptunit.shell import CommandResult


def _verdict(passed: bool) -> Outcome:
    return Outcome.PASSED if passed else Outcome.FAILED


def _search(pattern: str, output: str, anchored_end: bool) -> tuple[bool, str]:
    """Match ``pattern`` against ``output`` from the start.

    Returns the verdict and an error message for invalid patterns, which
    never match.
    """
    try:
        regex = re.compile(pattern)
    except re.error as e:
        return False, f"invalid pattern {pattern!r}: {e}"
    if anchored_end:
        return regex.fullmatch(output) is not None, ""
    return regex.match(output) is not None, ""


def check_equal(output: str, expected: str) -> AssertionResult:
    """Check that ``output`` is literally equal to ``expected``."""
    output, expected = str(output), str(expected)
    passed = output == expected
    return AssertionResult(
        name="equal",
        outcome=_verdict(passed),
        expected=expected,
        provided=output,
        message="values are equal" if passed else "values differ",
    )


def check_not_equal(output: str, expected: str) -> AssertionResult:
    """Check that ``output`` is not literally equal to ``expected``."""
    output, expected = str(output), str(expected)
    passed = output != expected
    return AssertionResult(
        name="not_equal",
        outcome=_verdict(passed),
        expected=expected,
        provided=output,
        message="values differ" if passed else "values are equal",
    )


def check_matches(output: str, pattern: str) -> AssertionResult:
    """Check that the whole of ``output`` matches the regex ``pattern``."""
    output, pattern = str(output), str(pattern)
    matched, error = _search(pattern, output, anchored_end=True)
    return AssertionResult(
        name="matches",
        outcome=_verdict(matched),
        expected=pattern,
        provided=output,
        message=error or ("pattern matched" if matched else "pattern did not match"),
        error=error or None,
    )


def check_not_matches(output: str, pattern: str) -> AssertionResult:
    """Check that ``output`` as a whole does not match the regex ``pattern``.

    An invalid pattern fails the check rather than counting as a non-match.
    """
    output, pattern = str(output), str(pattern)
    matched, error = _search(pattern, output, anchored_end=True)
    passed = not matched and not error
    return AssertionResult(
        name="not_matches",
        outcome=_verdict(passed),
        expected=pattern,
        provided=output,
        message=error or ("pattern did not match" if passed else "pattern matched"),
        error=error or None,
    )


def check_starts_with(output: str, pattern: str) -> AssertionResult:
    """Check that a prefix of ``output`` matches the regex ``pattern``."""
    output, pattern = str(output), str(pattern)
    matched, error = _search(pattern, output, anchored_end=False)
    return AssertionResult(
        name="starts_with",
        outcome=_verdict(matched),
        expected=pattern,
        provided=output,
        message=error or ("prefix matched" if matched else "prefix did not match"),
        error=error or None,
    )


def _status_of(status: CommandResult | int) -> int:
    if isinstance(status, CommandResult):
        return status.returncode
    return int(status)


def _not_a_code(
    name: str, label: str, value: object, expected: object, provided: object = None
) -> AssertionResult:
    error = f"{label} {value!r} is not an integer"
    return AssertionResult(
        name=name,
        outcome=Outcome.FAILED,
        expected=str(expected),
        provided=str(value if provided is None else provided),
        message=error,
        error=error,
    )


def _compare_codes(
    name: str, status: CommandResult | int, expected: int | str, equal: bool
) -> AssertionResult:
    try:
        provided = _status_of(status)
    except (TypeError, ValueError):
        return _not_a_code(name, "status", status, expected)
    try:
        expected_code = int(expected)
    except (TypeError, ValueError):
        return _not_a_code(name, "expected code", expected, expected, provided)
    passed = (provided == expected_code) is equal
    return AssertionResult(
        name=name,
        outcome=_verdict(passed),
        expected=str(expected_code),
        provided=str(provided),
        message=f"exit code {provided}",
    )


def check_return(status: CommandResult | int, expected: int | str) -> AssertionResult:
    """Check that a command's exit status equals ``expected``."""
    return _compare_codes("return", status, expected, equal=True)


def check_not_return(
    status: CommandResult | int, expected: int | str
) -> AssertionResult:
    """Check that a command's exit status differs from ``expected``."""
    return _compare_codes("not_return", status, expected, equal=False)


def skipped() -> AssertionResult:
    return AssertionResult(name="skip", outcome=Outcome.SKIPPED, message="skipped")
