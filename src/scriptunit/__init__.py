"""Unit tests for scripts and shell commands.

Write ``test...`` functions, then call ``main()`` at the bottom of the
script::

    from scriptunit import assert_equal, assert_return, main, sh

    def testEcho():
        result = sh("echo foo")
        assert_equal(result.output, "foo")
        assert_return(result, 0)

    if __name__ == "__main__":
        main()

The module-level assertion functions record into a process-wide default
``Harness``; create your own ``Harness`` to keep state separate.
"""

from scriptunit.assertions import AssertionResult, Outcome
from scriptunit.cli import main
from scriptunit.discovery import Registry, TestCase
from scriptunit.errors import ConfigError, DiscoveryError, ScriptunitError
from scriptunit.harness import Harness
from scriptunit.reporting import Reporter
from scriptunit.shell import CommandResult, sh
from scriptunit.state import RunState, Verbosity

_harness = Harness()


def get_harness() -> Harness:
    """Return the default harness used by the module-level functions."""
    return _harness


assert_equal = _harness.assert_equal
assert_not_equal = _harness.assert_not_equal
assert_matches = _harness.assert_matches
assert_not_matches = _harness.assert_not_matches
assert_starts_with = _harness.assert_starts_with
assert_return = _harness.assert_return
assert_not_return = _harness.assert_not_return
skip = _harness.skip
case = _harness.registry.register

__all__ = [
    "AssertionResult",
    "CommandResult",
    "ConfigError",
    "DiscoveryError",
    "Harness",
    "Outcome",
    "Registry",
    "Reporter",
    "RunState",
    "ScriptunitError",
    "TestCase",
    "Verbosity",
    "assert_equal",
    "assert_matches",
    "assert_not_equal",
    "assert_not_matches",
    "assert_not_return",
    "assert_return",
    "assert_starts_with",
    "case",
    "get_harness",
    "main",
    "sh",
    "skip",
]
