#!/usr/bin/env python3
"""Example test script.

Run it directly (``./echo_checks.py -v``) or through the console command
(``scriptunit examples/echo_checks.py -v``).
"""

import scriptunit
from scriptunit import (
    assert_equal,
    assert_matches,
    assert_not_equal,
    assert_not_return,
    assert_return,
    assert_starts_with,
    sh,
    skip,
)


def testEcho():
    result = sh("echo foo")
    assert_equal(result.output, "foo")
    assert_return(result, 0)


def testMultiLineOutput():
    result = sh("printf '  a  b\\nc\\n'")
    assert_equal(result.output, "  a  b\nc")
    assert_not_equal(result.output, "a b c")


def testPatterns():
    result = sh("uname -s")
    assert_matches(result.output, r"[A-Za-z]+")
    assert_starts_with(sh("echo hello world").output, "hel+o")


def testExitCodes():
    assert_not_return(sh("exit 3"), 0)
    assert_return(sh("exit 3"), 3)


def testNotReadyYet():
    skip()


@scriptunit.case
def check_registered_explicitly():
    assert_equal(sh("echo $((1 + 2))").output, "3")


if __name__ == "__main__":
    scriptunit.main()
