import scriptunit
from scriptunit import assert_equal, assert_return, skip


def testFirst():
    assert_equal("a", "a")
    assert_equal("a", "b")


def testSecond():
    skip()
    assert_return(3, 3)


def testBroken():
    raise RuntimeError("boom")


@scriptunit.case
def registered():
    assert_equal("x", "x")
