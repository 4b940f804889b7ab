from scriptunit.assertions import Outcome
from scriptunit.state import MAX_EXIT_CODE, RunState, Verbosity


def test_new_state_starts_at_zero():
    state = RunState()
    assert (state.passed, state.failed, state.skipped) == (0, 0, 0)
    assert state.verbosity is Verbosity.NORMAL
    assert state.current is None
    assert state.exit_code == 0


def test_record_increments_exactly_one_counter():
    state = RunState()
    state.record(Outcome.PASSED)
    state.record(Outcome.FAILED)
    state.record(Outcome.FAILED)
    state.record(Outcome.SKIPPED)
    assert state.passed == 1
    assert state.failed == 2
    assert state.skipped == 1
    assert state.total == 4


def test_exit_code_is_failure_count():
    state = RunState(failed=7)
    assert state.exit_code == 7


def test_exit_code_saturates_at_255():
    state = RunState(failed=300)
    assert state.exit_code == MAX_EXIT_CODE == 255


def test_verbosity_levels_are_ordered():
    assert Verbosity.QUIET < Verbosity.SUMMARY < Verbosity.NORMAL < Verbosity.VERBOSE
    assert int(Verbosity.VERBOSE) == 3
