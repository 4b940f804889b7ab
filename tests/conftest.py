"""Pytest configuration and fixtures."""

import io
import logging
from pathlib import Path

import pytest

import scriptunit
from scriptunit import Harness, Reporter, RunState, Verbosity
from scriptunit.config import CONFIG_ENV

SCRIPTS_DIR = Path(__file__).parent / "fixtures" / "scripts"


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset scriptunit loggers after each test so handlers don't leak."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("scriptunit"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def reset_default_harness(monkeypatch):
    """Give every test a clean default harness and no ambient config."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    harness = scriptunit.get_harness()
    harness.reset()
    harness.registry.clear()
    harness.configure(verbosity=Verbosity.NORMAL)
    harness.reporter = Reporter(verbosity=Verbosity.NORMAL)
    yield harness
    harness.reset()
    harness.registry.clear()
    harness.reporter = Reporter(verbosity=Verbosity.NORMAL)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def harness(output):
    """A standalone harness writing plain text to ``output``."""
    state = RunState()
    reporter = Reporter(stream=output, verbosity=state.verbosity, color="never")
    return Harness(state=state, reporter=reporter)


@pytest.fixture
def scripts_dir():
    return SCRIPTS_DIR
