"""Tests for config loading and validation."""

import textwrap
from pathlib import Path

import pytest

from scriptunit.config import (
    CONFIG_ENV,
    CONFIG_FILENAME,
    ScriptunitConfig,
    find_config,
    load_config,
    resolve_config,
)
from scriptunit.errors import ConfigError
from scriptunit.state import Verbosity


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str, name: str = CONFIG_FILENAME) -> Path:
        p = tmp_path / name
        p.write_text(textwrap.dedent(content))
        return p

    return _write


def test_defaults():
    cfg = ScriptunitConfig()
    assert cfg.verbosity is Verbosity.NORMAL
    assert cfg.color == "auto"
    assert cfg.log_file is None


def test_load_minimal_config(tmp_yaml):
    cfg = load_config(tmp_yaml("verbosity: quiet\n"))
    assert cfg.verbosity is Verbosity.QUIET


@pytest.mark.parametrize(
    "value,expected",
    [
        ("verbose", Verbosity.VERBOSE),
        ("Summary", Verbosity.SUMMARY),
        ("1", Verbosity.SUMMARY),
        ("'3'", Verbosity.VERBOSE),
    ],
)
def test_verbosity_names_and_numbers(tmp_yaml, value, expected):
    cfg = load_config(tmp_yaml(f"verbosity: {value}\n"))
    assert cfg.verbosity is expected


def test_unknown_verbosity_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="Unknown verbosity"):
        load_config(tmp_yaml("verbosity: loud\n"))


def test_unknown_key_rejected(tmp_yaml):
    with pytest.raises(ConfigError):
        load_config(tmp_yaml("parallel: 4\n"))


def test_invalid_color_rejected(tmp_yaml):
    with pytest.raises(ConfigError):
        load_config(tmp_yaml("color: sometimes\n"))


def test_invalid_yaml_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config(tmp_yaml("verbosity: [\n"))


def test_non_mapping_rejected(tmp_yaml):
    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_yaml("- quiet\n"))


def test_empty_file_gives_defaults(tmp_yaml):
    assert load_config(tmp_yaml("")) == ScriptunitConfig()


def test_config_error_is_value_error(tmp_yaml):
    with pytest.raises(ValueError):
        load_config(tmp_yaml("verbosity: loud\n"))


# --- environment expansion ---


def test_env_variables_expanded(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.setenv("SU_TEST_COLOR", "never")
    monkeypatch.setenv("SU_TEST_LOGDIR", str(tmp_path / "logs"))
    cfg = load_config(tmp_yaml("""\
        color: ${SU_TEST_COLOR}
        log_file: ${SU_TEST_LOGDIR}/run.log
    """))
    assert cfg.color == "never"
    assert cfg.log_file == str(tmp_path / "logs" / "run.log")


def test_env_default_used_when_unset(tmp_yaml, monkeypatch):
    monkeypatch.delenv("SU_TEST_UNSET", raising=False)
    cfg = load_config(tmp_yaml("color: ${SU_TEST_UNSET:-always}\n"))
    assert cfg.color == "always"


def test_missing_env_variable_rejected(tmp_yaml, monkeypatch):
    monkeypatch.delenv("SU_TEST_UNSET", raising=False)
    with pytest.raises(ConfigError, match="SU_TEST_UNSET"):
        load_config(tmp_yaml("log_file: ${SU_TEST_UNSET}/x.log\n"))


def test_relative_log_file_resolved_against_config_dir(tmp_yaml, tmp_path):
    cfg = load_config(tmp_yaml("log_file: logs/debug.log\n"))
    assert cfg.log_file == str((tmp_path / "logs" / "debug.log").resolve())


# --- locating config ---


def test_find_config_next_to_script(tmp_yaml, tmp_path):
    path = tmp_yaml("color: never\n")
    assert find_config(tmp_path) == path


def test_find_config_none(tmp_path):
    assert find_config(tmp_path) is None
    assert resolve_config(tmp_path) == ScriptunitConfig()


def test_find_config_from_environment(tmp_yaml, tmp_path, monkeypatch):
    path = tmp_yaml("verbosity: summary\n", name="custom.yaml")
    monkeypatch.setenv(CONFIG_ENV, str(path))
    assert find_config(tmp_path / "elsewhere") == path
    assert resolve_config(tmp_path / "elsewhere").verbosity is Verbosity.SUMMARY


def test_find_config_environment_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV, str(tmp_path / "missing.yaml"))
    with pytest.raises(ConfigError, match="missing file"):
        find_config(tmp_path)


def test_example_config_loads(monkeypatch):
    monkeypatch.delenv("SCRIPTUNIT_COLOR", raising=False)
    repo_root = Path(__file__).resolve().parents[1]
    cfg = load_config(repo_root / "examples" / CONFIG_FILENAME)
    assert cfg.verbosity is Verbosity.NORMAL
    assert cfg.color == "auto"
    assert cfg.log_file.endswith("scriptunit-examples.log")
