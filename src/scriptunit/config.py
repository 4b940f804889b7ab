"""Loading ``scriptunit.yaml`` into a validated ``ScriptunitConfig``."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from scriptunit.errors import ConfigError
from scriptunit.state import Verbosity

CONFIG_ENV = "SCRIPTUNIT_CONFIG"
CONFIG_FILENAME = "scriptunit.yaml"


class ScriptunitConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    verbosity: Verbosity = Verbosity.NORMAL
    color: Literal["auto", "always", "never"] = "auto"
    log_file: str | None = None

    @field_validator("verbosity", mode="before")
    @classmethod
    def parse_verbosity_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            if v.strip().isdigit():
                return int(v)
            try:
                return Verbosity[v.strip().upper()]
            except KeyError:
                names = ", ".join(m.name.lower() for m in Verbosity)
                raise ValueError(f"Unknown verbosity '{v}' (expected one of: {names})")
        return v

    @field_validator("color", "log_file", mode="before")
    @classmethod
    def expand_env_variables(cls, v: Any) -> Any:
        """Expand ${VAR} and ${VAR:-default} references.

        A reference to an unset variable without a default is an error.
        """
        if not isinstance(v, str):
            return v
        try:
            return expandvars(v, nounset=True)
        except Exception as e:
            raise ValueError(f"Cannot expand '{v}': {e}")


def load_config(path: Path) -> ScriptunitConfig:
    """Load and validate a scriptunit config from a YAML file."""
    config_dir = path.parent.resolve()

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    try:
        config = ScriptunitConfig(**raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}:\n{e}") from e

    # Resolve a relative log file against the config file location
    if config.log_file is not None:
        log_path = Path(config.log_file)
        if not log_path.is_absolute():
            config.log_file = str((config_dir / log_path).resolve())

    return config


def find_config(script_dir: Path) -> Path | None:
    """Locate the config for a script: $SCRIPTUNIT_CONFIG, then a
    scriptunit.yaml next to the script."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        path = Path(env_path)
        if not path.is_file():
            raise ConfigError(f"{CONFIG_ENV} points to a missing file: {env_path}")
        return path

    candidate = script_dir / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def resolve_config(script_dir: Path) -> ScriptunitConfig:
    path = find_config(script_dir)
    if path is None:
        return ScriptunitConfig()
    return load_config(path)
