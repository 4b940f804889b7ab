"""Exception classes for scriptunit.

Assertion failures are never raised; these cover problems that stop a
run from starting.
"""


class ScriptunitError(Exception):
    """Base exception for scriptunit."""
    pass


class DiscoveryError(ScriptunitError):
    """A test script could not be scanned or loaded."""
    pass


class ConfigError(ScriptunitError, ValueError):
    """Invalid scriptunit.yaml or environment configuration."""
    pass
