"""Finding the test cases of a script.

Three sources are supported:

* ``scan_source`` enumerates ``def test...`` and ``async def test...``
  statements statically, without executing the script.
* ``collect`` picks test functions out of an already executed module
  namespace (used by ``scriptunit.main()`` at the bottom of a script).
* ``Registry`` holds functions registered explicitly with ``@case``.
"""

from __future__ import annotations

import ast
import importlib.util
import inspect
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Iterable

from scriptunit.errors import DiscoveryError

TEST_NAME = re.compile(r"test[A-Za-z0-9_]+")

TestFunction = Callable[[], Any]

_FUNCTION_NODES = (ast.FunctionDef, ast.AsyncFunctionDef)


@dataclass(frozen=True)
class TestCase:
    """A discovered test case.

    Attributes:
        name: Function name, as printed in result lines.
        lineno: Line of the (last) definition in the script.
        func: The callable to invoke; None for statically scanned cases
            that have not been resolved yet.
    """

    __test__ = False  # keep pytest from collecting this class

    name: str
    lineno: int
    func: TestFunction | None = field(default=None, compare=False, repr=False)


def is_test_name(name: str) -> bool:
    return TEST_NAME.fullmatch(name) is not None


def scan_source(source: str, filename: str = "<script>") -> list[TestCase]:
    """Statically list top-level test functions in ``source``.

    Order is first appearance. A name defined twice keeps its first
    position but reports the line of the definition that wins.
    """
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise DiscoveryError(f"Cannot parse {filename}: {e}") from e

    found: dict[str, int] = {}
    for node in tree.body:
        if isinstance(node, _FUNCTION_NODES) and is_test_name(node.name):
            found[node.name] = node.lineno
    return [TestCase(name=name, lineno=lineno) for name, lineno in found.items()]


def scan_file(path: Path) -> list[TestCase]:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DiscoveryError(f"Cannot read {path}: {e}") from e
    return scan_source(source, filename=str(path))


def collect(namespace: dict[str, Any], module_name: str) -> list[TestCase]:
    """List test functions defined in ``module_name``'s namespace.

    Dict order is first-binding order and rebinding replaces the value in
    place, so a redefined test runs once, in its original slot, with its
    last body. Functions imported from other modules are ignored.
    """
    cases = []
    for name, obj in namespace.items():
        if not is_test_name(name) or not inspect.isfunction(obj):
            continue
        if obj.__module__ != module_name:
            continue
        cases.append(TestCase(name=name, lineno=obj.__code__.co_firstlineno, func=obj))
    return cases


def resolve(scanned: Iterable[TestCase], module: ModuleType) -> list[TestCase]:
    """Bind statically scanned cases to the functions of a loaded module."""
    resolved = []
    for case in scanned:
        func = getattr(module, case.name, None)
        if not callable(func):
            raise DiscoveryError(
                f"Test '{case.name}' was found in the source but is not "
                f"callable after loading {module.__name__}"
            )
        resolved.append(TestCase(name=case.name, lineno=case.lineno, func=func))
    return resolved


def merge(*groups: Iterable[TestCase]) -> list[TestCase]:
    """Concatenate case lists, dropping later duplicates of a function."""
    seen: set[int] = set()
    merged = []
    for group in groups:
        for case in group:
            key = id(case.func) if case.func is not None else id(case)
            if key in seen:
                continue
            seen.add(key)
            merged.append(case)
    return merged


class Registry:
    """Ordered collection of explicitly registered test functions."""

    def __init__(self) -> None:
        self._cases: dict[str, TestCase] = {}

    def register(self, func: TestFunction) -> TestFunction:
        """Decorator registering ``func`` as a test case; returns it unchanged."""
        key = f"{func.__module__}.{func.__qualname__}"
        self._cases[key] = TestCase(
            name=func.__name__,
            lineno=func.__code__.co_firstlineno,
            func=func,
        )
        return func

    def cases(self, module_name: str | None = None) -> list[TestCase]:
        return [
            case
            for case in self._cases.values()
            if module_name is None or case.func.__module__ == module_name
        ]

    def clear(self) -> None:
        self._cases.clear()

    def __len__(self) -> int:
        return len(self._cases)


def load_script(path: Path, module_name: str | None = None) -> ModuleType:
    """Import a test script from ``path`` as a fresh module.

    The script's directory is put on ``sys.path`` first, as the interpreter
    does when running a script directly.
    """
    path = path.resolve()
    name = module_name or f"scriptunit_script_{path.stem}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise DiscoveryError(f"Cannot load {path} as a Python module")

    script_dir = str(path.parent)
    if script_dir not in sys.path:
        sys.path.insert(0, script_dir)

    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        sys.modules.pop(name, None)
        raise DiscoveryError(f"Error while loading {path}: {e}") from e
    return module
