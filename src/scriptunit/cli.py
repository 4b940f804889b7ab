"""Command line entry points.

``app`` is the ``scriptunit`` console command, which runs a script file.
``main()`` is called at the bottom of a script to run its own tests.
Both read the verbosity flags leniently: unknown flags are ignored and
the last verbosity flag wins.
"""

from __future__ import annotations

import inspect
import sys
from pathlib import Path
from typing import Any, Callable, Iterable

import typer

from scriptunit.config import ScriptunitConfig, resolve_config
from scriptunit.discovery import (
    TestCase,
    collect,
    load_script,
    merge,
    resolve,
    scan_file,
)
from scriptunit.errors import ScriptunitError
from scriptunit.harness import Harness
from scriptunit.state import Verbosity
from scriptunit.verbose import setup_logger

# Unknown flags and stray tokens are accepted and ignored
CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}

FLAGS = {
    "-v": Verbosity.VERBOSE,
    "--verbose": Verbosity.VERBOSE,
    "-s": Verbosity.SUMMARY,
    "--summary": Verbosity.SUMMARY,
    "-q": Verbosity.QUIET,
    "--quiet": Verbosity.QUIET,
}
HELP_FLAGS = frozenset({"-h", "--help"})

# Exit code for problems that prevent the run from starting
ERROR_EXIT_CODE = 2

app = typer.Typer(
    name="scriptunit",
    help="Run the test functions of a script",
    add_completion=False,
    context_settings=CONTEXT_SETTINGS,
)
script_app = typer.Typer(add_completion=False, context_settings=CONTEXT_SETTINGS)


def resolve_verbosity(
    tokens: Iterable[str], default: Verbosity = Verbosity.NORMAL
) -> Verbosity | None:
    """Apply verbosity flags left to right; the last one wins.

    Returns None as soon as a help flag is seen.
    """
    verbosity = default
    for token in tokens:
        if token in HELP_FLAGS:
            return None
        verbosity = FLAGS.get(token, verbosity)
    return verbosity


def get_default_harness() -> Harness:
    from scriptunit import get_harness

    return get_harness()


def _execute(
    harness: Harness,
    tokens: list[str],
    script_dir: Path,
    load_cases: Callable[[], list[TestCase]],
) -> None:
    if resolve_verbosity(tokens) is None:
        harness.reporter.usage()
        raise typer.Exit(0)

    try:
        config = resolve_config(script_dir)
    except ScriptunitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(ERROR_EXIT_CODE)

    verbosity = resolve_verbosity(tokens, default=config.verbosity)
    _setup_logging(config, verbosity)
    harness.configure(verbosity=verbosity, color=config.color)

    try:
        cases = load_cases()
    except ScriptunitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(ERROR_EXIT_CODE)

    raise typer.Exit(harness.run(cases))


def _setup_logging(config: ScriptunitConfig, verbosity: Verbosity) -> None:
    debug_file = Path(config.log_file) if config.log_file else None
    setup_logger(debug_file, verbose=verbosity >= Verbosity.VERBOSE)


@app.command(context_settings=CONTEXT_SETTINGS, add_help_option=False)
def run(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(
        None, help="Test script followed by options", show_default=False
    ),
):
    """Run the test functions of SCRIPT: scriptunit SCRIPT [options...]"""
    tokens = list(args or []) + list(ctx.args)
    harness = get_default_harness()
    harness.reset()

    if resolve_verbosity(tokens) is None:
        harness.reporter.usage()
        raise typer.Exit(0)

    script = next((t for t in tokens if not t.startswith("-")), None)
    if script is None:
        harness.reporter.usage()
        raise typer.Exit(0)
    tokens.remove(script)

    script_path = Path(script)
    if not script_path.is_file():
        typer.echo(f"Error: test script not found: {script}", err=True)
        raise typer.Exit(ERROR_EXIT_CODE)

    def load_cases() -> list[TestCase]:
        # Scan before loading so a script without tests is never executed
        scanned = scan_file(script_path)
        if not scanned:
            return []
        module = load_script(script_path)
        return merge(
            resolve(scanned, module), harness.registry.cases(module.__name__)
        )

    _execute(harness, tokens, script_path.resolve().parent, load_cases)


@script_app.command(context_settings=CONTEXT_SETTINGS, add_help_option=False)
def run_script(
    ctx: typer.Context,
    args: list[str] | None = typer.Argument(None, show_default=False),
):
    """Run the tests of the script that called scriptunit.main()."""
    tokens = list(args or []) + list(ctx.args)
    harness: Harness = ctx.obj["harness"]
    namespace: dict[str, Any] = ctx.obj["namespace"]
    module_name = namespace.get("__name__", "__main__")

    script_file = namespace.get("__file__")
    script_dir = Path(script_file).resolve().parent if script_file else Path.cwd()

    def load_cases() -> list[TestCase]:
        return merge(
            collect(namespace, module_name), harness.registry.cases(module_name)
        )

    _execute(harness, tokens, script_dir, load_cases)


def main(
    argv: list[str] | None = None,
    *,
    namespace: dict[str, Any] | None = None,
    harness: Harness | None = None,
) -> None:
    """Run the calling script's test functions and exit.

    Call it at the bottom of a test script. The exit code is the number of
    failed assertions (saturating at 255).
    """
    if namespace is None:
        caller = inspect.currentframe().f_back
        namespace = caller.f_globals
        del caller
    if argv is None:
        argv = sys.argv[1:]

    prog_name = Path(namespace.get("__file__") or sys.argv[0] or "scriptunit").name
    script_app(
        args=list(argv),
        prog_name=prog_name,
        obj={"harness": harness or get_default_harness(), "namespace": namespace},
    )
