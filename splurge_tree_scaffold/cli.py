"""Command-line interface for the tree scaffolding tool.

This module defines the ``scaffold``, ``check`` and ``version`` commands
of the ``splurge-tree-scaffold`` application. It uses ``typer`` for
argument handling and delegates the work to the programmatic API in
:mod:`splurge_tree_scaffold.main`.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path

import typer

from . import main as main_module
from .cli_helpers import (
    create_config,
    create_event_bus,
    expand_source_files,
    load_base_config,
    resolve_log_level,
    setup_logging_with_level,
)
from .context import ScaffoldConfig
from .exceptions import BatchScaffoldError, CheckFailedError, ConfigurationError
from .result import Result

app = typer.Typer(
    name="splurge-tree-scaffold",
    help="Generate Solidity test scaffolds from .tree specifications",
    add_completion=False,
)

logger = logging.getLogger(__name__)


def _prepare(
    source_files: list[str],
    config_file: str | None,
    info: bool,
    debug: bool,
    **overrides: object,
) -> tuple[list[str], ScaffoldConfig]:
    """Resolve logging, configuration and the list of files for a command."""
    if info and debug:
        typer.echo("Error: --info and --debug cannot be used together.", err=True)
        raise typer.Exit(code=2)

    try:
        base_config = load_base_config(config_file)
        config = create_config(base_config, **overrides)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2) from None

    setup_logging_with_level(resolve_log_level(info, debug, base_config.log_level if config_file else None))
    if config_file:
        logger.info(f"Loaded configuration from: {config_file}")

    files, warnings = expand_source_files(source_files)
    for warning in warnings:
        typer.echo(f"warn: {warning}", err=True)
    if not files:
        typer.echo("Error: no input files", err=True)
        raise typer.Exit(code=1)

    return files, config


def _report_warnings(result: Result[list[str]]) -> None:
    warnings = result.warnings if not result.is_error() else (result.metadata or {}).get("warnings", [])
    for warning in warnings or []:
        typer.echo(f"warn: {warning}", err=True)


def _report_failures(error: Exception | None) -> None:
    if isinstance(error, BatchScaffoldError):
        for source_file, failure in error.failures.items():
            typer.echo(f"error: {source_file}: {failure}", err=True)
            if isinstance(failure, CheckFailedError) and failure.diff:
                typer.echo(failure.diff)
    elif error is not None:
        typer.echo(f"error: {error}", err=True)


@app.command("scaffold")
def scaffold(
    source_files: list[str] = typer.Argument(..., help="Tree files or glob patterns (e.g. 'test/**/*.tree')"),
    write_files: bool = typer.Option(
        False, "--write-files", "-w", help="Write the generated files next to their trees", is_flag=True
    ),
    force_write: bool = typer.Option(
        False, "--force-write", "-f", help="Overwrite generated files that already exist", is_flag=True
    ),
    solidity_version: str | None = typer.Option(
        None, "--solidity-version", "-s", help="Solidity version for the pragma directive (default: 0.8.0)"
    ),
    vm_skip: bool = typer.Option(False, "--vm-skip", "-S", help="Add vm.skip(true); to every test", is_flag=True),
    skip_modifiers: bool = typer.Option(
        False,
        "--skip-modifiers",
        "-m",
        help="Never create modifiers; fold every condition into test names",
        is_flag=True,
    ),
    indent: int | None = typer.Option(None, "--indent", help="Indentation width of the generated code (default: 2)"),
    no_format: bool = typer.Option(
        False, "--no-format", help="Do not run forge fmt on the generated code", is_flag=True
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="YAML configuration file to load settings from"
    ),
    max_concurrent: int | None = typer.Option(None, "--max-concurrent", help="Maximum files to process concurrently"),
    info: bool = typer.Option(False, "--info", help="Enable info logging output", is_flag=True),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output", is_flag=True),
) -> None:
    """Generate Solidity test files from .tree files.

    Without --write-files the generated code is printed to stdout.
    """
    files, config = _prepare(
        source_files,
        config_file,
        info,
        debug,
        write_files=write_files or None,
        force_write=force_write or None,
        solidity_version=solidity_version,
        emit_vm_skip=vm_skip or None,
        skip_modifiers=skip_modifiers or None,
        indent=indent,
        format_output=False if no_format else None,
        max_concurrent_files=max_concurrent,
    )
    if force_write and not config.write_files:
        typer.echo("Error: --force-write requires --write-files", err=True)
        raise typer.Exit(code=2)

    result = main_module.scaffold(files, config, event_bus=create_event_bus())
    _report_warnings(result)

    if not config.write_files:
        generated: dict[str, str] = (result.metadata or {}).get("generated_code", {})
        for target, code in generated.items():
            if len(generated) > 1:
                typer.echo(f"== {Path(target).as_posix()} ==")
            typer.echo(code.rstrip("\n"))

    if result.is_error():
        _report_failures(result.error)
        typer.echo(str(result.error), err=True)
        raise typer.Exit(code=1)


@app.command("check")
def check(
    source_files: list[str] = typer.Argument(..., help="Tree files or glob patterns (e.g. 'test/**/*.tree')"),
    solidity_version: str | None = typer.Option(
        None, "--solidity-version", "-s", help="Solidity version for the pragma directive (default: 0.8.0)"
    ),
    vm_skip: bool = typer.Option(False, "--vm-skip", "-S", help="Expect vm.skip(true); in every test", is_flag=True),
    skip_modifiers: bool = typer.Option(
        False, "--skip-modifiers", "-m", help="Expect every condition folded into test names", is_flag=True
    ),
    indent: int | None = typer.Option(None, "--indent", help="Indentation width of the generated code (default: 2)"),
    no_format: bool = typer.Option(
        False, "--no-format", help="Do not run forge fmt on the generated code", is_flag=True
    ),
    config_file: str | None = typer.Option(
        None, "--config", "-c", help="YAML configuration file to load settings from"
    ),
    max_concurrent: int | None = typer.Option(None, "--max-concurrent", help="Maximum files to process concurrently"),
    info: bool = typer.Option(False, "--info", help="Enable info logging output", is_flag=True),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output", is_flag=True),
) -> None:
    """Check that generated Solidity files match their .tree files."""
    files, config = _prepare(
        source_files,
        config_file,
        info,
        debug,
        solidity_version=solidity_version,
        emit_vm_skip=vm_skip or None,
        skip_modifiers=skip_modifiers or None,
        indent=indent,
        format_output=False if no_format else None,
        max_concurrent_files=max_concurrent,
    )

    result = main_module.check(files, config, event_bus=create_event_bus())
    _report_warnings(result)

    if result.is_error():
        _report_failures(result.error)
        failed = len(result.error.failures) if isinstance(result.error, BatchScaffoldError) else len(files)
        typer.echo(f"Check failed for {failed} of {len(files)} files", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"All {len(files)} files are up to date")


@app.command("version")
def version() -> None:
    """Show the version of splurge-tree-scaffold."""
    from . import __version__

    typer.echo(f"splurge-tree-scaffold {__version__}")


def main() -> None:
    """Main entry point for the CLI application."""
    app()


if __name__ == "__main__":
    main()
