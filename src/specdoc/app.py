"""Typer application and console-script entry point for specdoc.

The root callback installs the global :class:`~specdoc.output.OutputManager`
and configures :mod:`logging`; the ``generate`` and ``inspect`` commands
live in :mod:`specdoc.commands`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer

from specdoc import __version__
from specdoc.commands.generate import generate_command
from specdoc.commands.inspect import inspect_command
from specdoc.exit_codes import EXIT_GENERIC_FAILURE
from specdoc.output import OutputFormat, OutputManager, set_output

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"

app = typer.Typer(
    name="specdoc",
    help="Generate API documentation from OpenAPI 3.x specs.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("inspect")(inspect_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"specdoc {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool = False) -> None:
    """Send library log records to stderr: DEBUG with ``--verbose``, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON table output."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text table output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every command."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    configure_logging(verbose)


def _setup_signal_handlers() -> None:
    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """Entry point for the ``specdoc`` console script.

    :class:`~specdoc.exceptions.SpecdocError` escaping a command exits with
    the error's ``exit_code``.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from specdoc.exceptions import SpecdocError
        from specdoc.output import error

        if isinstance(exc, SpecdocError):
            error(str(exc))
            sys.exit(exc.exit_code)
        logging.getLogger(__name__).exception("Unexpected error")
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
