"""Typer application and CLI entry point for adcred.

The ``adcred`` command answers "which credentials would my program pick
up, and why?" without making any token request:

- ``adcred show`` runs the discovery chain and prints the resulting
  credential with secrets redacted.
- ``adcred paths`` prints every input the chain consults.
- ``adcred probe`` reports whether the process runs on Compute Engine.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. :class:`~adcred.exceptions.AdcError` exits with the
error's ``exit_code``.

See Also:
    :mod:`adcred.resolver`: The discovery chain driven by ``show``.
    :mod:`adcred.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import os
import signal
import sys
from typing import Any, Optional

import typer

from adcred import __version__
from adcred.exceptions import AdcError
from adcred.exit_codes import EXIT_GENERIC_FAILURE
from adcred.output import (
    debug,
    error,
    print_mapping,
    print_table,
    suggest,
    success,
    warning,
)

app = typer.Typer(
    name="adcred",
    help="Inspect Application Default Credentials discovery.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


class _OutputLogHandler(logging.Handler):
    """Forward log records to :meth:`~adcred.output.OutputManager.debug`."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            debug(self.format(record))
        except Exception:
            self.handleError(record)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"adcred {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route ``adcred`` log records to the output manager when *verbose* is set."""
    logger = logging.getLogger("adcred")
    for handler in list(logger.handlers):
        if isinstance(handler, _OutputLogHandler):
            logger.removeHandler(handler)
    if not verbose:
        logger.setLevel(logging.NOTSET)
        return
    handler = _OutputLogHandler()
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log each discovery step to stderr."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~adcred.output.OutputManager` and the
    debug log handler from CLI flags.
    """
    from adcred.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)


def _fail(exc: AdcError) -> typer.Exit:
    error(str(exc))
    return typer.Exit(code=exc.exit_code)


@app.command("show")
def show_command(
    service_account_only: bool = typer.Option(
        False,
        "--service-account-only",
        help="Only accept a service-account key from the ADC file locations.",
    ),
    scopes: Optional[list[str]] = typer.Option(
        None, "--scope", "-s", help="OAuth2 scope to attach (repeatable)."
    ),
    subject: Optional[str] = typer.Option(
        None, "--subject", help="User to impersonate with a service-account key."
    ),
) -> None:
    """Resolve credentials and print what was found.

    Example::

        adcred show --scope https://www.googleapis.com/auth/cloud-platform
    """
    from adcred.resolver import AdcResolver

    resolver = AdcResolver()
    try:
        if service_account_only:
            credentials = resolver.load_service_account_from_default_paths(scopes, subject)
        else:
            credentials = resolver.resolve_default_credentials(scopes, subject)
    except AdcError as exc:
        suggest("Run 'adcred paths' to see which locations were consulted.")
        raise _fail(exc) from None

    print_mapping(credentials.summary(), title="Application Default Credentials")
    success(f"Resolved {credentials.kind.value} credentials.")


@app.command("paths")
def paths_command() -> None:
    """Print every environment variable and file the discovery chain reads."""
    from adcred.environment import (
        ADC_ENV_VAR,
        GCE_CHECK_OVERRIDE_ENV_VAR,
        GCLOUD_ADC_PATH_OVERRIDE_ENV_VAR,
        Environment,
    )
    from adcred.paths import default_path_resolver

    env = Environment()
    path_resolver = default_path_resolver()

    rows: list[list[str]] = []
    for name in (
        ADC_ENV_VAR,
        GCLOUD_ADC_PATH_OVERRIDE_ENV_VAR,
        path_resolver.home_env_var,
        GCE_CHECK_OVERRIDE_ENV_VAR,
    ):
        value = env.lookup(name)
        rows.append([name, "(unset)" if value is None else repr(value)])

    well_known = path_resolver.well_known_path(env)
    if well_known:
        state = "present" if os.path.isfile(well_known) else "missing"
    else:
        state = "skipped"
    rows.append(["well-known path", f"{well_known or '(none)'} ({state})"])

    print_table(["input", "value"], rows, title="ADC discovery inputs")


@app.command("probe")
def probe_command() -> None:
    """Report whether the process runs on Google Compute Engine."""
    from adcred.metadata import is_running_on_compute_engine

    try:
        on_gce = is_running_on_compute_engine()
    except AdcError as exc:
        raise _fail(exc) from None

    print_mapping({"compute_engine": str(on_gce).lower()})
    if not on_gce:
        warning("Not on Compute Engine: the chain cannot fall back to the metadata server.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``adcred`` console script.

    Unhandled :class:`~adcred.exceptions.AdcError` instances cause a clean
    exit with the error's ``exit_code``; anything else exits with
    :data:`~adcred.exit_codes.EXIT_GENERIC_FAILURE`.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except AdcError as exc:
        error(str(exc))
        sys.exit(exc.exit_code)
    except Exception as exc:
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
