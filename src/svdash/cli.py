import os
from typing import Optional

import typer

from . import __version__
from .dash.app import run_dash
from .dash.discovery import DiscoveryError, discover_services
from .dash.render import min_size
from .dash.terminal import terminal_size
from .util import LOG_FILE_ENV, is_tty, resolve_base_dir, setup_logging


app = typer.Typer(
    name="svdash",
    add_completion=False,
    help=(
        "Live status table for a supervise/runsv service directory.\n\n"
        "Usage:\n"
        "  svdash [BASE_DIR]          Watch BASE_DIR (default: $SVDIR, then /service)\n\n"
        "Keys: j/k move the selection, q quits, an uppercase letter sends the\n"
        "lowercase command (u, d, t, ...) to the selection or, with nothing\n"
        "selected, to every service."
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: Optional[bool]) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _fail(msg: str) -> None:
    typer.echo(msg, err=True)
    raise typer.Exit(code=1)


@app.command()
def main(
    base_dir: Optional[str] = typer.Argument(
        None, help="Service directory (default: $SVDIR, then /service)", show_default=False
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Open the dashboard over the services in BASE_DIR."""
    try:
        setup_logging()
    except OSError:
        _fail(f"could not open log file '{os.getenv(LOG_FILE_ENV, '').strip()}'")
    if not is_tty():
        _fail("not a terminal")
    base = resolve_base_dir(base_dir)
    try:
        registry = discover_services(base)
    except DiscoveryError as e:
        _fail(str(e))

    need_cols, need_rows = min_size(registry)
    cols, rows = terminal_size()
    if cols < need_cols or rows < need_rows:
        _fail("sorry, terminal too small")

    try:
        run_dash(base, registry)
    except KeyboardInterrupt:
        raise typer.Exit()


def run() -> None:
    app()
