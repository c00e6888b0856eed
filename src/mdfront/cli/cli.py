"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated, Optional

import typer

from mdfront.cli.commands import check_cmd, ingest_cmd, init_cmd, list_cmd, show_cmd, _settings
from mdfront.log import configure_logging


app = typer.Typer(name="mdfront", no_args_is_help=True, help="Front-matter document checker and catalog")


@app.callback()
def main(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="debug, info, warning, error")] = None,
    ):
    """Parse, validate, list, and catalog front-matter markdown documents."""
    configure_logging(_settings(overrides={"log_level": log_level}).log_level)


app.command(name="check")(check_cmd)
app.command(name="list")(list_cmd)
app.command(name="show")(show_cmd)
app.command(name="ingest")(ingest_cmd)
app.command(name="init")(init_cmd)
