"""CLI entrypoint: Typer app definition and command registration"""

from typing import Annotated

import typer

from mdfilter.cli.commands import _settings, check_cmd, match_cmd
from mdfilter.log import configure_logging


app = typer.Typer(name="mdfilter", no_args_is_help=True, help="Filter markdown notes by tag, frontmatter, folder, date, and text")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    log_json: Annotated[bool, typer.Option("--log-json", help="Emit JSON log lines on stderr")] = False,
    ):
    """Configure logging before any command runs."""
    settings = _settings()
    configure_logging(verbose=verbose, log_json=log_json or settings.log_json)


app.command(name="match")(match_cmd)
app.command(name="check")(check_cmd)
