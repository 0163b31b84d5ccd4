"""Main CLI entry point for the ClaML code tools."""

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from claml_codes.cli.display import print_error
from claml_codes.cli.export import parse_command
from claml_codes.cli.lookup import search_command, show_command
from claml_codes.config import ClaMLConfig

# Create main Typer app
app = typer.Typer(
    name="claml",
    help="Parse ClaML classifications into code trees and search their labels.",
    no_args_is_help=True,
)

# Register commands
app.command("parse")(parse_command)
app.command("search")(search_command)
app.command("show")(show_command)


def configure_logging(level: str) -> None:
    """Send log records through Rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=False
            )
        ],
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Parse ClaML classifications into code trees and search their labels."""
    try:
        config = ClaMLConfig.from_env()
    except ValueError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(code=1) from None

    configure_logging("DEBUG" if verbose else config.log_level)


def main() -> None:
    """Entry point for the claml CLI."""
    app()


if __name__ == "__main__":
    main()
