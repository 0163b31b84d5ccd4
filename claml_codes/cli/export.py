"""CLI command for converting a ClaML file into a JSON code tree."""

import logging
from pathlib import Path
from typing import Annotated

import typer

from claml_codes.claml import ClaMLError
from claml_codes.cli.display import console, print_error, print_success
from claml_codes.storage import export_codes_json, load_claml_file

logger = logging.getLogger(__name__)


def parse_command(
    source: Annotated[
        Path,
        typer.Argument(
            help="Path to the ClaML XML file",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    output: Annotated[
        Path,
        typer.Argument(help="Destination JSON file for the top-level code tree"),
    ],
    pretty: Annotated[
        bool,
        typer.Option("--pretty", help="Indent the JSON output (larger file)"),
    ] = False,
) -> None:
    """Parse a ClaML file and export its code tree as JSON.

    Example:
        claml parse icd10gm.xml icd10gm.json --pretty
    """
    try:
        result = load_claml_file(source)
        export_codes_json(result.top_level_codes, output, pretty=pretty)
    except ClaMLError as e:
        print_error(f"Invalid ClaML file: {e}")
        raise typer.Exit(code=1) from None
    except OSError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    console.print(f"  Codes: {len(result.codes):,}")
    console.print(f"  Top-level codes: {len(result.top_level_codes):,}")
    print_success(f"Code tree written to {output}")
