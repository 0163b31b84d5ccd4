"""CLI commands for searching and browsing a code tree."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from claml_codes.claml import ClaMLError
from claml_codes.cli.display import (
    console,
    create_children_table,
    create_code_panel,
    create_hits_table,
    print_error,
    print_info,
)
from claml_codes.config import ClaMLConfig
from claml_codes.search import CodeSearch
from claml_codes.storage import load_top_level_codes

logger = logging.getLogger(__name__)

SourceOption = Annotated[
    Path | None,
    typer.Option(
        "--source",
        "-s",
        help="ClaML XML or exported JSON file (default: $CLAML_SOURCE)",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON instead of a table"),
]


def _load_config() -> ClaMLConfig:
    try:
        return ClaMLConfig.from_env()
    except ValueError as e:
        print_error(f"Configuration error: {e}")
        raise typer.Exit(code=1) from None


def _build_index(source: Path | None, config: ClaMLConfig) -> CodeSearch:
    """Load the tree from the given or configured source and index it."""
    path = source or config.source
    if path is None:
        print_error("No source given. Pass --source or set CLAML_SOURCE.")
        raise typer.Exit(code=1)
    if not path.is_file():
        print_error(f"Source file not found: {path}")
        raise typer.Exit(code=1)

    try:
        top_level_codes = load_top_level_codes(path)
    except ClaMLError as e:
        print_error(f"Invalid source {path}: {e}")
        raise typer.Exit(code=1) from None
    except OSError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from None

    return CodeSearch(top_level_codes)


def search_command(
    query: Annotated[str, typer.Argument(help="Free-text query")],
    source: SourceOption = None,
    limit: Annotated[
        int | None,
        typer.Option("--limit", "-n", min=1, help="Maximum number of results"),
    ] = None,
    output_json: JsonOption = False,
) -> None:
    """Search code labels.

    Every word of the query must occur in the label; codes whose label words
    start with more query words rank first.

    Example:
        claml search "acute heart" --source icd10gm.json
    """
    config = _load_config()
    index = _build_index(source, config)
    hits = index.search(query, limit=limit or config.search_limit)

    if output_json:
        data = [
            {
                "code": hit.code.code,
                "label": hit.code.label,
                "modifierLabel": hit.code.modifier_label,
                "score": hit.score,
            }
            for hit in hits
        ]
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    if not hits:
        print_info(f"No codes match '{query}' ({index.get_count():,} codes searched)")
        return

    console.print(create_hits_table(hits, query))


def show_command(
    code: Annotated[str, typer.Argument(help="Code identifier, e.g. A01.0")],
    source: SourceOption = None,
    output_json: JsonOption = False,
) -> None:
    """Show a code's label, metadata and direct children."""
    config = _load_config()
    index = _build_index(source, config)

    found = index.get_code(code)
    if found is None:
        print_error(f"Code not found: {code}")
        raise typer.Exit(code=1)

    if output_json:
        console.print_json(found.model_dump_json(by_alias=True))
        return

    console.print(create_code_panel(found))
    if found.sub_codes:
        console.print(create_children_table(found))
