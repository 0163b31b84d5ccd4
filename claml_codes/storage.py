"""Reading ClaML sources and reading/writing exported code trees."""

import json
import logging
import time
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from claml_codes.claml import SchemaViolationError, parse_claml
from claml_codes.models.code import Code, ParseResult

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"

_codes_adapter = TypeAdapter(list[Code])


def load_claml_file(path: Path) -> ParseResult:
    """Read and parse a ClaML XML file.

    Args:
        path: Path to the ClaML file.

    Returns:
        The parse result.
    """
    start = time.perf_counter()
    try:
        source = path.read_bytes()
    except OSError as e:
        logger.error("Failed to read ClaML file %s: %s", path, e)
        raise

    result = parse_claml(source)
    logger.info(
        "Loaded %s in %.0fms", path, (time.perf_counter() - start) * 1000
    )
    return result


def export_codes_json(codes: list[Code], path: Path, pretty: bool = False) -> None:
    """Write a code tree to a JSON file with camelCase keys.

    Args:
        codes: Root codes; their subtrees are written inline.
        path: Destination file. Parent directories are created.
        pretty: Indent the output.
    """
    data = _codes_adapter.dump_python(codes, mode="json", by_alias=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)
        logger.info("Saved %d top-level codes to %s", len(codes), path)
    except OSError as e:
        logger.error("Failed to save codes to %s: %s", path, e)
        raise


def load_codes_json(path: Path) -> list[Code]:
    """Load a code tree previously written by :func:`export_codes_json`.

    Raises:
        SchemaViolationError: If the file is not a valid code tree.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        logger.error("Failed to read codes from %s: %s", path, e)
        raise
    except json.JSONDecodeError as e:
        raise SchemaViolationError(f"Invalid JSON in {path}: {e}") from e

    try:
        return _codes_adapter.validate_python(data)
    except ValidationError as e:
        raise SchemaViolationError(f"Invalid code tree in {path}: {e}") from e


def load_top_level_codes(path: Path) -> list[Code]:
    """Load root codes from either an exported JSON tree or a ClaML file."""
    if path.suffix.lower() == JSON_SUFFIX:
        return load_codes_json(path)
    return load_claml_file(path).top_level_codes
