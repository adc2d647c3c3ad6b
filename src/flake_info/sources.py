"""Reading and writing sources files.

Two interchangeable formats share the same entries:

- ``*.toml``: a document with a ``sources`` array of tables
- anything else: a bare JSON array
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Iterable

import tomlkit

from flake_info.config import TOML_EXTENSION, TOML_SOURCES_KEY
from flake_info.errors import SourceParseError
from flake_info.logging import get_logger
from flake_info.models.source import Source, source_from_dict

logger = get_logger(__name__)


def _is_toml(path: Path) -> bool:
    return path.suffix == TOML_EXTENSION


def _load_toml(text: str) -> Any:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise SourceParseError(f"invalid TOML: {e}") from e

    if TOML_SOURCES_KEY not in document:
        raise SourceParseError(f"missing field '{TOML_SOURCES_KEY}'")
    return document[TOML_SOURCES_KEY]


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceParseError(f"invalid JSON: {e}") from e


def parse_sources(text: str, fmt: str = "json") -> list[Source]:
    """Parse the text of a sources file.

    Args:
        text: File contents
        fmt: "toml" for a document with a sources array, "json" for a bare array

    Returns:
        Sources in file order

    Raises:
        SourceParseError: If the document or any entry is malformed
    """
    if fmt == "toml":
        entries = _load_toml(text)
    elif fmt == "json":
        entries = _load_json(text)
    else:
        raise ValueError(f"Unknown sources format: {fmt}. Available: toml, json")

    if not isinstance(entries, list):
        raise SourceParseError(f"sources must be an array, got {type(entries).__name__}")

    sources = []
    for index, entry in enumerate(entries):
        try:
            sources.append(source_from_dict(entry))
        except SourceParseError as e:
            raise SourceParseError(f"source #{index}: {e}") from e

    return sources


def read_sources_file(path: Path | str) -> list[Source]:
    """Read a list of sources from a file.

    The format is chosen by extension alone: ``.toml`` files are TOML
    documents, every other file is a JSON array.

    Args:
        path: Path to the sources file

    Returns:
        Sources in file order

    Raises:
        OSError: If the file cannot be opened or read
        SourceParseError: If the file is not UTF-8, or the document or any
            entry is malformed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceParseError(f"{path}: not valid UTF-8: {e}") from e

    fmt = "toml" if _is_toml(path) else "json"

    try:
        sources = parse_sources(text, fmt)
    except SourceParseError as e:
        raise SourceParseError(f"{path}: {e}") from e

    logger.debug(f"Loaded {len(sources)} sources from {path} ({fmt})")
    return sources


def dumps_sources(sources: Iterable[Source], fmt: str = "json") -> str:
    """Render sources in their stored textual form.

    Args:
        sources: Sources to render
        fmt: "toml" or "json"

    Returns:
        Text that parse_sources() reads back into equal values
    """
    entries = [source.to_dict() for source in sources]

    if fmt == "json":
        return json.dumps(entries, indent=2) + "\n"
    if fmt != "toml":
        raise ValueError(f"Unknown sources format: {fmt}. Available: toml, json")

    doc = tomlkit.document()
    if not entries:
        doc[TOML_SOURCES_KEY] = tomlkit.array()
        return tomlkit.dumps(doc)

    tables = tomlkit.aot()
    for entry in entries:
        table = tomlkit.table()
        for key, value in entry.items():
            table[key] = value
        tables.append(table)
    doc[TOML_SOURCES_KEY] = tables

    return tomlkit.dumps(doc)


def write_sources_file(sources: Iterable[Source], path: Path | str) -> None:
    """Write sources to a file, choosing the format by extension.

    Args:
        sources: Sources to write
        path: Destination; parent directories are created as needed
    """
    path = Path(path)
    fmt = "toml" if _is_toml(path) else "json"

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_sources(sources, fmt), encoding="utf-8")

    logger.debug(f"Wrote sources to {path} ({fmt})")
