"""Parsing of ``tablename_date_schema[-schemaversion]_csvxversion.ext`` filenames."""

from __future__ import annotations

import datetime
import logging

from csvx.models.errors import NamingError
from csvx.models.metadata import SCHEMA_SCHEMA_NAME, Compression, FileNameMetadata
from csvx.parser.grammar import (
    DATE_SEGMENT_RE,
    INTEGER_SEGMENT_RE,
    VersionGrammar,
    VersionRegistry,
)

logger = logging.getLogger("csvx.parser")

_SEGMENT_NAMES = ("tablename", "date", "schema", "csvx version")


def _fail(index: int, segment: str, reason: str) -> NamingError:
    return NamingError(
        f"Filename segment {index} ({_SEGMENT_NAMES[index]} '{segment}'): {reason}",
        segment=index,
    )


def _parse_date(segment: str) -> datetime.date:
    match = DATE_SEGMENT_RE.fullmatch(segment)
    if match is None:
        raise _fail(1, segment, "expected an 8-digit YYYYMMDD date")
    year, month, day = (int(g) for g in match.groups())
    try:
        return datetime.date(year, month, day)
    except ValueError as exc:
        raise _fail(1, segment, f"not a calendar date ({exc})") from exc


def _parse_schema(segment: str, grammar: VersionGrammar) -> tuple[str, int | None]:
    if not grammar.has_schema_version:
        if not grammar.is_name(segment):
            raise _fail(2, segment, "not a valid schema identifier")
        return segment, None

    name, sep, version = segment.rpartition("-")
    if not sep:
        raise _fail(2, segment, "expected 'schema-schemaversion'")
    if INTEGER_SEGMENT_RE.fullmatch(version) is None:
        raise _fail(2, segment, f"schema version '{version}' is not an integer")
    if name != SCHEMA_SCHEMA_NAME and not grammar.is_name(name):
        raise _fail(2, segment, f"'{name}' is not a valid schema identifier")
    return name, int(version)


def parse_filename(filename: str, version: int = 4) -> FileNameMetadata:
    """Parse a csvx base filename under the rules of the given csvx version.

    Raises :class:`NamingError` naming the offending segment; the record is
    only returned when every segment matches its grammar.
    """
    grammar = VersionRegistry.get(version)

    parts = filename.split(".")
    compression: Compression | None = None
    if len(parts) > 2 and parts[-1] in {c.value for c in Compression}:
        compression = Compression(parts.pop())
    if len(parts) != 2:
        raise NamingError(
            f"Filename '{filename}' must have the form "
            f"tablename_date_schema_version.{grammar.extension}"
        )
    base, extension = parts
    if extension != grammar.extension:
        raise NamingError(
            f"Extension '.{extension}' is invalid for csvx version {grammar.version} "
            f"(expected '.{grammar.extension}')"
        )

    segments = base.split("_")
    if len(segments) != len(_SEGMENT_NAMES):
        raise NamingError(
            f"Filename base '{base}' has {len(segments)} underscore-separated "
            f"segments, expected {len(_SEGMENT_NAMES)}"
        )
    tablename, date_text, schema_text, version_text = segments

    if not grammar.is_name(tablename):
        raise _fail(0, tablename, "not a valid table identifier")
    if tablename in grammar.reserved_tablenames:
        raise _fail(0, tablename, "reserved word cannot be used as a table name")

    file_date = _parse_date(date_text)
    schema_name, schema_version = _parse_schema(schema_text, grammar)

    if INTEGER_SEGMENT_RE.fullmatch(version_text) is None:
        raise _fail(3, version_text, "not an integer")
    if int(version_text) != grammar.version:
        raise _fail(3, version_text, f"expected csvx version {grammar.version}")

    metadata = FileNameMetadata(
        tablename=tablename,
        date=file_date,
        schema_name=schema_name,
        schema_version=schema_version,
        csvx_version=grammar.version,
        compression=compression,
    )
    logger.debug("Parsed filename %s -> %s", filename, metadata)
    return metadata
