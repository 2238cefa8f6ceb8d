"""Builds a SchemaDefinition from a tokenized ``csvx-schema`` document."""

from __future__ import annotations

import logging

from csvx.models.document import RawDocument
from csvx.models.errors import CellLocation, ErrorKind, ValidationDiagnostic
from csvx.models.schema import ColumnSpec, Constraint, SchemaDefinition, TypeDescriptor, TypeKind
from csvx.parser.grammar import ENUM_EXPR_RE, VersionGrammar, is_column_identifier

logger = logging.getLogger("csvx.schema")

_SIMPLE_TYPES = {k.value: k for k in TypeKind if k != TypeKind.ENUM}
_CONSTRAINTS = {c.value: c for c in Constraint}


def parse_type(text: str, allow_enum: bool = True) -> tuple[TypeDescriptor | None, str | None]:
    """Parse a type spelling such as ``INTEGER`` or ``ENUM(RED,GREEN)``.

    Returns ``(descriptor, None)`` or ``(None, reason)``.
    """
    if text in _SIMPLE_TYPES:
        return TypeDescriptor(kind=_SIMPLE_TYPES[text]), None
    if text.startswith("ENUM"):
        if not allow_enum:
            return None, "ENUM types are not available in this csvx version"
        match = ENUM_EXPR_RE.fullmatch(text)
        if match is None:
            return None, f"Malformed ENUM declaration '{text}'"
        return TypeDescriptor(kind=TypeKind.ENUM, variants=tuple(match.group(1).split(","))), None
    return None, f"Unknown type '{text}'"


def parse_constraints(text: str) -> tuple[frozenset[Constraint] | None, str | None]:
    """Parse a space-separated subset of ``UNIQUE`` and ``NULLABLE``."""
    if text == "":
        return frozenset(), None
    found: set[Constraint] = set()
    for token in text.split(" "):
        if token == "":
            return None, f"Malformed constraints '{text}' (use single spaces between tokens)"
        if token not in _CONSTRAINTS:
            return None, f"Unknown constraint '{token}'"
        found.add(_CONSTRAINTS[token])
    return frozenset(found), None


class SchemaBuilder:
    """Turns the rows of a schema document into a :class:`SchemaDefinition`."""

    def __init__(self, grammar: VersionGrammar) -> None:
        self._grammar = grammar

    def build(
        self, document: RawDocument
    ) -> tuple[SchemaDefinition | None, list[ValidationDiagnostic]]:
        """Build the schema, collecting every problem found.

        Returns ``(schema, [])`` on success and ``(None, errors)`` otherwise.
        """
        header = self._grammar.schema_header
        if document.header != header:
            return None, [
                self._error(
                    f"Schema header must be '{','.join(header)}', "
                    f"found '{','.join(document.header)}'",
                    row=0,
                )
            ]

        errors: list[ValidationDiagnostic] = []
        columns: list[ColumnSpec] = []
        seen: dict[str, int] = {}

        for row_idx, row in enumerate(document.data_rows, start=1):
            if len(row) != len(header):
                errors.append(
                    self._error(
                        f"Schema row has {len(row)} fields, expected {len(header)}",
                        row=row_idx,
                    )
                )
                continue
            fields = dict(zip(header, row))
            row_ok = True

            column_id = fields["id"]
            if not is_column_identifier(column_id):
                errors.append(
                    self._error(f"Invalid column id '{column_id}'", row=row_idx, column=0)
                )
                row_ok = False
            elif column_id in seen:
                errors.append(
                    self._error(
                        f"Duplicate column id '{column_id}' "
                        f"(first declared in row {seen[column_id]})",
                        row=row_idx,
                        column=0,
                    )
                )
                row_ok = False
            else:
                seen[column_id] = row_idx

            col_type, reason = parse_type(fields["type"], allow_enum=self._grammar.allow_enum)
            if col_type is None:
                errors.append(self._error(str(reason), row=row_idx, column=1))
                row_ok = False

            constraints: frozenset[Constraint] | None = frozenset()
            if "constraints" in fields:
                constraints, reason = parse_constraints(fields["constraints"])
                if constraints is None:
                    errors.append(self._error(str(reason), row=row_idx, column=2))
                    row_ok = False

            if row_ok and col_type is not None and constraints is not None:
                columns.append(
                    ColumnSpec(
                        id=column_id,
                        type=col_type,
                        constraints=constraints,
                        description=fields.get("description", ""),
                    )
                )

        if not errors and not columns:
            errors.append(self._error("Schema declares no columns", row=0))

        if errors:
            logger.info("Schema rejected with %d error(s)", len(errors))
            return None, errors

        logger.debug("Built schema with columns %s", [c.id for c in columns])
        return SchemaDefinition(columns=tuple(columns)), []

    @staticmethod
    def _error(message: str, row: int, column: int | None = None) -> ValidationDiagnostic:
        return ValidationDiagnostic(
            kind=ErrorKind.SCHEMA,
            message=message,
            location=CellLocation(row=row, column=column),
        )
