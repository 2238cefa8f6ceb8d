"""Applies a SchemaDefinition to the data rows of a document."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from csvx.models.document import RawDocument
from csvx.models.errors import (
    CellLocation,
    ErrorKind,
    SchemaMismatchError,
    ValidationDiagnostic,
)
from csvx.models.schema import SchemaDefinition

logger = logging.getLogger("csvx.validation")


class RowValidator:
    """Per-cell type and nullability checks plus file-wide UNIQUE checks.

    Type checks run over disjoint row ranges, optionally on a thread pool;
    each range yields its own diagnostic list and the lists are merged in
    range order. Uniqueness is decided afterwards in a single pass over the
    rows in file order so the later of two equal values is always the one
    reported.
    """

    def __init__(self, workers: int = 1, rows_per_task: int = 2000) -> None:
        self._workers = max(1, workers)
        self._rows_per_task = max(1, rows_per_task)

    def validate(
        self, document: RawDocument, schema: SchemaDefinition
    ) -> list[ValidationDiagnostic]:
        """Validate every data row.

        Raises :class:`SchemaMismatchError` when the header does not list the
        schema's column ids in order.
        """
        self.check_header(document, schema)
        rows = document.data_rows
        errors = self._check_cells(rows, schema)
        errors.extend(self._check_unique(rows, schema))
        logger.debug(
            "Checked %d data rows against %d columns: %d problem(s)",
            len(rows), len(schema), len(errors),
        )
        return errors

    @staticmethod
    def check_header(document: RawDocument, schema: SchemaDefinition) -> None:
        header = document.header
        expected = schema.ids
        if len(header) != len(expected):
            raise SchemaMismatchError(
                f"Document has {len(header)} columns, schema declares {len(expected)} "
                f"({', '.join(expected)})",
                row=0,
            )
        for idx, (actual, declared) in enumerate(zip(header, expected)):
            if actual != declared:
                raise SchemaMismatchError(
                    f"Header column '{actual}' does not match schema column '{declared}'",
                    row=0,
                    column=idx,
                )

    # -- type and nullability ------------------------------------------------

    def _check_cells(
        self, rows: Sequence[tuple[str, ...]], schema: SchemaDefinition
    ) -> list[ValidationDiagnostic]:
        ranges = [
            (start, rows[start : start + self._rows_per_task])
            for start in range(0, len(rows), self._rows_per_task)
        ]
        if self._workers == 1 or len(ranges) <= 1:
            results = [_check_range(start, chunk, schema) for start, chunk in ranges]
        else:
            with ThreadPoolExecutor(
                max_workers=self._workers, thread_name_prefix="csvx-rows"
            ) as pool:
                # map() preserves submission order, so results stay in row order
                results = list(
                    pool.map(lambda r: _check_range(r[0], r[1], schema), ranges)
                )
        merged: list[ValidationDiagnostic] = []
        for chunk_errors in results:
            merged.extend(chunk_errors)
        return merged

    # -- uniqueness ----------------------------------------------------------

    def _check_unique(
        self, rows: Sequence[tuple[str, ...]], schema: SchemaDefinition
    ) -> list[ValidationDiagnostic]:
        unique_columns = [idx for idx, col in enumerate(schema.columns) if col.unique]
        if not unique_columns:
            return []
        errors: list[ValidationDiagnostic] = []
        first_seen: dict[int, dict[str, int]] = {idx: {} for idx in unique_columns}
        for offset, row in enumerate(rows):
            row_idx = offset + 1
            for col_idx in unique_columns:
                if col_idx >= len(row) or row[col_idx] == "":
                    continue
                value = row[col_idx]
                seen = first_seen[col_idx]
                if value in seen:
                    errors.append(
                        ValidationDiagnostic(
                            kind=ErrorKind.CONSTRAINT,
                            message=(
                                f"Duplicate value '{value}' in UNIQUE column "
                                f"'{schema.columns[col_idx].id}' (first seen in row {seen[value]})"
                            ),
                            location=CellLocation(row=row_idx, column=col_idx),
                        )
                    )
                else:
                    seen[value] = row_idx
        return errors


def _check_range(
    start: int, rows: Sequence[tuple[str, ...]], schema: SchemaDefinition
) -> list[ValidationDiagnostic]:
    """Check one range of data rows; ``start`` is the offset of its first row."""
    errors: list[ValidationDiagnostic] = []
    for offset, row in enumerate(rows):
        row_idx = start + offset + 1  # row 0 is the header
        for col_idx, (column, text) in enumerate(zip(schema.columns, row)):
            result = column.check(text)
            if not result.ok:
                errors.append(
                    ValidationDiagnostic(
                        kind=result.kind or ErrorKind.TYPE,
                        message=f"Column '{column.id}': {result.reason}",
                        location=CellLocation(row=row_idx, column=col_idx),
                    )
                )
    return errors
