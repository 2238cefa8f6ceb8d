"""csvx structural rules applied to a tokenized document."""

from __future__ import annotations

from csvx.models.document import RawDocument
from csvx.models.errors import CellLocation, ErrorKind, ValidationDiagnostic
from csvx.parser.grammar import is_column_identifier
from csvx.parser.tokenizer import needs_quoting


def _structural(message: str, row: int, column: int | None = None) -> ValidationDiagnostic:
    return ValidationDiagnostic(
        kind=ErrorKind.STRUCTURAL,
        message=message,
        location=CellLocation(row=row, column=column),
    )


class StructuralValidator:
    """Checks csvx structure beyond RFC4180; every violation is reported."""

    def validate(self, document: RawDocument) -> list[ValidationDiagnostic]:
        errors: list[ValidationDiagnostic] = []
        errors.extend(self._check_blank_lines(document))
        errors.extend(self._check_field_counts(document))
        errors.extend(self._check_header(document))
        errors.extend(self._check_minimal_quoting(document))
        errors.extend(self._check_terminator(document))
        return errors

    def _check_blank_lines(self, document: RawDocument) -> list[ValidationDiagnostic]:
        return [
            _structural("Blank lines are not allowed", row=idx)
            for idx, row in enumerate(document.rows)
            if not row
        ]

    def _check_field_counts(self, document: RawDocument) -> list[ValidationDiagnostic]:
        errors: list[ValidationDiagnostic] = []
        expected = document.width
        for idx, row in enumerate(document.rows):
            if row and len(row) != expected:
                errors.append(
                    _structural(
                        f"Row has {len(row)} fields, header has {expected}",
                        row=idx,
                    )
                )
        return errors

    def _check_header(self, document: RawDocument) -> list[ValidationDiagnostic]:
        return [
            _structural(
                f"Header field '{name}' is not a valid identifier "
                "(lowercase letter followed by lowercase letters, digits or underscores)",
                row=0,
                column=col,
            )
            for col, name in enumerate(document.header)
            if not is_column_identifier(name)
        ]

    def _check_minimal_quoting(self, document: RawDocument) -> list[ValidationDiagnostic]:
        errors: list[ValidationDiagnostic] = []
        for idx, (row, flags) in enumerate(zip(document.rows, document.quoted)):
            for col, (text, was_quoted) in enumerate(zip(row, flags)):
                if was_quoted and not needs_quoting(text, len(row)):
                    errors.append(
                        _structural(
                            "Field is quoted but contains no comma, quote or line break",
                            row=idx,
                            column=col,
                        )
                    )
        return errors

    def _check_terminator(self, document: RawDocument) -> list[ValidationDiagnostic]:
        if document.terminated:
            return []
        return [_structural("Last row is not terminated by \\r\\n", row=len(document) - 1)]
