"""Assembles diagnostics from all stages into one ValidationReport."""

from __future__ import annotations

from collections.abc import Iterable

from csvx.models.errors import ValidationDiagnostic, ValidationReport


def _sort_key(diagnostic: ValidationDiagnostic) -> tuple[int, int, int]:
    loc = diagnostic.location
    if loc is None:
        return (0, 0, 0)
    # Whole-row diagnostics sort before the cells of that row
    return (1, loc.row, -1 if loc.column is None else loc.column)


class ReportAssembler:
    """Collects diagnostics, drops exact duplicates and orders them.

    Diagnostics without a location (naming, encoding) come first, the rest
    follow in row then column order. Ties keep the order they were added in.
    """

    def __init__(self) -> None:
        self._diagnostics: list[ValidationDiagnostic] = []
        self._seen: set[tuple[str, str, object]] = set()

    def add(self, diagnostic: ValidationDiagnostic) -> None:
        key = (diagnostic.kind.value, diagnostic.message, diagnostic.location)
        if key in self._seen:
            return
        self._seen.add(key)
        self._diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[ValidationDiagnostic]) -> None:
        for diagnostic in diagnostics:
            self.add(diagnostic)

    def __len__(self) -> int:
        return len(self._diagnostics)

    def build(self) -> ValidationReport:
        ordered = sorted(self._diagnostics, key=_sort_key)
        return ValidationReport(valid=not ordered, diagnostics=ordered)

    @classmethod
    def single(cls, diagnostic: ValidationDiagnostic) -> ValidationReport:
        """Report for a run aborted by one fatal condition."""
        return ValidationReport(valid=False, diagnostics=[diagnostic])
