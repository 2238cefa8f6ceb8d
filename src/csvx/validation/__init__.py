"""Cell, row and report level validation."""

from csvx.validation.report import ReportAssembler
from csvx.validation.rows import RowValidator
from csvx.validation.types import CellCheck, TypeRegistry, check_cell, check_value

__all__ = [
    "CellCheck",
    "ReportAssembler",
    "RowValidator",
    "TypeRegistry",
    "check_cell",
    "check_value",
]
