"""In-memory schema cache: build once, validate many data files against it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from csvx.models.errors import NamingError, ValidationReport
from csvx.models.schema import SchemaDefinition
from csvx.service.engine import EngineConfig, ValidationEngine

logger = logging.getLogger("csvx.service")


class SchemaLoadError(ValueError):
    """Raised when a schema document fails to build; carries the report."""

    def __init__(self, filename: str, report: ValidationReport) -> None:
        self.filename = filename
        self.report = report
        msgs = "; ".join(str(d) for d in report.diagnostics)
        super().__init__(f"Schema build failed for '{filename}': {msgs}")


@dataclass
class SchemaSummary:
    """Short summary for listing schemas."""

    name: str
    filename: str
    columns: list[str]


class SchemaStore:
    """Schemas keyed by name. Thread-safe via ``threading.Lock``.

    A schema document ``animals-2_20170417_csvx-schema_4.csv`` is stored
    under its table name ``animals-2``, which is the schema name data files
    carry in their own filenames.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._lock = threading.Lock()
        self._schemas: dict[str, tuple[str, SchemaDefinition]] = {}
        self._engine = ValidationEngine(config)

    def load_schema(self, data: bytes, filename: str) -> SchemaSummary:
        """Build and store a schema. Raises :class:`SchemaLoadError` on failure."""
        result = self._engine.build_schema(data, filename)
        if isinstance(result, ValidationReport):
            raise SchemaLoadError(filename, result)
        name = self._engine.parse_filename(filename).tablename
        with self._lock:
            self._schemas[name] = (filename, result)
        logger.info("Loaded schema '%s' from %s (%d columns)", name, filename, len(result))
        return SchemaSummary(name=name, filename=filename, columns=result.ids)

    def get_schema(self, name: str) -> SchemaDefinition:
        """Look up a loaded schema. Raises ``KeyError`` if not found."""
        with self._lock:
            try:
                return self._schemas[name][1]
            except KeyError:
                raise KeyError(f"No schema loaded with name '{name}'") from None

    def list_schemas(self) -> list[SchemaSummary]:
        with self._lock:
            items = list(self._schemas.items())
        return [
            SchemaSummary(name=name, filename=filename, columns=schema.ids)
            for name, (filename, schema) in items
        ]

    def remove_schema(self, name: str) -> None:
        """Unload a schema. Raises ``KeyError`` if not found."""
        with self._lock:
            try:
                del self._schemas[name]
            except KeyError:
                raise KeyError(f"No schema loaded with name '{name}'") from None

    def validate(
        self, data: bytes, filename: str, schema_name: str | None = None
    ) -> ValidationReport:
        """Validate a data document against a loaded schema.

        The schema is looked up by ``schema_name`` or, when omitted, by the
        schema segment of ``filename``. A filename that does not parse is
        validated structurally so the naming error is still reported.
        """
        if schema_name is None:
            try:
                schema_name = self._engine.parse_filename(filename).schema_name
            except NamingError:
                return self._engine.validate_document(data, filename)
        schema = self.get_schema(schema_name)
        return self._engine.validate_document(data, filename, schema)
