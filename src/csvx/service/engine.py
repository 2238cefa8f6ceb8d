"""Orchestrates a validation run: bytes + filename -> ValidationReport."""

from __future__ import annotations

import logging
import threading

from pydantic import BaseModel, ConfigDict, Field, field_validator

from csvx.models.document import RawDocument
from csvx.models.errors import (
    EncodingError,
    NamingError,
    SchemaMismatchError,
    StructuralError,
    ValidationReport,
)
from csvx.models.metadata import FileNameMetadata
from csvx.models.schema import SchemaDefinition
from csvx.parser.codec import decode
from csvx.parser.filename import parse_filename
from csvx.parser.grammar import VersionGrammar, VersionRegistry
from csvx.parser.structure import StructuralValidator
from csvx.parser.tokenizer import Tokenizer
from csvx.schema.builder import SchemaBuilder
from csvx.settings import Settings
from csvx.validation.report import ReportAssembler
from csvx.validation.rows import RowValidator

logger = logging.getLogger("csvx.engine")


class EngineConfig(BaseModel):
    """Explicit engine configuration, resolved once per engine."""

    model_config = ConfigDict(frozen=True)

    version: int = 4
    workers: int = Field(default=1, ge=1)
    rows_per_task: int = Field(default=2000, ge=1)

    @field_validator("version")
    @classmethod
    def _version_supported(cls, value: int) -> int:
        VersionRegistry.get(value)
        return value

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> EngineConfig:
        settings = settings or Settings()
        return cls(
            version=settings.csvx_version,
            workers=settings.validation_workers,
            rows_per_task=settings.rows_per_task,
        )


class ValidationEngine:
    """Runs decode → filename → tokenize → structure → schema/rows → report.

    Stateless between calls; a single engine may be shared across threads.
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config or EngineConfig()
        self._grammar: VersionGrammar = VersionRegistry.get(self._config.version)
        self._tokenizer = Tokenizer()
        self._structure = StructuralValidator()
        self._schema_builder = SchemaBuilder(self._grammar)
        self._rows = RowValidator(
            workers=self._config.workers, rows_per_task=self._config.rows_per_task
        )

    @property
    def config(self) -> EngineConfig:
        return self._config

    def parse_filename(self, filename: str) -> FileNameMetadata:
        return parse_filename(filename, version=self._grammar.version)

    def validate_document(
        self,
        data: bytes,
        filename: str,
        schema: SchemaDefinition | None = None,
    ) -> ValidationReport:
        """Validate one csvx document.

        Without ``schema`` only encoding, naming and structure are checked,
        unless the filename marks a schema document, in which case the
        schema itself is built and checked. Encoding errors, malformed
        quoting and schema mismatches abort the run with a single diagnostic.
        """
        logger.info(
            "Validating %s (%d bytes, csvx v%d)", filename, len(data), self._grammar.version
        )
        report = ReportAssembler()
        try:
            document, metadata = self._read(data, filename, report)
            report.extend(self._structure.validate(document))
            if metadata is not None and metadata.is_schema:
                _, schema_errors = self._schema_builder.build(document)
                report.extend(schema_errors)
            elif schema is not None:
                report.extend(self._rows.validate(document, schema))
        except (EncodingError, StructuralError, SchemaMismatchError) as exc:
            logger.warning("Validation of %s aborted: %s", filename, exc)
            return ReportAssembler.single(exc.to_diagnostic())

        result = report.build()
        logger.info(
            "Validated %s: %s (%d diagnostic(s))",
            filename, "valid" if result.valid else "invalid", len(result.diagnostics),
        )
        return result

    def build_schema(self, data: bytes, filename: str) -> SchemaDefinition | ValidationReport:
        """Build a schema from a ``csvx-schema`` document.

        Returns the :class:`SchemaDefinition`, or a failing report listing
        every problem with the file.
        """
        logger.info("Building schema from %s", filename)
        report = ReportAssembler()
        try:
            document, metadata = self._read(data, filename, report)
        except (EncodingError, StructuralError) as exc:
            logger.warning("Schema build from %s aborted: %s", filename, exc)
            return ReportAssembler.single(exc.to_diagnostic())

        if metadata is not None and not metadata.is_schema:
            report.add(
                NamingError(
                    f"'{filename}' is not a schema document "
                    f"(schema segment is '{metadata.schema_name}')",
                    segment=2,
                ).to_diagnostic()
            )
        report.extend(self._structure.validate(document))
        schema, schema_errors = self._schema_builder.build(document)
        report.extend(schema_errors)

        if len(report) or schema is None:
            return report.build()
        return schema

    def _read(
        self, data: bytes, filename: str, report: ReportAssembler
    ) -> tuple[RawDocument, FileNameMetadata | None]:
        text = decode(data)
        metadata: FileNameMetadata | None = None
        try:
            metadata = self.parse_filename(filename)
        except NamingError as exc:
            report.add(exc.to_diagnostic())
        document = self._tokenizer.tokenize(text)
        return document, metadata


_default_engine: ValidationEngine | None = None
_default_engine_lock = threading.Lock()


def _engine() -> ValidationEngine:
    global _default_engine  # noqa: PLW0603
    with _default_engine_lock:
        if _default_engine is None:
            _default_engine = ValidationEngine(EngineConfig.from_settings())
        return _default_engine


def validate_document(
    data: bytes, filename: str, schema: SchemaDefinition | None = None
) -> ValidationReport:
    """Validate with an engine configured from :class:`Settings`."""
    return _engine().validate_document(data, filename, schema)


def build_schema(data: bytes, filename: str) -> SchemaDefinition | ValidationReport:
    """Build a schema with an engine configured from :class:`Settings`."""
    return _engine().build_schema(data, filename)


__all__ = [
    "EngineConfig",
    "ValidationEngine",
    "build_schema",
    "validate_document",
]
