"""Metadata carried in a csvx filename."""

from __future__ import annotations

import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

SCHEMA_SCHEMA_NAME = "csvx-schema"


class Compression(StrEnum):
    GZIP = "gzip"
    XZ = "xz"


class FileNameMetadata(BaseModel):
    """Parsed ``tablename_date_schema[...]_csvxversion.ext`` filename."""

    model_config = ConfigDict(frozen=True)

    tablename: str
    date: datetime.date
    schema_name: str
    schema_version: int | None = None
    csvx_version: int
    compression: Compression | None = None

    @property
    def is_schema(self) -> bool:
        """True when the file is a schema document describing other files."""
        return self.schema_name == SCHEMA_SCHEMA_NAME
