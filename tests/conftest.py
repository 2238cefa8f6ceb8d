"""Shared test fixtures for the csvx engine."""

from __future__ import annotations

import pytest

from csvx.models.schema import SchemaDefinition
from csvx.parser.grammar import VERSION_4
from csvx.parser.tokenizer import tokenize
from csvx.schema.builder import SchemaBuilder
from csvx.service.engine import EngineConfig, ValidationEngine

SCHEMA_FILENAME = "animals-2_20170417_csvx-schema_4.csv"
DATA_FILENAME = "all_20170417_animals-2_4.csv"


def csvx_text(*lines: str) -> str:
    """Join lines with csvx row terminators, including the final one."""
    return "".join(line + "\r\n" for line in lines)


def csvx_bytes(*lines: str) -> bytes:
    return csvx_text(*lines).encode("utf-8")


SAMPLE_SCHEMA_LINES = (
    "id,type,constraints,description",
    "id,INTEGER,UNIQUE,Internal zoo id",
    "name,STRING,,Animal name",
    'species,"ENUM(LION,TIGER,BEAR)",,Species',
    "weight,DECIMAL,NULLABLE,Weight in kg",
    "born,DATE,NULLABLE,Date of birth",
    "fed_at,DATETIME,NULLABLE,Last feeding",
    "feeding_time,TIME,NULLABLE,Daily feeding time",
    'caretaker,STRING,NULLABLE,"Caretaker, if any"',
    "vaccinated,BOOL,,Vaccination status",
)

SAMPLE_DATA_LINES = (
    "id,name,species,weight,born,fed_at,feeding_time,caretaker,vaccinated",
    '1,Leo,LION,190.5,20100312,20170416083000,083000,"Smith, J.",TRUE',
    '2,"Tony ""the"" Tiger",TIGER,,,,,,FALSE',
    "3,Baloo,BEAR,320,20080101,20170416120000,120000,Jones,TRUE",
)

SAMPLE_SCHEMA = csvx_bytes(*SAMPLE_SCHEMA_LINES)
SAMPLE_DATA = csvx_bytes(*SAMPLE_DATA_LINES)


@pytest.fixture
def engine() -> ValidationEngine:
    return ValidationEngine(EngineConfig(version=4))


@pytest.fixture
def sample_schema() -> SchemaDefinition:
    """The zoo schema, built and asserted valid."""
    schema, errors = SchemaBuilder(VERSION_4).build(tokenize(csvx_text(*SAMPLE_SCHEMA_LINES)))
    assert schema is not None, f"Sample schema has errors: {errors}"
    return schema
