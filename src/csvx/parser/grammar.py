"""Token grammars and per-version csvx rules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

IDENT_RE = re.compile(r"[a-z][a-z0-9]*")
IDENT_HYPHEN_RE = re.compile(r"[a-z][a-z0-9-]*")
IDENT_UNDERSCORE_RE = re.compile(r"[a-z][a-z0-9_]*")
UPPER_IDENT_RE = re.compile(r"[A-Z][A-Z0-9_]*")
ENUM_EXPR_RE = re.compile(r"ENUM\(([A-Z][A-Z0-9_]*(?:,[A-Z][A-Z0-9_]*)*)\)")
DATE_SEGMENT_RE = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})")
INTEGER_SEGMENT_RE = re.compile(r"0|[1-9][0-9]*")


def is_column_identifier(text: str) -> bool:
    """Header fields and schema column ids: lowercase-leading, underscores allowed."""
    return IDENT_UNDERSCORE_RE.fullmatch(text) is not None


class UnsupportedVersionError(ValueError):
    """Raised when a requested csvx version has no registered grammar."""

    def __init__(self, version: int, available: list[int]) -> None:
        self.version = version
        self.available = available
        super().__init__(
            f"Unsupported csvx version {version}. "
            f"Available: {', '.join(str(v) for v in available)}"
        )


@dataclass(frozen=True)
class VersionGrammar:
    """Everything that differs between csvx versions."""

    version: int
    extension: str
    name_re: re.Pattern[str]
    schema_header: tuple[str, ...]
    has_schema_version: bool = False
    allow_enum: bool = True
    reserved_tablenames: frozenset[str] = field(default_factory=frozenset)

    def is_name(self, text: str) -> bool:
        return self.name_re.fullmatch(text) is not None


class VersionRegistry:
    """Registry of supported csvx versions."""

    _grammars: dict[int, VersionGrammar] = {}

    @classmethod
    def register(cls, grammar: VersionGrammar) -> VersionGrammar:
        cls._grammars[grammar.version] = grammar
        return grammar

    @classmethod
    def get(cls, version: int) -> VersionGrammar:
        if version not in cls._grammars:
            raise UnsupportedVersionError(version, available=cls.available())
        return cls._grammars[version]

    @classmethod
    def available(cls) -> list[int]:
        return sorted(cls._grammars)


VERSION_1 = VersionRegistry.register(
    VersionGrammar(
        version=1,
        extension="csvx",
        name_re=IDENT_RE,
        schema_header=("id", "type"),
        has_schema_version=True,
        allow_enum=False,
    )
)

VERSION_4 = VersionRegistry.register(
    VersionGrammar(
        version=4,
        extension="csv",
        name_re=IDENT_HYPHEN_RE,
        schema_header=("id", "type", "constraints", "description"),
        reserved_tablenames=frozenset({"schema"}),
    )
)
