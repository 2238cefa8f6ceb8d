"""Decoding, filename parsing and tokenizing of csvx documents."""

from csvx.parser.codec import decode
from csvx.parser.filename import parse_filename
from csvx.parser.grammar import UnsupportedVersionError, VersionGrammar, VersionRegistry
from csvx.parser.structure import StructuralValidator
from csvx.parser.tokenizer import Tokenizer, tokenize, write_document

__all__ = [
    "StructuralValidator",
    "Tokenizer",
    "UnsupportedVersionError",
    "VersionGrammar",
    "VersionRegistry",
    "decode",
    "parse_filename",
    "tokenize",
    "write_document",
]
