"""
Lexical XML events produced by the tokenizer and consumed by the engine.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class StartTag:
    name: str


@dataclass(frozen=True)
class EndTag:
    name: str


@dataclass(frozen=True)
class Text:
    """Character data between two markup boundaries, entities resolved."""
    value: str


@dataclass(frozen=True)
class CData:
    """Raw payload of one <![CDATA[...]]> section."""
    value: str


@dataclass(frozen=True)
class Eof:
    pass


@dataclass(frozen=True)
class DecodeError:
    """The tokenizer could not continue (malformed markup, bad encoding, read failure)."""
    error: Exception


LexicalEvent = Union[StartTag, EndTag, Text, CData, Eof, DecodeError]
