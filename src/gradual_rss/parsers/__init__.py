"""
Streaming XML parsing: lexical events, tokenizer, nesting stack and the
item engine.

- Tokenizer emits StartTag/EndTag/Text/CData/Eof/DecodeError
- Nesting stack tracks open elements as Node objects
- ItemParser folds closed elements into caller-defined records
"""

from .events import StartTag, EndTag, Text, CData, Eof, DecodeError, LexicalEvent
from .tokenizer import XmlTokenizer
from .node_stack import NodeStack
from .engine import ItemParser, ParserState

__all__ = [
    # Lexical events
    'StartTag',
    'EndTag',
    'Text',
    'CData',
    'Eof',
    'DecodeError',
    'LexicalEvent',
    # Tokenizer and stack
    'XmlTokenizer',
    'NodeStack',
    # Engine
    'ItemParser',
    'ParserState',
]
