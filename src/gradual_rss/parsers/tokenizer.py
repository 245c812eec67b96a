"""
Incremental XML tokenizer.

Binds expat's push parser to the lexical event model. lxml's parser-target
interface folds CDATA sections into plain character data, so it cannot tell
Text from CData; expat reports CDATA boundaries explicitly.

Key behaviours:
- Bytes are pushed in arbitrary chunks; events are returned per chunk
- Character data between two markup boundaries becomes ONE Text event;
  comments and processing instructions count as boundaries
- Each CDATA section becomes ONE CData event with its raw payload
- Any failure becomes a single DecodeError event, after which the tokenizer
  stays silent
- No namespace processing, attributes are discarded
- An encoding override is decoded in Python and handed to expat as UTF-8,
  so multi-byte codecs (euc-kr, shift_jis, ...) work as well
"""

import codecs
import logging
from typing import List, Optional
from xml.parsers import expat

from .events import CData, DecodeError, EndTag, Eof, LexicalEvent, StartTag, Text

logger = logging.getLogger(__name__)

_TOKENIZER_ERRORS = (expat.ExpatError, ValueError, LookupError)


class XmlTokenizer:
    """
    Push tokenizer turning raw bytes into lexical events.

    Args:
        encoding: Encoding override, any Python codec (None honours the
            XML declaration)
        skip_whitespace_text: Drop Text events made only of whitespace

    Example:
        >>> tokenizer = XmlTokenizer()
        >>> tokenizer.feed(b'<rss><item><title>Hi</title>')
        [StartTag(name='rss'), StartTag(name='item'), StartTag(name='title'), Text(value='Hi'), EndTag(name='title')]
        >>> tokenizer.close()
        [DecodeError(error=ExpatError('no element found: ...'))]
    """

    def __init__(self, encoding: Optional[str] = None, skip_whitespace_text: bool = True):
        self._skip_whitespace_text = skip_whitespace_text
        self._events: List[LexicalEvent] = []
        self._text_parts: List[str] = []
        self._cdata_parts: Optional[List[str]] = None
        self._done = False

        # expat itself only decodes UTF-8/16 and single-byte codecs
        self._decoder = None
        if encoding is not None:
            self._decoder = codecs.getincrementaldecoder(encoding)()
            encoding = 'utf-8'

        self._parser = expat.ParserCreate(encoding)
        self._parser.buffer_text = True
        self._parser.StartElementHandler = self._on_start
        self._parser.EndElementHandler = self._on_end
        self._parser.CharacterDataHandler = self._on_data
        self._parser.StartCdataSectionHandler = self._on_cdata_start
        self._parser.EndCdataSectionHandler = self._on_cdata_end
        self._parser.CommentHandler = self._on_boundary
        self._parser.ProcessingInstructionHandler = self._on_boundary
        # Events must be delivered as soon as their bytes arrive
        if hasattr(self._parser, 'SetReparseDeferralEnabled'):
            self._parser.SetReparseDeferralEnabled(False)

    @property
    def done(self) -> bool:
        """True once Eof or DecodeError has been emitted."""
        return self._done

    def feed(self, chunk: bytes) -> List[LexicalEvent]:
        """
        Push a chunk of bytes.

        Args:
            chunk: Next slice of the document (may split tags or characters)

        Returns:
            Fresh list of events completed by this chunk. Events preceding a
            failure are returned ahead of the DecodeError.
        """
        if self._done:
            return []

        self._events = []
        try:
            self._parser.Parse(self._recode(chunk), False)
        except _TOKENIZER_ERRORS as e:
            self._fail(e)
        return self._events

    def close(self) -> List[LexicalEvent]:
        """
        Signal end of input.

        Returns:
            [Eof()] for a complete document, [DecodeError] for a truncated
            or empty one, [] if the tokenizer already finished.
        """
        if self._done:
            return []

        self._events = []
        try:
            self._parser.Parse(self._recode(b'', final=True), True)
        except _TOKENIZER_ERRORS as e:
            self._fail(e)
        else:
            self._flush_text()
            self._events.append(Eof())
            self._done = True
        return self._events

    def fail(self, error: Exception) -> List[LexicalEvent]:
        """Abort tokenizing because the byte source itself failed."""
        if self._done:
            return []
        self._events = []
        self._fail(error)
        return self._events

    def _recode(self, chunk: bytes, final: bool = False) -> bytes:
        if self._decoder is None:
            return chunk
        return self._decoder.decode(chunk, final).encode('utf-8')

    def _fail(self, error: Exception) -> None:
        logger.debug(f"Tokenizer stopped: {error}")
        self._text_parts = []
        self._cdata_parts = None
        self._events.append(DecodeError(error))
        self._done = True

    def _flush_text(self) -> None:
        if not self._text_parts:
            return
        value = ''.join(self._text_parts)
        self._text_parts = []
        if self._skip_whitespace_text and not value.strip():
            return
        self._events.append(Text(value))

    # === expat handlers ===

    def _on_start(self, name, attrs):
        self._flush_text()
        self._events.append(StartTag(name))

    def _on_end(self, name):
        self._flush_text()
        self._events.append(EndTag(name))

    def _on_data(self, data):
        if self._cdata_parts is not None:
            self._cdata_parts.append(data)
        else:
            self._text_parts.append(data)

    def _on_boundary(self, *args):
        # Comments and PIs split character data into separate Text events
        self._flush_text()

    def _on_cdata_start(self):
        self._flush_text()
        self._cdata_parts = []

    def _on_cdata_end(self):
        self._events.append(CData(''.join(self._cdata_parts or [])))
        self._cdata_parts = None
