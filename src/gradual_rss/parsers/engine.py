"""
Incremental event-to-record engine.

Drives tokenizer events through a nesting stack and folds every element
closed inside an item into the record under construction.

State machine per next_item() call:
- IDLE: no item open, nodes are pushed/popped but nothing is folded
- IN_ITEM: an item start tag was seen, popped nodes are folded into the record
- EXHAUSTED: end of input or an in-stream fault, every later call returns None

Assumptions:
- End tags pop the stack without checking the tag name; the tokenizer
  already rejects mismatched end tags as malformed input
- A nested item start discards the record in progress and starts a new one
- Malformed input ends the sequence exactly like end-of-input; the cause is
  kept in ``parser.fault``
"""

import logging
from collections import deque
from enum import Enum
from os import PathLike
import socket
from typing import Deque, Generic, Optional, Type, TypeVar, Union

from gradual_rss.config import ParserSettings, get_settings
from gradual_rss.exceptions import ConcurrentConsumerError
from gradual_rss.models.record import is_item_record
from gradual_rss.parsers.events import CData, DecodeError, EndTag, LexicalEvent, StartTag, Text
from gradual_rss.parsers.node_stack import NodeStack
from gradual_rss.parsers.tokenizer import XmlTokenizer
from gradual_rss.services.sources import (
    ByteSource,
    as_byte_source,
    open_file_source,
    open_socket_source,
    open_tcp_source,
)

logger = logging.getLogger(__name__)

R = TypeVar('R')


class ParserState(Enum):
    IDLE = 'idle'
    IN_ITEM = 'in_item'
    EXHAUSTED = 'exhausted'


class ItemParser(Generic[R]):
    """
    Pull parser producing one record per item element.

    Args:
        record_type: Class providing create() and fold(node)
        source: bytes/str, async reader, blocking file object, or ByteSource
        settings: ParserSettings (defaults to get_settings())

    Raises:
        TypeError: If record_type lacks create() or fold()
        ConstructionError: If source cannot be read sequentially

    Example:
        >>> parser = ItemParser(FeedItem, rss_bytes)
        >>> first = await parser.next_item()
        >>> async for item in parser:
        ...     print(item.title)
    """

    def __init__(
        self,
        record_type: Type[R],
        source,
        settings: Optional[ParserSettings] = None
    ):
        _check_record_type(record_type)
        self._record_type = record_type
        self._settings = settings or get_settings()
        self._source: ByteSource = as_byte_source(source)
        # Text sources are already decoded; their bytes are always UTF-8
        self._tokenizer = XmlTokenizer(
            encoding=self._source.encoding or self._settings.encoding,
            skip_whitespace_text=self._settings.skip_whitespace_text
        )
        self._pending: Deque[LexicalEvent] = deque()
        self._state = ParserState.IDLE
        self._busy = False

        self.fault: Optional[Exception] = None
        self.items_produced = 0

    # === Transport constructors ===

    @classmethod
    def from_bytes(
        cls,
        record_type: Type[R],
        data: Union[bytes, str],
        settings: Optional[ParserSettings] = None
    ) -> 'ItemParser[R]':
        """Parse an in-memory document."""
        return cls(record_type, data, settings)

    @classmethod
    async def open_file(
        cls,
        record_type: Type[R],
        path: Union[str, PathLike],
        settings: Optional[ParserSettings] = None
    ) -> 'ItemParser[R]':
        """
        Parse a local file.

        Raises:
            ConstructionError: If the file cannot be opened
        """
        _check_record_type(record_type)
        source = await open_file_source(path)
        return cls(record_type, source, settings)

    @classmethod
    async def from_connection(
        cls,
        record_type: Type[R],
        sock: socket.socket,
        settings: Optional[ParserSettings] = None
    ) -> 'ItemParser[R]':
        """
        Parse bytes arriving on a connected or accepted socket.

        Raises:
            ConstructionError: If the socket cannot be attached to the event loop
        """
        _check_record_type(record_type)
        source = await open_socket_source(sock)
        return cls(record_type, source, settings)

    @classmethod
    async def connect(
        cls,
        record_type: Type[R],
        host: str,
        port: int,
        settings: Optional[ParserSettings] = None
    ) -> 'ItemParser[R]':
        """
        Open a TCP connection and parse what the peer sends.

        Raises:
            ConstructionError: If the connection fails
        """
        _check_record_type(record_type)
        source = await open_tcp_source(host, port)
        return cls(record_type, source, settings)

    # === State ===

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def settings(self) -> ParserSettings:
        return self._settings

    # === Pull interface ===

    async def next_item(self) -> Optional[R]:
        """
        Produce the next completed record.

        Returns:
            The record closed by the next item end tag, or None when the input
            ended, was malformed, or an item end tag closed no open record.

        Raises:
            ConcurrentConsumerError: If another next_item() is still running
        """
        if self._busy:
            raise ConcurrentConsumerError(
                "ItemParser supports one consumer at a time; "
                "await the previous next_item() first"
            )
        if self._state is ParserState.EXHAUSTED:
            return None

        self._busy = True
        try:
            return await self._produce()
        finally:
            self._busy = False

    async def _produce(self) -> Optional[R]:
        item_tag = self._settings.item_tag
        stack = NodeStack()
        record: Optional[R] = None
        self._state = ParserState.IDLE

        while True:
            event = await self._next_event()

            if isinstance(event, StartTag):
                tag = event.name.lower()
                if tag == item_tag:
                    if record is not None:
                        logger.debug(
                            f"Nested <{item_tag}> at {'/'.join(stack.path)} "
                            f"discards the record in progress"
                        )
                    else:
                        logger.debug(f"Started record #{self.items_produced + 1}")
                    record = self._record_type.create()
                    self._state = ParserState.IN_ITEM
                stack.push(tag)

            elif isinstance(event, EndTag):
                tag = event.name.lower()
                if tag == item_tag:
                    self._state = ParserState.IDLE
                    if record is None:
                        logger.debug(f"</{item_tag}> without an open record")
                    else:
                        self.items_produced += 1
                        logger.debug(f"Completed record #{self.items_produced}")
                    return record

                node = stack.pop()
                if node is None:
                    continue
                if record is not None:
                    record.fold(node)

            elif isinstance(event, Text):
                stack.write_text(event.value)

            elif isinstance(event, CData):
                stack.write_cdata(event.value)

            elif isinstance(event, DecodeError):
                self._exhaust(event.error)
                return None

            else:
                self._exhaust(None)
                return None

    async def _next_event(self) -> LexicalEvent:
        # The pending queue is fully drained before the next read
        while not self._pending:
            try:
                chunk = await self._source.read(self._settings.chunk_size)
            except OSError as e:
                events = self._tokenizer.fail(e)
            else:
                logger.debug(f"Read {len(chunk)} byte(s) from source")
                if chunk:
                    events = self._tokenizer.feed(chunk)
                else:
                    events = self._tokenizer.close()
            self._pending.extend(events)
        return self._pending.popleft()

    def _exhaust(self, fault: Optional[Exception]) -> None:
        self._state = ParserState.EXHAUSTED
        self._pending.clear()
        self.fault = fault
        if fault is not None:
            logger.warning(
                f"Feed ended early after {self.items_produced} record(s): {fault}"
            )
        else:
            logger.info(f"Feed exhausted after {self.items_produced} record(s)")

    # === Sequence interface ===

    def stream(self):
        """Return the lazy async sequence of records (see ItemStream)."""
        from gradual_rss.api.stream import ItemStream
        return ItemStream(self)

    def __aiter__(self):
        return self.stream()

    # === Resource management ===

    async def aclose(self) -> None:
        """Release the underlying source. Further calls return None."""
        if self._state is not ParserState.EXHAUSTED:
            self._state = ParserState.EXHAUSTED
            self._pending.clear()
        await self._source.aclose()

    async def __aenter__(self) -> 'ItemParser[R]':
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return (
            f"ItemParser(record_type={self._record_type.__name__}, "
            f"state={self._state.value}, items={self.items_produced})"
        )


def _check_record_type(record_type) -> None:
    if not is_item_record(record_type):
        raise TypeError(
            f"{getattr(record_type, '__name__', record_type)!r} cannot be used as a "
            f"record type: create() and fold(node) are required"
        )
