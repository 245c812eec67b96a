"""
Lazy async sequence of records.

ItemStream turns repeated ItemParser.next_item() calls into an async
iterator that stops at the first None. It cannot be restarted: re-reading a
feed needs a new parser over a fresh source.
"""

from typing import Generic, List, Optional, Type, TypeVar

from gradual_rss.config import ParserSettings
from gradual_rss.parsers.engine import ItemParser

R = TypeVar('R')


class ItemStream(Generic[R]):
    """
    Async iterator over the records of one parser.

    Example:
        >>> async for item in ItemStream(parser):
        ...     print(item.title)
        >>> items = await ItemParser.from_bytes(FeedItem, data).stream().collect()
    """

    def __init__(self, parser: ItemParser[R]):
        self._parser = parser
        self._finished = False

    def __aiter__(self) -> 'ItemStream[R]':
        return self

    async def __anext__(self) -> R:
        if self._finished:
            raise StopAsyncIteration
        record = await self._parser.next_item()
        if record is None:
            self._finished = True
            raise StopAsyncIteration
        return record

    @property
    def finished(self) -> bool:
        return self._finished

    async def collect(self, limit: Optional[int] = None) -> List[R]:
        """
        Gather records into a list.

        Args:
            limit: Stop after this many records (None = all). Records after
                the limit stay unread in the source.

        Returns:
            Records in document order
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        records: List[R] = []
        while limit is None or len(records) < limit:
            try:
                records.append(await self.__anext__())
            except StopAsyncIteration:
                break
        return records


async def collect_items(
    record_type: Type[R],
    source,
    settings: Optional[ParserSettings] = None,
    limit: Optional[int] = None
) -> List[R]:
    """
    Parse a whole source into a list of records and release it.

    Args:
        record_type: Class providing create() and fold(node)
        source: Anything ItemParser accepts (bytes, str, file object, async reader)
        settings: Optional ParserSettings
        limit: Maximum number of records

    Example:
        >>> items = await collect_items(FeedItem, b'<rss>...</rss>')
    """
    async with ItemParser(record_type, source, settings) as parser:
        return await parser.stream().collect(limit)


async def collect_file(
    record_type: Type[R],
    path,
    settings: Optional[ParserSettings] = None,
    limit: Optional[int] = None
) -> List[R]:
    """
    Parse a local file into a list of records.

    Raises:
        ConstructionError: If the file cannot be opened
    """
    parser = await ItemParser.open_file(record_type, path, settings)
    async with parser:
        return await parser.stream().collect(limit)
