"""
Byte sources feeding the tokenizer.

Every source exposes the same two coroutines:
- ``read(n)``: up to n bytes, b'' at end of input
- ``aclose()``: release the underlying resource

Transport helpers (open_file_source, open_socket_source, open_tcp_source)
surface open failures as ConstructionError, distinct from in-stream faults
which only end the item sequence.
"""

import asyncio
import inspect
import io
import logging
import socket
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from gradual_rss.exceptions import ConstructionError

logger = logging.getLogger(__name__)


class ByteSource:
    """
    Base class for sequential async byte sources.

    Attributes:
        encoding: Encoding the bytes are known to be in regardless of the XML
            declaration ('utf-8' for sources re-encoding decoded text), or None
    """

    encoding: Optional[str] = None

    async def read(self, n: int) -> bytes:
        raise NotImplementedError

    async def aclose(self) -> None:
        pass


class MemorySource(ByteSource):
    """
    In-memory document.

    Example:
        >>> source = MemorySource(b'<rss/>')
        >>> await source.read(3)
        b'<rs'
    """

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]):
        if isinstance(data, str):
            data = data.encode('utf-8')
            self.encoding = 'utf-8'
        self._data = bytes(data)
        self._pos = 0

    async def read(self, n: int) -> bytes:
        chunk = self._data[self._pos:self._pos + n]
        self._pos += len(chunk)
        return chunk


class FileSource(ByteSource):
    """
    Blocking file object read in a worker thread.

    Args:
        fileobj: Object with a blocking read(n) (binary or text mode; text
            is re-encoded as UTF-8)
        owned: Close fileobj on aclose()
    """

    def __init__(self, fileobj, owned: bool = False):
        self._file = fileobj
        self._owned = owned
        if isinstance(fileobj, io.TextIOBase):
            self.encoding = 'utf-8'

    async def read(self, n: int) -> bytes:
        chunk = await asyncio.to_thread(self._file.read, n)
        if isinstance(chunk, str):
            chunk = chunk.encode('utf-8')
        return chunk or b''

    async def aclose(self) -> None:
        if self._owned and not self._file.closed:
            await asyncio.to_thread(self._file.close)


class StreamSource(ByteSource):
    """
    Object with an async read(n), typically asyncio.StreamReader.

    Args:
        reader: Async reader
        writer: Optional asyncio.StreamWriter closed on aclose()
    """

    def __init__(self, reader, writer: Optional[asyncio.StreamWriter] = None):
        self._reader = reader
        self._writer = writer

    async def read(self, n: int) -> bytes:
        return await self._reader.read(n)

    async def aclose(self) -> None:
        if self._writer is None:
            return
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except OSError as e:
            # Peer already gone; nothing left to release
            logger.debug(f"Connection close reported: {e}")
        self._writer = None


def as_byte_source(source) -> ByteSource:
    """
    Wrap an arbitrary input in a ByteSource.

    Accepts:
    - ByteSource instances (returned unchanged)
    - bytes, bytearray, memoryview, str (in-memory document)
    - objects whose read() is a coroutine function (asyncio.StreamReader, ...)
    - objects with a blocking read() (open files, io.BytesIO, ...)

    Raises:
        ConstructionError: If the object cannot be read sequentially
    """
    if isinstance(source, ByteSource):
        return source
    if isinstance(source, (bytes, bytearray, memoryview, str)):
        return MemorySource(source)

    read = getattr(source, 'read', None)
    if read is None or not callable(read):
        raise ConstructionError(
            f"Unsupported source type: {type(source).__name__}. "
            f"Expected bytes, str, or an object with read()."
        )
    if inspect.iscoroutinefunction(read):
        return StreamSource(source)
    return FileSource(source)


async def open_file_source(path: Union[str, PathLike]) -> FileSource:
    """
    Open a local file for streaming.

    Raises:
        ConstructionError: If the file cannot be opened (missing, permission, directory)
    """
    file_path = Path(path)
    try:
        fileobj = await asyncio.to_thread(open, file_path, 'rb')
    except OSError as e:
        logger.error(f"Cannot open feed file {file_path}: {e}")
        raise ConstructionError(f"Cannot open feed file {file_path}: {e}") from e

    logger.debug(f"Opened feed file {file_path}")
    return FileSource(fileobj, owned=True)


async def open_socket_source(sock: socket.socket) -> StreamSource:
    """
    Wrap an already connected (or accepted) socket.

    Raises:
        ConstructionError: If the socket cannot be attached to the event loop
    """
    try:
        reader, writer = await asyncio.open_connection(sock=sock)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot attach socket {sock!r}: {e}")
        raise ConstructionError(f"Cannot attach socket: {e}") from e
    return StreamSource(reader, writer)


async def open_tcp_source(host: str, port: int) -> StreamSource:
    """
    Open a TCP connection to host:port.

    Raises:
        ConstructionError: If the connection fails
    """
    try:
        reader, writer = await asyncio.open_connection(host, port)
    except OSError as e:
        logger.error(f"Cannot connect to {host}:{port}: {e}")
        raise ConstructionError(f"Cannot connect to {host}:{port}: {e}") from e

    logger.debug(f"Connected to {host}:{port}")
    return StreamSource(reader, writer)
