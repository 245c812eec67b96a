"""
Transport layer: byte sources the parser engine reads from.
"""

from .sources import (
    ByteSource,
    MemorySource,
    FileSource,
    StreamSource,
    as_byte_source,
    open_file_source,
    open_socket_source,
    open_tcp_source,
)

__all__ = [
    'ByteSource',
    'MemorySource',
    'FileSource',
    'StreamSource',
    'as_byte_source',
    'open_file_source',
    'open_socket_source',
    'open_tcp_source',
]
