"""
Exception taxonomy for gradual-rss.

Two families of failure exist:
- Construction failures (the byte source cannot be opened) are raised to the
  caller as ConstructionError.
- In-stream faults (malformed markup, undecodable bytes, read failures) are
  never raised. They end the item sequence exactly like end-of-input and are
  kept on the parser as ``parser.fault`` for inspection.
"""


class GradualRssError(Exception):
    """Base class for all gradual-rss errors."""


class ConstructionError(GradualRssError):
    """
    The byte source could not be opened.

    Raised from parser constructors (open_file, from_connection, connect) and
    chained to the underlying OSError.
    """


class ConcurrentConsumerError(GradualRssError, RuntimeError):
    """A second next_item() was awaited while another one was still running."""
