"""
User-facing sequence API built on ItemParser.
"""

from gradual_rss.api.stream import ItemStream, collect_items, collect_file

__all__ = [
    'ItemStream',
    'collect_items',
    'collect_file',
]
