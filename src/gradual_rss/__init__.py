"""
gradual-rss: incremental record extraction from RSS-like XML feeds.

Main package exports for user-facing API.
"""

from gradual_rss.config import ParserSettings, get_settings
from gradual_rss.exceptions import (
    GradualRssError,
    ConstructionError,
    ConcurrentConsumerError,
)
from gradual_rss.models import Node, ItemRecord, FeedItem
from gradual_rss.parsers import ItemParser, ParserState
from gradual_rss.api import ItemStream, collect_items, collect_file

__version__ = '0.1.0'

__all__ = [
    'ParserSettings',
    'get_settings',
    'GradualRssError',
    'ConstructionError',
    'ConcurrentConsumerError',
    'Node',
    'ItemRecord',
    'FeedItem',
    'ItemParser',
    'ParserState',
    'ItemStream',
    'collect_items',
    'collect_file',
]
