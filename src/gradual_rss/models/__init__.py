"""
Record-side models: transient element nodes, the record capability
interface, and the ready-made RSS item.
"""

from gradual_rss.models.node import Node
from gradual_rss.models.record import ItemRecord, is_item_record
from gradual_rss.models.feed_item import FeedItem

__all__ = [
    'Node',
    'ItemRecord',
    'is_item_record',
    'FeedItem',
]
