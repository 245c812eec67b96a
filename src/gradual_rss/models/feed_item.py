"""
Pydantic model for RSS 2.0 items.

Ready-made record type for ItemParser. Child elements are matched by their
lowercased tag; namespaced tags keep their prefix (e.g. ``content:encoded``).
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .node import Node
from .record import ItemRecord


class FeedItem(BaseModel, ItemRecord):
    """
    One RSS item.

    Each field takes the content of the matching child element; when an
    element carries both text and CDATA the one written last wins.
    Unknown leaf elements are kept in ``extra`` keyed by tag. Elements with
    no value are skipped; by default that includes whitespace-only text
    (``<title>   </title>`` leaves ``title`` as None unless
    ``skip_whitespace_text`` is disabled).

    Example:
        >>> parser = ItemParser.from_bytes(FeedItem, rss_bytes)
        >>> item = await parser.next_item()
        >>> item.title
        'First Item'
    """

    title: Optional[str] = Field(default=None, description="Item headline")
    link: Optional[str] = Field(default=None, description="URL of the item")
    description: Optional[str] = Field(default=None, description="Item synopsis, HTML kept as text")
    pub_date: Optional[str] = Field(
        default=None,
        description="Raw <pubDate> value (RFC 822 date string, not parsed)",
        examples=["Mon, 01 Jan 2024 00:00:00 GMT"]
    )
    guid: Optional[str] = Field(default=None, description="Unique identifier")
    author: Optional[str] = Field(default=None, description="<author> or <dc:creator>")
    comments: Optional[str] = Field(default=None, description="URL of the comments page")
    content: Optional[str] = Field(default=None, description="<content:encoded> body")
    categories: List[str] = Field(default_factory=list, description="All <category> values in order")
    extra: Dict[str, str] = Field(default_factory=dict, description="Other leaf elements, last value wins")

    @classmethod
    def create(cls) -> 'FeedItem':
        return cls()

    def fold(self, node: Node) -> None:
        value = node.content
        if value is None:
            return

        tag = node.tag
        if tag in _FIELD_BY_TAG:
            setattr(self, _FIELD_BY_TAG[tag], value)
        elif tag == 'category':
            self.categories.append(value)
        elif tag == 'dc:creator':
            if self.author is None:
                self.author = value
        else:
            self.extra[tag] = value


_FIELD_BY_TAG = {
    'title': 'title',
    'link': 'link',
    'description': 'description',
    'pubdate': 'pub_date',
    'guid': 'guid',
    'author': 'author',
    'comments': 'comments',
    'content:encoded': 'content',
}
