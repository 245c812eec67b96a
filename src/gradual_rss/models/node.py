"""
Transient per-element state tracked while an XML element is open.
"""

from dataclasses import dataclass, field
from typing import Optional

TEXT = 'text'
CDATA = 'cdata'


@dataclass
class Node:
    """
    One open XML element.

    Text and CDATA are stored separately. Each write replaces the previous
    value of that field (last write wins, never concatenation). With the
    default ``skip_whitespace_text`` setting, whitespace-only text never
    reaches a node, so ``<title>   </title>`` leaves ``text`` as None.

    Attributes:
        tag: Lowercased element name
        text: Last text value observed while this node was on top of the stack
        cdata: Last CDATA payload observed while this node was on top of the stack

    Example:
        >>> node = Node('title')
        >>> node.write_text('Hello')
        >>> node.write_cdata('<b>Hi</b>')
        >>> node.content
        '<b>Hi</b>'
        >>> node.value
        'Hello'
    """
    tag: str
    text: Optional[str] = None
    cdata: Optional[str] = None
    _last_written: Optional[str] = field(default=None, repr=False, compare=False)

    def write_text(self, value: str) -> None:
        self.text = value
        self._last_written = TEXT

    def write_cdata(self, value: str) -> None:
        self.cdata = value
        self._last_written = CDATA

    @property
    def content(self) -> Optional[str]:
        """Value of whichever of text/CDATA was written last, in document order."""
        if self._last_written == TEXT:
            return self.text
        if self._last_written == CDATA:
            return self.cdata
        return None

    @property
    def value(self) -> Optional[str]:
        """Text if present, otherwise CDATA."""
        return self.text if self.text is not None else self.cdata
