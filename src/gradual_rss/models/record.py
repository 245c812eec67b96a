"""
Record capability interface.

The parser engine knows nothing about the shape of the records it builds.
A record type only has to provide two operations:

- ``create()``: classmethod returning an empty instance
- ``fold(node)``: absorb one completed child element

Subclassing ItemRecord is optional; any class offering both operations is
accepted (see ``is_item_record``).
"""

from abc import ABC, abstractmethod

from .node import Node


class ItemRecord(ABC):
    """
    Abstract base class for records built incrementally from item elements.

    Example:
        >>> class Headline(ItemRecord):
        ...     def __init__(self):
        ...         self.title = None
        ...     @classmethod
        ...     def create(cls):
        ...         return cls()
        ...     def fold(self, node):
        ...         if node.tag == 'title':
        ...             self.title = node.value
    """

    @classmethod
    @abstractmethod
    def create(cls) -> 'ItemRecord':
        """Return an empty record, called when an item start tag is seen."""
        pass

    @abstractmethod
    def fold(self, node: Node) -> None:
        """
        Absorb one element closed inside the item.

        Tags the record does not recognize must be ignored here.

        Args:
            node: Completed element (lowercased tag, text, CDATA)
        """
        pass


def is_item_record(record_type) -> bool:
    """Check whether a type provides the create/fold capability."""
    return callable(getattr(record_type, 'create', None)) and callable(
        getattr(record_type, 'fold', None)
    )
