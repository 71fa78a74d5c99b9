# sedml/models/list_of.py
"""
Ordered, identifier-searchable collection of owned child elements.

Each SED-ML "listOfXxx" wrapper is a SedListOf subclass declaring its wrapper
tag and the element tags (and classes) it may contain.
"""

from typing import Dict, Iterator, List, Optional, Union

from ..errors.codes import SedErrorCode
from ..errors.return_codes import OperationReturnValue
from ..services.xml_streams import XMLInputStream
from .base import SedBase
from .type_codes import SedTypeCode


class SedListOf(SedBase):
    """
    Owns zero or more elements of one declared kind, in insertion order.

    Lookup by identifier is a linear scan returning the first match; identifiers
    are not required to be unique by the collection itself.
    """

    ELEMENT_NAME = "listOf"
    TYPE_CODE = SedTypeCode.SEDML_LIST_OF

    # Child tag -> element class; subclasses fill this in
    ITEM_CLASSES: Dict[str, type] = {}

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._items: List[SedBase] = []
        self._was_read = False

    # ==================== Item Typing ====================

    def get_item_type_codes(self) -> List[SedTypeCode]:
        return [klass.TYPE_CODE for klass in self.ITEM_CLASSES.values()]

    def accepts(self, item: SedBase) -> bool:
        """True if `item` may be stored in this collection."""
        return item.get_type_code() in self.get_item_type_codes()

    def _check_item(self, item: Optional[SedBase]) -> int:
        if item is None:
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        if not isinstance(item, SedBase) or not self.accepts(item):
            return OperationReturnValue.INVALID_OBJECT
        if (item.get_level(), item.get_version()) != (self.get_level(), self.get_version()):
            return OperationReturnValue.INVALID_OBJECT
        return OperationReturnValue.SUCCESS

    # ==================== Mutation ====================

    def append(self, item: Optional[SedBase]) -> int:
        """
        Append a deep copy of `item`.

        Args:
            item: Element to copy into the collection

        Returns:
            SUCCESS; INVALID_ATTRIBUTE_VALUE for None; INVALID_OBJECT for an
            element of the wrong kind or SED-ML revision
        """
        result = self._check_item(item)
        if result != OperationReturnValue.SUCCESS:
            return result
        duplicate = item.clone()
        self._items.append(duplicate)
        duplicate.connect_to_parent(self)
        return OperationReturnValue.SUCCESS

    def append_and_own(self, item: Optional[SedBase]) -> int:
        """
        Append `item` itself, transferring ownership to the collection.

        Same result codes as append().
        """
        result = self._check_item(item)
        if result != OperationReturnValue.SUCCESS:
            return result
        self._items.append(item)
        item.connect_to_parent(self)
        return OperationReturnValue.SUCCESS

    def remove(self, key: Union[int, str]) -> Optional[SedBase]:
        """
        Detach an element by position or identifier and hand it to the caller.

        Args:
            key: 0-based position or identifier

        Returns:
            The detached element, or None when not found
        """
        index = self._index_of(key)
        if index is None:
            return None
        item = self._items.pop(index)
        item.connect_to_parent(None)
        return item

    def clear(self) -> None:
        for item in self._items:
            item.connect_to_parent(None)
        self._items = []

    # ==================== Access ====================

    def get(self, key: Union[int, str]) -> Optional[SedBase]:
        """
        Return the element at a position or with an identifier.

        Args:
            key: 0-based position or identifier

        Returns:
            The stored element (not a copy), or None when not found
        """
        index = self._index_of(key)
        return self._items[index] if index is not None else None

    def size(self) -> int:
        return len(self._items)

    def _index_of(self, key: Union[int, str]) -> Optional[int]:
        if isinstance(key, str):
            for index, item in enumerate(self._items):
                if item.get_id() == key:
                    return index
            return None
        if isinstance(key, int) and not isinstance(key, bool) and 0 <= key < len(self._items):
            return key
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SedBase]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> SedBase:
        return self._items[index]

    # ==================== Parent and Children ====================

    def connect_to_child(self) -> None:
        super().connect_to_child()
        for item in self._items:
            item.connect_to_parent(self)

    def get_child_elements(self) -> Iterator[SedBase]:
        return iter(list(self._items))

    # ==================== Reading ====================

    def create_object(self, stream: XMLInputStream) -> Optional[SedBase]:
        """Create, append and return an item for a recognised child tag."""
        item_class = self.ITEM_CLASSES.get(stream.peek().name)
        if item_class is None:
            return None
        item = item_class(sedns=self.get_sed_namespaces())
        self.append_and_own(item)
        return item

    def read(self, stream: XMLInputStream) -> None:
        token = stream.peek()
        if self._was_read:
            stream.error_log.log_error(
                SedErrorCode.OneOfEachListOf,
                f"Element <{self.get_element_name()}> appears more than once.",
                line=token.line,
            )
        self._was_read = True
        before = len(self._items)
        super().read(stream)
        if len(self._items) == before:
            stream.error_log.log_error(
                SedErrorCode.EmptyListElement,
                f"The <{self.get_element_name()}> element is empty.",
                line=token.line,
            )

    # ==================== Writing ====================

    def write_elements(self, stream) -> None:
        super().write_elements(stream)
        for item in self._items:
            item.write(stream)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} size={len(self._items)}>"
