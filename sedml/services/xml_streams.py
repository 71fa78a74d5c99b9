# sedml/services/xml_streams.py
"""
Input and output streams the object model reads from and writes to.

Both are thin cursors over lxml trees: the input stream walks the element
children of one lxml element with a non-consuming peek(), the output stream
builds an lxml tree through start/attribute/end primitives.
"""

import copy
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from lxml import etree

from ..errors.error_log import SedErrorLog
from ..errors.return_codes import UNKNOWN_LOCATION


# ==================== Tokens ====================


@dataclass
class XMLToken:
    """
    One start element as seen by the object model.

    Attributes:
        name: Local tag name ("" for the end-of-stream token)
        namespace: Namespace URI of the tag, "" if none
        prefix: Prefix the tag was written with, "" for the default namespace
        attributes: Attribute values keyed by local name (namespaced attributes keep their Clark name)
        line: Source line, or UNKNOWN_LOCATION
        column: Source column; lxml does not report columns so this is UNKNOWN_LOCATION
        element: The underlying lxml element
    """

    name: str = ""
    namespace: str = ""
    prefix: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    line: int = UNKNOWN_LOCATION
    column: int = UNKNOWN_LOCATION
    element: Optional[etree._Element] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_element(cls, element: etree._Element) -> "XMLToken":
        """
        Build a token from an lxml element.

        Args:
            element: Parsed element

        Returns:
            Token describing the element's start tag
        """
        qname = etree.QName(element)
        attributes = {}
        for key, value in element.attrib.items():
            attr_qname = etree.QName(key)
            attributes[attr_qname.localname if attr_qname.namespace is None else key] = value
        return cls(
            name=qname.localname,
            namespace=qname.namespace or "",
            prefix=element.prefix or "",
            attributes=attributes,
            line=element.sourceline if element.sourceline is not None else UNKNOWN_LOCATION,
            column=UNKNOWN_LOCATION,
            element=element,
        )

    def get_name(self) -> str:
        return self.name

    def is_end(self) -> bool:
        """True for the token returned at the end of a stream."""
        return self.element is None

    def get_text(self) -> str:
        """Return the element's direct text content, stripped."""
        if self.element is None or self.element.text is None:
            return ""
        return self.element.text.strip()


# ==================== Input ====================


class XMLInputStream:
    """Cursor over a sequence of sibling elements."""

    def __init__(self, elements: Iterable[etree._Element], error_log: Optional[SedErrorLog] = None):
        """
        Initialise the stream.

        Comments and processing instructions are skipped.

        Args:
            elements: Sibling elements in document order
            error_log: Log that readers report diagnostics to
        """
        self._elements: List[etree._Element] = [el for el in elements if isinstance(el.tag, str)]
        self._position = 0
        self.error_log = error_log if error_log is not None else SedErrorLog()

    @classmethod
    def from_root(cls, root: etree._Element, error_log: Optional[SedErrorLog] = None) -> "XMLInputStream":
        """Create a stream whose only token is the document root."""
        return cls([root], error_log)

    def peek(self) -> XMLToken:
        """Return the next token without consuming it (an end token when exhausted)."""
        if not self.is_good():
            return XMLToken()
        return XMLToken.from_element(self._elements[self._position])

    def next(self) -> XMLToken:
        """Consume and return the next token (an end token when exhausted)."""
        token = self.peek()
        if self.is_good():
            self._position += 1
        return token

    def skip_past_end(self, token: XMLToken) -> None:
        """
        Skip the element described by `token`, including its subtree.

        Only the head of the stream can be skipped; other tokens are ignored.
        """
        if self.is_good() and self._elements[self._position] is token.element:
            self._position += 1

    def child_stream(self, token: XMLToken) -> "XMLInputStream":
        """Return a stream over the element children of `token`, sharing this stream's log."""
        if token.element is None:
            return XMLInputStream([], self.error_log)
        return XMLInputStream(token.element, self.error_log)

    def is_good(self) -> bool:
        return self._position < len(self._elements)

    def __len__(self) -> int:
        return len(self._elements) - self._position


# ==================== Output ====================


def format_attribute_value(value) -> str:
    """
    Format a Python value as SED-ML attribute text.

    Booleans become "true"/"false"; infinities and NaN use the XML Schema
    spellings "INF", "-INF" and "NaN".
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "INF" if value > 0 else "-INF"
        return repr(value)
    return str(value)


def strip_whitespace(element: etree._Element) -> None:
    """Remove whitespace-only text and tails throughout the tree, in place."""
    for node in element.iter():
        if node.text is not None and not node.text.strip():
            node.text = None
        if node is not element and node.tail is not None and not node.tail.strip():
            node.tail = None


class XMLOutputStream:
    """Builds an lxml tree through strictly nested element emission."""

    def __init__(self, namespace: str = "", nsmap: Optional[Dict[Optional[str], str]] = None):
        """
        Initialise the stream.

        Args:
            namespace: Namespace URI applied to elements started without one
            nsmap: Namespace declarations placed on the root element
        """
        self.namespace = namespace
        self.nsmap = dict(nsmap or {})
        if namespace and None not in self.nsmap:
            self.nsmap[None] = namespace
        self._root: Optional[etree._Element] = None
        self._stack: List[etree._Element] = []

    def _qualify(self, name: str, namespace: Optional[str]) -> str:
        namespace = self.namespace if namespace is None else namespace
        return f"{{{namespace}}}{name}" if namespace else name

    def start_element(self, name: str, namespace: Optional[str] = None) -> etree._Element:
        """
        Open a new element nested in the current one.

        Args:
            name: Local tag name
            namespace: Namespace URI (defaults to the stream's namespace)

        Returns:
            The created lxml element
        """
        tag = self._qualify(name, namespace)
        if not self._stack:
            if self._root is not None:
                raise ValueError("XML output already has a root element")
            element = etree.Element(tag, nsmap=self.nsmap or None)
            self._root = element
        else:
            element = etree.SubElement(self._stack[-1], tag)
        self._stack.append(element)
        return element

    def write_attribute(self, name: str, value) -> None:
        """Write an attribute on the current element; None values are skipped."""
        if value is None:
            return
        if not self._stack:
            raise ValueError("No open element to write attribute '%s' on" % name)
        self._stack[-1].set(name, format_attribute_value(value))

    def write_fragment(self, fragment: etree._Element) -> None:
        """Append a copy of an existing lxml element (math, notes, annotation) to the current element."""
        if not self._stack:
            raise ValueError("No open element to append fragment to")
        self._stack[-1].append(_copy_element(fragment))

    def end_element(self, name: Optional[str] = None) -> None:
        """Close the current element, checking the local name when given."""
        if not self._stack:
            raise ValueError("No open element to close")
        element = self._stack.pop()
        if name is not None and etree.QName(element).localname != name:
            raise ValueError(f"Mismatched end element: expected {etree.QName(element).localname}, got {name}")

    def get_root(self) -> Optional[etree._Element]:
        return self._root

    def to_string(self, pretty_print: bool = True, xml_declaration: bool = True) -> str:
        """
        Serialise the built tree.

        Returns:
            UTF-8 XML text, "" when nothing was written
        """
        if self._root is None:
            return ""
        return etree.tostring(
            self._root, encoding="UTF-8", xml_declaration=xml_declaration, pretty_print=pretty_print
        ).decode("utf-8")


def _copy_element(element: etree._Element) -> etree._Element:
    """Deep-copy an element without its tail text."""
    duplicate = copy.deepcopy(element)
    duplicate.tail = None
    return duplicate
