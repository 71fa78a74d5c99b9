# sedml/math/mathml.py
"""
MathML expression trees attached to elements such as computeChange.

The object model treats an expression as an opaque owned value: it can be read
from an input stream, written to an output stream, deep-copied, compared and
checked for well-formedness. Evaluation is out of scope.
"""

import copy
from dataclasses import dataclass
from typing import Optional

from lxml import etree

from ..errors.codes import SedErrorCode
from ..logging.debug_logger import get_logger, event, EventType as EVT
from ..models.namespaces import MATHML_NS
from ..services.xml_streams import XMLInputStream, XMLOutputStream, XMLToken, strip_whitespace

logger = get_logger(__name__)

# Token elements that must carry text
_TOKEN_ELEMENTS = {"ci", "cn", "csymbol"}

_ANNOTATION_ELEMENTS = {"annotation", "annotation-xml"}


@dataclass(frozen=True)
class MathStyle:
    """Options controlling how an expression is written."""

    keep_annotations: bool = True


class MathExpression:
    """
    A MathML <math> element owned by one element node.

    The wrapped lxml element is a private deep copy with ignorable whitespace
    removed, so two expressions parsed from differently indented text compare equal.
    """

    def __init__(self, element: etree._Element):
        """
        Wrap a MathML element.

        Args:
            element: A <math> element (copied, the caller keeps its own)

        Raises:
            ValueError: If element is None
        """
        if element is None:
            raise ValueError("Element cannot be None")
        # exclusive C14N drops namespace declarations inherited from the host document
        self._element = etree.fromstring(etree.tostring(element, method="c14n", exclusive=True))
        strip_whitespace(self._element)

    @classmethod
    def from_string(cls, xml_string: str) -> "MathExpression":
        """
        Parse MathML text.

        Args:
            xml_string: Serialized <math> element

        Returns:
            New expression

        Raises:
            etree.XMLSyntaxError: If the text is not well-formed XML
        """
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        return cls(etree.fromstring(xml_string.encode("utf-8"), parser))

    # ==================== Accessors ====================

    def get_element(self) -> etree._Element:
        """Return the wrapped <math> element."""
        return self._element

    def is_well_formed(self) -> bool:
        """
        Check the expression's structure.

        The root must be a MathML <math> element with exactly one element child,
        every descendant must be in the MathML namespace, every <apply> needs an
        operator child and every token element needs text.
        """
        root = self._element
        if etree.QName(root).namespace != MATHML_NS or etree.QName(root).localname != "math":
            return False
        children = [child for child in root if isinstance(child.tag, str)]
        if len(children) != 1:
            return False
        for node in root.iterdescendants():
            if not isinstance(node.tag, str):
                continue
            qname = etree.QName(node)
            if qname.localname in _ANNOTATION_ELEMENTS:
                continue
            if qname.namespace != MATHML_NS and not _inside_annotation(node):
                return False
            if qname.localname == "apply" and len([c for c in node if isinstance(c.tag, str)]) == 0:
                return False
            if qname.localname in _TOKEN_ELEMENTS and not (node.text or "").strip():
                return False
        return True

    def deep_copy(self) -> "MathExpression":
        return MathExpression(self._element)

    def __deepcopy__(self, memo) -> "MathExpression":
        return self.deep_copy()

    def to_string(self) -> str:
        return etree.tostring(self._element, encoding="unicode")

    def canonical(self) -> bytes:
        """Return the C14N serialization used for equality."""
        return etree.tostring(self._element, method="c14n", exclusive=True)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MathExpression):
            return NotImplemented
        return self.canonical() == other.canonical()

    def __hash__(self) -> int:
        return hash(self.canonical())

    def __repr__(self) -> str:
        return f"MathExpression({self.to_string()!r})"


# ==================== Reading and Writing ====================


def check_mathml_namespace(token: XMLToken) -> str:
    """
    Return the prefix the token's element binds to the MathML namespace.

    Args:
        token: Token for a <math> element

    Returns:
        The prefix ("" for the default namespace), or "" when MathML is not declared
    """
    if token.element is None:
        return ""
    for prefix, uri in token.element.nsmap.items():
        if uri == MATHML_NS:
            return prefix or ""
    return ""


def read_mathml(stream: XMLInputStream, prefix: str = "") -> Optional[MathExpression]:
    """
    Read the <math> element at the head of the stream.

    Args:
        stream: Input stream positioned on the math element
        prefix: Prefix the caller expects MathML to be bound to

    Returns:
        The expression, or None if the head of the stream is not MathML math
    """
    token = stream.peek()
    if token.name != "math":
        return None

    stream.next()
    if token.namespace != MATHML_NS:
        stream.error_log.log_error(
            SedErrorCode.InvalidMathElement,
            f"The <math> element must be in the MathML namespace '{MATHML_NS}'.",
            line=token.line,
        )
        event(logger, EVT.MATH_REJECTED, "math element outside MathML namespace", namespace=token.namespace)
        return None

    if prefix and token.prefix != prefix:
        logger.debug(f"MathML read with prefix '{token.prefix}', expected '{prefix}'")

    expression = MathExpression(token.element)
    if not expression.is_well_formed():
        # kept as read so the document still round-trips
        stream.error_log.log_error(SedErrorCode.InvalidMathExpression, line=token.line)
        event(logger, EVT.MATH_REJECTED, "math element is not a well-formed expression", line=token.line)
    return expression


def write_mathml(expression: Optional[MathExpression], stream: XMLOutputStream, style: Optional[MathStyle] = None) -> None:
    """
    Append an expression to the element currently open on the stream.

    Args:
        expression: Expression to write; None writes nothing
        stream: Output stream
        style: Writing options
    """
    if expression is None:
        return
    style = style or MathStyle()
    element = expression.get_element()
    if not style.keep_annotations:
        element = copy.deepcopy(element)
        for node in list(element.iter()):
            if isinstance(node.tag, str) and etree.QName(node).localname in _ANNOTATION_ELEMENTS:
                node.getparent().remove(node)
    stream.write_fragment(element)


# ==================== Internal Utilities ====================


def _inside_annotation(node: etree._Element) -> bool:
    for ancestor in node.iterancestors():
        if isinstance(ancestor.tag, str) and etree.QName(ancestor).localname in _ANNOTATION_ELEMENTS:
            return True
    return False
