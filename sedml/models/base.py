# sedml/models/base.py
"""
Base class for every SED-ML element in the object model.

An element owns its attributes, its child collections and (for some types) a
math expression. It holds only a weak back-link to its parent, which is used to
resolve document-wide context and never for lifetime management.

Reading follows a fixed sequence per element: attributes are read, child
elements are dispatched to create_object() and read recursively, anything else
is offered to read_other_xml(), and whatever remains is reported as
unrecognized. Writing emits attributes, then child elements, then math.
"""

import copy
import re
import weakref
from typing import Iterator, Optional, Set

from lxml import etree

from ..config import Config
from ..errors.codes import SedErrorCode
from ..errors.error_log import SedErrorLog
from ..errors.return_codes import OperationReturnValue, SedConstructorException, UNKNOWN_LOCATION
from ..logging.debug_logger import get_logger, event, bind, EventType as EVT
from ..services.xml_streams import XMLInputStream, XMLOutputStream, XMLToken, strip_whitespace
from .namespaces import SedNamespaces, XHTML_NS
from .type_codes import SedTypeCode

logger = get_logger(__name__)

SID_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
META_ID_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_.\-]*$")

_TRUE_VALUES = {"true", "1"}
_FALSE_VALUES = {"false", "0"}


class SedBase:
    """
    Common behaviour of all SED-ML elements.

    Subclasses set ELEMENT_NAME and TYPE_CODE, extend EXPECTED_ATTRIBUTES, and
    override the read/write hooks, always chaining to the superclass first.
    """

    ELEMENT_NAME = ""
    TYPE_CODE = SedTypeCode.SEDML_UNKNOWN
    EXPECTED_ATTRIBUTES = frozenset({"metaid", "id", "name"})

    # Code logged when a read encounters an attribute not in EXPECTED_ATTRIBUTES
    UNKNOWN_ATTRIBUTE_CODE = SedErrorCode.NotSchemaConformant

    def __init__(self, level: Optional[int] = None, version: Optional[int] = None, sedns: Optional[SedNamespaces] = None):
        """
        Initialise the element for a SED-ML revision.

        Either pass a level/version pair (a fresh namespace bundle is created) or
        an existing bundle to adopt, as done when building children of a document.

        Args:
            level: SED-ML level (defaults to the configured level)
            version: SED-ML version (defaults to the configured version)
            sedns: Namespace bundle to adopt

        Raises:
            SedConstructorException: If the revision is not supported
        """
        if sedns is None:
            try:
                config = Config()
            except ValueError as e:
                raise SedConstructorException(f"Invalid default level/version: {e}") from e
            level = config.DEFAULT_LEVEL if level is None else level
            version = config.DEFAULT_VERSION if version is None else version
            sedns = SedNamespaces(level, version)
        if not isinstance(sedns, SedNamespaces) or not sedns.is_valid():
            raise SedConstructorException()

        self._sedns = sedns
        self._id: Optional[str] = None
        self._name: Optional[str] = None
        self._metaid: Optional[str] = None
        self._notes: Optional[etree._Element] = None
        self._annotation: Optional[etree._Element] = None
        self._parent: Optional[weakref.ref] = None
        self._line = UNKNOWN_LOCATION
        self._column = UNKNOWN_LOCATION

    # ==================== Copying ====================

    def __deepcopy__(self, memo):
        cls = self.__class__
        duplicate = cls.__new__(cls)
        memo[id(self)] = duplicate
        for key, value in self.__dict__.items():
            if key == "_parent":
                duplicate._parent = None
            else:
                setattr(duplicate, key, copy.deepcopy(value, memo))
        duplicate.connect_to_child()
        return duplicate

    def clone(self) -> "SedBase":
        """Return an independently owned deep copy of this element and its subtree."""
        return copy.deepcopy(self)

    def copy_from(self, other: "SedBase") -> "SedBase":
        """
        Replace this element's content with a deep copy of `other` (assignment).

        The parent link of this element is kept.

        Raises:
            SedConstructorException: If other is None or of a different type
        """
        if other is None:
            raise SedConstructorException("Null argument to assignment")
        if other is self:
            return self
        if type(other) is not type(self):
            raise SedConstructorException(
                f"Cannot assign {other.get_element_name()} to {self.get_element_name()}"
            )
        parent = self._parent
        self.__dict__.update(copy.deepcopy(other).__dict__)
        self._parent = parent
        self.connect_to_child()
        return self

    # ==================== Identity ====================

    def get_element_name(self) -> str:
        return self.ELEMENT_NAME

    def get_type_code(self) -> SedTypeCode:
        return self.TYPE_CODE

    def get_level(self) -> int:
        return self._sedns.get_level()

    def get_version(self) -> int:
        return self._sedns.get_version()

    @property
    def level(self) -> int:
        return self._sedns.get_level()

    @property
    def version(self) -> int:
        return self._sedns.get_version()

    def get_sed_namespaces(self) -> SedNamespaces:
        return self._sedns

    def get_uri(self) -> str:
        """Namespace URI, taken from the owning document when attached to one."""
        document = self.get_sed_document()
        if document is not None and document is not self:
            return document.get_sed_namespaces().get_uri()
        return self._sedns.get_uri()

    def set_sed_namespaces_and_own(self, sedns: SedNamespaces) -> int:
        """
        Adopt a new namespace bundle, the only way to change level/version.

        Returns:
            SUCCESS, or INVALID_OBJECT for an unsupported bundle
        """
        if not isinstance(sedns, SedNamespaces) or not sedns.is_valid():
            return OperationReturnValue.INVALID_OBJECT
        self._sedns = sedns
        for child in self.get_child_elements():
            child.set_sed_namespaces_and_own(sedns)
        return OperationReturnValue.SUCCESS

    def get_line(self) -> int:
        return self._line

    def get_column(self) -> int:
        return self._column

    # ==================== Attributes ====================

    def get_id(self) -> Optional[str]:
        return self._id

    def is_set_id(self) -> bool:
        return self._id is not None

    def set_id(self, sid: Optional[str]) -> int:
        """Set the identifier; rejects values that are not valid SId syntax."""
        if sid is None:
            return self.unset_id()
        if not isinstance(sid, str) or not SID_PATTERN.match(sid):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._id = sid
        return OperationReturnValue.SUCCESS

    def unset_id(self) -> int:
        self._id = None
        return OperationReturnValue.SUCCESS

    def get_name(self) -> Optional[str]:
        return self._name

    def is_set_name(self) -> bool:
        return self._name is not None

    def set_name(self, name: Optional[str]) -> int:
        if name is None:
            return self.unset_name()
        if not isinstance(name, str):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._name = name
        return OperationReturnValue.SUCCESS

    def unset_name(self) -> int:
        self._name = None
        return OperationReturnValue.SUCCESS

    def get_metaid(self) -> Optional[str]:
        return self._metaid

    def is_set_metaid(self) -> bool:
        return self._metaid is not None

    def set_metaid(self, metaid: Optional[str]) -> int:
        if metaid is None:
            return self.unset_metaid()
        if not isinstance(metaid, str) or not META_ID_PATTERN.match(metaid):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._metaid = metaid
        return OperationReturnValue.SUCCESS

    def unset_metaid(self) -> int:
        self._metaid = None
        return OperationReturnValue.SUCCESS

    # ==================== Notes and Annotation ====================

    def get_notes(self) -> Optional[etree._Element]:
        return self._notes

    def is_set_notes(self) -> bool:
        return self._notes is not None

    def set_notes(self, notes) -> int:
        """
        Set the notes from an lxml <notes> element or its XML text.

        Returns:
            SUCCESS, or INVALID_OBJECT when the value is not a notes element
        """
        if notes is None:
            return self.unset_notes()
        element = _coerce_fragment(notes)
        if element is None or etree.QName(element).localname != "notes":
            return OperationReturnValue.INVALID_OBJECT
        _adopt_namespace(element, self.get_uri())
        self._notes = element
        return OperationReturnValue.SUCCESS

    def unset_notes(self) -> int:
        self._notes = None
        return OperationReturnValue.SUCCESS

    def get_annotation(self) -> Optional[etree._Element]:
        return self._annotation

    def is_set_annotation(self) -> bool:
        return self._annotation is not None

    def set_annotation(self, annotation) -> int:
        """Set the annotation from an lxml <annotation> element or its XML text."""
        if annotation is None:
            return self.unset_annotation()
        element = _coerce_fragment(annotation)
        if element is None or etree.QName(element).localname != "annotation":
            return OperationReturnValue.INVALID_OBJECT
        _adopt_namespace(element, self.get_uri())
        self._annotation = element
        return OperationReturnValue.SUCCESS

    def unset_annotation(self) -> int:
        self._annotation = None
        return OperationReturnValue.SUCCESS

    # ==================== Parent and Children ====================

    def connect_to_parent(self, parent: Optional["SedBase"]) -> None:
        """Record a non-owning link to the parent and re-link this element's own children."""
        self._parent = weakref.ref(parent) if parent is not None else None
        self.connect_to_child()

    def connect_to_child(self) -> None:
        """Re-link owned children to this element. Subclasses with children extend this."""

    def get_parent_sed_object(self) -> Optional["SedBase"]:
        return self._parent() if self._parent is not None else None

    def get_sed_document(self) -> Optional["SedBase"]:
        """Walk the parent links up to the owning document, if any."""
        node: Optional[SedBase] = self
        while node is not None:
            if node.get_type_code() == SedTypeCode.SEDML_DOCUMENT:
                return node
            node = node.get_parent_sed_object()
        return None

    def get_child_elements(self) -> Iterator["SedBase"]:
        """Yield the directly owned child elements (collections included)."""
        return iter(())

    def get_all_elements(self) -> Iterator["SedBase"]:
        """Yield every element below this one, depth first, in document order."""
        for child in self.get_child_elements():
            yield child
            yield from child.get_all_elements()

    def get_error_log(self) -> Optional[SedErrorLog]:
        document = self.get_sed_document()
        return document.get_error_log() if document is not None and document is not self else None

    # ==================== Validation ====================

    def has_required_attributes(self) -> bool:
        return True

    def has_required_elements(self) -> bool:
        return True

    # ==================== Reading ====================

    def create_object(self, stream: XMLInputStream) -> Optional["SedBase"]:
        """
        Return the owned object that should read the element at the head of the stream.

        The base class recognises nothing; owners return their collections.
        """
        return None

    def read(self, stream: XMLInputStream) -> None:
        """
        Read this element from the token at the head of the stream.

        Args:
            stream: Input stream positioned on this element's start tag
        """
        token = stream.next()
        self._line = token.line
        self._column = token.column
        with bind(element_id=token.attributes.get("id")):
            self.read_attributes(token, stream.error_log)

            children = stream.child_stream(token)
            while children.is_good():
                head = children.peek()
                child = self.create_object(children)
                if child is not None:
                    child.read(children)
                    continue
                if self.read_other_xml(children):
                    continue
                self._log_unrecognized(head, children.error_log)
                children.skip_past_end(head)

    def read_attributes(self, token: XMLToken, error_log: SedErrorLog) -> None:
        """
        Read the attributes common to every element and report unexpected ones.

        Args:
            token: Start tag of this element
            error_log: Log for attribute diagnostics
        """
        expected = self.get_expected_attributes()
        for key in token.attributes:
            if key.startswith("{") or key in expected:
                continue
            error_log.log_error(
                self.UNKNOWN_ATTRIBUTE_CODE,
                f"Attribute '{key}' is not permitted on <{self.get_element_name()}>.",
                line=token.line,
            )

        metaid = token.attributes.get("metaid")
        if metaid is not None:
            if not META_ID_PATTERN.match(metaid):
                error_log.log_error(SedErrorCode.InvalidMetaidSyntax, f"Value '{metaid}'.", line=token.line)
            self._metaid = metaid

        sid = token.attributes.get("id")
        if sid is not None:
            if not SID_PATTERN.match(sid):
                error_log.log_error(
                    SedErrorCode.InvalidIdSyntax,
                    f"The id '{sid}' on <{self.get_element_name()}> does not conform to the syntax.",
                    line=token.line,
                )
            self._id = sid

        name = token.attributes.get("name")
        if name is not None:
            self._name = name

    @classmethod
    def get_expected_attributes(cls) -> Set[str]:
        """Return every attribute name this class accepts, including inherited ones."""
        expected: Set[str] = set()
        for klass in cls.__mro__:
            expected.update(getattr(klass, "EXPECTED_ATTRIBUTES", ()))
        return expected

    def read_other_xml(self, stream: XMLInputStream) -> bool:
        """
        Offer a non-declarative child (notes, annotation, math) to this element.

        Subclasses check their own content first and then call this, combining
        both results with OR.

        Returns:
            True if something was consumed from the stream
        """
        token = stream.peek()
        if token.name == "notes":
            if self._notes is not None:
                stream.error_log.log_error(SedErrorCode.OnlyOneNotesElementAllowed, line=token.line)
            elif not _has_xhtml_content(token.element):
                stream.error_log.log_error(SedErrorCode.NotesNotInXHTMLNamespace, line=token.line)
            self._notes = _detach(token.element)
            stream.next()
            return True
        if token.name == "annotation":
            if self._annotation is not None:
                stream.error_log.log_error(SedErrorCode.MultipleAnnotations, line=token.line)
            self._annotation = _detach(token.element)
            stream.next()
            return True
        return False

    def _log_unrecognized(self, token: XMLToken, error_log: SedErrorLog) -> None:
        error_log.log_error(
            SedErrorCode.UnrecognizedElement,
            f"Element <{token.name}> is not permitted inside <{self.get_element_name()}>.",
            line=token.line,
        )
        event(
            logger,
            EVT.ELEMENT_UNRECOGNIZED,
            "Skipping unrecognized element",
            element=token.name,
            parent=self.get_element_name(),
            line=token.line,
        )

    @staticmethod
    def _read_bool(token: XMLToken, attribute: str, error_log: SedErrorLog) -> Optional[bool]:
        value = token.attributes.get(attribute)
        if value is None:
            return None
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        error_log.log_error(
            SedErrorCode.XMLAttributeTypeMismatch,
            f"Attribute '{attribute}' must be a boolean, got '{value}'.",
            line=token.line,
        )
        return None

    @staticmethod
    def _read_double(token: XMLToken, attribute: str, error_log: SedErrorLog) -> Optional[float]:
        value = token.attributes.get(attribute)
        if value is None:
            return None
        try:
            return float(value.strip())
        except ValueError:
            error_log.log_error(
                SedErrorCode.XMLAttributeTypeMismatch,
                f"Attribute '{attribute}' must be a double, got '{value}'.",
                line=token.line,
            )
            return None

    # ==================== Writing ====================

    def write(self, stream: XMLOutputStream) -> None:
        """Write this element: start tag, attributes, child elements, end tag."""
        stream.start_element(self.get_element_name())
        self.write_attributes(stream)
        self.write_elements(stream)
        stream.end_element(self.get_element_name())

    def write_attributes(self, stream: XMLOutputStream) -> None:
        stream.write_attribute("metaid", self._metaid)
        stream.write_attribute("id", self._id)
        stream.write_attribute("name", self._name)

    def write_elements(self, stream: XMLOutputStream) -> None:
        if self._notes is not None:
            stream.write_fragment(self._notes)
        if self._annotation is not None:
            stream.write_fragment(self._annotation)

    def to_xml_element(self) -> etree._Element:
        """Serialise this element (and its subtree) to a standalone lxml element."""
        stream = XMLOutputStream(self.get_uri(), self._sedns.get_nsmap())
        self.write(stream)
        return stream.get_root()

    def to_xml_string(self, pretty_print: bool = True) -> str:
        return etree.tostring(self.to_xml_element(), encoding="unicode", pretty_print=pretty_print)

    # ==================== Comparison ====================

    def __eq__(self, other) -> bool:
        if not isinstance(other, SedBase):
            return NotImplemented
        if self.get_type_code() != other.get_type_code():
            return False
        return _canonical(self.to_xml_element()) == _canonical(other.to_xml_element())

    __hash__ = None

    def __repr__(self) -> str:
        if self._id is not None:
            return f"<{self.__class__.__name__} id={self._id!r}>"
        return f"<{self.__class__.__name__}>"


# ==================== Internal Utilities ====================


def _canonical(element: etree._Element) -> bytes:
    return etree.tostring(element, method="c14n", exclusive=True)


def _detach(element: etree._Element) -> etree._Element:
    """Copy an element out of the parsed tree so the object model owns it, minus ignorable whitespace."""
    duplicate = copy.deepcopy(element)
    duplicate.tail = None
    strip_whitespace(duplicate)
    return duplicate


def _coerce_fragment(value) -> Optional[etree._Element]:
    if value is None:
        return None
    if isinstance(value, etree._Element):
        return _detach(value)
    if isinstance(value, str):
        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
            element = etree.fromstring(value.encode("utf-8"), parser)
        except etree.XMLSyntaxError:
            return None
        strip_whitespace(element)
        return element
    return None


def _adopt_namespace(fragment: etree._Element, uri: str) -> None:
    """Move elements without a namespace into the SED-ML namespace they are written under."""
    for node in fragment.iter():
        if isinstance(node.tag, str) and etree.QName(node).namespace is None:
            node.tag = etree.QName(uri, node.tag).text


def _has_xhtml_content(notes: etree._Element) -> bool:
    """True when every top-level child of <notes> is in the XHTML namespace."""
    children = [child for child in notes if isinstance(child.tag, str)]
    return bool(children) and all(etree.QName(child).namespace == XHTML_NS for child in children)
