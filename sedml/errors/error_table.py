# sedml/errors/error_table.py
"""
Static table of default severity, category and message text per diagnostic code.

The table is built once at import time and exposed read-only. Codes at or above
CALLER_SUPPLIED_THRESHOLD have no entry; callers creating such diagnostics must
supply severity, category and message themselves.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .codes import SedErrorCategory as CAT, SedErrorCode as C, SedErrorSeverity as SEV, is_caller_supplied


@dataclass(frozen=True)
class ErrorTableEntry:
    """Defaults for one diagnostic code."""

    code: int
    category: CAT
    severity: SEV
    short_message: str
    message: str


# ==================== Table Data ====================

_ENTRIES = (
    # XML layer
    (C.XMLUnknownError, CAT.INTERNAL, SEV.FATAL, "Unknown XML error", "Unrecognized error encountered internally."),
    (C.XMLOutOfMemory, CAT.SYSTEM, SEV.FATAL, "Out of memory", "Out of memory."),
    (C.XMLFileUnreadable, CAT.SYSTEM, SEV.ERROR, "File unreadable", "File unreadable."),
    (C.XMLFileUnwritable, CAT.SYSTEM, SEV.ERROR, "File unwritable", "File unwritable."),
    (
        C.InternalXMLParserError,
        CAT.INTERNAL,
        SEV.FATAL,
        "Internal XML parser error",
        "Internal XML parser state error.",
    ),
    (C.MissingXMLDecl, CAT.XML, SEV.ERROR, "Missing XML declaration", "Missing XML declaration at beginning of XML input."),
    (C.MissingXMLEncoding, CAT.XML, SEV.ERROR, "Missing XML encoding", "Missing encoding attribute in XML declaration."),
    (C.BadXMLDecl, CAT.XML, SEV.ERROR, "Bad XML declaration", "Invalid or unrecognized XML declaration or XML encoding."),
    (C.InvalidCharInXML, CAT.XML, SEV.ERROR, "Invalid XML character", "Invalid character in XML content."),
    (C.BadlyFormedXML, CAT.XML, SEV.FATAL, "Badly formed XML", "Badly formed XML."),
    (C.UnclosedXMLToken, CAT.XML, SEV.ERROR, "Unclosed XML token", "Unclosed token."),
    (C.XMLTagMismatch, CAT.XML, SEV.ERROR, "XML tag mismatch", "XML tag mismatch."),
    (C.DuplicateXMLAttribute, CAT.XML, SEV.ERROR, "Duplicate XML attribute", "Duplicate attribute."),
    (C.UndefinedXMLEntity, CAT.XML, SEV.ERROR, "Undefined XML entity", "Undefined XML entity."),
    (C.BadXMLPrefix, CAT.XML, SEV.ERROR, "Bad XML prefix", "Invalid XML namespace prefix."),
    (
        C.MissingXMLRequiredAttribute,
        CAT.XML,
        SEV.ERROR,
        "Missing XML required attribute",
        "Required attribute is missing.",
    ),
    (
        C.XMLAttributeTypeMismatch,
        CAT.XML,
        SEV.ERROR,
        "XML attribute type mismatch",
        "Data type mismatch in attribute value.",
    ),
    (C.BadXMLAttributeValue, CAT.XML, SEV.ERROR, "Bad XML attribute value", "Invalid attribute value."),
    (C.UnrecognizedXMLElement, CAT.XML, SEV.ERROR, "Unrecognized XML element", "Unrecognized XML element."),
    (C.XMLUnexpectedEOF, CAT.XML, SEV.ERROR, "Unexpected end of file", "Unexpected end of file."),
    (C.XMLContentEmpty, CAT.XML, SEV.ERROR, "XML content empty", "XML content is empty."),
    # SED-ML schema band
    (C.UnknownError, CAT.INTERNAL, SEV.FATAL, "Unknown error", "Encountered unknown internal SED-ML library error."),
    (C.NotUTF8, CAT.SEDML, SEV.ERROR, "Not UTF8", "File does not use UTF-8 encoding."),
    (C.UnrecognizedElement, CAT.SEDML, SEV.ERROR, "Unrecognized element", "Encountered unrecognized element."),
    (
        C.NotSchemaConformant,
        CAT.SEDML,
        SEV.SCHEMA_ERROR,
        "Not schema conformant",
        "Document does not conform to the SED-ML XML schema.",
    ),
    (C.InvalidMathElement, CAT.MATHML_CONSISTENCY, SEV.ERROR, "Invalid MathML", "Invalid MathML."),
    (
        C.DisallowedMathMLSymbol,
        CAT.MATHML_CONSISTENCY,
        SEV.ERROR,
        "Disallowed MathML symbol",
        "Disallowed MathML symbol found.",
    ),
    (
        C.DuplicateComponentId,
        CAT.IDENTIFIER_CONSISTENCY,
        SEV.ERROR,
        "Duplicate component identifier",
        "The value of the field 'id' on every element must be unique across the set of all 'id' values in a document.",
    ),
    (
        C.DuplicateMetaId,
        CAT.IDENTIFIER_CONSISTENCY,
        SEV.ERROR,
        "Duplicate 'metaid' attribute value",
        "Every 'metaid' attribute value must be unique across the set of all 'metaid' values in a document.",
    ),
    (
        C.InvalidMetaidSyntax,
        CAT.IDENTIFIER_CONSISTENCY,
        SEV.ERROR,
        "Invalid 'metaid' attribute value syntax",
        "The syntax of 'metaid' attribute values must conform to the syntax of the XML type 'ID'.",
    ),
    (
        C.InvalidIdSyntax,
        CAT.IDENTIFIER_CONSISTENCY,
        SEV.ERROR,
        "Invalid identifier syntax",
        "The syntax of 'id' attribute values must conform to the syntax of the SId type.",
    ),
    (
        C.InvalidNameSyntax,
        CAT.IDENTIFIER_CONSISTENCY,
        SEV.WARNING,
        "Invalid 'name' attribute value syntax",
        "The 'name' attribute value should be a non-empty string.",
    ),
    (
        C.MissingAnnotationNamespace,
        CAT.SEDML,
        SEV.ERROR,
        "Missing declaration of the XML namespace for the annotation",
        "Every top-level element within an annotation element must have a namespace declared.",
    ),
    (
        C.MultipleAnnotations,
        CAT.SEDML,
        SEV.ERROR,
        "Multiple annotation elements not allowed",
        "An element may have at most one annotation subelement.",
    ),
    (
        C.NotesNotInXHTMLNamespace,
        CAT.SEDML,
        SEV.ERROR,
        "Notes not placed in XHTML namespace",
        "The contents of the notes element must be explicitly placed in the XHTML XML namespace.",
    ),
    (
        C.OnlyOneNotesElementAllowed,
        CAT.SEDML,
        SEV.ERROR,
        "Only one notes element allowed",
        "An element may have at most one notes subelement.",
    ),
    (
        C.InvalidNamespaceOnSed,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Invalid XML namespace for SED-ML container",
        "The sedML container element must declare a SED-ML namespace supported by this library.",
    ),
    (
        C.MissingOrInconsistentLevel,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Missing or inconsistent value for 'level' attribute",
        "The sedML container element must declare the SED-ML level using the attribute 'level'.",
    ),
    (
        C.MissingOrInconsistentVersion,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Missing or inconsistent value for 'version' attribute",
        "The sedML container element must declare the SED-ML version using the attribute 'version'.",
    ),
    (
        C.LevelPositiveInteger,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Invalid 'level' attribute value",
        "The 'level' attribute on sedML must have a value of type positiveInteger.",
    ),
    (
        C.VersionPositiveInteger,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Invalid 'version' attribute value",
        "The 'version' attribute on sedML must have a value of type positiveInteger.",
    ),
    (
        C.AllowedAttributesOnSed,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Invalid attribute on sedML",
        "A sedML object may only have the attributes 'level', 'version', 'metaid' and 'id'.",
    ),
    (
        C.EmptyListElement,
        CAT.GENERAL_CONSISTENCY,
        SEV.WARNING,
        "No empty listOf elements allowed",
        "The various listOf subelements must not be empty.",
    ),
    (
        C.OneOfEachListOf,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Only one of each kind of listOf allowed",
        "An element may contain at most one of each kind of listOf subelement.",
    ),
    (
        C.AllowedAttributesOnModel,
        CAT.GENERAL_CONSISTENCY,
        SEV.ERROR,
        "Invalid attribute on model",
        "A model object may only have the attributes 'id', 'name', 'metaid', 'language' and 'source'.",
    ),
    (
        C.GeneralWarningNotSpecified,
        CAT.SEDML,
        SEV.GENERAL_WARNING,
        "Unknown error",
        "Unknown error from SED-ML.",
    ),
    # Library-internal band
    (
        C.LibSedAdditionalCodesLowerBound,
        CAT.INTERNAL,
        SEV.NOT_APPLICABLE,
        "Internal code lower bound",
        "Lower bound of the library-internal code band.",
    ),
    (
        C.CannotConvertToL1V1,
        CAT.SEDML_L1_COMPAT,
        SEV.ERROR,
        "Cannot convert to SED-ML L1V1",
        "Conversion of the document to SED-ML Level 1 Version 1 is not possible.",
    ),
    (
        C.MissingRequiredAttribute,
        CAT.INTERNAL_CONSISTENCY,
        SEV.ERROR,
        "Missing required attribute",
        "An element is missing one or more attributes required by the SED-ML schema.",
    ),
    (
        C.MissingRequiredElement,
        CAT.INTERNAL_CONSISTENCY,
        SEV.ERROR,
        "Missing required element",
        "An element is missing one or more subelements required by the SED-ML schema.",
    ),
    (
        C.InvalidMathExpression,
        CAT.MATHML_CONSISTENCY,
        SEV.ERROR,
        "Ill-formed math expression",
        "A math element is not a well-formed MathML expression.",
    ),
    (
        C.SedCodesUpperBound,
        CAT.INTERNAL,
        SEV.NOT_APPLICABLE,
        "Upper bound of built-in codes",
        "Upper bound of the built-in diagnostic codes.",
    ),
)


def _build_table() -> Mapping[int, ErrorTableEntry]:
    """Build the read-only code -> entry mapping."""
    table: Dict[int, ErrorTableEntry] = {}
    for code, category, severity, short_message, message in _ENTRIES:
        table[int(code)] = ErrorTableEntry(int(code), category, severity, short_message, message)
    return MappingProxyType(table)


ERROR_TABLE = _build_table()


# ==================== Public Interface ====================


def lookup(code: int) -> Optional[ErrorTableEntry]:
    """
    Look up the defaults for a diagnostic code.

    Codes below the caller-supplied threshold always resolve: codes without a
    dedicated entry fall back to the UnknownError (or XMLUnknownError) defaults.

    Args:
        code: Numeric diagnostic code

    Returns:
        The table entry, or None when the code is caller supplied
    """
    if is_caller_supplied(code):
        return None
    entry = ERROR_TABLE.get(code)
    if entry is not None:
        return entry
    if code < C.UnknownError:
        return ERROR_TABLE[int(C.XMLUnknownError)]
    return ERROR_TABLE[int(C.UnknownError)]
