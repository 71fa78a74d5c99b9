# sedml/errors/codes.py
"""
Diagnostic codes, severities and categories.

Codes are partitioned by range:
- 0 to 9999: XML layer (well-formedness, I/O)
- 10000 to 89999: SED-ML schema and consistency rules
- 90000 to 99999: library-internal conditions
- 100000 and above: supplied by callers, no built-in defaults
"""

from enum import Enum, IntEnum


# ==================== Code Bands ====================

XML_ERROR_CODES_UPPER_BOUND = 9999
ADDITIONAL_CODES_LOWER_BOUND = 90000
SEDML_CODES_UPPER_BOUND = 99999

# Codes at or above this value bypass the built-in message table
CALLER_SUPPLIED_THRESHOLD = SEDML_CODES_UPPER_BOUND + 1


# ==================== Enumerations ====================


class SedErrorSeverity(IntEnum):
    """
    Severity of a diagnostic.

    INFO < WARNING < ERROR < FATAL is the public ordering. The remaining values
    only appear in the default-message table and are translated when a record
    is created.
    """

    INFO = 0
    WARNING = 1
    ERROR = 2
    FATAL = 3

    # Table-internal values
    SCHEMA_ERROR = 4
    GENERAL_WARNING = 5
    NOT_APPLICABLE = 6

    def is_public(self) -> bool:
        """Return True for severities that may appear on a record."""
        return self <= SedErrorSeverity.FATAL


class SedErrorCategory(Enum):
    """Consistency domain a diagnostic belongs to; used for grouping only."""

    INTERNAL = "Internal"
    SYSTEM = "Operating system"
    XML = "XML content"
    SEDML = "General SED-ML conformance"
    SEDML_L1_COMPAT = "Translation to SED-ML L1V1"
    GENERAL_CONSISTENCY = "SED-ML component consistency"
    IDENTIFIER_CONSISTENCY = "SED-ML identifier consistency"
    MATHML_CONSISTENCY = "MathML consistency"
    INTERNAL_CONSISTENCY = "Internal consistency"

    def __str__(self) -> str:
        return self.value


class SedErrorCode(IntEnum):
    """Representative subset of the diagnostic codes with built-in defaults."""

    # XML layer
    XMLUnknownError = 0
    XMLOutOfMemory = 1
    XMLFileUnreadable = 2
    XMLFileUnwritable = 3
    InternalXMLParserError = 101
    MissingXMLDecl = 1001
    MissingXMLEncoding = 1002
    BadXMLDecl = 1003
    InvalidCharInXML = 1005
    BadlyFormedXML = 1006
    UnclosedXMLToken = 1007
    XMLTagMismatch = 1009
    DuplicateXMLAttribute = 1010
    UndefinedXMLEntity = 1011
    BadXMLPrefix = 1013
    MissingXMLRequiredAttribute = 1015
    XMLAttributeTypeMismatch = 1016
    BadXMLAttributeValue = 1019
    UnrecognizedXMLElement = 1021
    XMLUnexpectedEOF = 1024
    XMLContentEmpty = 1035

    # SED-ML schema band
    UnknownError = 10000
    NotUTF8 = 10101
    UnrecognizedElement = 10102
    NotSchemaConformant = 10103
    InvalidMathElement = 10201
    DisallowedMathMLSymbol = 10202
    DuplicateComponentId = 10301
    DuplicateMetaId = 10307
    InvalidMetaidSyntax = 10309
    InvalidIdSyntax = 10310
    InvalidNameSyntax = 10312
    MissingAnnotationNamespace = 10401
    MultipleAnnotations = 10404
    NotesNotInXHTMLNamespace = 10801
    OnlyOneNotesElementAllowed = 10805
    InvalidNamespaceOnSed = 20101
    MissingOrInconsistentLevel = 20102
    MissingOrInconsistentVersion = 20103
    LevelPositiveInteger = 20105
    VersionPositiveInteger = 20106
    AllowedAttributesOnSed = 20108
    EmptyListElement = 20203
    OneOfEachListOf = 20205
    AllowedAttributesOnModel = 20222
    GeneralWarningNotSpecified = 29999

    # Library-internal band
    LibSedAdditionalCodesLowerBound = 90000
    CannotConvertToL1V1 = 90001
    MissingRequiredAttribute = 90101
    MissingRequiredElement = 90102
    InvalidMathExpression = 90201
    SedCodesUpperBound = 99999


# ==================== Band Predicates ====================


def is_xml_code(code: int) -> bool:
    """Return True for codes in the XML-layer band."""
    return 0 <= code <= XML_ERROR_CODES_UPPER_BOUND


def is_sedml_code(code: int) -> bool:
    """Return True for codes in the SED-ML schema band."""
    return XML_ERROR_CODES_UPPER_BOUND < code < ADDITIONAL_CODES_LOWER_BOUND


def is_internal_code(code: int) -> bool:
    """Return True for codes in the library-internal band."""
    return ADDITIONAL_CODES_LOWER_BOUND <= code <= SEDML_CODES_UPPER_BOUND


def is_caller_supplied(code: int) -> bool:
    """Return True for codes that carry no built-in defaults."""
    return code >= CALLER_SUPPLIED_THRESHOLD
