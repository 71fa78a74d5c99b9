# sedml/models/namespaces.py
"""
Namespace bundle: the (level, version, URI) triple shared by a document's elements,
plus any additional prefix -> URI declarations the document carries.
"""

from typing import Dict, List, Optional, Tuple

# Supported SED-ML revisions and their namespace URIs
SEDML_DEFAULT_LEVEL = 1
SEDML_DEFAULT_VERSION = 1
SEDML_XMLNS_L1 = "http://sed-ml.org/"
SEDML_XMLNS_L1V2 = "http://sed-ml.org/sed-ml/level1/version2"
SEDML_XMLNS_L1V3 = "http://sed-ml.org/sed-ml/level1/version3"

SUPPORTED_NAMESPACES: Dict[Tuple[int, int], str] = {
    (1, 1): SEDML_XMLNS_L1,
    (1, 2): SEDML_XMLNS_L1V2,
    (1, 3): SEDML_XMLNS_L1V3,
}

MATHML_NS = "http://www.w3.org/1998/Math/MathML"
XHTML_NS = "http://www.w3.org/1999/xhtml"


class SedNamespaces:
    """
    Carries the SED-ML level/version and the namespace declarations of a document.

    The bundle is constructed independently and handed to element constructors,
    which adopt it instead of creating their own.
    """

    def __init__(self, level: int = SEDML_DEFAULT_LEVEL, version: int = SEDML_DEFAULT_VERSION):
        """
        Initialise the bundle for a SED-ML revision.

        An unsupported level/version pair yields a bundle whose is_valid()
        returns False; element constructors refuse such bundles.

        Args:
            level: SED-ML level
            version: SED-ML version
        """
        self._level = level
        self._version = version
        self._namespaces: Dict[str, str] = {}
        uri = self.get_sed_namespace_uri(level, version)
        if uri:
            self._namespaces[""] = uri

    # ==================== Class Helpers ====================

    @staticmethod
    def get_sed_namespace_uri(level: int, version: int) -> str:
        """
        Return the namespace URI for a level/version, or "" if unsupported.
        """
        return SUPPORTED_NAMESPACES.get((level, version), "")

    @staticmethod
    def get_supported_namespaces() -> List["SedNamespaces"]:
        """Return a bundle for every supported SED-ML revision."""
        return [SedNamespaces(level, version) for level, version in sorted(SUPPORTED_NAMESPACES)]

    @staticmethod
    def is_sed_namespace(uri: str) -> bool:
        return uri in SUPPORTED_NAMESPACES.values()

    @classmethod
    def from_uri(cls, uri: str) -> Optional["SedNamespaces"]:
        """
        Build the bundle matching a namespace URI.

        Args:
            uri: SED-ML namespace URI

        Returns:
            Matching bundle, or None for an unknown URI
        """
        for (level, version), known in SUPPORTED_NAMESPACES.items():
            if known == uri:
                return cls(level, version)
        return None

    # ==================== Accessors ====================

    def get_uri(self) -> str:
        return self.get_sed_namespace_uri(self._level, self._version)

    @property
    def uri(self) -> str:
        return self.get_uri()

    def get_level(self) -> int:
        return self._level

    def get_version(self) -> int:
        return self._version

    @property
    def level(self) -> int:
        return self._level

    @property
    def version(self) -> int:
        return self._version

    def get_namespaces(self) -> Dict[str, str]:
        """
        Return a copy of the prefix -> URI declarations.

        The default (unprefixed) namespace is stored under the empty prefix.
        """
        return dict(self._namespaces)

    def add_namespace(self, uri: str, prefix: str = "") -> None:
        """
        Declare an additional namespace.

        Args:
            uri: Namespace URI
            prefix: Prefix to bind, "" for the default namespace
        """
        self._namespaces[prefix] = uri

    def remove_namespace(self, uri: str) -> bool:
        """Remove every prefix bound to `uri`; returns True if any was removed."""
        prefixes = [prefix for prefix, bound in self._namespaces.items() if bound == uri]
        for prefix in prefixes:
            del self._namespaces[prefix]
        return bool(prefixes)

    def get_nsmap(self) -> Dict[Optional[str], str]:
        """Return the declarations as an lxml nsmap (None for the default prefix)."""
        return {(prefix or None): uri for prefix, uri in self._namespaces.items()}

    def is_valid(self) -> bool:
        """True when the level/version pair is a supported SED-ML revision."""
        return bool(self.get_uri())

    def clone(self) -> "SedNamespaces":
        copy = SedNamespaces(self._level, self._version)
        copy._namespaces = dict(self._namespaces)
        return copy

    def __eq__(self, other) -> bool:
        if not isinstance(other, SedNamespaces):
            return NotImplemented
        return (self._level, self._version, self._namespaces) == (other._level, other._version, other._namespaces)

    def __repr__(self) -> str:
        return f"SedNamespaces(level={self._level}, version={self._version})"
