# sedml/services/sed_reader.py
"""
Reads SED-ML documents from files and strings into the object model.

Reading never raises for document problems: malformed XML, unreadable files and
schema violations become diagnostics in the returned document's error log.
"""

from pathlib import Path
from typing import Union

from lxml import etree

from ..config import Config
from ..errors.codes import SedErrorCode
from ..logging.debug_logger import get_logger, event, bind, EventType as EVT
from ..models.document import SedDocument
from ..models.namespaces import SedNamespaces
from .xml_streams import XMLInputStream

logger = get_logger(__name__)


class SedReader:
    """Parses SED-ML XML into SedDocument object graphs."""

    def __init__(self):
        """Initialise the reader with a hardened lxml parser."""
        self.config = Config()
        # No entity expansion and no network access while parsing untrusted input
        self.parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)

    # ==================== Public Interface ====================

    def read_sedml_from_file(self, filepath: Union[str, Path]) -> SedDocument:
        """
        Read a SED-ML document from a file.

        Args:
            filepath: Path to the SED-ML file

        Returns:
            The document; an unreadable file yields an empty document whose
            log holds an XMLFileUnreadable diagnostic
        """
        filepath = str(filepath)
        event(logger, EVT.DOCUMENT_READ_START, "Reading SED-ML file", filepath=filepath)
        try:
            data = Path(filepath).read_bytes()
        except OSError as e:
            event(logger, EVT.XML_PARSE_ERROR, "Failed to read SED-ML file", filepath=filepath, error=str(e))
            document = self._empty_document()
            document.get_error_log().log_error(SedErrorCode.XMLFileUnreadable, f"'{filepath}': {e.strerror or e}")
            return document
        return self._read(data, filepath)

    def read_sedml_from_string(self, xml_string: Union[str, bytes]) -> SedDocument:
        """
        Read a SED-ML document from XML text.

        Args:
            xml_string: Serialized document (str or UTF-8 bytes)

        Returns:
            The document, with any problems recorded in its error log
        """
        event(logger, EVT.DOCUMENT_READ_START, "Reading SED-ML string", length=len(xml_string or ""))
        if xml_string is None:
            xml_string = ""
        data = xml_string.encode("utf-8") if isinstance(xml_string, str) else xml_string
        return self._read(data, "<string>")

    # ==================== Internal Methods ====================

    def _read(self, data: bytes, source: str) -> SedDocument:
        with bind(document_id=source):
            try:
                root = etree.fromstring(data, self.parser)
            except etree.XMLSyntaxError as e:
                event(
                    logger,
                    EVT.XML_PARSE_ERROR,
                    "Failed to parse SED-ML",
                    error=str(e),
                    xml_document=data[:2000].decode("utf-8", errors="replace"),
                )
                document = self._empty_document()
                document.get_error_log().log_error(SedErrorCode.BadlyFormedXML, str(e), line=e.lineno)
                return document

            document = self._read_root(root)
            event(
                logger,
                EVT.DOCUMENT_READ_END,
                "Finished reading SED-ML",
                models=document.get_num_models(),
                outputs=document.get_num_outputs(),
                errors=document.get_num_errors(),
            )
            return document

    def _read_root(self, root: etree._Element) -> SedDocument:
        """
        Build the document for a parsed root element.

        The namespace of the root decides the document's level and version;
        an unknown namespace falls back to the level/version attributes, then
        to the configured defaults.
        """
        qname = etree.QName(root)
        if qname.localname != "sedML":
            document = self._empty_document()
            document.get_error_log().log_error(
                SedErrorCode.NotSchemaConformant,
                f"The root element is <{qname.localname}>, expected <sedML>.",
                line=root.sourceline,
            )
            return document

        namespace = qname.namespace or ""
        sedns = SedNamespaces.from_uri(namespace)
        namespace_error = sedns is None
        if namespace_error:
            sedns = self._namespaces_from_attributes(root)

        for prefix, uri in root.nsmap.items():
            if prefix and uri != namespace:
                sedns.add_namespace(uri, prefix)

        document = SedDocument(sedns=sedns)
        if namespace_error:
            document.get_error_log().log_error(
                SedErrorCode.InvalidNamespaceOnSed,
                f"'{namespace}' is not a SED-ML namespace.",
                line=root.sourceline,
            )
        document.read(XMLInputStream.from_root(root, document.get_error_log()))
        return document

    def _namespaces_from_attributes(self, root: etree._Element) -> SedNamespaces:
        try:
            sedns = SedNamespaces(int(root.get("level", "")), int(root.get("version", "")))
        except ValueError:
            sedns = None
        if sedns is None or not sedns.is_valid():
            sedns = SedNamespaces(self.config.DEFAULT_LEVEL, self.config.DEFAULT_VERSION)
        return sedns

    def _empty_document(self) -> SedDocument:
        return SedDocument(self.config.DEFAULT_LEVEL, self.config.DEFAULT_VERSION)


# ==================== Module Conveniences ====================


def read_sedml(filepath: Union[str, Path]) -> SedDocument:
    """Read a SED-ML file with a default reader."""
    return SedReader().read_sedml_from_file(filepath)


def read_sedml_from_string(xml_string: Union[str, bytes]) -> SedDocument:
    """Read SED-ML text with a default reader."""
    return SedReader().read_sedml_from_string(xml_string)
