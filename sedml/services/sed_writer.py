# sedml/services/sed_writer.py
"""Writes SedDocument object graphs to SED-ML XML strings and files."""

from pathlib import Path
from typing import Optional, Union

from ..config import Config
from ..errors.codes import SedErrorCode
from ..logging.debug_logger import get_logger, event, bind, EventType as EVT
from ..models.document import SedDocument
from .xml_streams import XMLOutputStream

logger = get_logger(__name__)


class SedWriter:
    """Serialises documents using the configured formatting options."""

    def __init__(self, pretty_print: Optional[bool] = None, xml_declaration: Optional[bool] = None):
        """
        Initialise the writer.

        Args:
            pretty_print: Indent the output (defaults to SEDML_PRETTY_PRINT)
            xml_declaration: Emit an <?xml ...?> declaration (defaults to SEDML_XML_DECLARATION)
        """
        config = Config()
        self.pretty_print = config.PRETTY_PRINT if pretty_print is None else pretty_print
        self.xml_declaration = config.XML_DECLARATION if xml_declaration is None else xml_declaration

    def write_sedml_to_string(self, document: SedDocument) -> str:
        """
        Serialise a document.

        Args:
            document: Document to write

        Returns:
            XML text, or "" for a None document
        """
        if document is None:
            return ""
        sedns = document.get_sed_namespaces()
        stream = XMLOutputStream(sedns.get_uri(), sedns.get_nsmap())
        document.write(stream)
        text = stream.to_string(pretty_print=self.pretty_print, xml_declaration=self.xml_declaration)
        event(
            logger,
            EVT.DOCUMENT_WRITE,
            "Wrote SED-ML document",
            level=document.get_level(),
            version=document.get_version(),
            models=document.get_num_models(),
            outputs=document.get_num_outputs(),
        )
        return text

    def write_sedml_to_file(self, document: SedDocument, filepath: Union[str, Path]) -> bool:
        """
        Write a document to a file.

        Args:
            document: Document to write
            filepath: Destination path

        Returns:
            True on success, False for a None document

        Raises:
            IOError: If the file cannot be written (also logged as XMLFileUnwritable)
        """
        if document is None:
            return False
        with bind(document_id=str(filepath)):
            text = self.write_sedml_to_string(document)
            try:
                Path(filepath).write_text(text, encoding="utf-8")
            except OSError as e:
                logger.error(f"Failed to save SED-ML to {filepath}: {e}")
                document.get_error_log().log_error(SedErrorCode.XMLFileUnwritable, f"'{filepath}': {e}")
                raise IOError(f"Failed to save SED-ML: {e}")
        return True


# ==================== Module Conveniences ====================


def write_sedml(document: SedDocument, filepath: Union[str, Path]) -> bool:
    """Write a document to a file with a default writer."""
    return SedWriter().write_sedml_to_file(document, filepath)


def write_sedml_to_string(document: SedDocument) -> str:
    """Serialise a document with a default writer."""
    return SedWriter().write_sedml_to_string(document)
