# sedml/models/document.py
"""
The <sedML> root element.

A document owns the top-level collections and the diagnostic log that readers
and consistency checks report into. Every element below it resolves its
namespace and error log by walking its parent links up to the document.
"""

from typing import Dict, Optional, Tuple, Union

from ..errors.codes import SedErrorCode, SedErrorSeverity
from ..errors.error_log import SedErrorLog
from ..errors.return_codes import OperationReturnValue
from ..errors.sed_error import SedError
from ..logging.debug_logger import get_logger, event, EventType as EVT
from ..services.xml_streams import XMLInputStream, XMLToken
from .base import SedBase
from .model import SedListOfModels, SedModel
from .namespaces import SedNamespaces
from .output import SedListOfOutputs, SedOutput, SedPlot2D
from .type_codes import SedTypeCode

logger = get_logger(__name__)

# Elements whose ids are scoped to their enclosing element rather than the document
_LOCALLY_SCOPED = {SedTypeCode.SEDML_VARIABLE, SedTypeCode.SEDML_PARAMETER}


class SedDocument(SedBase):
    """
    Root of a SED-ML object graph.

    Attributes:
        level: SED-ML level written on the root element
        version: SED-ML version written on the root element
    """

    ELEMENT_NAME = "sedML"
    TYPE_CODE = SedTypeCode.SEDML_DOCUMENT
    EXPECTED_ATTRIBUTES = frozenset({"level", "version"})
    UNKNOWN_ATTRIBUTE_CODE = SedErrorCode.AllowedAttributesOnSed

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._error_log = SedErrorLog(self.get_level(), self.get_version())
        self._models = SedListOfModels(sedns=self._sedns)
        self._outputs = SedListOfOutputs(sedns=self._sedns)
        self.connect_to_child()

    # ==================== Diagnostics ====================

    def get_error_log(self) -> SedErrorLog:
        return self._error_log

    def get_num_errors(self, severity: Optional[SedErrorSeverity] = None) -> int:
        """
        Count logged diagnostics.

        Args:
            severity: Count only diagnostics with exactly this severity

        Returns:
            Number of matching diagnostics
        """
        if severity is None:
            return self._error_log.get_num_errors()
        return self._error_log.get_num_fails_with_severity(severity)

    def get_error(self, n: int) -> Optional[SedError]:
        return self._error_log.get_error(n)

    def set_sed_namespaces_and_own(self, sedns: SedNamespaces) -> int:
        result = super().set_sed_namespaces_and_own(sedns)
        if result == OperationReturnValue.SUCCESS:
            self._error_log.level = sedns.get_level()
            self._error_log.version = sedns.get_version()
        return result

    # ==================== Models ====================

    def get_list_of_models(self) -> SedListOfModels:
        return self._models

    def get_model(self, key: Union[int, str]) -> Optional[SedModel]:
        return self._models.get(key)

    def add_model(self, model: Optional[SedModel]) -> int:
        return self._models.append(model)

    def create_model(self) -> SedModel:
        model = SedModel(sedns=self._sedns)
        self._models.append_and_own(model)
        return model

    def remove_model(self, key: Union[int, str]) -> Optional[SedModel]:
        return self._models.remove(key)

    def get_num_models(self) -> int:
        return self._models.size()

    # ==================== Outputs ====================

    def get_list_of_outputs(self) -> SedListOfOutputs:
        return self._outputs

    def get_output(self, key: Union[int, str]) -> Optional[SedOutput]:
        return self._outputs.get(key)

    def add_output(self, output: Optional[SedOutput]) -> int:
        return self._outputs.append(output)

    def create_plot2d(self) -> SedPlot2D:
        return self._outputs.create_plot2d()

    def remove_output(self, key: Union[int, str]) -> Optional[SedOutput]:
        return self._outputs.remove(key)

    def get_num_outputs(self) -> int:
        return self._outputs.size()

    # ==================== Structure ====================

    def connect_to_child(self) -> None:
        super().connect_to_child()
        self._models.connect_to_parent(self)
        self._outputs.connect_to_parent(self)

    def get_child_elements(self):
        return iter((self._models, self._outputs))

    def get_sed_document(self) -> "SedDocument":
        return self

    # ==================== Consistency ====================

    def check_consistency(self) -> int:
        """
        Check identifier uniqueness and required content across the whole graph.

        Ids of variables and parameters are scoped to the element owning their
        collection; every other id must be unique within the document.

        Returns:
            Number of diagnostics logged by this check
        """
        before = self._error_log.get_num_errors()
        seen: Dict[Tuple[int, str], SedBase] = {}

        for element in self.get_all_elements():
            if element.get_type_code() == SedTypeCode.SEDML_LIST_OF:
                continue

            if element.is_set_id():
                key = (id(self._id_scope(element)), element.get_id())
                if key in seen:
                    self._error_log.log_error(
                        SedErrorCode.DuplicateComponentId,
                        f"The id '{element.get_id()}' on <{element.get_element_name()}> is already used by "
                        f"<{seen[key].get_element_name()}>.",
                        line=element.get_line(),
                    )
                else:
                    seen[key] = element

            if not element.has_required_attributes():
                self._error_log.log_error(
                    SedErrorCode.MissingRequiredAttribute,
                    f"<{element.get_element_name()}> is missing a required attribute.",
                    line=element.get_line(),
                )
            if not element.has_required_elements():
                self._error_log.log_error(
                    SedErrorCode.MissingRequiredElement,
                    f"<{element.get_element_name()}> is missing a required element.",
                    line=element.get_line(),
                )

        failures = self._error_log.get_num_errors() - before
        event(logger, EVT.CONSISTENCY_CHECK, "Consistency check complete", failures=failures)
        return failures

    def _id_scope(self, element: SedBase) -> SedBase:
        if element.get_type_code() in _LOCALLY_SCOPED:
            collection = element.get_parent_sed_object()
            owner = collection.get_parent_sed_object() if collection is not None else None
            if owner is not None:
                return owner
        return self

    # ==================== Reading and Writing ====================

    def create_object(self, stream: XMLInputStream) -> Optional[SedBase]:
        name = stream.peek().name
        if name == "listOfModels":
            return self._models
        if name == "listOfOutputs":
            return self._outputs
        return super().create_object(stream)

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._check_revision_attribute(
            token, "level", self.get_level(),
            SedErrorCode.MissingOrInconsistentLevel, SedErrorCode.LevelPositiveInteger, error_log,
        )
        self._check_revision_attribute(
            token, "version", self.get_version(),
            SedErrorCode.MissingOrInconsistentVersion, SedErrorCode.VersionPositiveInteger, error_log,
        )

    @staticmethod
    def _check_revision_attribute(token, attribute, expected, missing_code, type_code, error_log) -> None:
        """Compare a level/version attribute against the revision implied by the namespace."""
        value = token.attributes.get(attribute)
        if value is None:
            error_log.log_error(missing_code, f"The <sedML> element has no '{attribute}' attribute.", line=token.line)
            return
        try:
            number = int(value.strip())
        except ValueError:
            number = 0
        if number <= 0:
            error_log.log_error(type_code, f"Value '{value}'.", line=token.line)
        elif number != expected:
            error_log.log_error(
                missing_code,
                f"The '{attribute}' attribute is {number} but the namespace declares {expected}.",
                line=token.line,
            )

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("level", self.get_level())
        stream.write_attribute("version", self.get_version())

    def write_elements(self, stream) -> None:
        super().write_elements(stream)
        if self._models.size() > 0:
            self._models.write(stream)
        if self._outputs.size() > 0:
            self._outputs.write(stream)
