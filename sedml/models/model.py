# sedml/models/model.py
"""<model> elements: the models an experiment simulates, with pre-simulation changes."""

from typing import Optional, Union

from ..errors.codes import SedErrorCode
from ..errors.return_codes import OperationReturnValue
from ..services.xml_streams import XMLInputStream, XMLToken
from .base import SedBase
from .change import SedChange, SedChangeAttribute, SedComputeChange, SedListOfChanges
from .list_of import SedListOf
from .type_codes import SedTypeCode

# Language URN for SBML models, the most common case
SBML_LANGUAGE_URN = "urn:sedml:language:sbml"


class SedModel(SedBase):
    """A model referenced by source URI, optionally modified by changes."""

    ELEMENT_NAME = "model"
    TYPE_CODE = SedTypeCode.SEDML_MODEL
    EXPECTED_ATTRIBUTES = frozenset({"language", "source"})
    UNKNOWN_ATTRIBUTE_CODE = SedErrorCode.AllowedAttributesOnModel

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._language: Optional[str] = None
        self._source: Optional[str] = None
        self._changes = SedListOfChanges(sedns=self._sedns)
        self.connect_to_child()

    # ==================== Attributes ====================

    def get_language(self) -> Optional[str]:
        return self._language

    def is_set_language(self) -> bool:
        return self._language is not None

    def set_language(self, language: Optional[str]) -> int:
        if language is None:
            return self.unset_language()
        self._language = language
        return OperationReturnValue.SUCCESS

    def unset_language(self) -> int:
        self._language = None
        return OperationReturnValue.SUCCESS

    def get_source(self) -> Optional[str]:
        return self._source

    def is_set_source(self) -> bool:
        return self._source is not None

    def set_source(self, source: Optional[str]) -> int:
        if source is None:
            return self.unset_source()
        if not source:
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._source = source
        return OperationReturnValue.SUCCESS

    def unset_source(self) -> int:
        self._source = None
        return OperationReturnValue.SUCCESS

    # ==================== Changes ====================

    def get_list_of_changes(self) -> SedListOfChanges:
        return self._changes

    def get_change(self, key: Union[int, str]) -> Optional[SedChange]:
        return self._changes.get(key)

    def add_change(self, change: Optional[SedChange]) -> int:
        return self._changes.append(change)

    def create_change_attribute(self) -> SedChangeAttribute:
        return self._changes.create_change_attribute()

    def create_compute_change(self) -> SedComputeChange:
        return self._changes.create_compute_change()

    def remove_change(self, key: Union[int, str]) -> Optional[SedChange]:
        return self._changes.remove(key)

    def get_num_changes(self) -> int:
        return self._changes.size()

    # ==================== Structure ====================

    def connect_to_child(self) -> None:
        super().connect_to_child()
        self._changes.connect_to_parent(self)

    def get_child_elements(self):
        return iter((self._changes,))

    def has_required_attributes(self) -> bool:
        return self.is_set_id() and self.is_set_source() and super().has_required_attributes()

    # ==================== Reading and Writing ====================

    def create_object(self, stream: XMLInputStream) -> Optional[SedBase]:
        if stream.peek().name == "listOfChanges":
            return self._changes
        return super().create_object(stream)

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._language = token.attributes.get("language")
        self._source = token.attributes.get("source")

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("language", self._language)
        stream.write_attribute("source", self._source)

    def write_elements(self, stream) -> None:
        super().write_elements(stream)
        if self._changes.size() > 0:
            self._changes.write(stream)


class SedListOfModels(SedListOf):
    ELEMENT_NAME = "listOfModels"
    ITEM_CLASSES = {"model": SedModel}
