# sedml/models/variable.py
"""
<variable> elements: named references into a model (by XPath target or
implicit symbol) used inside computeChange expressions and data generators.
"""

from typing import Optional

from ..errors.return_codes import OperationReturnValue
from ..services.xml_streams import XMLToken
from .base import SedBase, SID_PATTERN
from .list_of import SedListOf
from .type_codes import SedTypeCode


class SedVariable(SedBase):
    """A variable with a required id and optional target/symbol references."""

    ELEMENT_NAME = "variable"
    TYPE_CODE = SedTypeCode.SEDML_VARIABLE
    EXPECTED_ATTRIBUTES = frozenset({"target", "symbol", "taskReference", "modelReference"})

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._target: Optional[str] = None
        self._symbol: Optional[str] = None
        self._task_reference: Optional[str] = None
        self._model_reference: Optional[str] = None

    # ==================== Attributes ====================

    def get_target(self) -> Optional[str]:
        return self._target

    def is_set_target(self) -> bool:
        return self._target is not None

    def set_target(self, target: Optional[str]) -> int:
        if target is None:
            return self.unset_target()
        self._target = target
        return OperationReturnValue.SUCCESS

    def unset_target(self) -> int:
        self._target = None
        return OperationReturnValue.SUCCESS

    def get_symbol(self) -> Optional[str]:
        return self._symbol

    def is_set_symbol(self) -> bool:
        return self._symbol is not None

    def set_symbol(self, symbol: Optional[str]) -> int:
        if symbol is None:
            return self.unset_symbol()
        self._symbol = symbol
        return OperationReturnValue.SUCCESS

    def unset_symbol(self) -> int:
        self._symbol = None
        return OperationReturnValue.SUCCESS

    def get_task_reference(self) -> Optional[str]:
        return self._task_reference

    def is_set_task_reference(self) -> bool:
        return self._task_reference is not None

    def set_task_reference(self, reference: Optional[str]) -> int:
        """Set the referenced task id (must be SId syntax)."""
        if reference is None:
            return self.unset_task_reference()
        if not SID_PATTERN.match(reference):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._task_reference = reference
        return OperationReturnValue.SUCCESS

    def unset_task_reference(self) -> int:
        self._task_reference = None
        return OperationReturnValue.SUCCESS

    def get_model_reference(self) -> Optional[str]:
        return self._model_reference

    def is_set_model_reference(self) -> bool:
        return self._model_reference is not None

    def set_model_reference(self, reference: Optional[str]) -> int:
        """Set the referenced model id (must be SId syntax)."""
        if reference is None:
            return self.unset_model_reference()
        if not SID_PATTERN.match(reference):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._model_reference = reference
        return OperationReturnValue.SUCCESS

    def unset_model_reference(self) -> int:
        self._model_reference = None
        return OperationReturnValue.SUCCESS

    # ==================== Validation ====================

    def has_required_attributes(self) -> bool:
        return self.is_set_id() and super().has_required_attributes()

    # ==================== Reading and Writing ====================

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._target = token.attributes.get("target")
        self._symbol = token.attributes.get("symbol")
        self._task_reference = token.attributes.get("taskReference")
        self._model_reference = token.attributes.get("modelReference")

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("target", self._target)
        stream.write_attribute("symbol", self._symbol)
        stream.write_attribute("taskReference", self._task_reference)
        stream.write_attribute("modelReference", self._model_reference)


class SedListOfVariables(SedListOf):
    ELEMENT_NAME = "listOfVariables"
    ITEM_CLASSES = {"variable": SedVariable}
