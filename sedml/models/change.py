# sedml/models/change.py
"""
Model changes applied before a simulation: attribute changes and computed changes.

A computeChange owns two collections (variables and parameters) and a MathML
expression computing the new value of its target.
"""

from typing import Optional, Union

from ..errors.codes import SedErrorCode
from ..errors.return_codes import OperationReturnValue
from ..logging.debug_logger import get_logger, event, bind, EventType as EVT
from ..math.mathml import MathExpression, check_mathml_namespace, read_mathml, write_mathml
from ..services.xml_streams import XMLInputStream, XMLToken
from .base import SedBase
from .list_of import SedListOf
from .parameter import SedListOfParameters, SedParameter
from .type_codes import SedTypeCode
from .variable import SedListOfVariables, SedVariable

logger = get_logger(__name__)


class SedChange(SedBase):
    """Abstract change addressed to an XPath target inside a model."""

    ELEMENT_NAME = "change"
    TYPE_CODE = SedTypeCode.SEDML_CHANGE
    EXPECTED_ATTRIBUTES = frozenset({"target"})

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._target: Optional[str] = None

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

    def has_required_attributes(self) -> bool:
        return self.is_set_target() and super().has_required_attributes()

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._target = token.attributes.get("target")

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("target", self._target)


class SedChangeAttribute(SedChange):
    """Sets the target attribute to a literal new value."""

    ELEMENT_NAME = "changeAttribute"
    TYPE_CODE = SedTypeCode.SEDML_CHANGE_ATTRIBUTE
    EXPECTED_ATTRIBUTES = frozenset({"newValue"})

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._new_value: Optional[str] = None

    def get_new_value(self) -> Optional[str]:
        return self._new_value

    def is_set_new_value(self) -> bool:
        return self._new_value is not None

    def set_new_value(self, value: Optional[str]) -> int:
        if value is None:
            return self.unset_new_value()
        self._new_value = str(value)
        return OperationReturnValue.SUCCESS

    def unset_new_value(self) -> int:
        self._new_value = None
        return OperationReturnValue.SUCCESS

    def has_required_attributes(self) -> bool:
        return self.is_set_new_value() and super().has_required_attributes()

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._new_value = token.attributes.get("newValue")

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("newValue", self._new_value)


class SedComputeChange(SedChange):
    """
    Sets the target to the value of a MathML expression.

    The expression may refer to the change's variables and parameters by id.
    """

    ELEMENT_NAME = "computeChange"
    TYPE_CODE = SedTypeCode.SEDML_CHANGE_COMPUTECHANGE

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._variables = SedListOfVariables(sedns=self._sedns)
        self._parameters = SedListOfParameters(sedns=self._sedns)
        self._math: Optional[MathExpression] = None
        self.connect_to_child()

    # ==================== Variables ====================

    def get_list_of_variables(self) -> SedListOfVariables:
        return self._variables

    def get_variable(self, key: Union[int, str]) -> Optional[SedVariable]:
        return self._variables.get(key)

    def add_variable(self, variable: Optional[SedVariable]) -> int:
        """Append a copy of `variable`; see SedListOf.append for result codes."""
        return self._variables.append(variable)

    def create_variable(self) -> SedVariable:
        """Create a variable in this change's namespace, append it and return it."""
        variable = SedVariable(sedns=self._sedns)
        self._variables.append_and_own(variable)
        return variable

    def remove_variable(self, key: Union[int, str]) -> Optional[SedVariable]:
        return self._variables.remove(key)

    def get_num_variables(self) -> int:
        return self._variables.size()

    # ==================== Parameters ====================

    def get_list_of_parameters(self) -> SedListOfParameters:
        return self._parameters

    def get_parameter(self, key: Union[int, str]) -> Optional[SedParameter]:
        return self._parameters.get(key)

    def add_parameter(self, parameter: Optional[SedParameter]) -> int:
        return self._parameters.append(parameter)

    def create_parameter(self) -> SedParameter:
        parameter = SedParameter(sedns=self._sedns)
        self._parameters.append_and_own(parameter)
        return parameter

    def remove_parameter(self, key: Union[int, str]) -> Optional[SedParameter]:
        return self._parameters.remove(key)

    def get_num_parameters(self) -> int:
        return self._parameters.size()

    # ==================== Math ====================

    def get_math(self) -> Optional[MathExpression]:
        return self._math

    def is_set_math(self) -> bool:
        return self._math is not None

    def set_math(self, math: Optional[MathExpression]) -> int:
        """
        Set the expression computing the new value.

        Args:
            math: Expression to copy; None clears the current one

        Returns:
            SUCCESS, or INVALID_OBJECT (state unchanged) when the expression is
            not a well-formed MathML expression
        """
        if math is self._math:
            return OperationReturnValue.SUCCESS
        if math is None:
            self._math = None
            return OperationReturnValue.SUCCESS
        if not isinstance(math, MathExpression) or not math.is_well_formed():
            with bind(element_id=self._id):
                event(logger, EVT.MATH_REJECTED, "Rejected ill-formed expression")
            return OperationReturnValue.INVALID_OBJECT
        self._math = math.deep_copy()
        return OperationReturnValue.SUCCESS

    def unset_math(self) -> int:
        self._math = None
        return OperationReturnValue.SUCCESS

    # ==================== Structure ====================

    def connect_to_child(self) -> None:
        super().connect_to_child()
        self._variables.connect_to_parent(self)
        self._parameters.connect_to_parent(self)

    def get_child_elements(self):
        return iter((self._variables, self._parameters))

    def has_required_elements(self) -> bool:
        return self.is_set_math() and super().has_required_elements()

    # ==================== Reading and Writing ====================

    def create_object(self, stream: XMLInputStream) -> Optional[SedBase]:
        name = stream.peek().name
        if name == "listOfVariables":
            return self._variables
        if name == "listOfParameters":
            return self._parameters
        return super().create_object(stream)

    def read_other_xml(self, stream: XMLInputStream) -> bool:
        read = False
        token = stream.peek()
        if token.name == "math":
            if self._math is not None:
                stream.error_log.log_error(
                    SedErrorCode.NotSchemaConformant,
                    "Only one <math> element is permitted inside <computeChange>.",
                    line=token.line,
                )
            math = read_mathml(stream, check_mathml_namespace(token))
            if math is not None:
                self._math = math
            read = True
        return super().read_other_xml(stream) or read

    def write_elements(self, stream) -> None:
        super().write_elements(stream)
        if self._variables.size() > 0:
            self._variables.write(stream)
        if self._parameters.size() > 0:
            self._parameters.write(stream)
        write_mathml(self._math, stream)


class SedListOfChanges(SedListOf):
    ELEMENT_NAME = "listOfChanges"
    ITEM_CLASSES = {
        "changeAttribute": SedChangeAttribute,
        "computeChange": SedComputeChange,
    }

    def create_change_attribute(self) -> SedChangeAttribute:
        change = SedChangeAttribute(sedns=self.get_sed_namespaces())
        self.append_and_own(change)
        return change

    def create_compute_change(self) -> SedComputeChange:
        change = SedComputeChange(sedns=self.get_sed_namespaces())
        self.append_and_own(change)
        return change
