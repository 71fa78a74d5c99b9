# sedml/models/parameter.py
"""<parameter> elements: named numeric constants."""

from typing import Optional

from ..errors.return_codes import OperationReturnValue
from ..services.xml_streams import XMLToken
from .base import SedBase
from .list_of import SedListOf
from .type_codes import SedTypeCode


class SedParameter(SedBase):
    """A parameter with a required id and a required double value."""

    ELEMENT_NAME = "parameter"
    TYPE_CODE = SedTypeCode.SEDML_PARAMETER
    EXPECTED_ATTRIBUTES = frozenset({"value"})

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._value: Optional[float] = None

    def get_value(self) -> Optional[float]:
        return self._value

    def is_set_value(self) -> bool:
        return self._value is not None

    def set_value(self, value) -> int:
        """
        Set the parameter value.

        Args:
            value: Anything float() accepts; None unsets

        Returns:
            SUCCESS, or INVALID_ATTRIBUTE_VALUE when the value is not numeric
        """
        if value is None:
            return self.unset_value()
        if isinstance(value, bool):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        try:
            self._value = float(value)
        except (TypeError, ValueError):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        return OperationReturnValue.SUCCESS

    def unset_value(self) -> int:
        self._value = None
        return OperationReturnValue.SUCCESS

    def has_required_attributes(self) -> bool:
        return self.is_set_id() and self.is_set_value() and super().has_required_attributes()

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._value = self._read_double(token, "value", error_log)

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("value", self._value)


class SedListOfParameters(SedListOf):
    ELEMENT_NAME = "listOfParameters"
    ITEM_CLASSES = {"parameter": SedParameter}
