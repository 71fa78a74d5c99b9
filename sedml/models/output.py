# sedml/models/output.py
"""
Outputs of a simulation experiment. Level 1 defines 2D plots made of curves,
each curve pairing an x and a y data generator reference.
"""

from typing import Optional, Union

from ..errors.return_codes import OperationReturnValue
from ..services.xml_streams import XMLInputStream, XMLToken
from .base import SedBase, SID_PATTERN
from .list_of import SedListOf
from .type_codes import SedTypeCode


class SedOutput(SedBase):
    """Abstract output; every output needs an id."""

    ELEMENT_NAME = "output"
    TYPE_CODE = SedTypeCode.SEDML_OUTPUT

    def has_required_attributes(self) -> bool:
        return self.is_set_id() and super().has_required_attributes()


class SedCurve(SedBase):
    """One curve of a 2D plot."""

    ELEMENT_NAME = "curve"
    TYPE_CODE = SedTypeCode.SEDML_OUTPUT_CURVE
    EXPECTED_ATTRIBUTES = frozenset({"logX", "logY", "xDataReference", "yDataReference"})

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._log_x: Optional[bool] = None
        self._log_y: Optional[bool] = None
        self._x_data_reference: Optional[str] = None
        self._y_data_reference: Optional[str] = None

    # ==================== Axes ====================

    def get_log_x(self) -> Optional[bool]:
        return self._log_x

    def is_set_log_x(self) -> bool:
        return self._log_x is not None

    def set_log_x(self, value: Optional[bool]) -> int:
        if value is None:
            return self.unset_log_x()
        if not isinstance(value, bool):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._log_x = value
        return OperationReturnValue.SUCCESS

    def unset_log_x(self) -> int:
        self._log_x = None
        return OperationReturnValue.SUCCESS

    def get_log_y(self) -> Optional[bool]:
        return self._log_y

    def is_set_log_y(self) -> bool:
        return self._log_y is not None

    def set_log_y(self, value: Optional[bool]) -> int:
        if value is None:
            return self.unset_log_y()
        if not isinstance(value, bool):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._log_y = value
        return OperationReturnValue.SUCCESS

    def unset_log_y(self) -> int:
        self._log_y = None
        return OperationReturnValue.SUCCESS

    # ==================== Data References ====================

    def get_x_data_reference(self) -> Optional[str]:
        return self._x_data_reference

    def is_set_x_data_reference(self) -> bool:
        return self._x_data_reference is not None

    def set_x_data_reference(self, reference: Optional[str]) -> int:
        """Set the id of the data generator plotted on the x axis."""
        if reference is None:
            return self.unset_x_data_reference()
        if not SID_PATTERN.match(reference):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._x_data_reference = reference
        return OperationReturnValue.SUCCESS

    def unset_x_data_reference(self) -> int:
        self._x_data_reference = None
        return OperationReturnValue.SUCCESS

    def get_y_data_reference(self) -> Optional[str]:
        return self._y_data_reference

    def is_set_y_data_reference(self) -> bool:
        return self._y_data_reference is not None

    def set_y_data_reference(self, reference: Optional[str]) -> int:
        if reference is None:
            return self.unset_y_data_reference()
        if not SID_PATTERN.match(reference):
            return OperationReturnValue.INVALID_ATTRIBUTE_VALUE
        self._y_data_reference = reference
        return OperationReturnValue.SUCCESS

    def unset_y_data_reference(self) -> int:
        self._y_data_reference = None
        return OperationReturnValue.SUCCESS

    # ==================== Validation, Reading and Writing ====================

    def has_required_attributes(self) -> bool:
        return (
            self.is_set_id()
            and self.is_set_log_x()
            and self.is_set_log_y()
            and self.is_set_x_data_reference()
            and self.is_set_y_data_reference()
            and super().has_required_attributes()
        )

    def read_attributes(self, token: XMLToken, error_log) -> None:
        super().read_attributes(token, error_log)
        self._log_x = self._read_bool(token, "logX", error_log)
        self._log_y = self._read_bool(token, "logY", error_log)
        self._x_data_reference = token.attributes.get("xDataReference")
        self._y_data_reference = token.attributes.get("yDataReference")

    def write_attributes(self, stream) -> None:
        super().write_attributes(stream)
        stream.write_attribute("logX", self._log_x)
        stream.write_attribute("logY", self._log_y)
        stream.write_attribute("xDataReference", self._x_data_reference)
        stream.write_attribute("yDataReference", self._y_data_reference)


class SedListOfCurves(SedListOf):
    ELEMENT_NAME = "listOfCurves"
    ITEM_CLASSES = {"curve": SedCurve}


class SedPlot2D(SedOutput):
    """A two-dimensional plot owning its curves."""

    ELEMENT_NAME = "plot2D"
    TYPE_CODE = SedTypeCode.SEDML_OUTPUT_PLOT2D

    def __init__(self, level=None, version=None, sedns=None):
        super().__init__(level, version, sedns)
        self._curves = SedListOfCurves(sedns=self._sedns)
        self.connect_to_child()

    def get_list_of_curves(self) -> SedListOfCurves:
        return self._curves

    def get_curve(self, key: Union[int, str]) -> Optional[SedCurve]:
        return self._curves.get(key)

    def add_curve(self, curve: Optional[SedCurve]) -> int:
        return self._curves.append(curve)

    def create_curve(self) -> SedCurve:
        curve = SedCurve(sedns=self._sedns)
        self._curves.append_and_own(curve)
        return curve

    def remove_curve(self, key: Union[int, str]) -> Optional[SedCurve]:
        return self._curves.remove(key)

    def get_num_curves(self) -> int:
        return self._curves.size()

    def connect_to_child(self) -> None:
        super().connect_to_child()
        self._curves.connect_to_parent(self)

    def get_child_elements(self):
        return iter((self._curves,))

    def create_object(self, stream: XMLInputStream) -> Optional[SedBase]:
        if stream.peek().name == "listOfCurves":
            return self._curves
        return super().create_object(stream)

    def write_elements(self, stream) -> None:
        super().write_elements(stream)
        if self._curves.size() > 0:
            self._curves.write(stream)


class SedListOfOutputs(SedListOf):
    ELEMENT_NAME = "listOfOutputs"
    ITEM_CLASSES = {"plot2D": SedPlot2D}

    def create_plot2d(self) -> SedPlot2D:
        plot = SedPlot2D(sedns=self.get_sed_namespaces())
        self.append_and_own(plot)
        return plot
