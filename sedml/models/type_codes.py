# sedml/models/type_codes.py
"""Type codes identifying each concrete element class."""

from enum import IntEnum


class SedTypeCode(IntEnum):
    """
    Constant per element class, used for dispatch without isinstance checks.
    """

    SEDML_UNKNOWN = 0
    SEDML_DOCUMENT = 1
    SEDML_LIST_OF = 2
    SEDML_MODEL = 3
    SEDML_CHANGE = 4
    SEDML_CHANGE_ATTRIBUTE = 5
    SEDML_CHANGE_COMPUTECHANGE = 6
    SEDML_VARIABLE = 7
    SEDML_PARAMETER = 8
    SEDML_OUTPUT = 9
    SEDML_OUTPUT_PLOT2D = 10
    SEDML_OUTPUT_CURVE = 11

    def __str__(self) -> str:
        return self.name
