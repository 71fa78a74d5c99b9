# sedml/errors/return_codes.py
"""
Result codes, sentinels and the constructor exception shared by every element.

Mutating methods never raise for bad input; they return one of the
OperationReturnValue codes and leave the object untouched on failure.
"""

from enum import IntEnum


# Returned by counting accessors of the null-tolerant facade when given no object
SEDML_INT_MAX = 2147483647

# Line/column value used when the parser cannot supply a location
UNKNOWN_LOCATION = SEDML_INT_MAX


class OperationReturnValue(IntEnum):
    """Integer result codes returned by attribute and child mutators."""

    SUCCESS = 0
    INDEX_EXCEEDS_SIZE = -1
    UNEXPECTED_ATTRIBUTE = -2
    OPERATION_FAILED = -3
    INVALID_ATTRIBUTE_VALUE = -4
    INVALID_OBJECT = -5

    def __str__(self) -> str:
        return self.name


class SedConstructorException(ValueError):
    """
    Raised when an element cannot be constructed or assigned.

    Typical causes are an unsupported level/version pair, or copying from a
    missing source object.
    """

    def __init__(self, message: str = "Level/version/namespaces combination is invalid"):
        super().__init__(message)
        self.message = message
