# sedml/bindings/capi.py
"""
Null-tolerant free-function façade over the object model.

Every function takes an element handle as its first argument. A None handle
never raises; the function returns the sentinel declared for it instead:

- counts and numeric queries: SEDML_INT_MAX
- mutators: OperationReturnValue.INVALID_OBJECT
- predicates: 0 (predicates return 0/1 integers, never bools)
- object and string getters: None

The functions are generated from the declaration table below, one per
(prefix, method) pair, and are named "<prefix>_<method>", for example
compute_change_get_num_variables(handle).
"""

import math
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors.return_codes import OperationReturnValue, SedConstructorException, SEDML_INT_MAX
from ..models.change import SedChangeAttribute, SedComputeChange
from ..models.document import SedDocument
from ..models.model import SedModel
from ..models.output import SedCurve, SedPlot2D
from ..models.parameter import SedParameter
from ..models.type_codes import SedTypeCode
from ..models.variable import SedVariable

# ==================== Sentinels ====================

COUNT = SEDML_INT_MAX
MUTATOR = OperationReturnValue.INVALID_OBJECT
PREDICATE = 0
OBJECT = None
DOUBLE = math.nan


def _accessors(attribute: str, getter_sentinel: Any = OBJECT) -> List[Tuple[str, Any]]:
    """Declarations for the get/set/is_set/unset quartet of one attribute."""
    return [
        (f"get_{attribute}", getter_sentinel),
        (f"set_{attribute}", MUTATOR),
        (f"is_set_{attribute}", PREDICATE),
        (f"unset_{attribute}", MUTATOR),
    ]


def _collection(item: str, plural: str) -> List[Tuple[str, Any]]:
    """Declarations for the owner-side accessors of one child collection."""
    return [
        (f"get_list_of_{plural}", OBJECT),
        (f"get_{item}", OBJECT),
        (f"add_{item}", MUTATOR),
        (f"remove_{item}", OBJECT),
        (f"get_num_{plural}", COUNT),
    ]


_ELEMENT = (
    _accessors("id")
    + _accessors("name")
    + _accessors("metaid")
    + _accessors("notes")
    + _accessors("annotation")
    + [
        ("get_element_name", OBJECT),
        ("get_type_code", SedTypeCode.SEDML_UNKNOWN),
        ("get_level", COUNT),
        ("get_version", COUNT),
        ("get_parent_sed_object", OBJECT),
        ("get_sed_document", OBJECT),
        ("has_required_attributes", PREDICATE),
        ("has_required_elements", PREDICATE),
        ("to_xml_string", OBJECT),
    ]
)

# ==================== Declaration Table ====================

# prefix -> (constructible class or None for abstract types, method declarations)
DECLARATIONS: Dict[str, Tuple[Optional[type], List[Tuple[str, Any]]]] = {
    "document": (
        SedDocument,
        _ELEMENT
        + _collection("model", "models")
        + _collection("output", "outputs")
        + [
            ("create_model", OBJECT),
            ("create_plot2d", OBJECT),
            ("get_error_log", OBJECT),
            ("get_num_errors", COUNT),
            ("get_error", OBJECT),
            ("check_consistency", COUNT),
        ],
    ),
    "model": (
        SedModel,
        _ELEMENT
        + _accessors("language")
        + _accessors("source")
        + _collection("change", "changes")
        + [("create_change_attribute", OBJECT), ("create_compute_change", OBJECT)],
    ),
    "change": (None, _ELEMENT + _accessors("target")),
    "change_attribute": (SedChangeAttribute, _ELEMENT + _accessors("target") + _accessors("new_value")),
    "compute_change": (
        SedComputeChange,
        _ELEMENT
        + _accessors("target")
        + _accessors("math")
        + _collection("variable", "variables")
        + _collection("parameter", "parameters")
        + [("create_variable", OBJECT), ("create_parameter", OBJECT)],
    ),
    "variable": (
        SedVariable,
        _ELEMENT
        + _accessors("target")
        + _accessors("symbol")
        + _accessors("task_reference")
        + _accessors("model_reference"),
    ),
    "parameter": (SedParameter, _ELEMENT + _accessors("value", DOUBLE)),
    "output": (None, _ELEMENT),
    "plot2d": (
        SedPlot2D,
        _ELEMENT + _collection("curve", "curves") + [("create_curve", OBJECT)],
    ),
    "curve": (
        SedCurve,
        _ELEMENT
        + _accessors("log_x", PREDICATE)
        + _accessors("log_y", PREDICATE)
        + _accessors("x_data_reference")
        + _accessors("y_data_reference"),
    ),
    "list_of": (
        None,
        _ELEMENT
        + [
            ("append", MUTATOR),
            ("append_and_own", MUTATOR),
            ("get", OBJECT),
            ("remove", OBJECT),
            ("size", COUNT),
        ],
    ),
}


# ==================== Generation ====================


def _make_method(prefix: str, method: str, sentinel: Any) -> Callable:
    def wrapper(handle, *args):
        if handle is None:
            return sentinel
        result = getattr(handle, method)(*args)
        if isinstance(result, bool):
            return int(result)
        return result

    wrapper.__name__ = f"{prefix}_{method}"
    wrapper.__qualname__ = wrapper.__name__
    wrapper.__doc__ = f"Call {method}() on a handle; returns {sentinel!r} for a None handle."
    return wrapper


def _make_create(prefix: str, klass: type) -> Callable:
    def create(level: int = 1, version: int = 1):
        try:
            return klass(level, version)
        except SedConstructorException:
            return None

    create.__name__ = f"{prefix}_create"
    create.__qualname__ = create.__name__
    create.__doc__ = f"Construct a {klass.__name__}; returns None for an unsupported level/version."
    return create


def _make_clone(prefix: str) -> Callable:
    def clone(handle):
        return handle.clone() if handle is not None else None

    clone.__name__ = f"{prefix}_clone"
    clone.__qualname__ = clone.__name__
    return clone


def _make_free(prefix: str) -> Callable:
    def free(handle) -> None:
        # Python reclaims the object once the caller drops it; only the parent link is severed
        if handle is not None:
            handle.connect_to_parent(None)

    free.__name__ = f"{prefix}_free"
    free.__qualname__ = free.__name__
    return free


def _generate() -> List[str]:
    names = []
    namespace = globals()
    for prefix, (klass, methods) in DECLARATIONS.items():
        generated = [_make_clone(prefix), _make_free(prefix)]
        if klass is not None:
            generated.append(_make_create(prefix, klass))
        generated.extend(_make_method(prefix, method, sentinel) for method, sentinel in methods)
        for function in generated:
            namespace[function.__name__] = function
            names.append(function.__name__)
    return names


__all__ = _generate()
