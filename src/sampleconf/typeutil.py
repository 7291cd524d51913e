"""Type classification helpers shared by the sensor, the registry and the walker."""

import collections
import inspect
import types
from collections.abc import Collection, Mapping
from typing import Any, Optional, Tuple, Type, Union, get_args, get_origin

from sampleconf.errors import UnsupportedCollectionShapeError

NoneType = type(None)

# Unboxed primitive types; Optional[p] of these is the boxed wrapper form
PRIMITIVE_TYPES: Tuple[Type, ...] = (bool, int, float, complex)

_PRIMITIVE_DEFAULTS = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

# Never treated as collections even though they implement Collection
_NON_COLLECTION_TYPES: Tuple[Type, ...] = (str, bytes, bytearray, memoryview, range, Mapping)

# Candidates for materialising abstract collection interfaces, in preference order
_CONCRETE_COLLECTION_CANDIDATES: Tuple[Type, ...] = (list, set, frozenset, tuple, collections.deque)


def normalize_type(tp: Any) -> Any:
    """Return the typing.Union form of a PEP 604 union so both spellings share a key."""
    if isinstance(tp, types.UnionType):
        return Union[get_args(tp)]
    return tp


def is_optional(tp: Any) -> bool:
    """Check whether tp is Optional[X] for exactly one X."""
    tp = normalize_type(tp)
    if get_origin(tp) is not Union:
        return False
    args = get_args(tp)
    return len(args) == 2 and NoneType in args


def strip_optional(tp: Any) -> Any:
    """Unwrap Optional[X] to X; any other type is returned unchanged."""
    tp = normalize_type(tp)
    if is_optional(tp):
        return next(arg for arg in get_args(tp) if arg is not NoneType)
    return tp


def is_wrapper_type(tp: Any) -> bool:
    """Check whether tp is the nullable wrapper of a primitive, e.g. Optional[int]."""
    return is_optional(tp) and strip_optional(tp) in PRIMITIVE_TYPES


def unwrap(tp: Any) -> Type:
    """
    Get the primitive type behind a wrapper type.

    Raises:
        ValueError: If tp is not a wrapper type
    """
    if not is_wrapper_type(tp):
        raise ValueError(f"{tp!r} is not a wrapper of a primitive type")
    return strip_optional(tp)


def _origin_class(tp: Any) -> Optional[type]:
    origin = get_origin(tp) or tp
    return origin if isinstance(origin, type) else None


def is_collection_type(tp: Any) -> bool:
    """Check whether tp declares a collection shape (not a string, bytes or mapping)."""
    origin = _origin_class(normalize_type(tp))
    if origin is None or issubclass(origin, _NON_COLLECTION_TYPES):
        return False
    return issubclass(origin, Collection)


def collection_element_type(tp: Any) -> Optional[Any]:
    """Get the declared element type of a collection, or None if it is unparameterised."""
    args = get_args(normalize_type(tp))
    if len(args) == 1:
        return args[0]
    if len(args) == 2 and args[1] is Ellipsis:
        return args[0]
    return None


def concrete_collection_type(tp: Any) -> Type:
    """
    Get a concrete class able to materialise the collection shape tp.

    Concrete declared types (list, set, deque, user subclasses of list, ...) are
    used as they are. Abstract interfaces (Sequence, AbstractSet, Collection, ...)
    get the first standard implementation that satisfies them.

    Raises:
        UnsupportedCollectionShapeError: If no instantiation strategy exists
    """
    tp = normalize_type(tp)
    if not is_collection_type(tp):
        raise UnsupportedCollectionShapeError(tp, "not a collection type")

    origin = _origin_class(tp)
    if origin is tuple:
        args = get_args(tp)
        if args and not (len(args) == 2 and args[1] is Ellipsis):
            raise UnsupportedCollectionShapeError(tp, "fixed-length tuples have no single element type")
        return tuple

    if not inspect.isabstract(origin):
        return origin

    for candidate in _CONCRETE_COLLECTION_CANDIDATES:
        if issubclass(candidate, origin):
            return candidate
    raise UnsupportedCollectionShapeError(tp, f"no concrete implementation of {origin.__qualname__}")


def default_value_for(tp: Any) -> Any:
    """
    Get a benign value compatible with tp.

    Primitives get their zero value, collections and mappings an empty instance,
    everything else None.
    """
    tp = strip_optional(tp)
    if tp in _PRIMITIVE_DEFAULTS:
        return _PRIMITIVE_DEFAULTS[tp]

    origin = _origin_class(tp)
    if origin is not None and issubclass(origin, Mapping):
        return {} if inspect.isabstract(origin) else origin()

    if is_collection_type(tp):
        try:
            return concrete_collection_type(tp)()
        except TypeError:
            # Shapes we cannot materialise still must not break the selector
            return None
    return None
