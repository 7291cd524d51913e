"""
Property introspection for sample target types.

A property is any public attribute a class exposes for reading:
- dataclass fields
- annotated class attributes of plain classes (ClassVar excluded)
- ``property`` objects, typed by their getter's return annotation

Catalogs are built once per class and cached.
"""

import dataclasses
import logging
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Type, get_origin

from sampleconf.config import CollectionSamplingMode
from sampleconf.errors import (
    AmbiguousInteractionsError,
    PropertyNotFoundError,
    UnsupportedCollectionShapeError,
)
from sampleconf.typeutil import collection_element_type, is_collection_type, normalize_type, strip_optional

logger = logging.getLogger(__name__)

# Cache of catalogs keyed by class. A catalog depends only on its class, so
# entries are only ever added and never mutated after they are stored.
_catalog_cache: Dict[Type, Dict[str, "PropertyDescriptor"]] = {}


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Metadata of one property of a class.

    Equality and hashing use only (owner, name), so a descriptor identifies a
    property and can be used directly as a settings key.
    """

    owner: Type
    name: str
    property_type: Any = field(default=Any, compare=False)
    getter: Optional[Callable[[Any], Any]] = field(default=None, compare=False, repr=False)
    setter: Optional[Callable[[Any, Any], None]] = field(default=None, compare=False, repr=False)
    writable: bool = field(default=True, compare=False)
    init: bool = field(default=False, compare=False)

    @property
    def is_collection(self) -> bool:
        return is_collection_type(strip_optional(self.property_type))

    @property
    def element_type(self) -> Optional[Any]:
        """Declared element type for collection properties, None otherwise."""
        if not self.is_collection:
            return None
        return collection_element_type(strip_optional(self.property_type))


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _resolve_hints(obj: Any) -> Dict[str, Any]:
    """Resolve annotations of obj, falling back to the raw ones for unresolvable forward references."""
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError) as e:
        logger.debug(f"Using raw annotations for {obj!r}: {e}")
        return dict(getattr(obj, "__annotations__", {}) or {})


def _dataclass_properties(cls: Type, hints: Dict[str, Any]) -> Dict[str, PropertyDescriptor]:
    frozen = cls.__dataclass_params__.frozen
    return {
        f.name: PropertyDescriptor(
            owner=cls,
            name=f.name,
            property_type=normalize_type(hints.get(f.name, f.type)),
            writable=not frozen or f.init,
            init=f.init,
        )
        for f in dataclasses.fields(cls)
        if _is_public(f.name)
    }


def _annotated_properties(cls: Type, hints: Dict[str, Any]) -> Dict[str, PropertyDescriptor]:
    properties = {}
    for name, hint in hints.items():
        if not _is_public(name) or get_origin(hint) is typing.ClassVar or hint is typing.ClassVar:
            continue
        properties[name] = PropertyDescriptor(owner=cls, name=name, property_type=normalize_type(hint))
    return properties


def _property_objects(cls: Type) -> Dict[str, PropertyDescriptor]:
    properties = {}
    # Walk the MRO from the base so overriding subclasses win
    for klass in reversed(cls.__mro__):
        for name, member in vars(klass).items():
            if not _is_public(name):
                continue
            if not isinstance(member, property):
                properties.pop(name, None)
                continue
            return_type = _resolve_hints(member.fget).get("return", Any) if member.fget else Any
            properties[name] = PropertyDescriptor(
                owner=cls,
                name=name,
                property_type=normalize_type(return_type),
                getter=member.fget,
                setter=member.fset,
                writable=member.fset is not None,
            )
    return properties


class PropertyCatalog:
    """Enumerates the introspectable properties of a class."""

    @staticmethod
    def properties(cls: Type) -> Dict[str, PropertyDescriptor]:
        """Get all public properties of cls keyed by name."""
        cached = _catalog_cache.get(cls)
        if cached is not None:
            return cached

        hints = _resolve_hints(cls)
        if dataclasses.is_dataclass(cls):
            catalog = _dataclass_properties(cls, hints)
        else:
            catalog = _annotated_properties(cls, hints)
        # Explicit property objects take precedence over same-named annotations
        catalog.update(_property_objects(cls))

        logger.debug(f"Built property catalog for {cls.__qualname__}: {sorted(catalog)}")
        _catalog_cache[cls] = catalog
        return catalog

    @staticmethod
    def describe(cls: Type, property_name: str) -> Optional[PropertyDescriptor]:
        """Get the descriptor of one property or None if cls has no such property."""
        return PropertyCatalog.properties(cls).get(property_name)

    @staticmethod
    def clear_cache() -> None:
        _catalog_cache.clear()


def get_property_descriptor_or_fail(
    cls: Type,
    property_name: str,
    collection_sampling_mode: Optional[CollectionSamplingMode] = None,
) -> PropertyDescriptor:
    """
    Resolve a tracked property name against the catalog of cls.

    With a collection_sampling_mode the property is resolved for per-element
    supply: in TYPED mode a collection property must declare its element type,
    so a bare ``list`` or ``set`` is rejected. Without one, the property is
    resolved as a whole value and its element type is not checked.

    Raises:
        PropertyNotFoundError: If cls has no property with that name
        UnsupportedCollectionShapeError: If a collection property has no element type in TYPED mode
    """
    descriptor = PropertyCatalog.describe(cls, property_name)
    if descriptor is None:
        raise PropertyNotFoundError(cls, property_name)

    if (descriptor.is_collection
            and collection_sampling_mode is CollectionSamplingMode.TYPED
            and descriptor.element_type is None):
        raise UnsupportedCollectionShapeError(
            descriptor.property_type,
            f"property '{property_name}' of {cls.__qualname__} does not declare an element type "
            "(use CollectionSamplingMode.RAW to accept bare collections)"
        )
    return descriptor


def deny_multiple_interactions(property_names: Sequence[str]) -> None:
    """Raise AmbiguousInteractionsError if more than one distinct property was tracked."""
    distinct: List[str] = list(dict.fromkeys(property_names))
    if len(distinct) > 1:
        raise AmbiguousInteractionsError(distinct)
