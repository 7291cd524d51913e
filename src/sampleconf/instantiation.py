"""
Minimal instantiation walker consuming the settings of a Sample session.

Every writable property of the target type is populated in this order:
1. the property's field rule
2. the rule for its exact declared type
3. for Optional[X], the rule for X
4. collections: elements from the element type's rule (or a nested build)
5. nested classes with properties: built recursively

Dataclasses are constructed through ``__init__``; other classes are created
without arguments and populated with ``setattr``.
"""

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, Dict, Generic, Tuple, Type, TypeVar

from sampleconf.collection_supplier import CollectionSupplierWrapper
from sampleconf.errors import CyclicGraphError, MissingSupplierError
from sampleconf.field_info import FieldInfo, Supplier
from sampleconf.introspection import PropertyCatalog, PropertyDescriptor
from sampleconf.typeutil import is_optional, strip_optional

if TYPE_CHECKING:
    from sampleconf.sample import Sample

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SampleInstantiator(Generic[T]):
    """Builds populated instances of a session's target type."""

    def __init__(self, sample: "Sample[T]"):
        self._target_type = sample.get_type()
        self._settings = sample.settings
        self._collection_size = sample.get_collection_size()

    def new_instance(self) -> T:
        return self._create(self._target_type, ())

    def _create(self, cls: Type, path: Tuple[Type, ...]) -> Any:
        if cls in path:
            raise CyclicGraphError(path + (cls,))
        path = path + (cls,)

        catalog = PropertyCatalog.properties(cls)
        values = {
            name: self._value_for(descriptor, path)
            for name, descriptor in catalog.items()
            if descriptor.writable
        }
        logger.debug(f"Populating {cls.__qualname__} with {sorted(values)}")
        return self._construct(cls, catalog, values)

    def _value_for(self, descriptor: PropertyDescriptor, path: Tuple[Type, ...]) -> Any:
        field_info = FieldInfo.of(descriptor)
        supplier = self._settings.lookup(descriptor)
        if supplier is None and is_optional(descriptor.property_type):
            supplier = self._settings.lookup_by_type(strip_optional(descriptor.property_type))
        if supplier is not None:
            return supplier(field_info)

        if descriptor.is_collection:
            wrapper = CollectionSupplierWrapper(
                descriptor.property_type,
                self._element_supplier(descriptor, path),
                self._size_for(descriptor),
            )
            return wrapper(field_info)

        declared = strip_optional(descriptor.property_type)
        if self._is_nested_type(declared):
            return self._create(declared, path)
        raise MissingSupplierError(descriptor.owner, descriptor.name, descriptor.property_type)

    def _size_for(self, descriptor: PropertyDescriptor) -> int:
        # Bare collections (RAW mode) have no element type to generate
        return self._collection_size if descriptor.element_type is not None else 0

    def _element_supplier(self, descriptor: PropertyDescriptor, path: Tuple[Type, ...]) -> Supplier:
        element_type = descriptor.element_type
        if element_type is None:
            return lambda field_info: None

        supplier = self._settings.lookup_by_type(element_type)
        if supplier is not None:
            return supplier
        if self._is_nested_type(element_type):
            return lambda field_info: self._create(element_type, path)
        raise MissingSupplierError(descriptor.owner, descriptor.name, element_type)

    @staticmethod
    def _is_nested_type(tp: Any) -> bool:
        if not isinstance(tp, type) or tp.__module__ == "builtins":
            return False
        return bool(PropertyCatalog.properties(tp))

    @staticmethod
    def _construct(cls: Type, catalog: Dict[str, PropertyDescriptor], values: Dict[str, Any]) -> Any:
        if dataclasses.is_dataclass(cls):
            init_values = {name: value for name, value in values.items() if catalog[name].init}
            instance = cls(**init_values)
            remaining = {name: value for name, value in values.items() if name not in init_values}
        else:
            instance = cls()
            remaining = values

        for name, value in remaining.items():
            setattr(instance, name, value)
        return instance
