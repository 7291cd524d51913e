"""Context passed to every supplier when sample data is generated."""

from dataclasses import dataclass
from typing import Any, Callable, Type, TypeVar

from sampleconf.introspection import PropertyDescriptor

S = TypeVar("S")


@dataclass(frozen=True)
class FieldInfo:
    """Describes the property a supplier is currently generating a value for."""

    declaring_type: Type
    property_name: str
    property_type: Any

    @classmethod
    def of(cls, descriptor: PropertyDescriptor) -> "FieldInfo":
        return cls(
            declaring_type=descriptor.owner,
            property_name=descriptor.name,
            property_type=descriptor.property_type,
        )


# A supplier receives the FieldInfo of the property being populated
Supplier = Callable[[FieldInfo], S]
