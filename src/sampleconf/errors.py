"""
Exceptions raised while configuring or building samples.

Every error is raised at the call that caused it. A binding call that raises
has registered nothing.
"""

from typing import Any, Optional, Sequence


class SampleError(Exception):
    """Base class for all sampleconf errors."""


class NullArgumentError(SampleError, ValueError):
    """A required argument (supplier, type or selector) was None."""


class ZeroInteractionsError(SampleError):
    """A field selector did not read any property of the sensor."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or (
            "The field selector did not interact with any property of the sensor. "
            "Make sure the selector reads exactly one property of the object it "
            "receives, e.g. 'lambda person: person.name'."
        ))


class AmbiguousInteractionsError(SampleError):
    """A field selector read more than one distinct property."""

    def __init__(self, property_names: Sequence[str]):
        self.property_names = list(property_names)
        super().__init__(
            "The field selector interacted with more than one property: "
            f"{', '.join(self.property_names)}. Only a single property may be "
            "selected; chained or multi-field access is not supported."
        )


class PropertyNotFoundError(SampleError, LookupError):
    """A tracked property name could not be resolved on the target type."""

    def __init__(self, target_type: Any, property_name: str):
        self.target_type = target_type
        self.property_name = property_name
        super().__init__(
            f"Property '{property_name}' was not found on {_type_name(target_type)}."
        )


class UninterceptableTypeError(SampleError, TypeError):
    """A sensor instance cannot be created for the target type."""

    def __init__(self, target_type: Any, reason: str):
        self.target_type = target_type
        super().__init__(
            f"Cannot create an invocation sensor for {_type_name(target_type)}: {reason}"
        )


class UnsupportedCollectionShapeError(SampleError, TypeError):
    """No concrete collection can be created for a declared property type."""

    def __init__(self, declared_type: Any, reason: Optional[str] = None):
        self.declared_type = declared_type
        message = f"Unsupported collection type {declared_type!r}"
        super().__init__(f"{message}: {reason}" if reason else message)


class DuplicateFieldSettingError(SampleError):
    """The same field was configured twice in a session that forbids overrides."""

    def __init__(self, descriptor: Any):
        self.descriptor = descriptor
        super().__init__(
            f"Field '{descriptor.name}' of {_type_name(descriptor.owner)} is already "
            "configured. Create the session with allow_field_override=True to "
            "replace field settings."
        )


class MissingSupplierError(SampleError, LookupError):
    """The instantiation walker found no rule for a property."""

    def __init__(self, declaring_type: Any, property_name: str, property_type: Any):
        self.declaring_type = declaring_type
        self.property_name = property_name
        self.property_type = property_type
        super().__init__(
            f"No supplier configured for {_type_name(declaring_type)}.{property_name} "
            f"of type {property_type!r}. Register one with for_type() or for_field()."
        )


class CyclicGraphError(SampleError):
    """The instantiation walker revisited a type it is still building."""

    def __init__(self, path: Sequence[Any]):
        self.path = list(path)
        super().__init__(
            "Cyclic object graph detected: "
            + " -> ".join(_type_name(t) for t in self.path)
            + ". Configure a supplier for one of the properties on the cycle."
        )


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)
