"""Second stage of a sample rule: binds a supplier to a type or to one property."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Collection, Generic, Optional, TypeVar

from sampleconf.collection_supplier import CollectionSupplierWrapper
from sampleconf.config import CollectionSamplingMode
from sampleconf.errors import NullArgumentError, UnsupportedCollectionShapeError, ZeroInteractionsError
from sampleconf.field_info import Supplier
from sampleconf.introspection import PropertyDescriptor, deny_multiple_interactions, get_property_descriptor_or_fail
from sampleconf.sensor import InvocationSensor
from sampleconf.typeutil import is_wrapper_type, unwrap

if TYPE_CHECKING:
    from sampleconf.sample import Sample

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

# A selector receives the sensor instance and reads exactly one property of it
TypedSelector = Callable[[T], S]


def require_not_none(value: Any, message: str) -> Any:
    if value is None:
        raise NullArgumentError(message)
    return value


class SettingBuilder(Generic[T, S]):
    """
    Holds a supplier until it is bound with for_type, for_field or for_field_collection.

    Every binding returns the owning Sample for method chaining. A binding that
    raises has registered nothing.
    """

    def __init__(self, sample: "Sample[T]", supplier: Supplier[S]):
        require_not_none(supplier, "supplier must not be None.")
        self._sample = sample
        self._supplier = supplier

    def for_type(self, type_: Any) -> "Sample[T]":
        """
        Register the supplier for every property declared as type_.

        Registering a wrapper type such as Optional[int] also registers the
        supplier for int, unless int already has its own rule.
        """
        require_not_none(type_, "type must not be None.")
        self._sample.add_type_setting(self._supplier, type_)
        if is_wrapper_type(type_):
            primitive = unwrap(type_)
            # Do not override an explicit primitive type setting
            if not self._sample.has_type_setting(primitive):
                self._sample.add_type_setting(self._supplier, primitive)
                logger.debug(f"Registered companion type setting {primitive.__name__} for {type_!r}")
        return self._sample

    def for_field(self, field_selector: TypedSelector[T, S]) -> "Sample[T]":
        """Register the supplier for the single property read by field_selector."""
        require_not_none(field_selector, "field selector must not be None.")
        descriptor = self._resolve_property(field_selector)
        self._sample.add_field_setting(descriptor, self._supplier)
        return self._sample

    def for_field_collection(self, field_selector: TypedSelector[T, Collection[S]]) -> "Sample[T]":
        """
        Register the supplier for the elements of the collection property read by field_selector.

        The supplier produces single elements; it is wrapped so the property gets a
        collection of the declared shape.
        """
        require_not_none(field_selector, "field selector must not be None.")
        descriptor = self._resolve_property(field_selector, self._sample.get_collection_sampling_mode())
        if not descriptor.is_collection:
            raise UnsupportedCollectionShapeError(
                descriptor.property_type,
                f"property '{descriptor.name}' is not a collection; use for_field() instead"
            )
        wrapper = CollectionSupplierWrapper(
            descriptor.property_type, self._supplier, self._sample.get_collection_size()
        )
        self._sample.add_field_setting(descriptor, wrapper)
        return self._sample

    def _resolve_property(
        self,
        field_selector: TypedSelector[T, Any],
        collection_sampling_mode: Optional[CollectionSamplingMode] = None,
    ) -> PropertyDescriptor:
        sensor_type = self._sample.get_type()
        invocation_sensor = InvocationSensor(sensor_type)
        field_selector(invocation_sensor.get_sensor())

        if not invocation_sensor.has_tracked_properties():
            raise ZeroInteractionsError()

        # ...make sure it was exactly one property interaction
        tracked_property_names = invocation_sensor.get_tracked_property_names()
        deny_multiple_interactions(tracked_property_names)
        property_name = tracked_property_names[0]

        descriptor = get_property_descriptor_or_fail(
            sensor_type, property_name, collection_sampling_mode
        )
        logger.debug(f"Selector resolved to {sensor_type.__qualname__}.{property_name}")
        return descriptor
