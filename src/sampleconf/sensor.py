"""
Invocation sensor: a stand-in instance that records which property a selector reads.

The sensor for a type T is an instance of a dynamically created subclass of T
whose ``__getattribute__`` intercepts reads of T's catalogued properties.
An intercepted read never runs the real property body; it records the property
and returns a benign value of the declared type. ``T.__init__`` is never called,
so the sensor works for types that require constructor arguments.
"""

import logging
import types
from typing import Any, Dict, Generic, List, Tuple, Type, TypeVar

from sampleconf.errors import UninterceptableTypeError
from sampleconf.introspection import PropertyCatalog, PropertyDescriptor
from sampleconf.typeutil import default_value_for, is_collection_type, strip_optional

logger = logging.getLogger(__name__)

T = TypeVar("T")

SENSOR_CLASS_SUFFIX = "Sensor"
SENSOR_SESSION_ATTRIBUTE = "_sampleconf_sensor_session"
SENSED_TYPE_ATTRIBUTE = "_sampleconf_sensed_type"
SENSOR_PATH_ATTRIBUTE = "_sampleconf_sensor_path"

# Sensor subclasses are stateless, so one per sensed type is enough.
# Entries are only ever added, never replaced, so sessions never observe each other here.
_sensor_class_cache: Dict[Type, Type] = {}


def _sensor_getattribute(self: Any, name: str) -> Any:
    """Record reads of catalogued properties; everything else behaves normally."""
    sensed_type = getattr(type(self), SENSED_TYPE_ATTRIBUTE)
    descriptor = PropertyCatalog.describe(sensed_type, name)
    if descriptor is None:
        return object.__getattribute__(self, name)
    session = object.__getattribute__(self, SENSOR_SESSION_ATTRIBUTE)
    return session._track(descriptor, object.__getattribute__(self, SENSOR_PATH_ATTRIBUTE))


def get_sensor_class(target_type: Type) -> Type:
    """
    Get (or create) the sensor subclass for target_type.

    Raises:
        UninterceptableTypeError: If target_type cannot be subclassed
    """
    cached = _sensor_class_cache.get(target_type)
    if cached is not None:
        return cached

    if not isinstance(target_type, type):
        raise UninterceptableTypeError(target_type, "it is not a class")
    if getattr(target_type, "__final__", False) is True:
        raise UninterceptableTypeError(target_type, "it is marked @final")

    namespace = {
        "__getattribute__": _sensor_getattribute,
        "__module__": target_type.__module__,
        "__qualname__": f"{target_type.__qualname__}{SENSOR_CLASS_SUFFIX}",
        SENSED_TYPE_ATTRIBUTE: target_type,
    }
    try:
        # new_class honours the target metaclass (ABCMeta, EnumType, ...) including __prepare__
        sensor_class = types.new_class(
            f"{target_type.__name__}{SENSOR_CLASS_SUFFIX}", (target_type,),
            exec_body=lambda ns: ns.update(namespace),
        )
    except TypeError as e:
        raise UninterceptableTypeError(target_type, f"it cannot be subclassed ({e})") from e

    # Abstract members are never executed on a sensor, so allow instantiation
    if getattr(sensor_class, "__abstractmethods__", None):
        sensor_class.__abstractmethods__ = frozenset()

    logger.debug(f"Created sensor class {sensor_class.__qualname__} for {target_type.__qualname__}")
    _sensor_class_cache[target_type] = sensor_class
    return sensor_class


class InvocationSensor(Generic[T]):
    """
    One sensing session for a target type.

    A session is meant for exactly one selector call: create it, pass
    ``get_sensor()`` to the selector, then inspect the tracked properties.
    """

    def __init__(self, target_type: Type[T]):
        self._target_type = target_type
        # Ordered set of (access path, owner, property name); only uniqueness matters
        self._tracked: Dict[Tuple[str, Type, str], None] = {}
        self._sensor = self._create_sensor_instance(target_type)

    @property
    def target_type(self) -> Type[T]:
        return self._target_type

    def get_sensor(self) -> T:
        """Get the sensor instance to pass to a selector."""
        return self._sensor

    def has_tracked_properties(self) -> bool:
        return bool(self._tracked)

    def get_tracked_property_names(self) -> List[str]:
        """
        Get the access paths of all properties read so far, in first-access order.

        Reads on the sensor itself are plain names; reads on a nested sensor are
        dotted paths such as ``"address.city"``.
        """
        return [path for path, _, _ in self._tracked]

    def get_tracked_properties(self) -> List[Tuple[Type, str]]:
        return [(owner, name) for _, owner, name in self._tracked]

    def _create_sensor_instance(self, sensed_type: Type, path: str = "") -> Any:
        sensor_class = get_sensor_class(sensed_type)
        try:
            instance = object.__new__(sensor_class)
            object.__setattr__(instance, SENSOR_SESSION_ATTRIBUTE, self)
            object.__setattr__(instance, SENSOR_PATH_ATTRIBUTE, path)
        except (TypeError, AttributeError) as e:
            raise UninterceptableTypeError(sensed_type, f"a sensor instance cannot be allocated ({e})") from e
        return instance

    def _track(self, descriptor: PropertyDescriptor, prefix: str = "") -> Any:
        path = f"{prefix}{descriptor.name}"
        key = (path, descriptor.owner, descriptor.name)
        if key not in self._tracked:
            self._tracked[key] = None
            logger.debug(f"Sensor tracked {descriptor.owner.__qualname__}.{descriptor.name} (path {path})")
        return self._default_for(descriptor, path)

    def _default_for(self, descriptor: PropertyDescriptor, path: str) -> Any:
        declared = strip_optional(descriptor.property_type)
        if self._is_sensable(declared):
            # Nested sensor so chained reads are recorded instead of failing on None
            try:
                return self._create_sensor_instance(declared, f"{path}.")
            except UninterceptableTypeError as e:
                logger.debug(f"Falling back to default value for {descriptor.name}: {e}")
        return default_value_for(declared)

    @staticmethod
    def _is_sensable(declared: Any) -> bool:
        if not isinstance(declared, type) or declared.__module__ == "builtins":
            return False
        if is_collection_type(declared):
            return False
        return bool(PropertyCatalog.properties(declared))
