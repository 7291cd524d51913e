"""
sampleconf: fluent configuration of sample data for arbitrary classes.

Rules are registered either for a data type or for a single property, which is
selected with a plain attribute read instead of a string name:

    >>> from sampleconf import Sample
    >>> sample = (Sample.of(Person)
    ...           .use(lambda info: "X").for_type(str)
    ...           .use(lambda info: 42).for_field(lambda person: person.age))
    >>> person = sample.new_instance()

Property selection works through an invocation sensor: a synthetic instance of
the target class that records which property the selector reads.
"""

__version__ = "0.1.0"

from .collection_supplier import CollectionSupplierWrapper
from .config import (
    CollectionSamplingMode,
    get_default_allow_field_override,
    get_default_collection_sampling_mode,
    get_default_collection_size,
    reset_defaults,
    set_default_allow_field_override,
    set_default_collection_sampling_mode,
    set_default_collection_size,
)
from .errors import (
    AmbiguousInteractionsError,
    CyclicGraphError,
    DuplicateFieldSettingError,
    MissingSupplierError,
    NullArgumentError,
    PropertyNotFoundError,
    SampleError,
    UninterceptableTypeError,
    UnsupportedCollectionShapeError,
    ZeroInteractionsError,
)
from .field_info import FieldInfo
from .instantiation import SampleInstantiator
from .introspection import PropertyCatalog, PropertyDescriptor
from .registry import SettingsRegistry
from .sample import Sample
from .sensor import InvocationSensor
from .setting_builder import SettingBuilder

__all__ = [
    # Session
    "Sample",
    "SettingBuilder",
    "SettingsRegistry",
    "SampleInstantiator",
    # Property selection
    "InvocationSensor",
    "PropertyCatalog",
    "PropertyDescriptor",
    # Suppliers
    "FieldInfo",
    "CollectionSupplierWrapper",
    # Configuration
    "CollectionSamplingMode",
    "set_default_collection_size",
    "get_default_collection_size",
    "set_default_collection_sampling_mode",
    "get_default_collection_sampling_mode",
    "set_default_allow_field_override",
    "get_default_allow_field_override",
    "reset_defaults",
    # Errors
    "SampleError",
    "NullArgumentError",
    "ZeroInteractionsError",
    "AmbiguousInteractionsError",
    "PropertyNotFoundError",
    "UninterceptableTypeError",
    "UnsupportedCollectionShapeError",
    "DuplicateFieldSettingError",
    "MissingSupplierError",
    "CyclicGraphError",
]
