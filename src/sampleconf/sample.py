"""
Sample session: the entry point for configuring sample data of one target type.

Usage:
    sample = (Sample.of(Person)
              .use(lambda info: "X").for_type(str)
              .use(lambda info: 42).for_field(lambda person: person.age)
              .use(lambda info: "t").for_field_collection(lambda person: person.tags))
    person = sample.new_instance()
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sampleconf.config import (
    CollectionSamplingMode,
    get_default_allow_field_override,
    get_default_collection_sampling_mode,
    get_default_collection_size,
    validate_collection_size,
)
from sampleconf.field_info import Supplier
from sampleconf.instantiation import SampleInstantiator
from sampleconf.introspection import PropertyDescriptor
from sampleconf.registry import SettingsRegistry
from sampleconf.setting_builder import SettingBuilder, require_not_none

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


class Sample(Generic[T]):
    """
    One configuration pass over a target type.

    The session owns its SettingsRegistry exclusively. Options left as None are
    taken from the framework defaults in sampleconf.config at creation time.
    """

    def __init__(
        self,
        target_type: Type[T],
        *,
        collection_sampling_mode: Optional[CollectionSamplingMode] = None,
        collection_size: Optional[int] = None,
        allow_field_override: Optional[bool] = None,
    ):
        require_not_none(target_type, "target type must not be None.")
        self._type = target_type
        self._collection_sampling_mode = (
            collection_sampling_mode if collection_sampling_mode is not None
            else get_default_collection_sampling_mode()
        )
        self._collection_size = validate_collection_size(
            collection_size if collection_size is not None else get_default_collection_size()
        )
        if allow_field_override is None:
            allow_field_override = get_default_allow_field_override()
        self._settings = SettingsRegistry(allow_field_override=allow_field_override)
        logger.debug(
            f"Created sample session for {self._type_name()} "
            f"(mode={self._collection_sampling_mode.name}, collection_size={self._collection_size})"
        )

    def _type_name(self) -> str:
        return getattr(self._type, "__qualname__", None) or repr(self._type)

    @classmethod
    def of(cls, target_type: Type[T], **options: Any) -> "Sample[T]":
        """Start a configuration session for target_type."""
        return cls(target_type, **options)

    def use(self, supplier: Supplier[S]) -> SettingBuilder[T, S]:
        """Start a rule with supplier; bind it with the returned SettingBuilder."""
        return SettingBuilder(self, supplier)

    def get_type(self) -> Type[T]:
        return self._type

    def get_collection_sampling_mode(self) -> CollectionSamplingMode:
        return self._collection_sampling_mode

    def get_collection_size(self) -> int:
        return self._collection_size

    @property
    def settings(self) -> SettingsRegistry:
        return self._settings

    def add_type_setting(self, supplier: Supplier, type_: Any) -> None:
        logger.debug(f"Adding type setting for {type_!r} on {self._type_name()} sample")
        self._settings.add_type_setting(supplier, type_)

    def has_type_setting(self, type_: Any) -> bool:
        return self._settings.has_type_setting(type_)

    def add_field_setting(self, descriptor: PropertyDescriptor, supplier: Supplier) -> None:
        logger.debug(f"Adding field setting for {descriptor.owner.__qualname__}.{descriptor.name}")
        self._settings.add_field_setting(descriptor, supplier)

    def new_instance(self) -> T:
        """Build a populated instance of the target type from the configured rules."""
        return SampleInstantiator(self).new_instance()

    get = new_instance

    def __repr__(self) -> str:
        return f"Sample({self._type_name()}, {self._settings!r})"
