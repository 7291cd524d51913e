"""
Settings registry: resolved supplier rules of one sample session.

Rules live in two separate namespaces:
- type keys: a declared type, used for every property of that exact type
- field keys: one PropertyDescriptor, used for that property only

Field keys always take precedence over type keys.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from sampleconf.errors import DuplicateFieldSettingError
from sampleconf.field_info import Supplier
from sampleconf.introspection import PropertyDescriptor
from sampleconf.typeutil import normalize_type

logger = logging.getLogger(__name__)


class SettingsRegistry:
    """Mapping from selection keys to supplier functions, owned by a single session."""

    def __init__(self, allow_field_override: bool = False):
        self.allow_field_override = allow_field_override
        self._type_settings: Dict[Any, Supplier] = {}
        self._field_settings: Dict[PropertyDescriptor, Supplier] = {}

    def add_type_setting(self, supplier: Supplier, type_: Any) -> None:
        """Register supplier for every property declared as type_; replaces an earlier rule."""
        key = normalize_type(type_)
        if key in self._type_settings:
            logger.debug(f"Replacing type setting for {key!r}")
        self._type_settings[key] = supplier

    def has_type_setting(self, type_: Any) -> bool:
        return normalize_type(type_) in self._type_settings

    def has_field_setting(self, descriptor: PropertyDescriptor) -> bool:
        return descriptor in self._field_settings

    def add_field_setting(self, descriptor: PropertyDescriptor, supplier: Supplier) -> None:
        """
        Register supplier for one property.

        Raises:
            DuplicateFieldSettingError: If the property is already configured and
                overrides are not allowed
        """
        if descriptor in self._field_settings:
            if not self.allow_field_override:
                raise DuplicateFieldSettingError(descriptor)
            logger.debug(f"Replacing field setting for {descriptor.owner.__qualname__}.{descriptor.name}")
        self._field_settings[descriptor] = supplier

    def lookup_by_field(self, descriptor: PropertyDescriptor) -> Optional[Supplier]:
        return self._field_settings.get(descriptor)

    def lookup_by_type(self, type_: Any) -> Optional[Supplier]:
        return self._type_settings.get(normalize_type(type_))

    def lookup(self, descriptor: PropertyDescriptor) -> Optional[Supplier]:
        """Get the supplier for a property: its field rule first, then its declared type's rule."""
        supplier = self.lookup_by_field(descriptor)
        if supplier is not None:
            return supplier
        return self.lookup_by_type(descriptor.property_type)

    @property
    def type_settings(self) -> Mapping[Any, Supplier]:
        return MappingProxyType(self._type_settings)

    @property
    def field_settings(self) -> Mapping[PropertyDescriptor, Supplier]:
        return MappingProxyType(self._field_settings)

    def __len__(self) -> int:
        return len(self._type_settings) + len(self._field_settings)

    def __repr__(self) -> str:
        return (f"SettingsRegistry(types={list(self._type_settings)}, "
                f"fields={[d.name for d in self._field_settings]})")
