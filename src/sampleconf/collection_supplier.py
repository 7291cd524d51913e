"""Adapts a supplier of single elements into a supplier of collections."""

import logging
from typing import Any, Collection, Generic, Optional, TypeVar

from sampleconf.config import get_default_collection_size, validate_collection_size
from sampleconf.field_info import FieldInfo, Supplier
from sampleconf.typeutil import concrete_collection_type, strip_optional

logger = logging.getLogger(__name__)

S = TypeVar("S")


class CollectionSupplierWrapper(Generic[S]):
    """
    Supplier producing collections of the declared shape filled by an element supplier.

    The concrete collection class is resolved when the wrapper is created, so an
    unsupported declaration fails at configuration time rather than when data is
    generated. Each call invokes the element supplier exactly ``size`` times with
    the same FieldInfo.
    """

    def __init__(self, declared_type: Any, element_supplier: Supplier[S], size: Optional[int] = None):
        self.declared_type = declared_type
        self.element_supplier = element_supplier
        self.size = validate_collection_size(get_default_collection_size() if size is None else size)
        self.collection_type = concrete_collection_type(strip_optional(declared_type))
        logger.debug(
            f"Wrapping element supplier for {declared_type!r} as {self.collection_type.__qualname__} "
            f"of {self.size} elements"
        )

    def __call__(self, field_info: FieldInfo) -> Collection[S]:
        return self.collection_type(self.element_supplier(field_info) for _ in range(self.size))

    def __repr__(self) -> str:
        return f"CollectionSupplierWrapper({self.declared_type!r}, size={self.size})"
