"""Tests for the collection supplier wrapper."""
import collections
import pytest
from typing import Deque, Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from sampleconf import (
    CollectionSupplierWrapper,
    FieldInfo,
    UnsupportedCollectionShapeError,
    set_default_collection_size,
)


@pytest.fixture
def field_info(person_type):
    return FieldInfo(declaring_type=person_type, property_name="tags", property_type=List[str])


def test_list_is_filled_by_element_supplier(field_info):
    wrapper = CollectionSupplierWrapper(List[str], lambda info: "t", size=3)

    result = wrapper(field_info)

    assert result == ["t", "t", "t"]
    assert type(result) is list


def test_element_supplier_receives_same_field_info(field_info):
    """Test that every element call gets the property's FieldInfo."""
    seen = []

    def element_supplier(info):
        seen.append(info)
        return info.property_name

    wrapper = CollectionSupplierWrapper(List[str], element_supplier, size=2)

    assert wrapper(field_info) == ["tags", "tags"]
    assert seen == [field_info, field_info]


def test_output_is_deterministic(field_info):
    counter = iter(range(100))
    wrapper = CollectionSupplierWrapper(List[int], lambda info: next(counter), size=2)

    assert wrapper(field_info) == [0, 1]
    assert wrapper(field_info) == [2, 3]
    assert len(wrapper(field_info)) == 2


@pytest.mark.parametrize("declared, expected_type", [
    (Set[str], set),
    (FrozenSet[str], frozenset),
    (Tuple[str, ...], tuple),
    (Deque[str], collections.deque),
    (Sequence[str], list),
    (Optional[List[str]], list),
])
def test_concrete_collection_shapes(field_info, declared, expected_type):
    wrapper = CollectionSupplierWrapper(declared, lambda info: "t", size=1)

    result = wrapper(field_info)

    assert type(result) is expected_type
    assert list(result) == ["t"]


def test_size_defaults_to_configured_collection_size(field_info):
    set_default_collection_size(4)
    wrapper = CollectionSupplierWrapper(List[str], lambda info: "t")

    assert wrapper.size == 4
    assert wrapper(field_info) == ["t"] * 4


def test_zero_size_produces_empty_collection(field_info):
    calls = []
    wrapper = CollectionSupplierWrapper(List[str], lambda info: calls.append(info), size=0)

    assert wrapper(field_info) == []
    assert calls == []


def test_negative_size_is_rejected():
    with pytest.raises(ValueError, match="negative"):
        CollectionSupplierWrapper(List[str], lambda info: "t", size=-1)


@pytest.mark.parametrize("declared", [Dict[str, int], Tuple[int, str], int])
def test_unsupported_shapes_fail_at_construction(declared):
    with pytest.raises(UnsupportedCollectionShapeError):
        CollectionSupplierWrapper(declared, lambda info: "t", size=1)
