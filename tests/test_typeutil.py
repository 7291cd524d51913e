"""Tests for type classification helpers."""
import collections
import pytest
from collections.abc import Collection, MutableSequence, Sequence
from typing import AbstractSet, Deque, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple, Union

from sampleconf import UnsupportedCollectionShapeError
from sampleconf.typeutil import (
    collection_element_type,
    concrete_collection_type,
    default_value_for,
    is_collection_type,
    is_optional,
    is_wrapper_type,
    normalize_type,
    strip_optional,
    unwrap,
)


def test_normalize_pep604_union():
    assert normalize_type(int | None) == Optional[int]
    assert normalize_type(str) is str


def test_optional_detection():
    assert is_optional(Optional[str])
    assert is_optional(str | None)
    assert not is_optional(str)
    assert not is_optional(Union[int, str])
    assert not is_optional(Union[int, str, None])


def test_strip_optional():
    assert strip_optional(Optional[int]) is int
    assert strip_optional(float | None) is float
    assert strip_optional(List[str]) == List[str]


@pytest.mark.parametrize("wrapper, primitive", [
    (Optional[int], int),
    (Optional[float], float),
    (Optional[bool], bool),
    (complex | None, complex),
])
def test_wrapper_types_unwrap_to_primitives(wrapper, primitive):
    assert is_wrapper_type(wrapper)
    assert unwrap(wrapper) is primitive


@pytest.mark.parametrize("tp", [int, str, Optional[str], List[int], Union[int, float]])
def test_non_wrapper_types(tp):
    assert not is_wrapper_type(tp)
    with pytest.raises(ValueError, match="not a wrapper"):
        unwrap(tp)


@pytest.mark.parametrize("tp", [
    list, List[str], Set[int], FrozenSet[int], Tuple[str, ...], Deque[int],
    Sequence[str], MutableSequence[int], Collection[str], AbstractSet[int],
])
def test_collection_types(tp):
    assert is_collection_type(tp)


@pytest.mark.parametrize("tp", [str, bytes, bytearray, dict, Dict[str, int], Mapping[str, int], int, range])
def test_non_collection_types(tp):
    assert not is_collection_type(tp)


def test_collection_element_type():
    assert collection_element_type(List[str]) is str
    assert collection_element_type(Tuple[int, ...]) is int
    assert collection_element_type(Set[Optional[int]]) == Optional[int]
    assert collection_element_type(list) is None
    assert collection_element_type(List) is None


@pytest.mark.parametrize("declared, concrete", [
    (List[str], list),
    (Set[int], set),
    (FrozenSet[int], frozenset),
    (Tuple[str, ...], tuple),
    (Deque[int], collections.deque),
    (Sequence[str], list),
    (MutableSequence[str], list),
    (Collection[str], list),
    (AbstractSet[int], set),
])
def test_concrete_collection_type(declared, concrete):
    assert concrete_collection_type(declared) is concrete


def test_concrete_collection_type_keeps_user_subclass():
    class TagList(list):
        pass

    assert concrete_collection_type(TagList) is TagList


def test_concrete_collection_type_rejects_fixed_tuples():
    with pytest.raises(UnsupportedCollectionShapeError, match="fixed-length"):
        concrete_collection_type(Tuple[int, str])


def test_concrete_collection_type_rejects_mappings():
    with pytest.raises(UnsupportedCollectionShapeError, match="not a collection"):
        concrete_collection_type(Dict[str, int])


def test_concrete_collection_type_rejects_abstract_user_collections():
    class Bag(Collection):
        pass

    with pytest.raises(UnsupportedCollectionShapeError, match="no concrete implementation"):
        concrete_collection_type(Bag)


def test_default_values():
    assert default_value_for(bool) is False
    assert default_value_for(int) == 0
    assert default_value_for(float) == 0.0
    assert default_value_for(str) == ""
    assert default_value_for(Optional[int]) == 0
    assert default_value_for(List[str]) == []
    assert default_value_for(Sequence[int]) == []
    assert default_value_for(Set[int]) == set()
    assert default_value_for(Dict[str, int]) == {}
    assert default_value_for(Mapping[str, int]) == {}
    assert default_value_for(object) is None
    assert default_value_for(Tuple[int, str]) is None
