"""End-to-end tests for sample sessions."""
import pytest
from dataclasses import dataclass
from typing import List, Optional

from sampleconf import (
    FieldInfo,
    NullArgumentError,
    PropertyCatalog,
    Sample,
    SampleInstantiator,
)


def test_person_scenario(person_type):
    """Test the resolved registry of the reference Person configuration."""
    sample = (Sample.of(person_type)
              .use(lambda info: "X").for_type(str)
              .use(lambda info: 42).for_field(lambda person: person.age)
              .use(lambda info: "t").for_field_collection(lambda person: person.tags))

    catalog = PropertyCatalog.properties(person_type)
    settings = sample.settings

    assert set(settings.field_settings) == {catalog["age"], catalog["tags"]}
    assert set(settings.type_settings) == {str}

    assert settings.lookup(catalog["age"])(FieldInfo.of(catalog["age"])) == 42
    assert settings.lookup_by_field(catalog["name"]) is None
    assert settings.lookup(catalog["name"])(FieldInfo.of(catalog["name"])) == "X"

    tags = settings.lookup(catalog["tags"])(FieldInfo.of(catalog["tags"]))
    assert isinstance(tags, list)
    assert tags and all(tag == "t" for tag in tags)


def test_person_scenario_new_instance(person_type):
    person = (Sample.of(person_type)
              .use(lambda info: "X").for_type(str)
              .use(lambda info: 42).for_field(lambda person: person.age)
              .use(lambda info: "t").for_field_collection(lambda person: person.tags)
              .new_instance())

    assert person == person_type(name="X", age=42, tags=["t", "t"])


def test_field_rule_beats_type_rule(person_type):
    """Test that the field rule is used even though a type rule matches the property type."""
    person = (Sample.of(person_type)
              .use(lambda info: 1).for_type(int)
              .use(lambda info: 99).for_field(lambda person: person.age)
              .use(lambda info: "n").for_type(str)
              .get())

    assert person.age == 99
    assert person.tags == ["n", "n"]


def test_type_rule_registered_after_field_rule(person_type):
    sample = (Sample.of(person_type)
              .use(lambda info: 99).for_field(lambda person: person.age)
              .use(lambda info: 1).for_type(int))

    age = PropertyCatalog.describe(person_type, "age")
    assert sample.settings.lookup(age)(FieldInfo.of(age)) == 99


def test_suppliers_receive_field_info(person_type):
    seen = {}

    def remember(info):
        seen[info.property_name] = info
        return info.property_name

    person = (Sample.of(person_type)
              .use(remember).for_type(str)
              .use(lambda info: 0).for_type(int)
              .get())

    assert person.name == "name"
    assert person.tags == ["tags", "tags"]
    assert seen["name"] == FieldInfo(declaring_type=person_type, property_name="name", property_type=str)
    assert seen["tags"].property_type == List[str]


def test_sessions_are_independent(person_type):
    first = Sample.of(person_type).use(lambda info: "a").for_type(str)
    second = Sample.of(person_type)

    assert first.has_type_setting(str)
    assert not second.has_type_setting(str)
    assert first.settings is not second.settings


def test_wrapper_rule_resolves_primitive_properties():
    @dataclass
    class Counter:
        hits: int
        misses: Optional[int] = None

    counter = Sample.of(Counter).use(lambda info: 5).for_type(Optional[int]).get()

    assert counter == Counter(hits=5, misses=5)


def test_none_target_type():
    with pytest.raises(NullArgumentError):
        Sample.of(None)


def test_accessors(person_type):
    sample = Sample.of(person_type, collection_size=5)

    assert sample.get_type() is person_type
    assert sample.get_collection_size() == 5
    assert isinstance(SampleInstantiator(sample), SampleInstantiator)
    assert "TestPerson" in repr(sample)
