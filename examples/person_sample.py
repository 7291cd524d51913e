"""Example configuring sample data for a small object graph.

This example is dependency-free and shows:
- type rules with `for_type`, including the Optional[int] -> int companion rule
- property rules with `for_field`, selected by attribute reads
- collection rules with `for_field_collection`
- building the populated instance with `new_instance()`

Run it directly to print the generated sample.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sampleconf import Sample, set_default_collection_size


@dataclass
class Address:
    street: str
    city: str


@dataclass
class Person:
    """Person with a nested address and a list of tags."""

    name: str
    age: int
    address: Address
    tags: List[str] = field(default_factory=list)
    height_cm: Optional[int] = None


def build_person() -> Person:
    return (Sample.of(Person)
            .use(lambda info: f"<{info.property_name}>").for_type(str)
            .use(lambda info: 180).for_type(Optional[int])
            .use(lambda info: 42).for_field(lambda person: person.age)
            .use(lambda info: "vip").for_field_collection(lambda person: person.tags)
            .new_instance())


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    set_default_collection_size(3)
    print(build_person())
