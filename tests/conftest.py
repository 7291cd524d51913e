"""Pytest configuration and shared fixtures."""
import pytest
from dataclasses import dataclass, field
from typing import List, Optional, Set


@dataclass
class TestPerson:
    """Person with a string, an int and a list of strings."""
    name: str
    age: int
    tags: List[str]


@dataclass
class TestAddress:
    street: str
    city: str


@dataclass
class TestCustomer:
    """Customer with a nested address and optional/collection fields."""
    name: str
    address: TestAddress
    nickname: Optional[str] = None
    scores: Set[int] = field(default_factory=set)


class TestAccount:
    """Plain class exposing read-only properties with business logic."""

    def __init__(self, owner: str, balance: float):
        self._owner = owner
        self._balance = balance

    @property
    def owner(self) -> str:
        return self._owner.upper()

    @property
    def balance(self) -> float:
        raise RuntimeError("property body must not run on a sensor")


@pytest.fixture(autouse=True)
def reset_sample_defaults():
    """Reset framework defaults before and after each test."""
    import sampleconf.config as config_module

    config_module.reset_defaults()

    yield

    config_module.reset_defaults()


@pytest.fixture
def person_type():
    return TestPerson


@pytest.fixture
def address_type():
    return TestAddress


@pytest.fixture
def customer_type():
    return TestCustomer


@pytest.fixture
def account_type():
    return TestAccount
