"""
Framework configuration for sample sessions.

This module holds the defaults a new Sample session starts from. A session
copies these values when it is created, so changing a default afterwards only
affects sessions created later.

Configurable defaults:
1. Collection size: how many elements generated collections contain
2. Collection sampling mode: whether collection properties must declare an element type
3. Field override: whether a field may be configured twice in one session

You normally only call these once at test-suite startup (e.g. in conftest.py).
"""

from enum import Enum


class CollectionSamplingMode(Enum):
    """How collection-typed properties are accepted when they are selected."""

    # Collection properties must declare their element type, e.g. List[str]
    TYPED = "typed"
    # Bare collection declarations (list, set, ...) are accepted as well
    RAW = "raw"


DEFAULT_COLLECTION_SIZE = 2
DEFAULT_COLLECTION_SAMPLING_MODE = CollectionSamplingMode.TYPED
DEFAULT_ALLOW_FIELD_OVERRIDE = False

# Global framework configuration
_collection_size: int = DEFAULT_COLLECTION_SIZE
_collection_sampling_mode: CollectionSamplingMode = DEFAULT_COLLECTION_SAMPLING_MODE
_allow_field_override: bool = DEFAULT_ALLOW_FIELD_OVERRIDE


def validate_collection_size(size: int) -> int:
    """Return size unchanged or raise ValueError if it is not a usable element count."""
    if isinstance(size, bool) or not isinstance(size, int):
        raise ValueError(f"Collection size must be an int, got {type(size).__name__}")
    if size < 0:
        raise ValueError(f"Collection size must not be negative, got {size}")
    return size


def set_default_collection_size(size: int) -> None:
    """
    Set the number of elements generated for collection properties.

    Args:
        size: Non-negative element count

    Raises:
        ValueError: If size is negative or not an int

    Example:
        >>> from sampleconf.config import set_default_collection_size
        >>> set_default_collection_size(5)
    """
    global _collection_size
    _collection_size = validate_collection_size(size)


def get_default_collection_size() -> int:
    """Get the default number of elements generated for collection properties."""
    return _collection_size


def set_default_collection_sampling_mode(mode: CollectionSamplingMode) -> None:
    """
    Set how collection properties are checked when a selector resolves them.

    Args:
        mode: The CollectionSamplingMode new sessions start with

    Raises:
        ValueError: If mode is not a CollectionSamplingMode
    """
    global _collection_sampling_mode
    if not isinstance(mode, CollectionSamplingMode):
        raise ValueError(f"Expected a CollectionSamplingMode, got {mode!r}")
    _collection_sampling_mode = mode


def get_default_collection_sampling_mode() -> CollectionSamplingMode:
    """Get the collection sampling mode new sessions start with."""
    return _collection_sampling_mode


def set_default_allow_field_override(allow: bool) -> None:
    """Allow (or forbid) configuring the same field twice in one session."""
    global _allow_field_override
    _allow_field_override = bool(allow)


def get_default_allow_field_override() -> bool:
    return _allow_field_override


def reset_defaults() -> None:
    """Restore every framework default to its initial value."""
    global _collection_size, _collection_sampling_mode, _allow_field_override
    _collection_size = DEFAULT_COLLECTION_SIZE
    _collection_sampling_mode = DEFAULT_COLLECTION_SAMPLING_MODE
    _allow_field_override = DEFAULT_ALLOW_FIELD_OVERRIDE
