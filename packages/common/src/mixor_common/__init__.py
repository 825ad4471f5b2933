"""Common utilities and base classes for mixor packages.

This package provides shared functionality used across all mixor packages:

- **Exceptions**: Unified exception hierarchy with context support
- **Serialization**: ``to_dict`` protocol and deterministic plain-data conversion
- **Factories**: Base class for objects built from dict/YAML configuration

Example:
    ```python
    from mixor_common import MixorError, to_plain

    raise MixorError("Something went wrong", context={"details": "here"})

    plain = to_plain({"limit": 3})
    ```
"""

from mixor_common.exceptions import (
    ConfigurationError,
    MixorError,
    NotFoundError,
    SerializationError,
)
from mixor_common.factory import FactoryBase, load_config
from mixor_common.serialization import (
    Serializable,
    canonical_json,
    is_serializable,
    qualified_name,
    serialize,
    to_plain,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "MixorError",
    "ConfigurationError",
    "NotFoundError",
    "SerializationError",
    # Serialization
    "Serializable",
    "serialize",
    "is_serializable",
    "qualified_name",
    "canonical_json",
    "to_plain",
    # Factories
    "FactoryBase",
    "load_config",
]
