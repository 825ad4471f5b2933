"""A collection of ready-made mixor values.

- **Values**: ``required``, ``length``, ``number_range``, ``pattern``,
  ``one_of``, ``instance_of``, ``predicate`` and ``chain``
- **Factory**: ``SchemaFactory`` building schemas from dict/YAML configuration
"""

from .factory import SchemaFactory, schema_factory
from .values import (
    chain,
    instance_of,
    length,
    number_range,
    one_of,
    pattern,
    predicate,
    required,
)

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Values
    "required",
    "length",
    "number_range",
    "pattern",
    "one_of",
    "instance_of",
    "predicate",
    "chain",
    # Factory
    "SchemaFactory",
    "schema_factory",
]
