"""Declarative validation and business-rule composition.

This package provides a small set of composable primitives:

- **Result**: ``Ok``/``Err`` success/failure container and its guards
- **Value**: atomic single-field validator
- **Schema**: object validator built from named values, with accumulating
  (``"all"``) and fail-fast (``"strict"``) modes
- **Specification**: conditional, combinable chains of business rules
- **Element metadata**: tag, structural hash and documentation shared by all
  validators, read through ``get_element_meta``

Expected failures are returned as ``Err`` results. Misuse of the API (for
example a schema field that is not a value) raises a ``Panic``.

Example:
    ```python
    from mixor_core import err, is_ok, ok, schema, spec, value

    user = schema({
        "name": value(lambda v: ok(v) if v else err("EMPTY_NAME")),
        "age": value(lambda v: ok(v) if v >= 0 else err("INVALID_AGE")),
    })

    adult = spec().rule("adult", lambda u: ok(u) if u["age"] >= 18 else err("INVALID_AGE")).build()

    is_ok(user({"name": "Ada", "age": 36}))  # True
    adult.satisfy({"name": "Ada", "age": 15})  # Err('INVALID_AGE')
    ```
"""

from mixor_core.element import ElementMeta, get_element_meta
from mixor_core.hashing import fingerprint
from mixor_core.panic import Panic, SchemaPanic, SpecificationPanic, ValuePanic
from mixor_core.result import Err, Ok, Result, err, is_err, is_ok, is_result, ok, unwrap
from mixor_core.schema import Schema, is_schema, schema
from mixor_core.specification import (
    Rule,
    SpecBuilder,
    Specification,
    is_rule,
    is_spec,
    rule,
    spec,
)
from mixor_core.value import Value, is_value, value

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Result
    "Ok",
    "Err",
    "Result",
    "ok",
    "err",
    "is_ok",
    "is_err",
    "is_result",
    "unwrap",
    # Identity
    "ElementMeta",
    "get_element_meta",
    "fingerprint",
    # Panics
    "Panic",
    "ValuePanic",
    "SchemaPanic",
    "SpecificationPanic",
    # Value
    "Value",
    "value",
    "is_value",
    # Schema
    "Schema",
    "schema",
    "is_schema",
    # Specification
    "Rule",
    "rule",
    "is_rule",
    "SpecBuilder",
    "Specification",
    "spec",
    "is_spec",
]
