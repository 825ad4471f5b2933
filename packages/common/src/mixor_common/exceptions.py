"""Common exception hierarchy for all mixor packages.

Every exception raised by a mixor package derives from ``MixorError``.
Exceptions carry an optional context dictionary with structured data about
the failure, which keeps messages short while still making misuse easy to
diagnose.

Note that expected validation failures are never raised: they travel as
``Err`` results. The exceptions here signal defects in the calling code or
in the configuration handed to a factory.

Example:
    ```python
    from mixor_common.exceptions import ConfigurationError, MixorError

    try:
        factory.create(**config)
    except MixorError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class MixorError(Exception):
    """Base exception for all mixor packages.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, kinds, etc.)
        details: Alternative to context (takes precedence when both are given)

    Example:
        ```python
        error = MixorError(
            "Schema construction failed",
            context={"field": "email"}
        )
        str(error)
        # 'Schema construction failed'
        error.context
        # {'field': 'email'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ConfigurationError(MixorError):
    """Raised when configuration is invalid or an API is misused.

    Common scenarios include:
    - A factory configuration missing required keys
    - A validator composed from objects that are not validators
    - A builder used after it was finalized

    Example:
        ```python
        raise ConfigurationError(
            "Field configuration missing 'name'",
            context={"index": 2}
        )
        ```
    """

    pass


class NotFoundError(MixorError):
    """Raised when a named item is not registered.

    Example:
        ```python
        raise NotFoundError(
            "Unknown value type: 'uuid'",
            context={"type": "uuid", "available": ["length", "range"]}
        )
        ```
    """

    pass


class SerializationError(MixorError):
    """Raised when an object cannot be reduced to plain data.

    Example:
        ```python
        raise SerializationError(
            "Reference cycle detected",
            context={"type": "dict"}
        )
        ```
    """

    pass


__all__ = [
    "MixorError",
    "ConfigurationError",
    "NotFoundError",
    "SerializationError",
]
