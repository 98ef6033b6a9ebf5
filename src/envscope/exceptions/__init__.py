"""Exceptions raised by envscope.

All exceptions include structured error information (code, message, details).

Usage:
    from envscope.exceptions import (
        EnvscopeError,
        MissingKeyError,
        ResourceNotFoundError,
        PropertiesParseError,
    )

Per-call failures (MissingKeyError, ResourceNotFoundError) are recoverable;
PropertiesParseError and ConfigurationError abort initialization.
"""

from envscope.exceptions.base import (
    ConfigurationError,
    EnvscopeError,
    MissingKeyError,
    PropertiesParseError,
    ResourceNotFoundError,
    ValidationError,
)

__all__ = [
    "EnvscopeError",
    "ValidationError",
    "ConfigurationError",
    "MissingKeyError",
    "ResourceNotFoundError",
    "PropertiesParseError",
]
