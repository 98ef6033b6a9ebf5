"""Base exception classes for envscope.

Every envscope exception carries structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (key, file, line, environment, ...)
"""

from typing import Any, Dict, Optional


class EnvscopeError(Exception):
    """Base exception for all envscope errors.

    Attributes:
        code: Machine-readable error code (e.g., "MISSING_KEY")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(EnvscopeError):
    """Input failed validation (bad logical path, unconvertible value)."""

    pass


class ConfigurationError(EnvscopeError):
    """Configuration is invalid or incomplete.

    Raised during the one-time load; an environment that failed to build
    must not be used.
    """

    pass


class MissingKeyError(EnvscopeError, KeyError):
    """A property key has no value after all layers were applied.

    Also a ``KeyError`` so mapping-style callers can catch it naturally.
    """

    def __init__(self, key: str, environment: Optional[str] = None):
        details: Dict[str, Any] = {"key": key}
        if environment:
            details["environment"] = environment
        super().__init__(
            code="MISSING_KEY",
            message=f"Property '{key}' is not defined",
            details=details,
        )
        self.key = key

    # KeyError.__str__ would repr() the message
    __str__ = EnvscopeError.__str__


class ResourceNotFoundError(EnvscopeError):
    """Neither the environment-scoped nor the default resource exists."""

    def __init__(
        self,
        logical_path: str,
        environment: Optional[str] = None,
        searched: Optional[list] = None,
    ):
        details: Dict[str, Any] = {"logical_path": logical_path}
        if environment:
            details["environment"] = environment
        if searched:
            details["searched"] = [str(p) for p in searched]
        super().__init__(
            code="RESOURCE_NOT_FOUND",
            message=f"Resource '{logical_path}' not found",
            details=details,
        )
        self.logical_path = logical_path


class PropertiesParseError(ConfigurationError):
    """A properties file is malformed.

    Fatal at startup: the environment cannot be trusted after this.
    """

    def __init__(self, message: str, source: Optional[str] = None, line: Optional[int] = None):
        details: Dict[str, Any] = {}
        if source:
            details["source"] = source
        if line is not None:
            details["line"] = line
        super().__init__(code="PROPERTIES_PARSE_ERROR", message=message, details=details)
        self.source = source
        self.line = line
