"""Active environment name resolution.

The environment name comes from one of three sources, highest first:

1. an OS environment variable (``ENVSCOPE_ENV`` by default)
2. a process setting (``envscope.environment``)
3. a hosting-container configuration entry (``envscope.environment``)

When none of them holds a non-blank value the default name is used.
"""

import os
import threading
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from envscope.exceptions import ValidationError

DEVELOPMENT = "DEVELOPMENT"
TEST = "TEST"
PRODUCTION = "PRODUCTION"

WELL_KNOWN_NAMES = frozenset({DEVELOPMENT, TEST, PRODUCTION})
DEFAULT_ENVIRONMENT = DEVELOPMENT

SOURCE_OS = "os"
SOURCE_PROCESS = "process"
SOURCE_CONTAINER = "container"
SOURCE_DEFAULT = "default"


class EnvironmentName(str):
    """Upper-cased, immutable environment name.

    The name doubles as a file and directory name, so it must be non-blank
    and a single path component.
    """

    def __new__(cls, value: str) -> "EnvironmentName":
        normalized = value.strip()
        if not normalized:
            raise ValidationError(
                "INVALID_ENVIRONMENT_NAME",
                "Environment name must not be empty",
                details={"name": value},
            )
        if "/" in normalized or "\\" in normalized or normalized == "." or ".." in normalized:
            raise ValidationError(
                "INVALID_ENVIRONMENT_NAME",
                "Environment name must be a single path component",
                details={"name": value},
            )
        return super().__new__(cls, normalized.upper())

    @property
    def directory(self) -> str:
        """Lower-case form used for file and directory names."""
        return self.lower()

    def matches(self, other: str) -> bool:
        return self == other.strip().upper()


@dataclass(frozen=True)
class NameSources:
    """The three candidate sources and the key looked up in each."""

    os_environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    process_settings: Mapping[str, str] = field(default_factory=dict)
    container_config: Mapping[str, str] = field(default_factory=dict)
    env_var: str = "ENVSCOPE_ENV"
    setting_key: str = "envscope.environment"
    container_key: str = "envscope.environment"

    def candidates(self) -> Tuple[Tuple[str, Optional[str]], ...]:
        """(source, raw value) pairs in precedence order."""
        return (
            (SOURCE_OS, self.os_environ.get(self.env_var)),
            (SOURCE_PROCESS, self.process_settings.get(self.setting_key)),
            (SOURCE_CONTAINER, self.container_config.get(self.container_key)),
        )


class EnvironmentNameResolver:
    """Determine the active environment name once and remember it."""

    def __init__(self, sources: Optional[NameSources] = None, default: str = DEFAULT_ENVIRONMENT):
        self._sources = sources or NameSources()
        self._default = EnvironmentName(default)
        self._lock = threading.Lock()
        self._resolved: Optional[Tuple[EnvironmentName, str]] = None

    def resolve(self) -> EnvironmentName:
        """Return the active environment name.

        The first call fixes the result; later calls return the same object
        even if the underlying sources change.
        """
        return self._resolve()[0]

    @property
    def source(self) -> str:
        """Which source supplied the name ("os", "process", "container" or "default")."""
        return self._resolve()[1]

    def _resolve(self) -> Tuple[EnvironmentName, str]:
        with self._lock:
            if self._resolved is None:
                self._resolved = self._pick()
            return self._resolved

    def _pick(self) -> Tuple[EnvironmentName, str]:
        for source, value in self._sources.candidates():
            # Blank values fall through to the next source
            if value is not None and value.strip():
                return EnvironmentName(value), source
        return self._default, SOURCE_DEFAULT


__all__ = [
    "DEVELOPMENT",
    "TEST",
    "PRODUCTION",
    "WELL_KNOWN_NAMES",
    "DEFAULT_ENVIRONMENT",
    "EnvironmentName",
    "NameSources",
    "EnvironmentNameResolver",
]
