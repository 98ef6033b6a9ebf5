"""Environment-scoped resource resolution.

A logical path such as ``/hibernate.cfg.xml`` is looked up first under a
directory named after the active environment (``production/hibernate.cfg.xml``)
and then directly under the resource roots. Projects that never split
resources per environment keep working unchanged.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import IO, Any, Dict, List, Optional, Sequence, Tuple

from envscope.exceptions import ResourceNotFoundError, ValidationError
from envscope.logger import Logger, get_logger
from envscope.names import EnvironmentName


class ResourceScope(str, Enum):
    """Which lookup satisfied a resource."""

    ENVIRONMENT = "environment"
    DEFAULT = "default"


@dataclass(frozen=True)
class ResourceLocation:
    """A resolved resource.

    Attributes:
        logical_path: The path as requested
        path: Concrete file to open
        scope: Whether the environment directory or the default root matched
    """

    logical_path: str
    path: Path
    scope: ResourceScope

    @property
    def is_environment_scoped(self) -> bool:
        return self.scope is ResourceScope.ENVIRONMENT

    def open(self, mode: str = "r", **kwargs: Any) -> IO[Any]:
        return self.path.open(mode, **kwargs)

    def __fspath__(self) -> str:
        return str(self.path)


def _normalize(logical_path: str) -> PurePosixPath:
    relative = PurePosixPath(logical_path.strip().lstrip("/"))
    if not relative.parts or relative == PurePosixPath("."):
        raise ValidationError(
            "INVALID_RESOURCE_PATH",
            "Resource path must not be empty",
            details={"logical_path": logical_path},
        )
    if ".." in relative.parts:
        raise ValidationError(
            "INVALID_RESOURCE_PATH",
            "Resource path must stay inside the resource roots",
            details={"logical_path": logical_path},
        )
    return relative


class ResourceResolver:
    """Resolve logical resource paths for one environment.

    The environment never changes after startup, so successful lookups can
    be cached. Misses are always re-checked.
    """

    def __init__(
        self,
        environment_name: str,
        search_path: Sequence[Path],
        cache: bool = True,
        logger: Optional[Logger] = None,
    ):
        self.environment_name = EnvironmentName(environment_name)
        self.search_path = [Path(p) for p in search_path]
        self.logger = logger or get_logger()
        self._cache_enabled = cache
        self._cache: Dict[str, ResourceLocation] = {}
        self._lock = threading.Lock()

    def candidates(self, logical_path: str) -> List[Tuple[ResourceScope, Path]]:
        """Every location probed for ``logical_path``, in probe order."""
        relative = _normalize(logical_path)
        scoped = [
            (ResourceScope.ENVIRONMENT, root / self.environment_name.directory / relative)
            for root in self.search_path
        ]
        default = [(ResourceScope.DEFAULT, root / relative) for root in self.search_path]
        return scoped + default

    def resolve(self, logical_path: str) -> ResourceLocation:
        """Find ``logical_path``, preferring the environment directory.

        Raises:
            ValidationError: If the path is empty or escapes the roots
            ResourceNotFoundError: If no candidate exists
        """
        if self._cache_enabled:
            with self._lock:
                cached = self._cache.get(logical_path)
            if cached is not None:
                return cached

        probes = self.candidates(logical_path)
        for scope, path in probes:
            if path.is_file():
                location = ResourceLocation(logical_path=logical_path, path=path, scope=scope)
                self.logger.debug(
                    "Resource resolved",
                    resource=logical_path,
                    scope=scope.value,
                    path=str(path),
                )
                if self._cache_enabled:
                    with self._lock:
                        self._cache[logical_path] = location
                return location

        raise ResourceNotFoundError(
            logical_path,
            environment=self.environment_name,
            searched=[path for _, path in probes],
        )

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()


__all__ = ["ResourceScope", "ResourceLocation", "ResourceResolver"]
