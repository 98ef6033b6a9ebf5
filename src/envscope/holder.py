"""One-time, thread-safe construction of the Environment.

Many threads may ask for the environment at startup; exactly one of them
runs the load sequence and all of them get the same instance. A failed
load is remembered and raised again to every later caller instead of
being retried.
"""

import threading
from types import TracebackType
from typing import Callable, Optional

from envscope.environment import Environment


class EnvironmentHolder:
    """Lazily build an Environment at most once.

    Example:
        holder = EnvironmentHolder(lambda: Environment.build(settings))
        env = holder.get()
    """

    def __init__(self, factory: Optional[Callable[[], Environment]] = None):
        self._factory = factory or Environment.build
        self._lock = threading.Lock()
        self._environment: Optional[Environment] = None
        self._error: Optional[BaseException] = None
        self._traceback: Optional[TracebackType] = None

    @property
    def initialized(self) -> bool:
        return self._environment is not None

    def get(self) -> Environment:
        """Return the environment, building it on first use.

        Raises:
            Whatever the first build raised, on this and every later call
        """
        environment = self._environment
        if environment is not None:
            return environment

        with self._lock:
            if self._environment is None:
                if self._error is not None:
                    # Restore the first traceback so repeated raises do not grow it
                    raise self._error.with_traceback(self._traceback)
                try:
                    self._environment = self._factory()
                except Exception as e:
                    self._error = e
                    self._traceback = e.__traceback__
                    raise
            return self._environment

    def reset(self) -> None:
        """Forget the built environment or recorded failure (for tests)."""
        with self._lock:
            self._environment = None
            self._error = None
            self._traceback = None


_default_holder = EnvironmentHolder()


def get_environment(reload: bool = False) -> Environment:
    """Get the process-wide environment built from ``ENVSCOPE_*`` settings

    Args:
        reload: If True, discard the current instance and build again

    Returns:
        The shared Environment instance
    """
    if reload:
        _default_holder.reset()
    return _default_holder.get()


def reset_environment() -> None:
    """Reset the process-wide environment (primarily for testing)"""
    _default_holder.reset()


__all__ = ["EnvironmentHolder", "get_environment", "reset_environment"]
