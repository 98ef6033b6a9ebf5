"""Shared fixtures for envscope tests."""

import textwrap
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from envscope import Environment, EnvscopeSettings
from envscope.logger import Logger


class RecordingLogger(Logger):
    """Logger that keeps (level, message, fields) tuples for assertions."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def _record(self, level: str, message: str, **kwargs: Any) -> None:
        self.records.append((level, message, kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._record("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._record("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._record("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._record("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._record("CRITICAL", message, **kwargs)

    def get_session_id(self) -> str:
        return "recording"

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [m for lvl, m, _ in self.records if level is None or lvl == level]


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Empty properties/resource directory."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def write_properties(config_dir: Path) -> Callable[[str, str], Path]:
    """Write ``<name>.properties`` into the config directory."""

    def _write(name: str, content: str) -> Path:
        path = config_dir / f"{name}.properties"
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_resource(config_dir: Path) -> Callable[[str, str], Path]:
    """Write a resource file relative to the config directory."""

    def _write(relative: str, content: str = "") -> Path:
        path = config_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def build_environment(config_dir: Path, recording_logger: RecordingLogger) -> Callable[..., Environment]:
    """Build an Environment from injected sources, never the real OS environment."""

    def _build(
        os_environ: Optional[Dict[str, str]] = None,
        process_settings: Optional[Dict[str, str]] = None,
        container_config: Optional[Dict[str, str]] = None,
        **settings_kwargs: Any,
    ) -> Environment:
        settings_kwargs.setdefault("config_path", [config_dir])
        return Environment.build(
            settings=EnvscopeSettings(**settings_kwargs),
            os_environ=os_environ or {},
            process_settings=process_settings,
            container_config=container_config,
            logger=recording_logger,
        )

    return _build
