"""Dataclass-based settings for envscope.

Describes where properties and resources live and which keys name the
active environment. Every field can be set from ``{prefix}_*`` variables.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from envscope.exceptions import ConfigurationError, ValidationError
from envscope.names import EnvironmentName

DEFAULT_PREFIX = "ENVSCOPE"


def _split_path(value: str) -> List[Path]:
    return [Path(part) for part in value.split(os.pathsep) if part.strip()]


@dataclass
class EnvscopeSettings:
    """Locations and keys used to build an Environment

    Attributes:
        config_path: Directories searched for ``<name>.properties`` and the
            common file, in order (first match wins)
        resource_path: Directories searched for resources (defaults to
            config_path)
        default_environment: Name used when no source names an environment
        env_var: OS environment variable naming the environment
        setting_key: Process setting naming the environment
        container_key: Hosting-container entry naming the environment
        common_name: Base name of the shared fallback properties file
        env_file: Optional dotenv file providing process settings
        cache_resources: Cache successful resource resolutions
    """

    config_path: List[Path] = field(default_factory=lambda: [Path("config")])
    resource_path: Optional[List[Path]] = None
    default_environment: str = "DEVELOPMENT"
    env_var: str = "ENVSCOPE_ENV"
    setting_key: str = "envscope.environment"
    container_key: str = "envscope.environment"
    common_name: str = "environment"
    env_file: Optional[Path] = None
    cache_resources: bool = True

    def __post_init__(self) -> None:
        self.config_path = [Path(p) for p in self.config_path]
        if self.resource_path is None:
            self.resource_path = list(self.config_path)
        else:
            self.resource_path = [Path(p) for p in self.resource_path]
        if isinstance(self.env_file, str):
            self.env_file = Path(self.env_file)
        self.default_environment = self.default_environment.strip().upper()
        self.validate()

    def validate(self) -> None:
        """Reject settings that cannot produce a usable environment

        Raises:
            ConfigurationError: If a required value is empty
        """
        if not self.default_environment:
            raise ConfigurationError(
                "INVALID_SETTINGS", "Default environment name must not be empty"
            )
        try:
            EnvironmentName(self.default_environment)
        except ValidationError as e:
            raise ConfigurationError(
                "INVALID_SETTINGS", e.message, details={"field": "default_environment"}
            ) from e
        if not self.config_path:
            raise ConfigurationError(
                "INVALID_SETTINGS", "At least one properties directory is required"
            )
        for attr in ("env_var", "setting_key", "container_key", "common_name"):
            if not getattr(self, attr):
                raise ConfigurationError(
                    "INVALID_SETTINGS", f"{attr} must not be empty", details={"field": attr}
                )

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
        config_path: Optional[Sequence[Path]] = None,
    ) -> "EnvscopeSettings":
        """Load settings from environment variables

        Args:
            prefix: Environment variable prefix (default: ENVSCOPE)
            environ: Mapping to read instead of ``os.environ``
            config_path: Explicit properties directories (wins over the variable)

        Environment variables:
            {prefix}_CONFIG_PATH: os.pathsep separated properties directories
            {prefix}_RESOURCE_PATH: os.pathsep separated resource directories
            {prefix}_DEFAULT_ENV: Fallback environment name
            {prefix}_ENV_FILE: dotenv file with process settings
            {prefix}_CACHE_RESOURCES: "false" disables the resource cache
            {prefix}_ENV_VAR: OS variable naming the environment (default: {prefix}_ENV)
            {prefix}_SETTING_KEY: Process setting naming the environment
            {prefix}_CONTAINER_KEY: Hosting-container entry naming the environment
            {prefix}_COMMON_NAME: Base name of the shared properties file
        """
        env = os.environ if environ is None else environ

        if config_path is not None:
            paths = [Path(p) for p in config_path]
        elif env.get(f"{prefix}_CONFIG_PATH"):
            paths = _split_path(env[f"{prefix}_CONFIG_PATH"])
        else:
            paths = [Path("config")]

        resource_value = env.get(f"{prefix}_RESOURCE_PATH")
        env_file = env.get(f"{prefix}_ENV_FILE")

        return cls(
            config_path=paths,
            resource_path=_split_path(resource_value) if resource_value else None,
            default_environment=env.get(f"{prefix}_DEFAULT_ENV", "DEVELOPMENT"),
            env_file=Path(env_file) if env_file else None,
            cache_resources=env.get(f"{prefix}_CACHE_RESOURCES", "true").lower() != "false",
            env_var=env.get(f"{prefix}_ENV_VAR", f"{prefix}_ENV"),
            setting_key=env.get(f"{prefix}_SETTING_KEY", "envscope.environment"),
            container_key=env.get(f"{prefix}_CONTAINER_KEY", "envscope.environment"),
            common_name=env.get(f"{prefix}_COMMON_NAME", "environment"),
        )


__all__ = ["EnvscopeSettings", "DEFAULT_PREFIX"]
