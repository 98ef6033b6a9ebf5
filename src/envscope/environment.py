"""The Environment facade.

Application code asks one object for everything: the active environment
name, property values and environment-scoped resources.

Example:
    from envscope import Environment

    env = Environment.build()
    if env.is_production():
        pool = env.get_int("db.pool.size")
    smtp = env.get_or_default("mail.host", "localhost")
    cfg = env.get_resource("/hibernate.cfg.xml")
"""

import os
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, TypeVar, Union

from envscope.config import EnvLoader, EnvscopeSettings
from envscope.exceptions import MissingKeyError, ValidationError
from envscope.logger import Logger, get_logger
from envscope.names import (
    DEVELOPMENT,
    PRODUCTION,
    SOURCE_DEFAULT,
    TEST,
    EnvironmentName,
    EnvironmentNameResolver,
    NameSources,
)
from envscope.overrides import apply_overrides
from envscope.properties import PropertiesLoader
from envscope.resources import ResourceLocation, ResourceResolver

T = TypeVar("T")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Sentinel for "no default given"; None is a legitimate default
MISSING: Any = _Missing()

_TRUE_VALUES = frozenset({"true", "yes", "on", "1"})
_FALSE_VALUES = frozenset({"false", "no", "off", "0"})


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(value)


class Environment:
    """Resolved environment name, properties and resources.

    Built once per process (see ``EnvironmentHolder``) and read-only
    afterwards, so instances can be shared between threads freely.
    """

    def __init__(
        self,
        name: str,
        properties: Mapping[str, str],
        resources: Optional[ResourceResolver] = None,
        source: str = SOURCE_DEFAULT,
    ):
        self._name = EnvironmentName(name)
        self._properties: Mapping[str, str] = MappingProxyType(dict(properties))
        self._resources = resources or ResourceResolver(self._name, [])
        self._source = source

    @classmethod
    def build(
        cls,
        settings: Optional[EnvscopeSettings] = None,
        os_environ: Optional[Mapping[str, str]] = None,
        process_settings: Optional[Mapping[str, str]] = None,
        container_config: Optional[Mapping[str, str]] = None,
        logger: Optional[Logger] = None,
    ) -> "Environment":
        """Run the full load sequence.

        Resolves the name, loads both property layers, applies process
        overrides and prepares the resource resolver.

        Args:
            settings: Where to look (default: ``EnvscopeSettings.from_env()``)
            os_environ: OS variables (default: ``os.environ``)
            process_settings: Explicit process settings, layered over the
                dotenv file named by ``settings.env_file``
            container_config: Hosting-container configuration entries
            logger: Logger for the load sequence

        Raises:
            PropertiesParseError: If a properties file is malformed
            ConfigurationError: If settings are invalid or a file is unreadable
            ValidationError: If a source names an invalid environment
        """
        logger = logger or get_logger()
        settings = settings or EnvscopeSettings.from_env()
        process = EnvLoader(settings.env_file).load(process_settings)

        resolver = EnvironmentNameResolver(
            NameSources(
                os_environ=os.environ if os_environ is None else os_environ,
                process_settings=process,
                container_config=container_config or {},
                env_var=settings.env_var,
                setting_key=settings.setting_key,
                container_key=settings.container_key,
            ),
            default=settings.default_environment,
        )
        name = resolver.resolve()
        logger.info("Environment resolved", environment=str(name), source=resolver.source)

        loader = PropertiesLoader(settings.config_path, settings.common_name, logger=logger)
        base = loader.load(name).merged()
        properties = apply_overrides(base, process, logger=logger)

        resources = ResourceResolver(
            name,
            settings.resource_path or settings.config_path,
            cache=settings.cache_resources,
            logger=logger,
        )
        return cls(name, properties, resources, source=resolver.source)

    @property
    def name(self) -> EnvironmentName:
        return self._name

    @property
    def source(self) -> str:
        """Which name source selected this environment."""
        return self._source

    # -- name predicates ---------------------------------------------------

    def is_environment(self, name: str) -> bool:
        """Case-insensitive comparison with the active name."""
        return self._name.matches(name)

    def is_development(self) -> bool:
        return self.is_environment(DEVELOPMENT)

    def is_test(self) -> bool:
        return self.is_environment(TEST)

    def is_production(self) -> bool:
        return self.is_environment(PRODUCTION)

    # -- properties --------------------------------------------------------

    def has(self, key: str) -> bool:
        return key in self._properties

    def get(self, key: str) -> str:
        """Return the value of ``key``.

        Raises:
            MissingKeyError: If no layer defines ``key``
        """
        try:
            return self._properties[key]
        except KeyError:
            raise MissingKeyError(key, environment=self._name) from None

    def get_or_default(self, key: str, default: T) -> Union[str, T]:
        """Return the value of ``key``, or ``default`` when it is undefined."""
        return self._properties.get(key, default)

    def get_int(self, key: str, default: Any = MISSING) -> int:
        return self._convert(key, default, int, "integer")

    def get_float(self, key: str, default: Any = MISSING) -> float:
        return self._convert(key, default, float, "number")

    def get_bool(self, key: str, default: Any = MISSING) -> bool:
        """Accepts true/false, yes/no, on/off and 1/0 in any case."""
        return self._convert(key, default, _parse_bool, "boolean")

    def get_list(self, key: str, default: Any = MISSING, sep: str = ",") -> List[str]:
        """Split a value on ``sep``, dropping blank items."""
        return self._convert(
            key,
            default,
            lambda raw: [item.strip() for item in raw.split(sep) if item.strip()],
            "list",
        )

    def supports(self, feature: str) -> bool:
        """True when ``feature`` is set to a true value; unset means False."""
        return self.get_or_default(feature, "false").strip().lower() in _TRUE_VALUES

    def _convert(self, key: str, default: Any, convert: Callable[[str], T], kind: str) -> T:
        if key not in self._properties:
            if default is MISSING:
                raise MissingKeyError(key, environment=self._name)
            return default
        raw = self._properties[key]
        try:
            return convert(raw.strip())
        except ValueError as e:
            raise ValidationError(
                "INVALID_PROPERTY_VALUE",
                f"Property '{key}' is not a valid {kind}: {raw!r}",
                details={"key": key, "environment": str(self._name)},
            ) from e

    def keys(self) -> List[str]:
        return sorted(self._properties)

    def as_dict(self) -> Dict[str, str]:
        """Copy of the final property mapping."""
        return dict(self._properties)

    # -- resources ---------------------------------------------------------

    def get_resource(self, logical_path: str) -> ResourceLocation:
        """Resolve a resource, preferring the environment directory.

        Raises:
            ResourceNotFoundError: If the resource exists in neither scope
        """
        return self._resources.resolve(logical_path)

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __repr__(self) -> str:
        return f"Environment(name={str(self._name)!r}, source={self._source!r}, keys={len(self._properties)})"


__all__ = ["Environment", "MISSING"]
