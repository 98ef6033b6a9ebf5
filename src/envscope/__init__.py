"""envscope - environment-aware configuration resolution.

Resolves the active deployment environment (development, test, production,
...) and gives application code one object to query:
- names: active environment name from OS variable, process setting or
  container entry, with a default fallback
- properties: ``<env>.properties`` layered over ``environment.properties``
- overrides: process settings that replace, never add, property values
- resources: per-environment resource directories with a default fallback
- binding: declarative ``Property`` markers for injection layers
"""

__version__ = "1.0.0"

from envscope.binding import Property, bind_properties, resolve_binding
from envscope.config import EnvLoader, EnvscopeSettings
from envscope.environment import MISSING, Environment
from envscope.exceptions import (
    ConfigurationError,
    EnvscopeError,
    MissingKeyError,
    PropertiesParseError,
    ResourceNotFoundError,
    ValidationError,
)
from envscope.holder import EnvironmentHolder, get_environment, reset_environment
from envscope.logger import Logger, StructuredLogger, create_logger, get_logger
from envscope.names import (
    DEFAULT_ENVIRONMENT,
    DEVELOPMENT,
    PRODUCTION,
    TEST,
    EnvironmentName,
    EnvironmentNameResolver,
    NameSources,
)
from envscope.overrides import apply_overrides
from envscope.properties import PropertiesLoader, PropertySource, parse_properties
from envscope.resources import ResourceLocation, ResourceResolver, ResourceScope

__all__ = [
    "__version__",
    # Facade
    "Environment",
    "EnvironmentHolder",
    "get_environment",
    "reset_environment",
    "MISSING",
    # Names
    "EnvironmentName",
    "EnvironmentNameResolver",
    "NameSources",
    "DEVELOPMENT",
    "TEST",
    "PRODUCTION",
    "DEFAULT_ENVIRONMENT",
    # Properties
    "PropertiesLoader",
    "PropertySource",
    "parse_properties",
    "apply_overrides",
    # Resources
    "ResourceResolver",
    "ResourceLocation",
    "ResourceScope",
    # Binding
    "Property",
    "resolve_binding",
    "bind_properties",
    # Config
    "EnvscopeSettings",
    "EnvLoader",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "EnvscopeError",
    "MissingKeyError",
    "ResourceNotFoundError",
    "PropertiesParseError",
    "ConfigurationError",
    "ValidationError",
]
