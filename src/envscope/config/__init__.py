"""Configuration for envscope itself.

Example:
    from envscope.config import EnvscopeSettings, EnvLoader

    settings = EnvscopeSettings.from_env()
    process_settings = EnvLoader(settings.env_file).load({"db.pool": "20"})
"""

from envscope.config.env_loader import EnvLoader
from envscope.config.settings import DEFAULT_PREFIX, EnvscopeSettings

__all__ = [
    "EnvLoader",
    "EnvscopeSettings",
    "DEFAULT_PREFIX",
]
