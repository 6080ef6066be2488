"""Extendible config loading. Add new providers (env, vault, etc.) by implementing ConfigProvider."""

from commons.config.loader import (
    CONFIG_PATH_ENV,
    ConfigProvider,
    YamlConfigProvider,
    get_config,
    get_section,
)

_config_instance = None


def load_config(path=None, reload: bool = False):
    """Load config once; optional path for tests or overrides (reload=True replaces the cached copy)."""
    global _config_instance, config
    if _config_instance is None or reload:
        _config_instance = YamlConfigProvider(path=path).load()
        config = _config_instance
    return _config_instance


try:
    config = load_config()
except FileNotFoundError:
    # Installed without the source tree: fall back to built-in defaults
    config = {}

__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigProvider",
    "YamlConfigProvider",
    "get_config",
    "get_section",
    "load_config",
    "config",
]
