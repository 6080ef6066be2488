"""Config provider protocol and implementations. Extend by adding new providers."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Load .env so TEXTBENCH_* overrides can live next to the project
try:
    from dotenv import load_dotenv
    _project_root = Path(__file__).resolve().parent.parent.parent.parent
    load_dotenv(_project_root / ".env")
except ImportError:
    pass

CONFIG_PATH_ENV = "TEXTBENCH_CONFIG"

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "config.yaml"


class ConfigProvider:
    """Protocol for config sources. Implement to add env, remote, etc."""

    def load(self) -> Dict[str, Any]:
        """Return the full config dict."""
        raise NotImplementedError


class YamlConfigProvider(ConfigProvider):
    """Load config from a YAML file. Path: explicit, then $TEXTBENCH_CONFIG, then src/config/config.yaml."""

    def __init__(self, path: Optional[Path] = None):
        env_path = os.environ.get(CONFIG_PATH_ENV)
        self.path = Path(path or env_path or DEFAULT_CONFIG_PATH)

    def load(self) -> Dict[str, Any]:
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {self.path}")
        return data


def get_config(provider: Optional[ConfigProvider] = None) -> Dict[str, Any]:
    """Get config from the given provider, or default YAML."""
    if provider is None:
        provider = YamlConfigProvider()
    return provider.load()


def get_section(cfg: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    """Walk nested mapping keys; missing or null sections come back as {}."""
    node: Any = cfg
    for key in keys:
        if not isinstance(node, dict):
            return {}
        node = node.get(key)
    return node if isinstance(node, dict) else {}
