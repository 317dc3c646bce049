"""Configuration registry - loads the search configuration from YAML.

Follows the same pattern as the document store:
- YAML definition in definitions/ (or SEARCHVIEW_CONFIG_PATH)
- Lazy loading with _loaded guard
- Global singleton via get_config_registry()
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from searchview.exceptions import ConfigurationError

from .schemas import SearchConfiguration

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "definitions" / "catalog.yaml"


class ConfigRegistry:
    """Registry holding the application's SearchConfiguration."""

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            env_path = os.environ.get("SEARCHVIEW_CONFIG_PATH")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        self.config_path = Path(config_path)
        self._configuration: Optional[SearchConfiguration] = None
        self._loaded = False

    def load(self) -> None:
        """Load the configuration from YAML."""
        if self._loaded:
            return

        if not self.config_path.exists():
            raise FileNotFoundError(f"Search configuration not found: {self.config_path}")

        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        try:
            self._configuration = SearchConfiguration.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid search configuration in {self.config_path}: {e}") from e

        self._loaded = True
        logger.info(
            f"Loaded search configuration: {len(self._configuration.index_fields)} index fields, "
            f"{len(self._configuration.show_fields)} show fields"
        )

    def get_configuration(self) -> SearchConfiguration:
        """Get the loaded search configuration."""
        self.load()
        return self._configuration

    def get_stats(self) -> dict[str, int]:
        configuration = self.get_configuration()
        return {
            "index_fields": len(configuration.index_fields),
            "show_fields": len(configuration.show_fields),
            "views": len(configuration.views),
        }

    def reload(self) -> None:
        """Force reload the configuration."""
        self._loaded = False
        self._configuration = None
        self.load()


# Global registry instance
_registry: Optional[ConfigRegistry] = None


def get_config_registry() -> ConfigRegistry:
    """Get the global configuration registry instance."""
    global _registry
    if _registry is None:
        _registry = ConfigRegistry()
        _registry.load()
    return _registry
