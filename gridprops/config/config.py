# gridprops/config/config.py

import copy
import logging
import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from . import defaults

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager with YAML override support."""

    def __init__(self, config_file: Optional[Path] = None):
        self.settings = self.load_defaults()

        if config_file is not None:
            # An explicit file is always honoured, test mode or not
            self._load_yaml_config(Path(config_file))
        elif self._is_test_mode():
            logger.debug("Test mode detected - ignoring discovered config files")
        else:
            discovered = self._find_config_file()
            if discovered is not None:
                try:
                    self._load_yaml_config(discovered)
                except (OSError, yaml.YAMLError) as e:
                    logger.warning(f"Config file loading failed: {e} - using defaults")
            else:
                logger.debug("No gridprops config found - using defaults only")

    def _find_config_file(self) -> Optional[Path]:
        """Find a config file with multiple fallback locations."""
        env_path = os.environ.get('GRIDPROPS_CONFIG')
        if env_path:
            return Path(env_path)

        project_root = Path(__file__).parent.parent.parent

        potential_locations = [
            project_root / 'gridprops.yml',
            Path.cwd() / 'gridprops.yml',
            Path.home() / '.gridprops' / 'config.yml',
        ]

        for location in potential_locations:
            if location.exists() and location.is_file():
                return location

        return None

    def _is_test_mode(self) -> bool:
        """Detect if we're running under pytest or a forced test mode."""
        return (
            os.environ.get('FORCE_TEST_MODE', 'false').lower() == 'true' or
            os.environ.get('PYTEST_CURRENT_TEST') is not None
        )

    def load_defaults(self) -> Dict[str, Any]:
        """Load default configuration settings."""
        return {
            'paths': defaults.PATHS.copy(),
            'logging': defaults.LOGGING.copy(),
            'properties': copy.deepcopy(defaults.PROPERTIES),
            'loading': copy.deepcopy(defaults.LOADING),
            'aquifer': copy.deepcopy(defaults.AQUIFER),
        }

    def _load_yaml_config(self, config_file: Path):
        """Load and merge configuration from a YAML file."""
        with open(config_file, 'r') as file:
            yaml_config = yaml.safe_load(file)
        if yaml_config:
            self._deep_merge(self.settings, yaml_config)
        logger.info(f"Loaded configuration from {config_file}")

    def _deep_merge(self, base: dict, override: dict):
        """Deep merge override into base dictionary."""
        for key, value in override.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation."""
        keys = key.split(".")
        value = self.settings

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def paths(self) -> Dict[str, Any]:
        return self.settings.get('paths', {})

    @property
    def logging(self) -> Dict[str, Any]:
        return self.settings.get('logging', {})

    @property
    def properties(self) -> Dict[str, Any]:
        return self.settings.get('properties', {})

    @property
    def loading(self) -> Dict[str, Any]:
        return self.settings.get('loading', {})

    @property
    def aquifer(self) -> Dict[str, Any]:
        return self.settings.get('aquifer', {})


# Global config instance
config = Config()
