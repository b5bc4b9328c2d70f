"""PluginAgent — loads, validates and publishes the plugin Configuration."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Container, Optional

from cibot.config.loader import PathLike, decode_file
from cibot.plugins.schema import Configuration
from cibot.plugins.validation import validate

logger = logging.getLogger(__name__)


def load_plugin_config(path: PathLike) -> Configuration:
    """Parse a plugin config file without defaulting or validating it.

    Raises ``cibot.config.ConfigError`` if the file cannot be read or parsed.
    """
    return decode_file(Configuration, Path(path))


class PluginAgent:
    """Holds the current plugin Configuration and replaces it atomically.

    A new Configuration is parsed and fully validated against *registry*
    before it is published; readers never see one that failed validation.
    """

    def __init__(self, registry: Container[str]) -> None:
        self._registry = registry
        self._load_lock = threading.Lock()
        self._lock = threading.Lock()
        self._configuration: Optional[Configuration] = None

    def load(self, path: PathLike) -> Configuration:
        """Load and validate *path*, then publish it.

        Raises ConfigError or PluginConfigError; the previous snapshot stays
        in place when it does.
        """
        with self._load_lock:
            configuration = load_plugin_config(path)
            validate(configuration, self._registry)
            self.set(configuration)
        logger.info(
            "loaded plugin config from %s (%d scopes)", path, len(configuration.plugins)
        )
        return configuration

    def set(self, configuration: Configuration) -> None:
        with self._lock:
            self._configuration = configuration

    def config(self) -> Optional[Configuration]:
        with self._lock:
            return self._configuration
