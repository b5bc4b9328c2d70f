"""ConfigAgent — publishes the last successfully loaded Config to readers."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from cibot.config.loader import PathLike, load
from cibot.config.schema import Config

logger = logging.getLogger(__name__)


class ConfigAgent:
    """Holds the current Config snapshot and replaces it atomically.

    ``load`` builds a brand-new Config and swaps the reference only once it
    loaded cleanly; on failure the exception propagates and readers keep
    the previous snapshot. Only one load runs at a time. When and how often
    to reload is up to the caller.
    """

    def __init__(self) -> None:
        self._load_lock = threading.Lock()
        self._lock = threading.Lock()
        self._config: Optional[Config] = None

    def load(self, main_config_path: PathLike, job_config_path: Optional[PathLike] = None) -> Config:
        with self._load_lock:
            config = load(main_config_path, job_config_path)
            self.set(config)
        logger.info("loaded config from %s", main_config_path)
        return config

    def set(self, config: Config) -> None:
        with self._lock:
            self._config = config

    def config(self) -> Optional[Config]:
        """The last published snapshot, or None before the first successful load."""
        with self._lock:
            return self._config
