"""Load the main config file and merge job-config fragments into it.

The job-config path may be a single YAML file or a directory tree. When
walking a tree:

- entries whose name starts with ``..`` are skipped, and such directories
  are never descended into (Kubernetes volume mounts keep their
  ``..data``/``..<timestamp>`` bookkeeping there);
- only ``.yaml``/``.yml`` files are read;
- basenames must be unique across the whole tree, since the config-updater
  uses the basename as the ConfigMap key;
- entries that cannot be listed are logged and skipped.
"""

from __future__ import annotations

import json
import logging
import os
import stat
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Set, Type, TypeVar, Union

import yaml

from cibot.config.errors import ConfigError, ConfigFaultError
from cibot.config.jobs import merge_job_config
from cibot.config.schema import DEFAULT_NAMESPACE, Config, JobConfig
from cibot.decode import DecodeError, build

logger = logging.getLogger(__name__)

JOB_CONFIG_EXTENSIONS = (".yaml", ".yml")

T = TypeVar("T")
PathLike = Union[str, os.PathLike]


def read_document(path: Path) -> Dict[str, Any]:
    """Parse a YAML (or ``.json``) file into a mapping. Empty files give ``{}``."""
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"error reading {path}: {exc}") from exc
    except (yaml.YAMLError, ValueError) as exc:
        raise ConfigError(f"error unmarshaling {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"error unmarshaling {path}: expected a mapping, got {type(data).__name__}"
        )
    return data


def decode_file(cls: Type[T], path: Path) -> T:
    """Read *path* and build dataclass *cls* from it."""
    data = read_document(path)
    try:
        return build(cls, data)
    except DecodeError as exc:
        raise ConfigError(f"error unmarshaling {path}: {exc}") from exc


def iter_job_config_files(directory: Path) -> Iterator[Path]:
    """Yield job-config files under *directory* in lexical walk order."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        logger.error("walking path %s: %s", directory, exc)
        return

    for entry in entries:
        if entry.name.startswith(".."):
            continue
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            logger.error("walking path %s: %s", entry.path, exc)
            continue
        if is_dir:
            yield from iter_job_config_files(Path(entry.path))
        elif os.path.splitext(entry.name)[1] in JOB_CONFIG_EXTENSIONS:
            yield Path(entry.path)


def _apply_defaults(config: Config) -> None:
    if not config.prowjob_namespace:
        config.prowjob_namespace = DEFAULT_NAMESPACE
    if not config.pod_namespace:
        config.pod_namespace = DEFAULT_NAMESPACE


def _is_dir(path: Path, what: str) -> bool:
    try:
        st = path.stat()
    except OSError as exc:
        raise ConfigError(f"cannot read {what} {path}: {exc}") from exc
    return stat.S_ISDIR(st.st_mode)


def _load_config(main_config: Path, job_config: Optional[Path]) -> Config:
    if _is_dir(main_config, "main config"):
        raise ConfigError(f"main config {main_config} is a directory, expected a file")

    config = decode_file(Config, main_config)
    logger.debug("loaded main config %s (%d presets)", main_config, len(config.presets))

    if job_config is None:
        return config

    if not _is_dir(job_config, "job config"):
        merge_job_config(config, decode_file(JobConfig, job_config))
        return config

    seen: Set[str] = set()
    for path in iter_job_config_files(job_config):
        if path.name in seen:
            raise ConfigError(f"duplicated basename is not allowed: {path.name}")
        seen.add(path.name)
        merge_job_config(config, decode_file(JobConfig, path))
        logger.debug("merged job config %s", path)
    return config


def load(main_config_path: PathLike, job_config_path: Optional[PathLike] = None) -> Config:
    """Load, merge and return a Config.

    Raises ConfigError on any IO, parse or merge problem. Any other exception
    raised while loading is converted to ConfigFaultError: a malformed config
    must never take down the process that asked for it.
    """
    job_config = Path(job_config_path) if job_config_path else None
    try:
        config = _load_config(Path(main_config_path), job_config)
        _apply_defaults(config)
    except ConfigError:
        raise
    except Exception as exc:
        raise ConfigFaultError(f"unexpected fault loading config: {exc!r}") from exc
    return config
