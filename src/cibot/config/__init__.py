"""Job and operational config: schema, loader, preset merging."""

from cibot.config.agent import ConfigAgent
from cibot.config.errors import ConfigError, ConfigFaultError
from cibot.config.jobs import merge_job_config
from cibot.config.loader import load
from cibot.config.schema import Config, JobConfig, OwnersDirBlacklist, Preset, ProwConfig

__all__ = [
    "Config",
    "ConfigAgent",
    "ConfigError",
    "ConfigFaultError",
    "JobConfig",
    "OwnersDirBlacklist",
    "Preset",
    "ProwConfig",
    "load",
    "merge_job_config",
]
