"""Merge job-config fragments into one accumulated JobConfig."""

from __future__ import annotations

from typing import Set

from cibot.config.errors import ConfigError
from cibot.config.schema import JobConfig


def merge_job_config(config: JobConfig, fragment: JobConfig) -> None:
    """Append *fragment*'s presets to *config*.

    Every ``label:value`` pair must be unique across all accumulated presets.
    On a duplicate, ConfigError is raised and *config* is left unchanged.
    """
    presets = config.presets + fragment.presets

    seen: Set[str] = set()
    for preset in presets:
        for label, value in preset.labels.items():
            pair = f"{label}:{value}"
            if pair in seen:
                raise ConfigError(f"duplicated preset 'label:value' pair: {pair}")
            seen.add(pair)

    config.presets = presets
