"""Job and operational config schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

DEFAULT_NAMESPACE = "default"


@dataclass
class Preset:
    """Labels plus pod fragments merged into every job carrying those labels.

    ``env``, ``volumes`` and ``volume_mounts`` are passed through as parsed.
    """

    labels: Dict[str, str] = field(default_factory=dict)
    env: List[Any] = field(default_factory=list)
    volumes: List[Any] = field(default_factory=list)
    volume_mounts: List[Any] = field(default_factory=list, metadata={"key": "volumeMounts"})


@dataclass
class JobConfig:
    presets: List[Preset] = field(default_factory=list)


@dataclass
class OwnersDirBlacklist:
    """Directories to ignore when searching for OWNERS files."""

    repos: Dict[str, List[str]] = field(default_factory=dict)  # org or org/repo -> dirs
    default: List[str] = field(default_factory=list)

    def dir_blacklist(self, org: str, repo: str) -> List[str]:
        dirs = list(self.default)
        dirs.extend(self.repos.get(org, []))
        dirs.extend(self.repos.get(f"{org}/{repo}", []))
        return dirs


@dataclass
class ProwConfig:
    prowjob_namespace: str = ""  # defaults to "default"
    pod_namespace: str = ""  # defaults to "default"
    owners_dir_blacklist: OwnersDirBlacklist = field(default_factory=OwnersDirBlacklist)


@dataclass
class Config(JobConfig, ProwConfig):
    """A read-only snapshot of the job and operational config."""
