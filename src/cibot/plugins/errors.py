"""Exceptions raised while defaulting, compiling, and validating plugin config."""

from __future__ import annotations

from typing import List


class PluginConfigError(Exception):
    """Base class for plugin configuration failures."""


class CompileError(PluginConfigError):
    """A regexp or duration in the plugin config failed to compile."""

    def __init__(self, field: str, value: str, reason: str) -> None:
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"failed to compile {field} {value!r}: {reason}")


class InvalidPluginConfigError(PluginConfigError):
    """One or more semantic problems were found; ``errors`` lists them all."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            "invalid plugin configuration:\n\t" + "\n\t".join(self.errors)
        )
