"""Plugin registry — the set of known plugin names and their help text.

Automations register themselves once at process start; afterwards the
registry is only read. ``validate`` receives it as an argument and only asks
``name in registry``, so any container of names (a set in tests) works too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional


@dataclass(frozen=True)
class PluginHelp:
    """What a plugin does, shown by ``cibot plugins``."""

    name: str
    description: str
    events: List[str] = field(default_factory=list)  # webhook events it handles


class PluginRegistry:
    """Central store for plugin help entries, keyed by plugin name."""

    def __init__(self) -> None:
        self._plugins: Dict[str, PluginHelp] = {}

    # ---- registration ----

    def register(self, plugin: PluginHelp) -> None:
        if plugin.name in self._plugins:
            raise ValueError(f"plugin {plugin.name!r} is already registered")
        self._plugins[plugin.name] = plugin

    def register_many(self, plugins: List[PluginHelp]) -> None:
        for plugin in plugins:
            self.register(plugin)

    # ---- queries ----

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._plugins))

    def __len__(self) -> int:
        return len(self._plugins)

    def get(self, name: str) -> Optional[PluginHelp]:
        return self._plugins.get(name)

    @property
    def all_plugins(self) -> List[PluginHelp]:
        return [self._plugins[name] for name in sorted(self._plugins)]

    def descriptions(self) -> Mapping[str, str]:
        """Read-only name → description view."""
        return MappingProxyType({h.name: h.description for h in self._plugins.values()})


def build_registry() -> PluginRegistry:
    """Create a registry holding every built-in plugin."""
    from cibot.plugins.builtin import ALL_BUILTIN_PLUGINS

    registry = PluginRegistry()
    registry.register_many(ALL_BUILTIN_PLUGINS)
    return registry
