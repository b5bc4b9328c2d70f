"""Plugin configuration — schema, defaulting, compilation, validation."""

from cibot.plugins.agent import PluginAgent, load_plugin_config
from cibot.plugins.errors import CompileError, InvalidPluginConfigError, PluginConfigError
from cibot.plugins.registry import PluginHelp, PluginRegistry, build_registry
from cibot.plugins.schema import Configuration
from cibot.plugins.validation import validate, validate_optional, validate_sizes

__all__ = [
    "CompileError",
    "Configuration",
    "InvalidPluginConfigError",
    "PluginAgent",
    "PluginConfigError",
    "PluginHelp",
    "PluginRegistry",
    "build_registry",
    "load_plugin_config",
    "validate",
    "validate_optional",
    "validate_sizes",
]
