"""Plugin configuration validation — defaulting, compilation, scope checks.

``validate`` runs a fixed pipeline:

1. ``set_defaults`` fills in every defaulted field.
2. ``compile_regexps_and_durations`` compiles raw strings; the first failure
   raises ``CompileError`` immediately.
3. Plugin names and scopes are checked: unknown plugins, malformed scope keys
   and plugins enabled for both ``org/repo`` and its ``org``.
4. External plugins get the same scope and org/repo duplicate checks, keyed
   by name, and every entry must be named.

Problems from steps 3 and 4 are collected and raised together as one
``InvalidPluginConfigError`` so an author can fix them in a single pass.

The remaining checks in this module (sizes, blunderbuss, config-updater,
require-matching-label) are not part of ``validate``; callers run them on
demand, usually through ``validate_optional``.
"""

from __future__ import annotations

import logging
import posixpath
from typing import Container, Dict, List, Optional, Sequence, Set, Tuple

from cibot.plugins.compile import compile_regexps_and_durations
from cibot.plugins.defaults import set_defaults
from cibot.plugins.errors import InvalidPluginConfigError, PluginConfigError
from cibot.plugins.schema import (
    Blunderbuss,
    Configuration,
    ConfigUpdater,
    ExternalPlugin,
    RequireMatchingLabel,
    Size,
)

logger = logging.getLogger(__name__)


# ---- scope overlay ----


def split_scope(scope: str) -> Tuple[str, Optional[str]]:
    """Split ``"org"`` or ``"org/repo"`` into (org, repo). Raises ValueError otherwise."""
    parts = scope.split("/")
    if len(parts) > 2 or not all(parts):
        raise ValueError(f"invalid scope {scope!r}: expected 'org' or 'org/repo'")
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def find_duplicated_plugin_config(repo_config: Sequence[str], org_config: Sequence[str]) -> List[str]:
    """Names in *repo_config* that are also in *org_config*, in repo order."""
    org_names = set(org_config)
    dupes: List[str] = []
    for name in repo_config:
        if name in org_names and name not in dupes:
            dupes.append(name)
    return dupes


def _overlay_duplicates(scoped: Dict[str, List[str]]) -> List[Tuple[str, str, List[str]]]:
    """(repo scope, org scope, dupes) for every org/repo re-enabling an org-level name."""
    found = []
    for scope, names in scoped.items():
        if "/" not in scope:
            continue
        org = scope.split("/", 1)[0]
        dupes = find_duplicated_plugin_config(names, scoped.get(org, []))
        if dupes:
            found.append((scope, org, dupes))
    return found


# ---- checks run by validate() ----


def validate_plugins(plugins: Dict[str, List[str]], registry: Container[str]) -> List[str]:
    """Return one message per unknown plugin, malformed scope, or org/repo duplicate."""
    errors: List[str] = []
    for scope, names in plugins.items():
        try:
            split_scope(scope)
        except ValueError as exc:
            errors.append(str(exc))
        for name in names:
            if name not in registry:
                errors.append(f"unknown plugin: {name}")

    for repo, org, dupes in _overlay_duplicates(plugins):
        errors.append(f"plugins {', '.join(dupes)} are duplicated for {repo} and {org}")
    return errors


def validate_external_plugins(plugin_map: Dict[str, List[ExternalPlugin]]) -> List[str]:
    """Return one message per malformed scope, unnamed plugin, or org/repo duplicate."""
    errors: List[str] = []
    for scope, plugins in plugin_map.items():
        try:
            split_scope(scope)
        except ValueError as exc:
            errors.append(f"external plugins: {exc}")
        for i, plugin in enumerate(plugins):
            if not plugin.name:
                errors.append(f"external plugin {i} for {scope!r} has an empty name")

    by_name = {
        scope: [p.name for p in plugins if p.name] for scope, plugins in plugin_map.items()
    }
    for repo, org, dupes in _overlay_duplicates(by_name):
        errors.append(f"external plugins {', '.join(dupes)} are duplicated for {repo} and {org}")
    return errors


def validate(config: Configuration, registry: Container[str]) -> None:
    """Default, compile and validate *config* in place.

    *registry* is any container of known plugin names (normally a
    ``PluginRegistry``); it is only queried with ``in``.

    Raises ``CompileError`` on the first bad regexp/duration and
    ``InvalidPluginConfigError`` listing every semantic problem. *config*
    must not be handed to readers unless this returns normally.
    """
    if not config.plugins:
        logger.warning("no plugins specified -- check syntax?")

    set_defaults(config)
    compile_regexps_and_durations(config)

    errors = validate_plugins(config.plugins, registry)
    errors.extend(validate_external_plugins(config.external_plugins))
    if errors:
        raise InvalidPluginConfigError(errors)


# ---- optional checks ----


def validate_sizes(size: Optional[Size]) -> None:
    """Size bounds must be non-decreasing: s <= m <= l <= xl <= xxl."""
    if size is None:
        return
    if size.s > size.m or size.m > size.l or size.l > size.xl or size.xl > size.xxl:
        raise PluginConfigError(
            "invalid size plugin configuration - one of the smaller sizes is bigger "
            f"than a larger one (s={size.s}, m={size.m}, l={size.l}, xl={size.xl}, xxl={size.xxl})"
        )


def validate_blunderbuss(blunderbuss: Blunderbuss) -> None:
    if blunderbuss.reviewer_count is not None and blunderbuss.file_weight_count is not None:
        raise PluginConfigError(
            "cannot use both request_count and file_weight_count in blunderbuss"
        )
    if blunderbuss.reviewer_count is not None and blunderbuss.reviewer_count < 1:
        raise PluginConfigError(
            f"invalid request_count: {blunderbuss.reviewer_count} (needs to be positive)"
        )
    if blunderbuss.file_weight_count is not None and blunderbuss.file_weight_count < 1:
        raise PluginConfigError(
            f"invalid file_weight_count: {blunderbuss.file_weight_count} (needs to be positive)"
        )


def validate_config_updater(updater: ConfigUpdater) -> None:
    """No two files may write the same key of the same namespace/name ConfigMap.

    Expects defaulted input (``namespaces`` resolved).
    """
    written: Dict[str, Set[str]] = {}
    for path, spec in updater.maps.items():
        key = spec.key or posixpath.basename(path)
        for namespace in spec.namespaces:
            configmap = f"{namespace}/{spec.name}"
            keys = written.setdefault(configmap, set())
            if key in keys:
                raise PluginConfigError(
                    f"key {key} in configmap {configmap} updated with more than one file"
                )
            keys.add(key)


def validate_require_matching_label(entries: Sequence[RequireMatchingLabel]) -> None:
    for i, rml in enumerate(entries):
        where = f"require_matching_label[{i}]"
        if not rml.org:
            raise PluginConfigError(f"{where}: every entry must specify 'org'")
        if not rml.regexp:
            raise PluginConfigError(f"{where}: every entry must specify 'regexp'")
        if not rml.missing_label:
            raise PluginConfigError(f"{where}: every entry must specify 'missing_label'")
        if not rml.grace_period:
            raise PluginConfigError(f"{where}: every entry must specify 'grace_period'")
        if not rml.prs and not rml.issues:
            raise PluginConfigError(
                f"{where}: must specify 'prs: true' and/or 'issues: true'"
            )
        if not rml.prs and rml.branch:
            raise PluginConfigError(f"{where}: 'branch' is only valid with 'prs: true'")


def validate_optional(config: Configuration) -> None:
    """Run the checks that ``validate`` leaves out. Call after ``validate``."""
    validate_sizes(config.size)
    validate_blunderbuss(config.blunderbuss)
    validate_config_updater(config.config_updater)
    validate_require_matching_label(config.require_matching_label)
