"""Default values applied to a plugin Configuration before it is compiled."""

from __future__ import annotations

import logging
from typing import Dict

from cibot.plugins.schema import ConfigMapSpec, ConfigUpdater, Configuration

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "prow/config.json"
DEFAULT_PLUGIN_FILE = "prow/plugins.yaml"
DEFAULT_BLUNDERBUSS_REVIEWER_COUNT = 2
DEFAULT_GRACE_PERIOD = "5s"
DEFAULT_MILESTONE_MAINTAINERS = "SIG Chairs/TLs"
DEFAULT_CHERRY_PICK_BRANCH_REGEXP = r"^release-.*$"
DEFAULT_SIG_MENTION_REGEXP = (
    r"(?m)@kubernetes/sig-([\w-]*)-"
    r"(misc|test-failures|bugs|feature-requests|proposals|pr-reviews|api-reviews)"
)
DEFAULT_CHERRY_PICK_COMMENT = (
    "This PR is not for the master branch but does not have the `cherry-pick-approved` "
    " label. Adding the `do-not-merge/cherry-pick-not-approved`  label.\n"
    "\n"
    "To approve the cherry-pick, please assign the patch release manager for the "
    "release branch by writing `/assign @username` in a comment when ready.\n"
    "\n"
    "The list of patch release managers for each release can be found "
    "[here](https://git.k8s.io/sig-release/release-managers.md)."
)

JOIN_ORG_URL = "https://github.com/orgs/{org}/people"


def set_config_updater_defaults(updater: ConfigUpdater) -> None:
    """Resolve ``maps`` and every entry's ``namespaces``.

    Precedence: a non-empty ``maps`` always wins and the deprecated
    ``config_file``/``plugin_file`` fields are ignored with a warning. Only an empty
    ``maps`` is derived from them.
    """
    if not updater.maps:
        config_file = updater.config_file
        if config_file:
            logger.warning(
                'config_file is deprecated, please switch to "maps": {"%s": "config"}',
                config_file,
            )
        else:
            config_file = DEFAULT_CONFIG_FILE

        plugin_file = updater.plugin_file
        if plugin_file:
            logger.warning(
                'plugin_file is deprecated, please switch to "maps": {"%s": "plugins"}',
                plugin_file,
            )
        else:
            plugin_file = DEFAULT_PLUGIN_FILE

        maps: Dict[str, ConfigMapSpec] = {
            config_file: ConfigMapSpec(name="config"),
            plugin_file: ConfigMapSpec(name="plugins"),
        }
        updater.maps = maps
    else:
        for name, value in (("config_file", updater.config_file), ("plugin_file", updater.plugin_file)):
            if value:
                logger.warning("%s is deprecated and ignored because maps is set: %s", name, value)

    for spec in updater.maps.values():
        spec.namespaces = [spec.namespace, *spec.additional_namespaces]


def set_defaults(config: Configuration) -> None:
    """Fill in every defaulted field. Running it twice changes nothing."""
    set_config_updater_defaults(config.config_updater)

    for plugins in config.external_plugins.values():
        for plugin in plugins:
            if not plugin.endpoint:
                plugin.endpoint = f"http://{plugin.name}"

    blunderbuss = config.blunderbuss
    if blunderbuss.reviewer_count is None and blunderbuss.file_weight_count is None:
        blunderbuss.reviewer_count = DEFAULT_BLUNDERBUSS_REVIEWER_COUNT

    for trigger in config.triggers:
        if trigger.trusted_org and not trigger.join_org_url:
            trigger.join_org_url = JOIN_ORG_URL.format(org=trigger.trusted_org)

    if not config.sig_mention.regexp:
        config.sig_mention.regexp = DEFAULT_SIG_MENTION_REGEXP

    for milestone in config.repo_milestone.values():
        if not milestone.maintainers_friendly_name:
            milestone.maintainers_friendly_name = DEFAULT_MILESTONE_MAINTAINERS

    cherry_pick = config.cherry_pick_unapproved
    if not cherry_pick.branch_regexp:
        cherry_pick.branch_regexp = DEFAULT_CHERRY_PICK_BRANCH_REGEXP
    if not cherry_pick.comment:
        cherry_pick.comment = DEFAULT_CHERRY_PICK_COMMENT

    for rml in config.require_matching_label:
        if not rml.grace_period:
            rml.grace_period = DEFAULT_GRACE_PERIOD
