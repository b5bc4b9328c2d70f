"""Plugin configuration schema — one dataclass per built-in plugin.

Raw strings (regexps, durations) are the serialisable source of truth. Their
compiled forms are ``init=False`` fields filled in by validation and never
read from a config file.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import timedelta
from re import Pattern
from typing import Any, Dict, List, Optional, Sequence, Tuple, TypeVar

from cibot.decode import build


def _derived(default: Any = None) -> Any:
    return field(default=default, init=False, repr=False, compare=False)


def _full_name(org: str, repo: str) -> str:
    return f"{org}/{repo}"


_S = TypeVar("_S")


def _scoped(entries: Sequence[_S], org: str, repo: str) -> List[_S]:
    """Entries whose ``repos`` name ``org/repo`` first, then those naming ``org``."""
    full_name = _full_name(org, repo)
    by_repo = [e for e in entries if full_name in e.repos]  # type: ignore[attr-defined]
    by_org = [
        e for e in entries if org in e.repos and full_name not in e.repos  # type: ignore[attr-defined]
    ]
    return by_repo + by_org


@dataclass
class ExternalPlugin:
    """An out-of-process plugin that receives webhooks over HTTP."""

    name: str = ""
    endpoint: str = ""  # defaults to http://{name}
    events: List[str] = field(default_factory=list)  # empty = every event


@dataclass
class Owners:
    mdyaml_repos: List[str] = field(default_factory=list, metadata={"key": "mdyamlrepos"})
    skip_collaborators: List[str] = field(default_factory=list)
    labels_blacklist: List[str] = field(default_factory=list)

    def mdyaml_enabled(self, org: str, repo: str) -> bool:
        """True if markdown YAML OWNERS headers are honoured for org/repo."""
        return org in self.mdyaml_repos or _full_name(org, repo) in self.mdyaml_repos

    def skip_collaborators_for(self, org: str, repo: str) -> bool:
        return org in self.skip_collaborators or _full_name(org, repo) in self.skip_collaborators


@dataclass
class Approve:
    """Settings for the approve plugin, applied to the scopes in ``repos``.

    The ``Optional[bool]`` flags are tri-state: ``None`` means "not
    configured", which is distinct from an explicit ``False``.
    """

    repos: List[str] = field(default_factory=list)
    issue_required: bool = False
    deprecated_implicit_self_approve: Optional[bool] = field(
        default=None, metadata={"key": "implicit_self_approve"}
    )
    require_self_approval: Optional[bool] = None
    lgtm_acts_as_approve: bool = False
    deprecated_review_acts_as_approve: Optional[bool] = field(
        default=None, metadata={"key": "review_acts_as_approve"}
    )
    ignore_review_state: Optional[bool] = None

    def has_self_approval(self) -> bool:
        """True if the PR author is assumed to approve their own changes."""
        if self.deprecated_implicit_self_approve is not None:
            return self.deprecated_implicit_self_approve
        if self.require_self_approval is not None:
            return not self.require_self_approval
        return True

    def consider_review_state(self) -> bool:
        """True if GitHub review states count as /approve commands."""
        if self.deprecated_review_acts_as_approve is not None:
            return self.deprecated_review_acts_as_approve
        if self.ignore_review_state is not None:
            return not self.ignore_review_state
        return True


@dataclass
class Blockade:
    repos: List[str] = field(default_factory=list)  # org or org/repo
    block_regexps: List[str] = field(default_factory=list, metadata={"key": "blockregexps"})
    exception_regexps: List[str] = field(
        default_factory=list, metadata={"key": "exceptionregexps"}
    )
    explanation: str = ""


@dataclass
class Blunderbuss:
    # request_count and file_weight_count are mutually exclusive
    reviewer_count: Optional[int] = field(default=None, metadata={"key": "request_count"})
    max_reviewer_count: int = field(default=0, metadata={"key": "max_request_count"})  # 0 = no limit
    file_weight_count: Optional[int] = None
    exclude_approvers: bool = False


@dataclass
class CherryPickUnapproved:
    branch_regexp: str = field(default="", metadata={"key": "branchregexp"})
    comment: str = ""

    branch_re: Optional[Pattern[str]] = _derived()


@dataclass
class ConfigMapSpec:
    """Where one repository file is synced: a key in a ConfigMap."""

    name: str = ""
    key: str = ""  # empty = basename of the file
    namespace: str = ""  # empty = the job namespace
    additional_namespaces: List[str] = field(default_factory=list)

    # [namespace] + additional_namespaces, resolved during defaulting
    namespaces: List[str] = field(default_factory=list, init=False, compare=False)


@dataclass
class ConfigUpdater:
    maps: Dict[str, ConfigMapSpec] = field(default_factory=dict)
    # Deprecated single-file fields; ignored whenever maps is non-empty.
    config_file: str = ""
    plugin_file: str = ""


@dataclass
class Golint:
    minimum_confidence: Optional[float] = None  # (0, 1], lint tool defaults to 0.8


@dataclass
class Heart:
    adorees: List[str] = field(default_factory=list)
    comment_regexp: str = field(default="", metadata={"key": "commentregexp"})

    comment_re: Optional[Pattern[str]] = _derived()


@dataclass
class Label:
    additional_labels: List[str] = field(default_factory=list)


@dataclass
class Lgtm:
    repos: List[str] = field(default_factory=list)
    review_acts_as_lgtm: bool = False
    store_tree_hash: bool = False
    sticky_lgtm_team: str = field(default="", metadata={"key": "trusted_team_for_sticky_lgtm"})


@dataclass
class Milestone:
    maintainers_id: int = 0
    maintainers_team: str = ""
    maintainers_friendly_name: str = ""


@dataclass
class RequireMatchingLabel:
    """Apply ``missing_label`` to issues/PRs that carry no label matching ``regexp``."""

    org: str = ""
    repo: str = ""  # empty = every repo in org
    branch: str = ""  # only valid with prs
    prs: bool = False
    issues: bool = False
    regexp: str = ""
    missing_label: str = ""
    missing_comment: str = ""
    grace_period: str = ""  # Go-style duration, defaults to "5s"

    compiled_regexp: Optional[Pattern[str]] = _derived()
    grace_period_duration: Optional[timedelta] = _derived()


@dataclass
class SigMention:
    regexp: str = ""

    compiled_regexp: Optional[Pattern[str]] = _derived()


@dataclass
class Size:
    """Lower bounds (lines changed) for each size label. XS is always 0."""

    s: int = 0
    m: int = 0
    l: int = 0  # noqa: E741
    xl: int = 0
    xxl: int = 0


@dataclass
class Trigger:
    repos: List[str] = field(default_factory=list)
    trusted_org: str = ""
    join_org_url: str = ""
    only_org_members: bool = False
    ignore_ok_to_test: bool = False


@dataclass
class Configuration:
    """Top-level plugin configuration.

    ``plugins`` and ``external_plugins`` are keyed by scope: ``"org"`` or
    ``"org/repo"``.
    """

    plugins: Dict[str, List[str]] = field(default_factory=dict)
    external_plugins: Dict[str, List[ExternalPlugin]] = field(default_factory=dict)
    owners: Owners = field(default_factory=Owners)

    approve: List[Approve] = field(default_factory=list)
    use_deprecated_self_approve: bool = field(
        default=False,
        metadata={"key": "use_deprecated_2018_implicit_self_approve_default_migrate_before_july_2019"},
    )
    use_deprecated_review_approve: bool = field(
        default=False,
        metadata={"key": "use_deprecated_2018_review_acts_as_approve_default_migrate_before_july_2019"},
    )
    blockades: List[Blockade] = field(default_factory=list)
    blunderbuss: Blunderbuss = field(default_factory=Blunderbuss)
    cherry_pick_unapproved: CherryPickUnapproved = field(default_factory=CherryPickUnapproved)
    config_updater: ConfigUpdater = field(default_factory=ConfigUpdater)
    golint: Optional[Golint] = None
    heart: Heart = field(default_factory=Heart)
    label: Optional[Label] = None
    lgtm: List[Lgtm] = field(default_factory=list)
    repo_milestone: Dict[str, Milestone] = field(default_factory=dict)
    require_matching_label: List[RequireMatchingLabel] = field(default_factory=list)
    sig_mention: SigMention = field(default_factory=SigMention, metadata={"key": "sigmention"})
    size: Optional[Size] = None
    triggers: List[Trigger] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Configuration":
        return build(cls, data)

    # ---- lookups used by the automations ----

    def trigger_for(self, org: str, repo: str) -> Trigger:
        matches = _scoped(self.triggers, org, repo)
        return matches[0] if matches else Trigger()

    def approve_for(self, org: str, repo: str) -> Approve:
        """Approve settings for org/repo, with the global deprecation switches folded in.

        Returns a copy; the snapshot itself is never modified.
        """
        matches = _scoped(self.approve, org, repo)
        a = dataclasses.replace(matches[0]) if matches else Approve()
        if (
            self.use_deprecated_self_approve
            and a.deprecated_implicit_self_approve is None
            and a.require_self_approval is None
        ):
            a.deprecated_implicit_self_approve = False
        if (
            self.use_deprecated_review_approve
            and a.deprecated_review_acts_as_approve is None
            and a.ignore_review_state is None
        ):
            a.deprecated_review_acts_as_approve = False
        return a

    def lgtm_for(self, org: str, repo: str) -> List[Lgtm]:
        return _scoped(self.lgtm, org, repo)

    def enabled_repos_for_plugin(self, plugin: str) -> Tuple[List[str], List[str]]:
        """Return (orgs, repos) whose plugin list includes *plugin*."""
        orgs: List[str] = []
        repos: List[str] = []
        for scope, names in self.plugins.items():
            if plugin not in names:
                continue
            (repos if "/" in scope else orgs).append(scope)
        return orgs, repos
