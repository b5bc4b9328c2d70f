"""Built-in plugins — the automations that ship with the hook server."""

from cibot.plugins.registry import PluginHelp

APPROVE = PluginHelp(
    name="approve",
    description="Manages the 'approved' label based on /approve commands and OWNERS files.",
    events=["issue_comment", "pull_request_review", "pull_request"],
)

ASSIGN = PluginHelp(
    name="assign",
    description="Assigns or requests reviews from users with /assign and /cc commands.",
    events=["issue_comment", "pull_request_review_comment"],
)

BLOCKADE = PluginHelp(
    name="blockade",
    description="Blocks merging of PRs that touch paths matching the configured regexps.",
    events=["pull_request"],
)

BLUNDERBUSS = PluginHelp(
    name="blunderbuss",
    description="Requests reviews from OWNERS reviewers when a PR is opened.",
    events=["pull_request", "issue_comment"],
)

CHERRY_PICK_UNAPPROVED = PluginHelp(
    name="cherry-pick-unapproved",
    description="Labels PRs against release branches that lack cherry-pick approval.",
    events=["pull_request"],
)

CONFIG_UPDATER = PluginHelp(
    name="config-updater",
    description="Syncs repository files into ConfigMaps when a PR changing them merges.",
    events=["pull_request"],
)

GOLINT = PluginHelp(
    name="golint",
    description="Runs golint on changed Go files and comments on problems.",
    events=["issue_comment"],
)

HEART = PluginHelp(
    name="heart",
    description="Adds a heart reaction to matching comments by adorees.",
    events=["issue_comment", "pull_request_review_comment"],
)

HOLD = PluginHelp(
    name="hold",
    description="Adds or removes the 'do-not-merge/hold' label with /hold.",
    events=["issue_comment"],
)

LABEL = PluginHelp(
    name="label",
    description="Adds kind/priority/area and additional labels via slash commands.",
    events=["issue_comment"],
)

LGTM = PluginHelp(
    name="lgtm",
    description="Manages the 'lgtm' label with /lgtm and review states.",
    events=["issue_comment", "pull_request_review", "pull_request"],
)

MILESTONE = PluginHelp(
    name="milestone",
    description="Sets milestones with /milestone for members of the maintainers team.",
    events=["issue_comment"],
)

OWNERS_LABEL = PluginHelp(
    name="owners-label",
    description="Applies labels listed in OWNERS files to PRs touching those directories.",
    events=["pull_request"],
)

REQUIRE_MATCHING_LABEL = PluginHelp(
    name="require-matching-label",
    description="Adds a label to issues/PRs that have no label matching a regexp.",
    events=["issues", "pull_request", "issue_comment"],
)

SIGMENTION = PluginHelp(
    name="sigmention",
    description="Labels issues and PRs with sig/* labels when SIG teams are mentioned.",
    events=["issue_comment", "issues", "pull_request"],
)

SIZE = PluginHelp(
    name="size",
    description="Labels PRs with a size/* label based on the number of changed lines.",
    events=["pull_request"],
)

TRIGGER = PluginHelp(
    name="trigger",
    description="Starts jobs for PRs from trusted users and on /test and /ok-to-test.",
    events=["pull_request", "push", "issue_comment"],
)

VERIFY_OWNERS = PluginHelp(
    name="verify-owners",
    description="Checks OWNERS files changed in a PR for syntax and blacklisted labels.",
    events=["pull_request"],
)

ALL_BUILTIN_PLUGINS = [
    APPROVE,
    ASSIGN,
    BLOCKADE,
    BLUNDERBUSS,
    CHERRY_PICK_UNAPPROVED,
    CONFIG_UPDATER,
    GOLINT,
    HEART,
    HOLD,
    LABEL,
    LGTM,
    MILESTONE,
    OWNERS_LABEL,
    REQUIRE_MATCHING_LABEL,
    SIGMENTION,
    SIZE,
    TRIGGER,
    VERIFY_OWNERS,
]
