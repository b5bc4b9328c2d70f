"""Compile the raw regexp and duration strings of a plugin Configuration.

Durations use the Go syntax the config files are written in: a sequence of
decimal numbers, each with a unit suffix, such as ``"300ms"``, ``"1.5h"`` or
``"2h45m"``. Valid units are ``ns``, ``us`` (or ``µs``), ``ms``, ``s``,
``m``, ``h``.
"""

from __future__ import annotations

import re
from datetime import timedelta
from re import Pattern

from cibot.plugins.errors import CompileError
from cibot.plugins.schema import Configuration

# microseconds per unit
_UNITS = {
    "ns": 1e-3,
    "us": 1.0,
    "µs": 1.0,  # U+00B5
    "μs": 1.0,  # U+03BC
    "ms": 1e3,
    "s": 1e6,
    "m": 60e6,
    "h": 3600e6,
}

# Largest duration representable as int64 nanoseconds, in microseconds.
_MAX_MICROSECONDS = (2**63 - 1) / 1000

# "ms" must be tried before "m" and "s".
_COMPONENT_RE = re.compile(r"([0-9]*\.?[0-9]*)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a Go-style duration string. Raises ValueError on bad input."""
    s = value
    sign = 1
    if s[:1] in ("+", "-"):
        sign = -1 if s[0] == "-" else 1
        s = s[1:]
    if s == "0":
        return timedelta(0)
    if not s:
        raise ValueError(f"invalid duration {value!r}")

    total = 0.0
    pos = 0
    while pos < len(s):
        m = _COMPONENT_RE.match(s, pos)
        if m is None or m.group(1) in ("", "."):
            raise ValueError(f"invalid duration {value!r}")
        total += float(m.group(1)) * _UNITS[m.group(2)]
        pos = m.end()
    if total > _MAX_MICROSECONDS:
        raise ValueError(f"invalid duration {value!r}: out of range")
    try:
        return timedelta(microseconds=sign * total)
    except OverflowError as exc:
        raise ValueError(f"invalid duration {value!r}: out of range") from exc


def _compile(field: str, pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise CompileError(field, pattern, str(exc)) from exc


def compile_regexps_and_durations(config: Configuration) -> None:
    """Compile every raw regexp/duration in a fixed order; the first failure wins."""
    config.sig_mention.compiled_regexp = _compile("sigmention.regexp", config.sig_mention.regexp)
    config.cherry_pick_unapproved.branch_re = _compile(
        "cherry_pick_unapproved.branchregexp", config.cherry_pick_unapproved.branch_regexp
    )
    config.heart.comment_re = _compile("heart.commentregexp", config.heart.comment_regexp)

    for i, rml in enumerate(config.require_matching_label):
        rml.compiled_regexp = _compile(f"require_matching_label[{i}].regexp", rml.regexp)
        try:
            rml.grace_period_duration = parse_duration(rml.grace_period)
        except ValueError as exc:
            raise CompileError(
                f"require_matching_label[{i}].grace_period", rml.grace_period, str(exc)
            ) from exc
