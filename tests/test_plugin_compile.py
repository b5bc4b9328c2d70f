"""Tests for regexp and duration compilation."""

from datetime import timedelta

import pytest

from cibot.plugins.compile import compile_regexps_and_durations, parse_duration
from cibot.plugins.defaults import set_defaults
from cibot.plugins.errors import CompileError
from cibot.plugins.schema import (
    CherryPickUnapproved,
    Configuration,
    Heart,
    RequireMatchingLabel,
    SigMention,
)


class TestParseDuration:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("5s", timedelta(seconds=5)),
            ("0", timedelta(0)),
            ("300ms", timedelta(milliseconds=300)),
            ("1.5h", timedelta(minutes=90)),
            ("2h45m", timedelta(hours=2, minutes=45)),
            ("1m30s", timedelta(seconds=90)),
            ("-10s", timedelta(seconds=-10)),
            ("+3m", timedelta(minutes=3)),
            (".5s", timedelta(milliseconds=500)),
            ("250us", timedelta(microseconds=250)),
            ("250µs", timedelta(microseconds=250)),
            ("2000ns", timedelta(microseconds=2)),
        ],
    )
    def test_valid(self, value, expected):
        assert parse_duration(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "5",
            "s",
            "5 s",
            "5d",
            "1.2.3s",
            "-",
            "five seconds",
            ".s",
            "\u0665s",  # ARABIC-INDIC DIGIT FIVE
            "3000000h",
            "99999999999999999999999h",
        ],
    )
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_duration(value)

    def test_largest_duration(self):
        assert parse_duration("2562047h") == timedelta(hours=2562047)
        with pytest.raises(ValueError, match="out of range"):
            parse_duration("2562048h")


class TestCompile:
    def _defaulted(self, **kwargs) -> Configuration:
        cfg = Configuration(**kwargs)
        set_defaults(cfg)
        return cfg

    def test_default_sig_mention_matches(self):
        cfg = self._defaulted()
        compile_regexps_and_durations(cfg)
        m = cfg.sig_mention.compiled_regexp.search("cc @kubernetes/sig-testing-misc please")
        assert m is not None
        assert m.groups() == ("testing", "misc")

    def test_default_sig_mention_multiline(self):
        cfg = self._defaulted()
        compile_regexps_and_durations(cfg)
        text = "first line\n@kubernetes/sig-node-bugs\n@kubernetes/sig-api-machinery-api-reviews"
        found = cfg.sig_mention.compiled_regexp.findall(text)
        assert found == [("node", "bugs"), ("api-machinery", "api-reviews")]

    def test_default_cherry_pick_branch(self):
        cfg = self._defaulted()
        compile_regexps_and_durations(cfg)
        assert cfg.cherry_pick_unapproved.branch_re.match("release-1.14")
        assert not cfg.cherry_pick_unapproved.branch_re.match("master")

    def test_empty_heart_regexp_compiles(self):
        cfg = self._defaulted()
        compile_regexps_and_durations(cfg)
        assert cfg.heart.comment_re is not None

    def test_grace_period_default_is_five_seconds(self):
        cfg = self._defaulted(
            require_matching_label=[RequireMatchingLabel(org="k", regexp="^kind/")]
        )
        compile_regexps_and_durations(cfg)
        rml = cfg.require_matching_label[0]
        assert rml.grace_period_duration == timedelta(seconds=5)
        assert rml.compiled_regexp.search("kind/bug")

    def test_bad_sig_mention_regexp(self):
        cfg = self._defaulted(sig_mention=SigMention(regexp="(unclosed"))
        with pytest.raises(CompileError) as info:
            compile_regexps_and_durations(cfg)
        assert info.value.field == "sigmention.regexp"
        assert info.value.value == "(unclosed"
        assert "(unclosed" in str(info.value)

    def test_first_failure_wins(self):
        cfg = self._defaulted(
            cherry_pick_unapproved=CherryPickUnapproved(branch_regexp="[bad"),
            heart=Heart(comment_regexp="(also bad"),
        )
        with pytest.raises(CompileError) as info:
            compile_regexps_and_durations(cfg)
        assert info.value.field == "cherry_pick_unapproved.branchregexp"
        assert cfg.heart.comment_re is None

    def test_bad_label_regexp_names_index(self):
        cfg = self._defaulted(
            require_matching_label=[
                RequireMatchingLabel(org="k", regexp="ok"),
                RequireMatchingLabel(org="k", regexp="("),
            ]
        )
        with pytest.raises(CompileError) as info:
            compile_regexps_and_durations(cfg)
        assert info.value.field == "require_matching_label[1].regexp"
        assert info.value.value == "("

    def test_regexp_checked_before_grace_period(self):
        cfg = self._defaulted(
            require_matching_label=[RequireMatchingLabel(org="k", regexp="(", grace_period="nope")]
        )
        with pytest.raises(CompileError) as info:
            compile_regexps_and_durations(cfg)
        assert info.value.field.endswith(".regexp")

    def test_bad_grace_period(self):
        cfg = self._defaulted(
            require_matching_label=[RequireMatchingLabel(org="k", regexp="x", grace_period="5 minutes")]
        )
        with pytest.raises(CompileError) as info:
            compile_regexps_and_durations(cfg)
        assert info.value.field == "require_matching_label[0].grace_period"
        assert "5 minutes" in str(info.value)
