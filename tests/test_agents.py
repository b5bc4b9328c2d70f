"""Tests for the config and plugin agents."""

import pytest

from cibot.config.agent import ConfigAgent
from cibot.config.errors import ConfigError
from cibot.plugins.agent import PluginAgent, load_plugin_config
from cibot.plugins.errors import CompileError, InvalidPluginConfigError


class TestConfigAgent:
    def test_empty_before_load(self):
        assert ConfigAgent().config() is None

    def test_publishes_on_success(self, write_file, main_config_yaml):
        agent = ConfigAgent()
        cfg = agent.load(write_file("config.yaml", main_config_yaml))
        assert agent.config() is cfg
        assert cfg.prowjob_namespace == "ci"

    def test_keeps_previous_on_failure(self, write_file, tmp_path):
        agent = ConfigAgent()
        first = agent.load(write_file("config.yaml", "pod_namespace: pods\n"))
        write_file("jobs/a/x.yaml", "")
        write_file("jobs/b/x.yaml", "")
        with pytest.raises(ConfigError):
            agent.load(tmp_path / "config.yaml", tmp_path / "jobs")
        assert agent.config() is first

    def test_reload_replaces_snapshot(self, write_file):
        agent = ConfigAgent()
        path = write_file("config.yaml", "pod_namespace: one\n")
        first = agent.load(path)
        path.write_text("pod_namespace: two\n")
        second = agent.load(path)
        assert agent.config() is second
        assert first.pod_namespace == "one"
        assert second.pod_namespace == "two"


class TestPluginAgent:
    def test_load_validates_and_publishes(self, registry, write_file, sample_plugins_yaml):
        agent = PluginAgent(registry)
        configuration = agent.load(write_file("plugins.yaml", sample_plugins_yaml))
        assert agent.config() is configuration
        assert configuration.heart.comment_re.search("THANKS!")
        assert configuration.config_updater.maps["prow/config.yaml"].namespaces == ["ci", "test-pods"]
        assert configuration.external_plugins["kubernetes/test-infra"][0].endpoint == "http://needs-rebase"

    def test_invalid_config_not_published(self, registry, write_file, sample_plugins_yaml):
        agent = PluginAgent(registry)
        good = agent.load(write_file("plugins.yaml", sample_plugins_yaml))
        bad = write_file("bad.yaml", "plugins:\n  k:\n  - trigger\n  k/k:\n  - trigger\n")
        with pytest.raises(InvalidPluginConfigError):
            agent.load(bad)
        assert agent.config() is good

    def test_compile_error_not_published(self, registry, write_file):
        agent = PluginAgent(registry)
        bad = write_file("bad.yaml", "plugins:\n  k: [sigmention]\nsigmention:\n  regexp: '('\n")
        with pytest.raises(CompileError):
            agent.load(bad)
        assert agent.config() is None

    def test_unreadable_file(self, registry, tmp_path):
        with pytest.raises(ConfigError):
            PluginAgent(registry).load(tmp_path / "missing.yaml")

    def test_load_plugin_config_does_not_default(self, write_file):
        configuration = load_plugin_config(write_file("plugins.yaml", "plugins:\n  k: [lgtm]\n"))
        assert configuration.blunderbuss.reviewer_count is None
        assert configuration.sig_mention.regexp == ""
