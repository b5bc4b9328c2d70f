"""Shared test fixtures — sample plugin configs, job-config trees."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from cibot.plugins.registry import PluginRegistry, build_registry


@pytest.fixture
def registry() -> PluginRegistry:
    """The built-in plugin registry."""
    return build_registry()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write dedented *content* to *relpath* under tmp_path, creating parents."""

    def _write(relpath: str, content: str) -> Path:
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_plugins_yaml() -> str:
    """A valid plugin config touching most sections."""
    return textwrap.dedent("""\
        plugins:
          kubernetes:
          - trigger
          - approve
          kubernetes/test-infra:
          - lgtm
          - config-updater
        external_plugins:
          kubernetes/test-infra:
          - name: needs-rebase
            events:
            - pull_request
          - name: cherrypicker
            endpoint: http://cherrypicker.svc:8888
        triggers:
        - repos:
          - kubernetes
          trusted_org: kubernetes
        approve:
        - repos:
          - kubernetes/test-infra
          require_self_approval: true
        blunderbuss:
          max_request_count: 3
        config_updater:
          maps:
            prow/config.yaml:
              name: config
              namespace: ci
              additional_namespaces:
              - test-pods
        repo_milestone:
          kubernetes/kubernetes:
            maintainers_team: release-team
        require_matching_label:
        - org: kubernetes
          repo: kubernetes
          issues: true
          regexp: ^(sig|wg)/
          missing_label: needs-sig
        heart:
          adorees:
          - octocat
          commentregexp: "(?i)thanks"
    """)


@pytest.fixture
def main_config_yaml() -> str:
    return textwrap.dedent("""\
        prowjob_namespace: ci
        owners_dir_blacklist:
          default:
          - vendor
          repos:
            kubernetes:
            - docs
        presets:
        - labels:
            preset-service-account: "true"
          env:
          - name: GOOGLE_APPLICATION_CREDENTIALS
            value: /etc/service-account/service-account.json
          volumes:
          - name: service
            secret:
              secretName: service-account
          volumeMounts:
          - name: service
            mountPath: /etc/service-account
            readOnly: true
    """)
