import os
import sys
import json
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from kubeconf.cli.main import KubeConfCLI

KUBECONFIG = """\
current-context: dev
clusters:
- name: dev-cluster
  cluster:
    server: https://dev.example.com:6443
contexts:
- name: dev
  context:
    cluster: dev-cluster
    user: dev-user
    namespace: team-a
users:
- name: dev-user
  user:
    token: kube-token
"""


@pytest.fixture
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("KUBERNETES_") or name in ("KUBECONFIG", "HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def kubeconfig_file(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG)
    return path


def test_show_json_masks_secrets(clean_env, kubeconfig_file, capsys):
    code = KubeConfCLI().run(["show", "--json", "--no-service-account", "--kubeconfig", str(kubeconfig_file)])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["master_url"] == "https://dev.example.com:6443/api/v1/"
    assert data["namespace"] == "team-a"
    assert data["oauth_token"] == "***"
    assert "401" in data["error_messages"]


def test_show_json_with_secrets_and_explicit_values(clean_env, kubeconfig_file, capsys):
    code = KubeConfCLI().run([
        "show", "--json", "--show-secrets", "--no-service-account",
        "--kubeconfig", str(kubeconfig_file),
        "--master", "https://explicit.example.com", "--namespace", "explicit-ns",
    ])
    data = json.loads(capsys.readouterr().out)

    assert code == 0
    assert data["master_url"] == "https://explicit.example.com/api/v1/"
    assert data["namespace"] == "explicit-ns"
    assert data["oauth_token"] == "kube-token"


def test_show_table(clean_env, kubeconfig_file, capsys):
    code = KubeConfCLI().run(["show", "--no-service-account", "--kubeconfig", str(kubeconfig_file)])
    out = capsys.readouterr().out

    assert code == 0
    assert "master_url" in out
    assert "team-a" in out
    assert "kube-token" not in out


def test_explain_registered_status(clean_env, kubeconfig_file, capsys):
    code = KubeConfCLI().run(["explain", "--no-service-account", "--kubeconfig", str(kubeconfig_file), "401"])
    out = capsys.readouterr().out

    assert code == 0
    assert "Unauthorized!" in out


def test_explain_unregistered_status(clean_env, tmp_path, capsys):
    code = KubeConfCLI().run(["explain", "--no-service-account", "--no-kubeconfig", "403"])
    assert code == 1
    assert "No diagnostic" in capsys.readouterr().out


def test_no_arguments_prints_help(capsys):
    assert KubeConfCLI().run([]) == 0
    assert "usage: kubeconf" in capsys.readouterr().out
