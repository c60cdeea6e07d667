import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from kubeconf.kubeconfig.parser import KubeConfigParser, KubeConfigError

KUBECONFIG = """\
apiVersion: v1
kind: Config
current-context: dev
clusters:
- name: dev-cluster
  cluster:
    server: https://dev.example.com:6443
    certificate-authority: /etc/kube/dev-ca.crt
    insecure-skip-tls-verify: true
- name: prod-cluster
  cluster:
    server: https://prod.example.com:6443
    certificate-authority-data: UFJPRC1DQQ==
contexts:
- name: dev
  context:
    cluster: dev-cluster
    user: dev-user
    namespace: team-a
- name: prod
  context:
    cluster: prod-cluster
    user: ghost-user
users:
- name: dev-user
  user:
    client-certificate: /etc/kube/dev.crt
    client-key: /etc/kube/dev.key
    token: dev-token
"""


@pytest.fixture
def kubeconfig_file(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG)
    return path


def test_parse_resolves_current_context(kubeconfig_file):
    snapshot = KubeConfigParser().parse(kubeconfig_file)

    assert snapshot.context_name == "dev"
    assert snapshot.namespace == "team-a"
    assert snapshot.cluster.server == "https://dev.example.com:6443"
    assert snapshot.cluster.certificate_authority == "/etc/kube/dev-ca.crt"
    assert snapshot.cluster.insecure_skip_tls_verify is True
    assert snapshot.auth_info.name == "dev-user"
    assert snapshot.auth_info.client_certificate == "/etc/kube/dev.crt"
    assert snapshot.auth_info.client_key == "/etc/kube/dev.key"
    assert snapshot.auth_info.token == "dev-token"
    assert snapshot.auth_info.username is None


def test_dangling_user_is_not_an_error(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG.replace("current-context: dev", "current-context: prod"))

    snapshot = KubeConfigParser().parse(path)

    assert snapshot.cluster.server == "https://prod.example.com:6443"
    assert snapshot.cluster.certificate_authority_data == "UFJPRC1DQQ=="
    assert snapshot.cluster.insecure_skip_tls_verify is None
    assert snapshot.auth_info is None
    assert snapshot.namespace is None


def test_missing_current_context(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG.replace("current-context: dev\n", ""))

    snapshot = KubeConfigParser().parse(path)
    assert snapshot.context_name is None
    assert snapshot.cluster is None
    assert snapshot.auth_info is None


def test_unknown_current_context(tmp_path):
    path = tmp_path / "config"
    path.write_text(KUBECONFIG.replace("current-context: dev", "current-context: staging"))

    snapshot = KubeConfigParser().parse(path)
    assert snapshot.context_name == "staging"
    assert snapshot.cluster is None


def test_accessors_work_on_other_contexts(kubeconfig_file):
    parser = KubeConfigParser()
    doc = parser.load(kubeconfig_file)
    prod = {"cluster": "prod-cluster", "user": "dev-user"}

    assert parser.cluster_for(doc, prod).name == "prod-cluster"
    assert parser.auth_for(doc, prod).token == "dev-token"
    assert parser.cluster_for(doc, {"user": "dev-user"}) is None


def test_empty_file_yields_empty_snapshot(tmp_path):
    path = tmp_path / "config"
    path.write_text("")
    snapshot = KubeConfigParser().parse(path)
    assert snapshot.cluster is None


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config"
    path.write_text("current-context: dev\nclusters: [unclosed\n")

    with pytest.raises(KubeConfigError) as excinfo:
        KubeConfigParser().parse(path)
    assert excinfo.value.path == str(path)


def test_non_utf8_file_raises(tmp_path):
    path = tmp_path / "config"
    path.write_bytes(b"current-context: \xff\xfe\n")

    with pytest.raises(KubeConfigError) as excinfo:
        KubeConfigParser().parse(path)
    assert excinfo.value.path == str(path)


def test_non_mapping_document_raises(tmp_path):
    path = tmp_path / "config"
    path.write_text("- just\n- a\n- list\n")
    with pytest.raises(KubeConfigError):
        KubeConfigParser().parse(path)


def test_section_must_be_a_list(tmp_path):
    path = tmp_path / "config"
    path.write_text("current-context: dev\nclusters: not-a-list\n")
    with pytest.raises(KubeConfigError):
        KubeConfigParser().parse(path)


def test_unreadable_file_raises(tmp_path):
    with pytest.raises(KubeConfigError):
        KubeConfigParser().parse(tmp_path / "does-not-exist")
