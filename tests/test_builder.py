import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from kubeconf.core.builder import ConfigBuilder
from kubeconf.core.environment import EnvironmentResolver
from kubeconf.core.resolver import ConfigResolver


def isolated_resolver(tmp_path, environ=None):
    properties = {
        "kubernetes.auth.tryServiceAccount": "false",
        "kubeconfig": str(tmp_path / "missing-config"),
    }
    return ConfigResolver(environment=EnvironmentResolver(properties=properties, environ=environ or {}))


def test_builder_values_override_environment(tmp_path):
    environ = {
        "KUBERNETES_MASTER": "https://env.example.com",
        "KUBERNETES_NAMESPACE": "env-ns",
        "KUBERNETES_AUTH_TOKEN": "env-token",
    }
    config = (ConfigBuilder(resolver=isolated_resolver(tmp_path, environ))
              .with_master_url("https://built.example.com:6443")
              .with_namespace("built-ns")
              .with_api_version("v1beta1")
              .build())

    assert config.master_url == "https://built.example.com:6443/api/v1beta1/"
    assert config.namespace == "built-ns"
    assert config.oauth_token == "env-token"


def test_builder_covers_every_field(tmp_path):
    config = (ConfigBuilder(resolver=isolated_resolver(tmp_path))
              .with_enabled_protocols(["TLSv1.3"])
              .with_trust_certs(True)
              .with_ca_cert_file("/ca.crt")
              .with_ca_cert_data("Q0E=")
              .with_client_cert_file("/client.crt")
              .with_client_cert_data("Q0VSVA==")
              .with_client_key_file("/client.key")
              .with_client_key_data("S0VZ")
              .with_client_key_algo("EC")
              .with_client_key_passphrase("s3cret")
              .with_username("admin")
              .with_password("hunter2")
              .with_oauth_token("token")
              .with_watch_reconnect_interval(250)
              .with_watch_reconnect_limit(5)
              .with_request_timeout(3000)
              .with_proxy("http://proxy:3128")
              .build())

    assert config.enabled_protocols == ("TLSv1.3",)
    assert config.trust_certs is True
    assert config.ca_cert_data == "Q0E="
    assert config.client_key_algo == "EC"
    assert config.client_key_passphrase == "s3cret"
    assert config.password == "hunter2"
    assert config.watch_reconnect_interval == 250
    assert config.watch_reconnect_limit == 5
    assert config.request_timeout == 3000
    assert config.proxy == "http://proxy:3128"


def test_builder_is_reusable(tmp_path):
    builder = ConfigBuilder(resolver=isolated_resolver(tmp_path)).with_namespace("first")
    first = builder.build()
    second = builder.with_namespace("second").build()

    assert first.namespace == "first"
    assert second.namespace == "second"
