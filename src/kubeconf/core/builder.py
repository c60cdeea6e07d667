#!/usr/bin/env python3
"""
KUBECONF BUILDER - Explicit Values
----------------------------------
Fluent front-end for the resolver. Every value given to the builder is
treated as explicit and takes precedence over the environment, the
service account and the kubeconfig file.

    config = (ConfigBuilder()
              .with_master_url("https://api.example.com:6443")
              .with_namespace("payments")
              .build())

Author: KubeConf Team
Date: 2026-10-19
"""

from typing import Dict, Any, Optional, Iterable

from kubeconf.core.models import ResolvedConfig
from kubeconf.core.resolver import ConfigResolver


class ConfigBuilder:

    def __init__(self, resolver: Optional[ConfigResolver] = None):
        self.resolver = resolver
        self.values: Dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "ConfigBuilder":
        self.values[name] = value
        return self

    def with_master_url(self, master_url: str) -> "ConfigBuilder":
        return self._set("master_url", master_url)

    def with_api_version(self, api_version: str) -> "ConfigBuilder":
        return self._set("api_version", api_version)

    def with_namespace(self, namespace: str) -> "ConfigBuilder":
        return self._set("namespace", namespace)

    def with_enabled_protocols(self, protocols: Iterable[str]) -> "ConfigBuilder":
        return self._set("enabled_protocols", list(protocols))

    def with_trust_certs(self, trust_certs: bool) -> "ConfigBuilder":
        return self._set("trust_certs", trust_certs)

    def with_ca_cert_file(self, path: str) -> "ConfigBuilder":
        return self._set("ca_cert_file", path)

    def with_ca_cert_data(self, data: str) -> "ConfigBuilder":
        return self._set("ca_cert_data", data)

    def with_client_cert_file(self, path: str) -> "ConfigBuilder":
        return self._set("client_cert_file", path)

    def with_client_cert_data(self, data: str) -> "ConfigBuilder":
        return self._set("client_cert_data", data)

    def with_client_key_file(self, path: str) -> "ConfigBuilder":
        return self._set("client_key_file", path)

    def with_client_key_data(self, data: str) -> "ConfigBuilder":
        return self._set("client_key_data", data)

    def with_client_key_algo(self, algo: str) -> "ConfigBuilder":
        return self._set("client_key_algo", algo)

    def with_client_key_passphrase(self, passphrase: str) -> "ConfigBuilder":
        return self._set("client_key_passphrase", passphrase)

    def with_username(self, username: str) -> "ConfigBuilder":
        return self._set("username", username)

    def with_password(self, password: str) -> "ConfigBuilder":
        return self._set("password", password)

    def with_oauth_token(self, token: str) -> "ConfigBuilder":
        return self._set("oauth_token", token)

    def with_watch_reconnect_interval(self, millis: int) -> "ConfigBuilder":
        return self._set("watch_reconnect_interval", millis)

    def with_watch_reconnect_limit(self, limit: int) -> "ConfigBuilder":
        return self._set("watch_reconnect_limit", limit)

    def with_request_timeout(self, millis: int) -> "ConfigBuilder":
        return self._set("request_timeout", millis)

    def with_proxy(self, proxy: str) -> "ConfigBuilder":
        return self._set("proxy", proxy)

    def build(self) -> ResolvedConfig:
        resolver = self.resolver or ConfigResolver()
        return resolver.resolve(**self.values)
