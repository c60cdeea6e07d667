#!/usr/bin/env python3
"""
KUBECONF ENVIRONMENT - Setting Lookup
-------------------------------------
Reads named settings from an injected property store, falling back to the
process environment and finally to a caller-supplied default.

A setting such as 'kubernetes.auth.tryKubeConfig' is looked up verbatim in
the property store and as KUBERNETES_AUTH_TRYKUBECONFIG in the environment.

Author: KubeConf Team
Date: 2026-10-19
"""

import os
import logging
from typing import Optional, Mapping, List

logger = logging.getLogger("kubeconf.environment")

# Named settings
KUBERNETES_MASTER = "kubernetes.master"
KUBERNETES_API_VERSION = "kubernetes.api.version"
KUBERNETES_NAMESPACE = "kubernetes.namespace"
KUBERNETES_TLS_PROTOCOLS = "kubernetes.tls.protocols"
KUBERNETES_TRUST_CERTIFICATES = "kubernetes.trust.certificates"
KUBERNETES_CA_CERT_FILE = "kubernetes.certs.ca.file"
KUBERNETES_CA_CERT_DATA = "kubernetes.certs.ca.data"
KUBERNETES_CLIENT_CERT_FILE = "kubernetes.certs.client.file"
KUBERNETES_CLIENT_CERT_DATA = "kubernetes.certs.client.data"
KUBERNETES_CLIENT_KEY_FILE = "kubernetes.certs.client.key.file"
KUBERNETES_CLIENT_KEY_DATA = "kubernetes.certs.client.key.data"
KUBERNETES_CLIENT_KEY_ALGO = "kubernetes.certs.client.key.algo"
KUBERNETES_CLIENT_KEY_PASSPHRASE = "kubernetes.certs.client.key.passphrase"
KUBERNETES_AUTH_BASIC_USERNAME = "kubernetes.auth.basic.username"
KUBERNETES_AUTH_BASIC_PASSWORD = "kubernetes.auth.basic.password"
KUBERNETES_AUTH_TOKEN = "kubernetes.auth.token"
KUBERNETES_AUTH_TRY_SERVICE_ACCOUNT = "kubernetes.auth.tryServiceAccount"
KUBERNETES_AUTH_TRY_KUBECONFIG = "kubernetes.auth.tryKubeConfig"
KUBERNETES_WATCH_RECONNECT_INTERVAL = "kubernetes.watch.reconnectInterval"
KUBERNETES_WATCH_RECONNECT_LIMIT = "kubernetes.watch.reconnectLimit"
KUBERNETES_REQUEST_TIMEOUT = "kubernetes.request.timeout"
KUBECONFIG_FILE = "kubeconfig"
HTTP_PROXY = "http.proxy"
HTTPS_PROXY = "https.proxy"
ALL_PROXY = "all.proxy"


def env_var_name(name: str) -> str:
    """'kubernetes.auth.token' -> 'KUBERNETES_AUTH_TOKEN'"""
    return name.upper().replace(".", "_").replace("-", "_")


class EnvironmentResolver:
    """
    Read-only view over the property store and the environment.

    Both mappings are injected so tests can run against a fixed dictionary
    instead of the real process state.
    """

    def __init__(self, properties: Optional[Mapping[str, str]] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self.properties = properties if properties is not None else {}
        self.environ = environ if environ is not None else os.environ

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Returns the first non-empty value for name, or default."""
        value = self.properties.get(name)
        if value is None or value == "":
            value = self.environ.get(env_var_name(name))
        if value is None or value == "":
            return default
        return value

    def get_bool(self, name: str, default: Optional[bool] = None) -> Optional[bool]:
        value = self.get(name)
        if value is None:
            return default
        lowered = str(value).strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        logger.warning(f"Ignoring non-boolean value '{value}' for setting '{name}'")
        return default

    def get_int(self, name: str, default: Optional[int] = None) -> Optional[int]:
        value = self.get(name)
        if value is None:
            return default
        try:
            return int(str(value).strip())
        except ValueError:
            logger.warning(f"Ignoring non-integer value '{value}' for setting '{name}'")
            return default

    def get_list(self, name: str, default: Optional[List[str]] = None) -> Optional[List[str]]:
        """Comma-separated settings such as the TLS protocol list."""
        value = self.get(name)
        if value is None:
            return default
        items = [item.strip() for item in str(value).split(",") if item.strip()]
        return items or default

    def first(self, *names: str) -> Optional[str]:
        """First non-empty value among several settings (proxy chain)."""
        for name in names:
            value = self.get(name)
            if value is not None:
                return value
        return None
