#!/usr/bin/env python3
"""
KUBECONF CORE MODELS
--------------------
Defines the data structures shared by the resolver, the kubeconfig parser
and the CLI. ResolvedConfig is the only object that leaves the library;
the other records live for the duration of a single resolution.

Author: KubeConf Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Optional, Mapping, Tuple, Dict, Any

SECRET_FIELDS = ("client_key_passphrase", "password", "oauth_token", "client_key_data")
MASK = "***"


@dataclass(frozen=True)
class ResolvedConfig:
    """
    The end product of resolution.

    Immutable so a half-resolved configuration can never leak to the
    transport layer; use ConfigBuilder or the resolver to obtain one.
    """
    master_url: str
    api_version: str
    namespace: str
    trust_certs: bool
    enabled_protocols: Tuple[str, ...] = ("TLSv1.2",)
    ca_cert_file: Optional[str] = None
    ca_cert_data: Optional[str] = None
    client_cert_file: Optional[str] = None
    client_cert_data: Optional[str] = None
    client_key_file: Optional[str] = None
    client_key_data: Optional[str] = None
    client_key_algo: Optional[str] = None
    client_key_passphrase: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    oauth_token: Optional[str] = None
    watch_reconnect_interval: Optional[int] = None
    watch_reconnect_limit: Optional[int] = None
    request_timeout: Optional[int] = None
    proxy: Optional[str] = None
    error_messages: Mapping[int, str] = field(default_factory=lambda: MappingProxyType({}))

    def error_message(self, status_code: int, default: Optional[str] = None) -> Optional[str]:
        """Looks up the diagnostic registered for an HTTP status code."""
        return self.error_messages.get(status_code, default)

    def to_dict(self, mask_secrets: bool = False) -> Dict[str, Any]:
        """Plain-dict rendering used by the CLI (JSON and table output)."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["enabled_protocols"] = list(self.enabled_protocols)
        data["error_messages"] = dict(self.error_messages)
        if mask_secrets:
            for name in SECRET_FIELDS:
                if data.get(name) is not None:
                    data[name] = MASK
        return data


@dataclass(frozen=True)
class ServiceAccountCredentials:
    """Token and CA material mounted into a pod by the cluster."""
    token: Optional[str] = None
    ca_cert_file: Optional[str] = None


@dataclass(frozen=True)
class KubeCluster:
    name: str
    server: Optional[str] = None
    certificate_authority: Optional[str] = None
    certificate_authority_data: Optional[str] = None
    insecure_skip_tls_verify: Optional[bool] = None


@dataclass(frozen=True)
class KubeAuthInfo:
    name: str
    client_certificate: Optional[str] = None
    client_certificate_data: Optional[str] = None
    client_key: Optional[str] = None
    client_key_data: Optional[str] = None
    token: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


@dataclass(frozen=True)
class KubeContextSnapshot:
    """
    The current context of a kubeconfig file, already dereferenced.

    cluster and auth_info are None when the context does not point at a
    resolvable entry; that is not an error.
    """
    context_name: Optional[str] = None
    namespace: Optional[str] = None
    cluster: Optional[KubeCluster] = None
    auth_info: Optional[KubeAuthInfo] = None
