#!/usr/bin/env python3
"""
KUBECONF RESOLVER - The Precedence Chain
----------------------------------------
Determines the effective client configuration by walking its sources in
a strict order, each one only filling fields that are still unresolved:

    1. explicit values from the caller (constructor or ConfigBuilder)
    2. property store / environment settings
    3. the in-cluster service account mount
    4. the current context of the user's kubeconfig file
    5. literal defaults

and finally normalizes the result (API URL shaping, trust flag).

Resolution never fails because of its sources: missing files contribute
nothing and a malformed kubeconfig is logged and skipped.

Author: KubeConf Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from kubeconf.core import environment as settings
from kubeconf.core.environment import EnvironmentResolver
from kubeconf.core.credentials import (
    CredentialFileReader,
    SERVICE_ACCOUNT_TOKEN_PATH,
    SERVICE_ACCOUNT_CA_CRT_PATH,
)
from kubeconf.core.draft import DraftConfig, merge_missing
from kubeconf.core.models import ResolvedConfig
from kubeconf.kubeconfig.parser import KubeConfigParser, KubeConfigError

logger = logging.getLogger("kubeconf.resolver")

DEFAULT_MASTER_URL = "https://kubernetes.default.svc"
DEFAULT_API_VERSION = "v1"
DEFAULT_NAMESPACE = "default"
DEFAULT_TLS_PROTOCOLS = ["TLSv1.2"]
DEFAULT_CLIENT_KEY_ALGO = "RSA"
DEFAULT_CLIENT_KEY_PASSPHRASE = "changeit"
DEFAULT_WATCH_RECONNECT_INTERVAL = 1000
DEFAULT_WATCH_RECONNECT_LIMIT = -1
DEFAULT_REQUEST_TIMEOUT = 10000
DEFAULT_KUBECONFIG_PATH = Path("~") / ".kube" / "config"

SERVICE_ACCOUNT_HINT = "Configured service account doesn't have access. Service account may have been revoked."
KUBECONFIG_HINT = "Token may have expired! Please use kubectl login / oc login to log-in again."


def auth_error_messages(hint: str) -> Dict[int, str]:
    return {
        401: f"Unauthorized! {hint}",
        403: f"Forbidden! {hint}",
    }


class ConfigResolver:
    """
    Orchestrates the sources. Collaborators are injected so each source
    can be replaced in isolation; the defaults touch the real process.
    """

    def __init__(self, environment: Optional[EnvironmentResolver] = None,
                 file_reader: Optional[CredentialFileReader] = None,
                 parser: Optional[KubeConfigParser] = None,
                 service_account_token_path: Union[str, Path] = SERVICE_ACCOUNT_TOKEN_PATH,
                 service_account_ca_path: Union[str, Path] = SERVICE_ACCOUNT_CA_CRT_PATH):
        self.environment = environment or EnvironmentResolver()
        self.file_reader = file_reader or CredentialFileReader()
        self.parser = parser or KubeConfigParser()
        self.service_account_token_path = service_account_token_path
        self.service_account_ca_path = service_account_ca_path

    def resolve(self, **explicit: Any) -> ResolvedConfig:
        """
        Runs the full chain and returns a frozen, normalized configuration.

        Keyword arguments are explicit field values and win over every
        other source. Unknown names raise TypeError.
        """
        draft = DraftConfig.from_explicit(explicit)

        # --- PHASE 1: PROPERTY / ENVIRONMENT SEED ---
        self._seed_from_environment(draft)

        # --- PHASE 2: IN-CLUSTER SERVICE ACCOUNT ---
        if self.environment.get_bool(settings.KUBERNETES_AUTH_TRY_SERVICE_ACCOUNT, True):
            self._merge_service_account(draft)

        # --- PHASE 3: KUBECONFIG CURRENT CONTEXT ---
        if self.environment.get_bool(settings.KUBERNETES_AUTH_TRY_KUBECONFIG, True):
            self._merge_kubeconfig(draft)

        # --- PHASE 4: DEFAULTS & NORMALIZATION ---
        self._apply_defaults(draft)
        self._normalize(draft)

        return draft.freeze()

    def _seed_from_environment(self, draft: DraftConfig) -> None:
        env = self.environment
        seeded = merge_missing(draft, [
            ("master_url", env.get(settings.KUBERNETES_MASTER)),
            ("api_version", env.get(settings.KUBERNETES_API_VERSION)),
            ("namespace", env.get(settings.KUBERNETES_NAMESPACE)),
            ("enabled_protocols", env.get_list(settings.KUBERNETES_TLS_PROTOCOLS)),
            ("trust_certs", env.get_bool(settings.KUBERNETES_TRUST_CERTIFICATES)),
            ("ca_cert_file", env.get(settings.KUBERNETES_CA_CERT_FILE)),
            ("ca_cert_data", env.get(settings.KUBERNETES_CA_CERT_DATA)),
            ("client_cert_file", env.get(settings.KUBERNETES_CLIENT_CERT_FILE)),
            ("client_cert_data", env.get(settings.KUBERNETES_CLIENT_CERT_DATA)),
            ("client_key_file", env.get(settings.KUBERNETES_CLIENT_KEY_FILE)),
            ("client_key_data", env.get(settings.KUBERNETES_CLIENT_KEY_DATA)),
            ("client_key_algo", env.get(settings.KUBERNETES_CLIENT_KEY_ALGO)),
            ("client_key_passphrase", env.get(settings.KUBERNETES_CLIENT_KEY_PASSPHRASE)),
            ("username", env.get(settings.KUBERNETES_AUTH_BASIC_USERNAME)),
            ("password", env.get(settings.KUBERNETES_AUTH_BASIC_PASSWORD)),
            ("oauth_token", env.get(settings.KUBERNETES_AUTH_TOKEN)),
            ("watch_reconnect_interval", env.get_int(settings.KUBERNETES_WATCH_RECONNECT_INTERVAL)),
            ("watch_reconnect_limit", env.get_int(settings.KUBERNETES_WATCH_RECONNECT_LIMIT)),
            ("request_timeout", env.get_int(settings.KUBERNETES_REQUEST_TIMEOUT)),
            ("proxy", env.first(settings.HTTP_PROXY, settings.HTTPS_PROXY, settings.ALL_PROXY)),
        ])
        if seeded:
            logger.debug(f"Seeded from environment: {', '.join(seeded)}")

    def _merge_service_account(self, draft: DraftConfig) -> None:
        credentials = self.file_reader.read_service_account(
            self.service_account_token_path, self.service_account_ca_path
        )
        if credentials is None:
            logger.debug("No service account mounted")
            return

        # The mounted CA only applies when no client certificate was configured.
        if credentials.ca_cert_file and not draft.is_set("client_cert_file"):
            merge_missing(draft, [("ca_cert_file", credentials.ca_cert_file)])

        if merge_missing(draft, [("oauth_token", credentials.token)]):
            logger.debug("Using service account token")
            self._register_messages(draft, SERVICE_ACCOUNT_HINT)

    def kubeconfig_path(self) -> Path:
        configured = self.environment.get(settings.KUBECONFIG_FILE)
        if configured:
            return Path(configured).expanduser()
        return DEFAULT_KUBECONFIG_PATH.expanduser()

    def _merge_kubeconfig(self, draft: DraftConfig) -> None:
        path = self.kubeconfig_path()
        if not self.file_reader.exists(path):
            logger.debug(f"No kubeconfig at {path}")
            return

        try:
            snapshot = self.parser.parse(path)
        except KubeConfigError as e:
            logger.error(f"Could not load kube config file from {path}: {e}")
            return

        cluster = snapshot.cluster
        if cluster is None:
            logger.debug(f"Kubeconfig {path}: current context has no cluster")
            return

        adopted = merge_missing(draft, [
            ("master_url", cluster.server),
            ("namespace", snapshot.namespace),
            ("ca_cert_file", cluster.certificate_authority),
            ("ca_cert_data", cluster.certificate_authority_data),
            ("trust_certs", bool(cluster.insecure_skip_tls_verify)),
        ])

        auth = snapshot.auth_info
        if auth is not None:
            auth_adopted = merge_missing(draft, [
                ("client_cert_file", auth.client_certificate),
                ("client_cert_data", auth.client_certificate_data),
                ("client_key_file", auth.client_key),
                ("client_key_data", auth.client_key_data),
                ("oauth_token", auth.token),
                ("username", auth.username),
                ("password", auth.password),
            ])
            if auth_adopted:
                self._register_messages(draft, KUBECONFIG_HINT)
            adopted.extend(auth_adopted)

        logger.debug(f"Kubeconfig context '{snapshot.context_name}' supplied: {', '.join(adopted) or 'nothing'}")

    def _register_messages(self, draft: DraftConfig, hint: str) -> None:
        for status, message in auth_error_messages(hint).items():
            draft.error_messages.setdefault(status, message)

    def _apply_defaults(self, draft: DraftConfig) -> None:
        merge_missing(draft, [
            ("master_url", DEFAULT_MASTER_URL),
            ("api_version", DEFAULT_API_VERSION),
            ("namespace", DEFAULT_NAMESPACE),
            ("enabled_protocols", list(DEFAULT_TLS_PROTOCOLS)),
            ("client_key_algo", DEFAULT_CLIENT_KEY_ALGO),
            ("client_key_passphrase", DEFAULT_CLIENT_KEY_PASSPHRASE),
            ("watch_reconnect_interval", DEFAULT_WATCH_RECONNECT_INTERVAL),
            ("watch_reconnect_limit", DEFAULT_WATCH_RECONNECT_LIMIT),
            ("request_timeout", DEFAULT_REQUEST_TIMEOUT),
        ])

    def _normalize(self, draft: DraftConfig) -> None:
        draft.master_url = self.append_api_path(draft.master_url, draft.api_version)
        if draft.trust_certs is None:
            draft.trust_certs = False

    @staticmethod
    def append_api_path(master_url: str, api_version: str) -> str:
        """'https://host' -> 'https://host/api/v1/', applied once per resolution."""
        url = master_url if master_url.endswith("/") else master_url + "/"
        return f"{url}api/{api_version}/"

    @staticmethod
    def normalize_master_url(master_url: str, api_version: str) -> str:
        """
        'https://host' -> 'https://host/api/v1/'

        For re-normalizing an already resolved URL: one ending in the API
        suffix is returned as is.
        """
        url = master_url if master_url.endswith("/") else master_url + "/"
        if url.endswith(f"api/{api_version}/"):
            return url
        return ConfigResolver.append_api_path(url, api_version)


def resolve_config(**explicit: Any) -> ResolvedConfig:
    """Resolves against the real environment and filesystem."""
    return ConfigResolver().resolve(**explicit)
