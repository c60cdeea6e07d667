#!/usr/bin/env python3
"""
KUBECONF KUBECONFIG PARSER - Context Resolution
-----------------------------------------------
Loads a kubectl-style multi-cluster configuration file and dereferences
its 'current-context' into a concrete (cluster, user) pair.

Dangling references (a context naming a cluster or user that does not
exist) are not errors: the corresponding part of the snapshot is None.
Only unreadable files and malformed documents raise KubeConfigError.

Author: KubeConf Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ruamel.yaml import YAML, YAMLError

from kubeconf.core.models import KubeCluster, KubeAuthInfo, KubeContextSnapshot

logger = logging.getLogger("kubeconf.kubeconfig")


class KubeConfigError(Exception):
    """Raised when a kubeconfig file exists but cannot be used."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        super().__init__(message)
        self.path = str(path) if path is not None else None


def _as_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    return None


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class KubeConfigParser:
    """
    Reads kubeconfig documents with ruamel.yaml in safe mode.

    The accessors operate on the raw document so callers can inspect
    contexts other than the current one.
    """

    def __init__(self):
        self.yaml = YAML(typ='safe')

    def load(self, path: Union[str, Path]) -> Dict[str, Any]:
        """Returns the raw document, validated to be a mapping."""
        path = Path(path)
        try:
            raw_text = path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            raise KubeConfigError(f"Unable to read kubeconfig {path}: {e}", path) from e

        try:
            doc = self.yaml.load(raw_text)
        except YAMLError as e:
            raise KubeConfigError(f"Invalid YAML in kubeconfig {path}: {e}", path) from e

        if doc is None:
            return {}
        if not isinstance(doc, dict):
            raise KubeConfigError(
                f"Kubeconfig {path} must be a mapping, got {type(doc).__name__}", path
            )
        for section in ("clusters", "contexts", "users"):
            entries = doc.get(section)
            if entries is not None and not isinstance(entries, list):
                raise KubeConfigError(f"Kubeconfig section '{section}' must be a list", path)
        return doc

    def parse(self, path: Union[str, Path]) -> KubeContextSnapshot:
        """Loads the file and resolves its current context."""
        doc = self.load(path)
        context_name = doc.get("current-context") or None
        context = self.current_context(doc)
        if context is None:
            logger.debug(f"Kubeconfig {path} has no resolvable current context")
            return KubeContextSnapshot(context_name=_as_str(context_name))

        return KubeContextSnapshot(
            context_name=_as_str(context_name),
            namespace=_as_str(context.get("namespace")),
            cluster=self.cluster_for(doc, context),
            auth_info=self.auth_for(doc, context),
        )

    def current_context(self, doc: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        name = doc.get("current-context")
        if not name:
            return None
        return self._named_entry(doc, "contexts", name, "context")

    def cluster_for(self, doc: Dict[str, Any], context: Dict[str, Any]) -> Optional[KubeCluster]:
        name = context.get("cluster")
        entry = self._named_entry(doc, "clusters", name, "cluster") if name else None
        if entry is None:
            return None
        return KubeCluster(
            name=str(name),
            server=_as_str(entry.get("server")),
            certificate_authority=_as_str(entry.get("certificate-authority")),
            certificate_authority_data=_as_str(entry.get("certificate-authority-data")),
            insecure_skip_tls_verify=_as_bool(entry.get("insecure-skip-tls-verify")),
        )

    def auth_for(self, doc: Dict[str, Any], context: Dict[str, Any]) -> Optional[KubeAuthInfo]:
        name = context.get("user")
        entry = self._named_entry(doc, "users", name, "user") if name else None
        if entry is None:
            return None
        return KubeAuthInfo(
            name=str(name),
            client_certificate=_as_str(entry.get("client-certificate")),
            client_certificate_data=_as_str(entry.get("client-certificate-data")),
            client_key=_as_str(entry.get("client-key")),
            client_key_data=_as_str(entry.get("client-key-data")),
            token=_as_str(entry.get("token")),
            username=_as_str(entry.get("username")),
            password=_as_str(entry.get("password")),
        )

    def _named_entry(self, doc: Dict[str, Any], section: str, name: Any,
                     body_key: str) -> Optional[Dict[str, Any]]:
        """Finds {name: ..., <body_key>: {...}} in a top-level list."""
        for item in doc.get(section) or []:
            if isinstance(item, dict) and item.get("name") == name:
                body = item.get(body_key)
                return body if isinstance(body, dict) else {}
        return None
