#!/usr/bin/env python3
"""
KUBECONF DRAFT - Resolution Record
----------------------------------
The mutable working copy filled in by the resolver, source by source,
before it is frozen into a ResolvedConfig.

Every source writes through merge_missing(), so a field set by a
higher-precedence source is never overwritten.

Author: KubeConf Team
Date: 2026-10-19
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Dict, Any, List, Optional, Iterable, Tuple

from kubeconf.core.models import ResolvedConfig

# Fields that can be supplied explicitly by the caller
EXPLICIT_FIELDS = tuple(f.name for f in fields(ResolvedConfig) if f.name != "error_messages")


@dataclass
class DraftConfig:
    """
    Maintains the state of a single resolution.

    None means 'not resolved yet'; an empty string or list supplied
    explicitly is a value and is kept.
    """
    master_url: Optional[str] = None
    api_version: Optional[str] = None
    namespace: Optional[str] = None
    enabled_protocols: Optional[List[str]] = None
    trust_certs: Optional[bool] = None
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
    error_messages: Dict[int, str] = field(default_factory=dict)

    @classmethod
    def from_explicit(cls, values: Dict[str, Any]) -> "DraftConfig":
        unknown = sorted(set(values) - set(EXPLICIT_FIELDS))
        if unknown:
            raise TypeError(f"Unknown configuration field(s): {', '.join(unknown)}")
        draft = cls()
        merge_missing(draft, values.items())
        return draft

    def is_set(self, name: str) -> bool:
        return getattr(self, name) is not None

    def freeze(self) -> ResolvedConfig:
        """Produces the immutable record. Callers normalize first."""
        values = {name: getattr(self, name) for name in EXPLICIT_FIELDS}
        values["enabled_protocols"] = tuple(self.enabled_protocols or ())
        return ResolvedConfig(
            error_messages=MappingProxyType(dict(self.error_messages)),
            **values
        )


def merge_missing(draft: DraftConfig, candidates: Iterable[Tuple[str, Any]]) -> List[str]:
    """
    Fill-if-absent merge of (field_name, value) pairs into the draft.

    None candidates contribute nothing. Returns the names of the fields
    that were actually adopted, in order.
    """
    adopted = []
    for name, value in candidates:
        if value is None or draft.is_set(name):
            continue
        setattr(draft, name, value)
        adopted.append(name)
    return adopted
