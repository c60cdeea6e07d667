#!/usr/bin/env python3
"""
KUBECONF CREDENTIALS - File Reader
----------------------------------
Thin filesystem seam for the small secret files the resolver consumes:
the mounted service-account token and CA certificate, plus existence
checks for the kubeconfig file.

Author: KubeConf Team
Date: 2026-10-19
"""

import logging
from pathlib import Path
from typing import Optional, Union

from kubeconf.core.models import ServiceAccountCredentials

logger = logging.getLogger("kubeconf.credentials")

SERVICE_ACCOUNT_DIR = Path("/var/run/secrets/kubernetes.io/serviceaccount")
SERVICE_ACCOUNT_TOKEN_PATH = SERVICE_ACCOUNT_DIR / "token"
SERVICE_ACCOUNT_CA_CRT_PATH = SERVICE_ACCOUNT_DIR / "ca.crt"

PathLike = Union[str, Path]


class CredentialFileReader:
    """
    Reports absence separately from content: exists() never raises,
    read_text() raises FileNotFoundError, OSError or UnicodeDecodeError.
    """

    def exists(self, path: PathLike) -> bool:
        try:
            return Path(path).is_file()
        except OSError:
            return False

    def read_text(self, path: PathLike) -> str:
        return Path(path).read_text(encoding="utf-8")

    def read_service_account(self, token_path: PathLike = SERVICE_ACCOUNT_TOKEN_PATH,
                             ca_path: PathLike = SERVICE_ACCOUNT_CA_CRT_PATH
                             ) -> Optional[ServiceAccountCredentials]:
        """
        Loads the mounted service-account bundle.

        Returns None when neither file is present. The CA path is only
        reported when the file actually exists.
        """
        ca_cert_file = str(ca_path) if self.exists(ca_path) else None
        token = None
        try:
            token = self.read_text(token_path).strip() or None
        except FileNotFoundError:
            logger.debug(f"No service account token at {token_path}")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug(f"Service account token at {token_path} unreadable: {e}")

        if token is None and ca_cert_file is None:
            return None
        return ServiceAccountCredentials(token=token, ca_cert_file=ca_cert_file)
