# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import json
from dataclasses import dataclass, field

from ._constants import EXEC_API_VERSION, EXEC_CREDENTIAL_KIND
from ._records import CredentialRecord, normalize
from ._types import SecretStore


@dataclass(frozen=True)
class ExecCredentialStatus:
    client_certificate_data: str = ""
    client_key_data: str = ""


@dataclass(frozen=True)
class ExecCredential:
    """The document an exec credential plugin prints for kubectl.

    See https://kubernetes.io/docs/reference/access-authn-authz/authentication/#client-go-credential-plugins
    """

    status: ExecCredentialStatus = field(default_factory=ExecCredentialStatus)
    api_version: str = EXEC_API_VERSION
    kind: str = EXEC_CREDENTIAL_KIND

    def to_dict(self) -> dict:
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "status": {
                "clientCertificateData": self.status.client_certificate_data,
                "clientKeyData": self.status.client_key_data,
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))


def respond(record: CredentialRecord) -> ExecCredential:
    """Wrap a record's client certificate and key in an ExecCredential.

    Values are passed through untouched. Empty values stay empty, it is up to the
    client to reject them.
    """
    return ExecCredential(
        status=ExecCredentialStatus(
            client_certificate_data=record.client_certificate,
            client_key_data=record.client_key,
        )
    )


async def authenticate(store: SecretStore, identifier: str) -> ExecCredential:
    """Fetch a single item by id and build its ExecCredential."""
    return respond(normalize(await store.get_item(identifier)))
