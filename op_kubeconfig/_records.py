# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any

from ._data_utils import canonical_label, config_name, to_bool
from ._exceptions import ParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SecretField:
    """A single labelled value on a secret store item."""

    label: str = ""
    value: str = ""
    id: str = ""


@dataclass(frozen=True)
class RawRecord:
    """A secret store item as returned by the store.

    Field labels are free text, see :func:`normalize` for how they are interpreted.
    """

    id: str
    title: str = ""
    version: int = 0
    fields: tuple[SecretField, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> RawRecord:
        """Build a record from the JSON representation of a 1Password item."""
        if not isinstance(data, dict):
            raise ParseError(f"Expected an item object, got {type(data).__name__}")
        fields = data.get("fields") or []
        if not isinstance(fields, list):
            raise ParseError(f"Item {data.get('id', '')} has malformed fields")
        parsed = []
        for f in fields:
            if not isinstance(f, dict):
                raise ParseError(f"Item {data.get('id', '')} has a malformed field")
            parsed.append(
                SecretField(
                    label=str(f.get("label") or ""),
                    value=str(f.get("value") or ""),
                    id=str(f.get("id") or ""),
                )
            )
        try:
            version = int(data.get("version") or 0)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Item {data.get('id', '')} has a malformed version") from e
        return cls(
            id=str(data.get("id") or ""),
            title=str(data.get("title") or ""),
            version=version,
            fields=tuple(parsed),
        )


@dataclass(frozen=True)
class CredentialRecord:
    """Cluster access credentials extracted from a secret store item."""

    id: str
    display_name: str
    server: str = ""
    insecure_skip_tls_verify: bool = False
    certificate_authority: str = ""
    client_certificate: str = ""
    client_key: str = ""

    @property
    def config_name(self) -> str:
        """Name of the cluster, user and context entries for this record."""
        return config_name(self.display_name)


class Attribute(enum.Enum):
    SERVER = "server"
    INSECURE_SKIP_TLS_VERIFY = "insecure_skip_tls_verify"
    CERTIFICATE_AUTHORITY = "certificate_authority"
    CLIENT_CERTIFICATE = "client_certificate"
    CLIENT_KEY = "client_key"


# Keyed by canonical_label()
LABELS: dict[str, Attribute] = {
    "server": Attribute.SERVER,
    "insecure-skip-tls-verify": Attribute.INSECURE_SKIP_TLS_VERIFY,
    "insecure_skip_tls_verify": Attribute.INSECURE_SKIP_TLS_VERIFY,
    "certificate-authority-data": Attribute.CERTIFICATE_AUTHORITY,
    "certificate_authority": Attribute.CERTIFICATE_AUTHORITY,
    "certificate-authority": Attribute.CERTIFICATE_AUTHORITY,
    "ca": Attribute.CERTIFICATE_AUTHORITY,
    "client-certificate": Attribute.CLIENT_CERTIFICATE,
    "client-certificate-data": Attribute.CLIENT_CERTIFICATE,
    "client_certificate": Attribute.CLIENT_CERTIFICATE,
    "cert": Attribute.CLIENT_CERTIFICATE,
    "client-key": Attribute.CLIENT_KEY,
    "client-key-data": Attribute.CLIENT_KEY,
    "client_key": Attribute.CLIENT_KEY,
    "key": Attribute.CLIENT_KEY,
}


def normalize(raw: RawRecord) -> CredentialRecord:
    """Extract cluster credentials from a secret store item.

    Labels are compared after :func:`canonical_label`, so ``"Client Key"`` and
    ``"client-key"`` are equivalent. When several fields map to the same attribute
    the last one wins. Unknown labels are ignored and missing attributes are left
    empty, an item with no recognised fields produces an empty record.

    Args:
        raw: The item to normalize.

    Returns:
        A new :class:`CredentialRecord`.
    """
    values: dict[str, Any] = {}
    for f in raw.fields:
        attribute = LABELS.get(canonical_label(f.label))
        if attribute is None:
            logger.debug("Ignoring field %r on item %s", f.label, raw.id)
            continue
        if attribute is Attribute.INSECURE_SKIP_TLS_VERIFY:
            values[attribute.value] = to_bool(f.value)
        else:
            values[attribute.value] = f.value
    return CredentialRecord(id=raw.id, display_name=raw.title, **values)
