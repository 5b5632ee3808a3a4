# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import logging
from typing import Iterable, List

from ._constants import DEFAULT_EXEC_COMMAND, DEFAULT_TAG, EXEC_API_VERSION
from ._records import CredentialRecord, normalize
from ._types import KubeConfigWriter, SecretStore

logger = logging.getLogger(__name__)


class Synchronizer:
    """Write kubeconfig entries for credentials held in a secret store.

    Every record becomes a cluster, a user and a context that share the name
    :attr:`CredentialRecord.config_name`. The user runs ``exec_command auth <id>``
    so that certificates are only read from the store when a client connects and
    never end up in the kubeconfig file.

    Args:
        store: Where to read records from.
        writer: Where to write kubeconfig entries to.
        exec_command: How kubeconfig users should invoke op-kubeconfig.
    """

    def __init__(
        self,
        store: SecretStore,
        writer: KubeConfigWriter,
        exec_command: str = DEFAULT_EXEC_COMMAND,
    ) -> None:
        self.store = store
        self.writer = writer
        self.exec_command = exec_command

    async def update(self, tag: str = DEFAULT_TAG) -> List[str]:
        """Synchronize every item in the store that has ``tag``.

        Returns:
            The names of the entries that were written, in the order they were written.
        """
        raw_records = await self.store.list_items(tag)
        return await self.sync([normalize(raw) for raw in raw_records], tag)

    async def sync(self, records: Iterable[CredentialRecord], tag: str) -> List[str]:
        """Write the cluster, user and context entries for each record.

        Records are processed one at a time in the order given. The first writer
        error is raised immediately and entries that were already written are
        kept, every write is an overwrite so running again is safe.
        """
        names = []
        for record in records:
            await self.sync_record(record)
            names.append(record.config_name)
        logger.info("Synchronized %d items tagged %s", len(names), tag)
        return names

    async def sync_record(self, record: CredentialRecord) -> None:
        name = record.config_name
        # The context refers to the cluster and user by name so it goes last
        await self.writer.set_cluster(
            name,
            server=record.server,
            certificate_authority=record.certificate_authority or None,
            insecure_skip_tls_verify=record.insecure_skip_tls_verify,
        )
        await self.writer.set_exec_credentials(
            name,
            command=self.exec_command,
            api_version=EXEC_API_VERSION,
            args=["auth", record.id],
        )
        await self.writer.set_context(name, cluster=name, user=name)
        logger.info("Synchronized %s (%s)", name, record.id)
