# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from os import PathLike
from typing import (
    TYPE_CHECKING,
    List,
    Optional,
    Protocol,
    Sequence,
    Union,
    runtime_checkable,
)

PathType = Union[str, "PathLike[str]"]

if TYPE_CHECKING:
    from ._records import RawRecord


@runtime_checkable
class SecretStore(Protocol):
    """Somewhere to read raw credential records from."""

    async def list_items(self, tag: str) -> List["RawRecord"]: ...
    async def get_item(self, identifier: str) -> "RawRecord": ...


@runtime_checkable
class KubeConfigWriter(Protocol):
    """Something that can create or overwrite named kubeconfig entries."""

    async def set_cluster(
        self,
        name: str,
        server: str,
        certificate_authority: Optional[str] = None,
        insecure_skip_tls_verify: bool = False,
    ) -> None: ...

    async def set_exec_credentials(
        self,
        name: str,
        command: str,
        api_version: str,
        args: Sequence[str],
    ) -> None: ...

    async def set_context(self, name: str, cluster: str, user: str) -> None: ...
