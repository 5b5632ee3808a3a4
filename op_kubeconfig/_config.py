# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import base64
import binascii
import logging
import os
import pathlib
import typing
from typing import Any, Dict, List, Optional, Sequence, Union

import anyio
import anyio.to_thread
import jsonpath
import yaml

from ._async_utils import NamedTemporaryFile, check_output
from ._constants import DEFAULT_KUBECONFIG, EXEC_INTERACTIVE_MODE
from ._exceptions import KubeConfigError
from ._types import PathType

logger = logging.getLogger(__name__)


def kubeconfig_path(path: Optional[PathType] = None) -> pathlib.Path:
    """Resolve which kubeconfig file to write to.

    Uses ``path`` if given, otherwise the first file listed in ``$KUBECONFIG``,
    otherwise ``~/.kube/config``.
    """
    if not path:
        paths = [p for p in os.environ.get("KUBECONFIG", "").split(os.pathsep) if p]
        path = paths[0] if paths else DEFAULT_KUBECONFIG
    return pathlib.Path(path).expanduser()


def encode_certificate_data(data: str) -> str:
    """Return certificate data in the base64 form kubeconfig ``*-data`` keys expect.

    PEM text is encoded, anything else is assumed to already be base64.
    """
    if "-----" in data:
        return base64.b64encode(data.encode()).decode()
    # Base64 may be wrapped over several lines
    return "".join(data.split())


def _without_ca_if_insecure(
    name: str, certificate_authority: Optional[str], insecure_skip_tls_verify: bool
) -> Optional[str]:
    # Kubernetes refuses clusters that set both
    if certificate_authority and insecure_skip_tls_verify:
        logger.warning(
            "Cluster %s skips TLS verification, ignoring its certificate authority",
            name,
        )
        return None
    return certificate_authority


def empty_kubeconfig() -> Dict:
    return {
        "apiVersion": "v1",
        "kind": "Config",
        "preferences": {},
        "clusters": [],
        "users": [],
        "contexts": [],
        "current-context": "",
    }


class KubeConfig:
    """A single kubeconfig file that named entries can be written to.

    Each ``set_*`` call replaces the whole entry with the same name, or appends a
    new one, and then saves the file. Entries with other names are left alone.

    A missing file is treated as an empty kubeconfig and created on first save.
    """

    def __init__(self, path_or_config: Union[PathType, Dict, None] = None):
        self.path: Optional[pathlib.Path] = None
        self._raw: dict = {}

        if path_or_config is None or isinstance(path_or_config, (str, os.PathLike)):
            self.path = kubeconfig_path(path_or_config)
            if self.path.is_dir():
                raise KubeConfigError(
                    f'Error loading config file "{self.path}": is a directory.'
                )
        elif isinstance(path_or_config, dict):
            self._raw = path_or_config
        else:
            raise TypeError("KubeConfig path_or_config must be a string, path or dict.")

        self.__write_lock = anyio.Lock()

    def __await__(self):
        async def f():
            if not self._raw and self.path:
                await self._load()
            return self

        return f().__await__()

    async def _load(self) -> None:
        assert self.path
        if not await anyio.Path(self.path).exists():
            logger.debug("%s does not exist, starting from an empty kubeconfig", self.path)
            self._raw = empty_kubeconfig()
            return
        try:
            async with await anyio.open_file(self.path) as fh:
                data = yaml.safe_load(await fh.read())
        except (OSError, yaml.YAMLError) as e:
            raise KubeConfigError(f"Failed to load {self.path}: {e}") from e
        if data is None:
            data = empty_kubeconfig()
        if not isinstance(data, dict):
            raise KubeConfigError(f"{self.path} is not a kubeconfig file")
        self._raw = data

    async def save(self, path: Optional[PathType] = None) -> None:
        path = self.path if not path else path
        if not path:
            raise ValueError("No path provided")
        data = yaml.safe_dump(self._raw)
        async with self.__write_lock:
            try:
                parent = anyio.Path(path).parent
                await parent.mkdir(parents=True, exist_ok=True)
                # Never truncate the kubeconfig in place
                async with NamedTemporaryFile(
                    dir=str(parent), prefix=".kubeconfig-", suffix=".tmp"
                ) as tmp:
                    await tmp.write_text(data)
                    await anyio.to_thread.run_sync(os.replace, tmp, path)
            except OSError as e:
                raise KubeConfigError(f"Failed to save {path}: {e}") from e

    async def _upsert(self, section: str, key: str, name: str, value: Dict) -> None:
        entry = {"name": name, key: value}
        patch = jsonpath.JSONPatch()
        if not isinstance(self._raw.get(section), list):
            patch.add(f"/{section}", [entry])
        else:
            for i, existing in enumerate(self._raw[section]):
                if isinstance(existing, dict) and existing.get("name") == name:
                    patch.replace(f"/{section}/{i}", entry)
                    break
            else:
                patch.add(f"/{section}/-", entry)
        self._raw = typing.cast(dict, patch.apply(self._raw))
        logger.debug("Set %s %s in %s", key, name, self.path)
        if self.path:
            await self.save()

    async def set_cluster(
        self,
        name: str,
        server: str,
        certificate_authority: Optional[str] = None,
        insecure_skip_tls_verify: bool = False,
    ) -> None:
        """Create or replace a cluster entry."""
        certificate_authority = _without_ca_if_insecure(
            name, certificate_authority, insecure_skip_tls_verify
        )
        cluster: Dict[str, Any] = {"server": server}
        if certificate_authority:
            cluster["certificate-authority-data"] = encode_certificate_data(
                certificate_authority
            )
        if insecure_skip_tls_verify:
            cluster["insecure-skip-tls-verify"] = True
        await self._upsert("clusters", "cluster", name, cluster)

    async def set_exec_credentials(
        self,
        name: str,
        command: str,
        api_version: str,
        args: Sequence[str],
    ) -> None:
        """Create or replace a user entry that gets credentials from an exec plugin."""
        user = {
            "exec": {
                "apiVersion": api_version,
                "command": command,
                "args": list(args),
                "interactiveMode": EXEC_INTERACTIVE_MODE,
            }
        }
        await self._upsert("users", "user", name, user)

    async def set_context(self, name: str, cluster: str, user: str) -> None:
        """Create or replace a context entry."""
        await self._upsert("contexts", "context", name, {"cluster": cluster, "user": user})

    def _get(self, section: str, key: str, name: str) -> Dict:
        for entry in self._raw.get(section) or []:
            if entry.get("name") == name:
                return entry[key]
        raise ValueError(f"{key.capitalize()} {name} not found")

    def get_cluster(self, cluster_name: str) -> Dict:
        """Get a cluster by name."""
        return self._get("clusters", "cluster", cluster_name)

    def get_user(self, user_name: str) -> Dict:
        """Get a user by name."""
        return self._get("users", "user", user_name)

    def get_context(self, context_name: str) -> Dict:
        """Get a context by name."""
        return self._get("contexts", "context", context_name)

    @property
    def raw(self) -> Dict:
        return self._raw

    @property
    def clusters(self) -> List[Dict]:
        return self._raw.get("clusters") or []

    @property
    def users(self) -> List[Dict]:
        return self._raw.get("users") or []

    @property
    def contexts(self) -> List[Dict]:
        return self._raw.get("contexts") or []


class KubectlConfig:
    """Write kubeconfig entries by running ``kubectl config``.

    Args:
        kubeconfig: Passed to kubectl as ``--kubeconfig``, kubectl's own lookup
            rules apply when omitted.
        command: Name or path of the ``kubectl`` executable.
    """

    def __init__(self, kubeconfig: Optional[PathType] = None, command: str = "kubectl"):
        self.kubeconfig = kubeconfig
        self.command = command

    async def _kubectl(self, *args: str) -> str:
        cmd = [self.command, "config", *args]
        if self.kubeconfig:
            cmd.append(f"--kubeconfig={os.fspath(self.kubeconfig)}")
        return await check_output(*cmd, error=KubeConfigError)

    async def set_cluster(
        self,
        name: str,
        server: str,
        certificate_authority: Optional[str] = None,
        insecure_skip_tls_verify: bool = False,
    ) -> None:
        """Create or replace a cluster entry with ``kubectl config set-cluster``."""
        certificate_authority = _without_ca_if_insecure(
            name, certificate_authority, insecure_skip_tls_verify
        )
        args = ["set-cluster", name, f"--server={server}"]
        if insecure_skip_tls_verify:
            args.append("--insecure-skip-tls-verify=true")
        if not certificate_authority:
            await self._kubectl(*args)
            return
        # kubectl only embeds certificate authorities from files
        async with NamedTemporaryFile(suffix=".crt") as ca_file:
            if "-----" in certificate_authority:
                ca_data = certificate_authority.encode()
            else:
                try:
                    ca_data = base64.b64decode(certificate_authority)
                except binascii.Error as e:
                    raise KubeConfigError(
                        f"Certificate authority for {name} is neither PEM nor base64"
                    ) from e
            await ca_file.write_bytes(ca_data)
            await self._kubectl(
                *args, f"--certificate-authority={ca_file}", "--embed-certs=true"
            )

    async def set_exec_credentials(
        self,
        name: str,
        command: str,
        api_version: str,
        args: Sequence[str],
    ) -> None:
        """Create or replace an exec plugin user with ``kubectl config set-credentials``."""
        await self._kubectl(
            "set-credentials",
            name,
            f"--exec-command={command}",
            f"--exec-api-version={api_version}",
            *[f"--exec-arg={arg}" for arg in args],
        )

    async def set_context(self, name: str, cluster: str, user: str) -> None:
        """Create or replace a context with ``kubectl config set-context``."""
        await self._kubectl(
            "set-context", name, f"--cluster={cluster}", f"--user={user}"
        )
