# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License

from typing import Optional, Sequence


class OpKubeconfigError(Exception):
    """Base class for all op-kubeconfig errors."""


class CommandError(OpKubeconfigError):
    """An external command exited with a non-zero status.

    Attributes:
        args: The command that was run
        returncode: The exit status of the command
        stderr: Anything the command wrote to stderr
    """

    def __init__(
        self,
        message: str,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.command = list(command) if command else []
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class SecretStoreError(CommandError):
    """The secret store could not be queried."""


class KubeConfigError(CommandError):
    """The kubeconfig could not be read or updated."""


class ParseError(OpKubeconfigError):
    """A collaborator returned output that does not have the expected shape."""
