# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""
This module contains `op_kubeconfig`, which keeps kubeconfig entries in sync with
cluster credentials stored in 1Password.

`op-kubeconfig update` writes a cluster, user and context for every tagged item and
`op-kubeconfig auth` is the exec credential plugin those users call back into.
"""
from ._config import KubeConfig, KubectlConfig, kubeconfig_path
from ._data_utils import config_name, slugify, to_bool
from ._exceptions import (
    CommandError,
    KubeConfigError,
    OpKubeconfigError,
    ParseError,
    SecretStoreError,
)
from ._exec_credential import (
    ExecCredential,
    ExecCredentialStatus,
    authenticate,
    respond,
)
from ._onepassword import OnePassword
from ._records import CredentialRecord, RawRecord, SecretField, normalize
from ._sync import Synchronizer

__version__ = "0.1.0"

__all__ = [
    "CommandError",
    "CredentialRecord",
    "ExecCredential",
    "ExecCredentialStatus",
    "KubeConfig",
    "KubeConfigError",
    "KubectlConfig",
    "OnePassword",
    "OpKubeconfigError",
    "ParseError",
    "RawRecord",
    "SecretField",
    "SecretStoreError",
    "Synchronizer",
    "authenticate",
    "config_name",
    "kubeconfig_path",
    "normalize",
    "respond",
    "slugify",
    "to_bool",
]
