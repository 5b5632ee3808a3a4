# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
EXEC_API_VERSION = "client.authentication.k8s.io/v1"
EXEC_CREDENTIAL_KIND = "ExecCredential"
EXEC_INTERACTIVE_MODE = "IfAvailable"

DEFAULT_TAG = "kubeconfig"
DEFAULT_EXEC_COMMAND = "op-kubeconfig"
DEFAULT_KUBECONFIG = "~/.kube/config"

# Marks kubeconfig entries written by op-kubeconfig
CONFIG_NAME_SUFFIX = ":op"
