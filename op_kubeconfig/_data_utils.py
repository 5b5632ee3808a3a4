# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
"""Utilities for turning human written labels and titles into kubeconfig data."""
from __future__ import annotations

import re

from ._constants import CONFIG_NAME_SUFFIX

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Convert a title into a kubeconfig entry name.

    Only spaces are replaced, any other character is passed through as is.

    Args:
        name: The human readable title.

    Returns:
        The lower-cased title with every space replaced by a hyphen.

    Examples:
        >>> slugify("My Cluster")
        'my-cluster'
    """
    return name.lower().replace(" ", "-")


def config_name(name: str) -> str:
    """Name shared by the cluster, user and context entries for a title.

    The suffix makes it possible to tell managed entries apart from ones
    that were added by hand.

    Examples:
        >>> config_name("My Cluster")
        'my-cluster:op'
    """
    return f"{slugify(name)}{CONFIG_NAME_SUFFIX}"


def canonical_label(label: str) -> str:
    """Normalize a field label so that case and spacing don't matter.

    Examples:
        >>> canonical_label("  Client   Key ")
        'client-key'
    """
    return _WHITESPACE.sub("-", label.strip().lower())


def to_bool(value: str) -> bool:
    """Loosely interpret a string as a boolean.

    Only the first character after trimming is inspected, so ``"true "``,
    ``"Yes"`` and ``"1"`` are all true. Everything else, including an empty
    string, is false.
    """
    value = value.strip().lower()
    return value[:1] in ("t", "y", "1")
