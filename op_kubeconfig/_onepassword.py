# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from ._async_utils import check_output
from ._exceptions import ParseError, SecretStoreError
from ._records import RawRecord

logger = logging.getLogger(__name__)


class OnePassword:
    """Read items from 1Password using the ``op`` CLI.

    The CLI must already be signed in, op-kubeconfig never handles 1Password
    authentication itself.

    Args:
        command: Name or path of the ``op`` executable.
        env: Extra environment variables for the ``op`` process.
    """

    def __init__(self, command: str = "op", env: Optional[Dict[str, str]] = None):
        self.command = command
        self._env = env

    async def _run(self, *args: str) -> Any:
        env = None
        if self._env:
            env = os.environ.copy()
            env.update(self._env)
        output = await check_output(
            self.command, *args, "--format", "json", env=env, error=SecretStoreError
        )
        # op prints nothing at all when a list is empty
        if not output.strip():
            return None
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"Failed to parse '{self.command} {' '.join(args)}' output: {e}"
            ) from e

    async def get_item(self, identifier: str) -> RawRecord:
        """Fetch a single item by name or id."""
        data = await self._run("item", "get", identifier)
        if data is None:
            raise ParseError(f"'{self.command} item get {identifier}' printed nothing")
        return RawRecord.from_dict(data)

    async def list_items(self, tag: str) -> List[RawRecord]:
        """Fetch every item with a tag.

        Listing only returns item summaries, so each item is then fetched in full.
        Items are returned in the order 1Password lists them.
        """
        summaries = await self._run("item", "list", "--tags", tag)
        if summaries is None:
            return []
        if not isinstance(summaries, list):
            raise ParseError(
                f"Expected a list of items from '{self.command} item list', "
                f"got {type(summaries).__name__}"
            )
        logger.debug("Found %d items tagged %s", len(summaries), tag)
        items = []
        for summary in summaries:
            if not isinstance(summary, dict) or not summary.get("id"):
                raise ParseError(f"Item summary without an id: {summary!r}")
            items.append(await self.get_item(summary["id"]))
        return items
