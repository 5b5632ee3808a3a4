# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
from __future__ import annotations

import logging
import subprocess
import tempfile
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Type

import anyio
import anyio.to_thread

from ._exceptions import CommandError

logger = logging.getLogger(__name__)


async def check_output(
    *args: str, error: Type[CommandError] = CommandError, **kwargs
) -> str:
    """Run a command and return its output.

    Raises:
        CommandError: If the command can't be started or exits with a non-zero code.
            Pass ``error`` to raise a more specific subclass.
    """
    logger.debug("Running %s", args[0])
    try:
        completed_process = await anyio.run_process(
            args,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            **kwargs,
        )
    except OSError as e:
        raise error(f"Failed to run {args[0]}: {e}", command=args) from e
    if completed_process.returncode == 0:
        return completed_process.stdout.decode()
    else:
        stderr = completed_process.stderr.decode()
        raise error(
            f"{args[0]} exited with non-zero code {completed_process.returncode}:\n{stderr}",
            command=args,
            returncode=completed_process.returncode,
            stderr=stderr,
        )


@asynccontextmanager
async def NamedTemporaryFile(  # noqa: N802
    *args, delete: bool = True, **kwargs
) -> AsyncGenerator[anyio.Path, None]:
    """Create a temporary file that is deleted when the context exits."""
    kwargs.update(delete=False)

    def f():
        return tempfile.NamedTemporaryFile(*args, **kwargs)

    tmp = await anyio.to_thread.run_sync(f)
    tmp.close()
    fh = anyio.Path(tmp.name)
    try:
        yield fh
    finally:
        if delete:
            await fh.unlink(missing_ok=True)
