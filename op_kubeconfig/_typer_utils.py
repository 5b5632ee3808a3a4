# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License

import asyncio
import inspect
from functools import wraps

import typer

from ._exceptions import OpKubeconfigError


def _typer_async(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return asyncio.run(f(*args, **kwargs))
        except KeyboardInterrupt:
            raise typer.Exit(code=130)

    return wrapper


def _exit_on_error(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except OpKubeconfigError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1)

    return wrapper


def register(app, func):
    if inspect.iscoroutinefunction(func):
        func = _typer_async(func)
    func = _exit_on_error(func)
    app.command()(func)
