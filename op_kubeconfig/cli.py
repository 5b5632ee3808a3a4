# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from typing_extensions import Annotated

import op_kubeconfig

from ._config import KubeConfig, KubectlConfig
from ._constants import DEFAULT_EXEC_COMMAND, DEFAULT_TAG
from ._exec_credential import authenticate
from ._onepassword import OnePassword
from ._sync import Synchronizer
from ._typer_utils import register

console = Console()

app = typer.Typer(
    no_args_is_help=True,
    help="Keep kubeconfig in sync with cluster credentials stored in 1Password.",
)

OpOption = Annotated[
    str,
    typer.Option(
        "--op",
        envvar="OP_KUBECONFIG_OP",
        help="Path to the 1Password CLI.",
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")
    ] = False,
):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


async def auth(
    identifier: Annotated[str, typer.Argument(help="Name or id of the 1Password item.")],
    op: OpOption = "op",
):
    """Print an ExecCredential for a 1Password item.

    This is called by kubectl through the users written by `update`, the only
    thing written to stdout is the ExecCredential JSON.
    """
    credential = await authenticate(OnePassword(command=op), identifier)
    typer.echo(credential.to_json())


async def update(
    tag: Annotated[
        str,
        typer.Option(envvar="OP_KUBECONFIG_TAG", help="1Password tag to search for."),
    ] = DEFAULT_TAG,
    kubeconfig: Annotated[
        Optional[Path],
        typer.Option(
            help="Kubeconfig file to update. Defaults to the first file in "
            "$KUBECONFIG or ~/.kube/config.",
        ),
    ] = None,
    kubectl: Annotated[
        bool,
        typer.Option(
            "--kubectl",
            help="Update the kubeconfig by running kubectl instead of editing it directly.",
        ),
    ] = False,
    kubectl_path: Annotated[
        str,
        typer.Option(envvar="OP_KUBECONFIG_KUBECTL", help="Path to kubectl."),
    ] = "kubectl",
    exec_command: Annotated[
        str,
        typer.Option(
            envvar="OP_KUBECONFIG_EXEC_COMMAND",
            help="Command kubeconfig users run to fetch credentials.",
        ),
    ] = DEFAULT_EXEC_COMMAND,
    op: OpOption = "op",
):
    """Update the kubeconfig file based on items from 1Password."""
    if kubectl:
        writer = KubectlConfig(kubeconfig=kubeconfig, command=kubectl_path)
    else:
        writer = await KubeConfig(kubeconfig)
    synchronizer = Synchronizer(
        OnePassword(command=op), writer, exec_command=exec_command
    )
    names = await synchronizer.update(tag)
    for name in names:
        console.print(f'Set context "{name}".')
    console.print("kubeconfig updated successfully")


def version():
    """Print the op-kubeconfig version."""
    typer.echo(op_kubeconfig.__version__)


register(app, auth)
register(app, update)
register(app, version)


def go():
    app()


if __name__ == "__main__":
    go()
