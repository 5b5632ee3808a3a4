# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import stat
import sys
from pathlib import Path

CA_PEM = "-----BEGIN CERTIFICATE-----\nMIIBfakeca\n-----END CERTIFICATE-----\n"


def python_executable(directory: Path, name: str, script: Path) -> str:
    """Create an executable called ``name`` that runs a Python script.

    The script is run with the current interpreter, which lets tests point
    op-kubeconfig at fake ``op`` and ``kubectl`` binaries.

    Args:
        directory: Where to create the executable.
        name: File name of the executable.
        script: The Python script to run.

    Returns:
        The path of the new executable.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)
