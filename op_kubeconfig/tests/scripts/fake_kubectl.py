#!/usr/bin/env python
# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
#
# Stand-in for kubectl that appends each invocation to the JSON lines file named
# by FAKE_KUBECTL_LOG. Exits non-zero for the subcommand in FAKE_KUBECTL_FAIL.

import json
import os
import sys

args = sys.argv[1:]
call = {"args": args}
for arg in args:
    if arg.startswith("--certificate-authority="):
        with open(arg.split("=", 1)[1]) as fh:
            call["certificate-authority"] = fh.read()

if len(args) > 1 and args[1] == os.environ.get("FAKE_KUBECTL_FAIL"):
    print(f"error: {args[1]} failed", file=sys.stderr)
    sys.exit(1)

with open(os.environ["FAKE_KUBECTL_LOG"], "a") as fh:
    fh.write(json.dumps(call) + "\n")
