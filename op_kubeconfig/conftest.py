# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import json
from pathlib import Path

import pytest

from op_kubeconfig._testutils import CA_PEM, python_executable

HERE = Path(__file__).parent.resolve()
SCRIPTS = HERE / "tests" / "scripts"


@pytest.fixture
def example_items():
    return [
        {
            "id": "prod0000000000000000000001",
            "title": "Prod",
            "version": 3,
            "tags": ["kubeconfig"],
            "fields": [
                {"id": "f1", "label": "server", "value": "https://prod.example.com:6443"},
                {"id": "f2", "label": "CA", "value": CA_PEM},
                {"id": "f3", "label": "cert", "value": "PRODCERT"},
                {"id": "f4", "label": "key", "value": "PRODKEY"},
                {"id": "f5", "label": "notesPlain", "value": "ignored"},
            ],
        },
        {
            "id": "stag0000000000000000000002",
            "title": "Staging",
            "version": 1,
            "tags": ["kubeconfig", "dev"],
            "fields": [
                {"id": "f1", "label": "Server", "value": "https://staging.example.com"},
                {"id": "f2", "label": "Insecure Skip TLS Verify", "value": "yes"},
                {"id": "f3", "label": "Client Certificate", "value": "STAGCERT"},
                {"id": "f4", "label": "Client Key", "value": "STAGKEY"},
            ],
        },
        {
            "id": "mail0000000000000000000003",
            "title": "Mail",
            "tags": ["email"],
            "fields": [{"id": "f1", "label": "password", "value": "hunter2"}],
        },
    ]


@pytest.fixture
def fake_op(tmp_path, monkeypatch, example_items):
    """Path to a fake ``op`` executable serving ``example_items``."""
    items_file = tmp_path / "items.json"
    items_file.write_text(json.dumps(example_items))
    monkeypatch.setenv("FAKE_OP_ITEMS", str(items_file))
    monkeypatch.delenv("FAKE_OP_FAIL", raising=False)
    monkeypatch.delenv("FAKE_OP_GARBAGE", raising=False)
    return python_executable(tmp_path / "bin", "op", SCRIPTS / "fake_op.py")


@pytest.fixture
def fake_kubectl(tmp_path, monkeypatch):
    """Path to a fake ``kubectl`` and a function returning the calls made to it."""
    log = tmp_path / "kubectl.log"
    monkeypatch.setenv("FAKE_KUBECTL_LOG", str(log))
    monkeypatch.delenv("FAKE_KUBECTL_FAIL", raising=False)

    def calls():
        if not log.exists():
            return []
        return [json.loads(line) for line in log.read_text().splitlines()]

    return python_executable(tmp_path / "bin", "kubectl", SCRIPTS / "fake_kubectl.py"), calls


@pytest.fixture
def kubeconfig_file(tmp_path, monkeypatch):
    """Path of a kubeconfig with one unmanaged context, also exported as KUBECONFIG."""
    path = tmp_path / "kube" / "config"
    path.parent.mkdir()
    path.write_text(
        "apiVersion: v1\n"
        "kind: Config\n"
        "preferences: {}\n"
        "clusters:\n"
        "- name: kind-pytest\n"
        "  cluster:\n"
        "    server: https://127.0.0.1:6443\n"
        "users:\n"
        "- name: kind-pytest\n"
        "  user:\n"
        "    token: abc\n"
        "contexts:\n"
        "- name: kind-pytest\n"
        "  context:\n"
        "    cluster: kind-pytest\n"
        "    user: kind-pytest\n"
        "current-context: kind-pytest\n"
    )
    monkeypatch.setenv("KUBECONFIG", str(path))
    return path
