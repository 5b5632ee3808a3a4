# SPDX-FileCopyrightText: Copyright (c) 2024-2026, op-kubeconfig Developers (See LICENSE for list)
# SPDX-License-Identifier: BSD 3-Clause License
import json

import yaml
from typer.testing import CliRunner

import op_kubeconfig
from op_kubeconfig.cli import app

runner = CliRunner()


def test_help_default():
    result = runner.invoke(app, [])
    assert result.exit_code in (0, 2)
    assert "Usage:" in result.output
    assert "auth" in result.output
    assert "update" in result.output


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert op_kubeconfig.__version__ in result.stdout


def test_auth(fake_op):
    result = runner.invoke(app, ["auth", "prod0000000000000000000001", "--op", fake_op])
    assert result.exit_code == 0, result.output
    assert result.stdout.count("\n") == 1
    assert json.loads(result.stdout) == {
        "apiVersion": "client.authentication.k8s.io/v1",
        "kind": "ExecCredential",
        "status": {"clientCertificateData": "PRODCERT", "clientKeyData": "PRODKEY"},
    }


def test_auth_op_from_env(fake_op):
    result = runner.invoke(app, ["auth", "Staging"], env={"OP_KUBECONFIG_OP": fake_op})
    assert result.exit_code == 0, result.output
    status = json.loads(result.stdout)["status"]
    assert status == {"clientCertificateData": "STAGCERT", "clientKeyData": "STAGKEY"}


def test_auth_without_certificates(fake_op):
    result = runner.invoke(app, ["auth", "Mail", "--op", fake_op])
    assert result.exit_code == 0, result.output
    status = json.loads(result.stdout)["status"]
    assert status == {"clientCertificateData": "", "clientKeyData": ""}


def test_auth_missing_item(fake_op):
    result = runner.invoke(app, ["auth", "nope", "--op", fake_op])
    assert result.exit_code == 1
    assert "error:" in result.output
    assert "apiVersion" not in result.output


def test_update(fake_op, kubeconfig_file):
    result = runner.invoke(
        app, ["update", "--op", fake_op, "--exec-command", "/usr/local/bin/op-kubeconfig"]
    )
    assert result.exit_code == 0, result.output
    assert "prod:op" in result.stdout
    assert "staging:op" in result.stdout
    assert "kubeconfig updated successfully" in result.stdout

    config = yaml.safe_load(kubeconfig_file.read_text())
    assert [c["name"] for c in config["contexts"]] == ["kind-pytest", "prod:op", "staging:op"]
    assert config["current-context"] == "kind-pytest"
    users = {u["name"]: u["user"] for u in config["users"]}
    assert users["prod:op"]["exec"] == {
        "apiVersion": "client.authentication.k8s.io/v1",
        "command": "/usr/local/bin/op-kubeconfig",
        "args": ["auth", "prod0000000000000000000001"],
        "interactiveMode": "IfAvailable",
    }
    clusters = {c["name"]: c["cluster"] for c in config["clusters"]}
    assert clusters["staging:op"] == {
        "server": "https://staging.example.com",
        "insecure-skip-tls-verify": True,
    }
    assert "certificate-authority-data" in clusters["prod:op"]
    # Certificates are fetched by `auth`, they never end up in the kubeconfig
    assert "PRODCERT" not in kubeconfig_file.read_text()


def test_update_twice(fake_op, kubeconfig_file):
    result = runner.invoke(app, ["update", "--op", fake_op])
    assert result.exit_code == 0, result.output
    first = kubeconfig_file.read_text()
    result = runner.invoke(app, ["update", "--op", fake_op])
    assert result.exit_code == 0, result.output
    assert kubeconfig_file.read_text() == first


def test_update_tag(fake_op, tmp_path):
    path = tmp_path / "config"
    result = runner.invoke(
        app,
        ["update", "--kubeconfig", str(path)],
        env={"OP_KUBECONFIG_OP": fake_op, "OP_KUBECONFIG_TAG": "dev"},
    )
    assert result.exit_code == 0, result.output
    config = yaml.safe_load(path.read_text())
    assert [c["name"] for c in config["clusters"]] == ["staging:op"]


def test_update_with_kubectl(fake_op, fake_kubectl, tmp_path):
    kubectl, calls = fake_kubectl
    result = runner.invoke(
        app,
        ["update", "--tag", "dev", "--kubectl", "--kubectl-path", kubectl, "--op", fake_op],
    )
    assert result.exit_code == 0, result.output
    assert [c["args"][1] for c in calls()] == ["set-cluster", "set-credentials", "set-context"]
    assert calls()[1]["args"] == [
        "config",
        "set-credentials",
        "staging:op",
        "--exec-command=op-kubeconfig",
        "--exec-api-version=client.authentication.k8s.io/v1",
        "--exec-arg=auth",
        "--exec-arg=stag0000000000000000000002",
    ]


def test_update_kubectl_failure(fake_op, fake_kubectl, monkeypatch):
    kubectl, calls = fake_kubectl
    monkeypatch.setenv("FAKE_KUBECTL_FAIL", "set-credentials")
    result = runner.invoke(
        app, ["update", "--kubectl", "--kubectl-path", kubectl, "--op", fake_op]
    )
    assert result.exit_code == 1
    assert "set-credentials failed" in result.output
    assert [c["args"][1] for c in calls()] == ["set-cluster"]


def test_update_op_failure(fake_op, kubeconfig_file, monkeypatch):
    before = kubeconfig_file.read_text()
    monkeypatch.setenv("FAKE_OP_FAIL", "1")
    result = runner.invoke(app, ["update", "--op", fake_op])
    assert result.exit_code == 1
    assert "not currently signed in" in result.output
    assert kubeconfig_file.read_text() == before
