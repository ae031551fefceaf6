#!/usr/bin/env python3
"""
测试 kubectl 命令构造和结果解析（不访问集群）
"""

import asyncio
import json
import subprocess

from mesh_readiness_checker.collectors import k8s_client
from mesh_readiness_checker.collectors.k8s_client import KubectlWrapper, format_selector


class FakeRun:
    """替换 subprocess.run，记录命令"""

    def __init__(self, returncode=0, stdout="", stderr="", raises=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.raises:
            raise self.raises
        return subprocess.CompletedProcess(cmd, self.returncode, self.stdout, self.stderr)


def test_format_selector():
    assert format_selector(None) == ""
    assert format_selector({}) == ""
    assert format_selector({"maistra.io/owner": "istio-system", "istio": "cni"}) == \
        "istio=cni,maistra.io/owner=istio-system"


def test_list_resources_command(monkeypatch):
    fake = FakeRun(stdout=json.dumps({"items": [{"metadata": {"name": "istiod"}}]}))
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    client = KubectlWrapper(context="prod")
    result = asyncio.run(client.list_resources(
        "deployments.apps", "istio-system", {"maistra.io/owner": "istio-system"}
    ))

    assert result["success"] is True
    assert result["data"]["items"][0]["metadata"]["name"] == "istiod"
    cmd, _ = fake.calls[0]
    assert cmd == [
        "kubectl", "--context", "prod",
        "get", "deployments.apps", "-n", "istio-system",
        "-l", "maistra.io/owner=istio-system",
        "-o", "json",
    ]


def test_failed_command(monkeypatch):
    fake = FakeRun(returncode=1, stderr="Error from server (Forbidden): deployments.apps is forbidden\n")
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    result = asyncio.run(KubectlWrapper().list_resources("deployments.apps", "istio-system"))

    assert result["success"] is False
    assert result["error"] == "Error from server (Forbidden): deployments.apps is forbidden"
    assert "-l" not in fake.calls[0][0]


def test_timeout(monkeypatch):
    fake = FakeRun(raises=subprocess.TimeoutExpired(cmd="kubectl", timeout=15))
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    result = asyncio.run(KubectlWrapper().list_resources("statefulsets.apps", "istio-system"))

    assert result["success"] is False
    assert "timed out" in result["error"]


def test_missing_kubectl(monkeypatch):
    fake = FakeRun(raises=FileNotFoundError(2, "No such file or directory", "kubectl"))
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    result = asyncio.run(KubectlWrapper().get_control_plane("basic", "istio-system"))

    assert result["success"] is False
    assert "No such file or directory" in result["error"]


def test_patch_status_command(monkeypatch):
    fake = FakeRun(stdout="{}")
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    status = {"conditions": [{"type": "Ready", "status": "True"}]}
    asyncio.run(KubectlWrapper().patch_status(
        "servicemeshcontrolplanes.maistra.io", "basic", "istio-system", status
    ))

    cmd, _ = fake.calls[0]
    assert cmd[:3] == ["kubectl", "patch", "servicemeshcontrolplanes.maistra.io"]
    assert "--subresource=status" in cmd
    assert "--type=merge" in cmd
    patch = json.loads(cmd[cmd.index("-p") + 1])
    assert patch == {"status": status}


def test_create_resource_uses_stdin(monkeypatch):
    fake = FakeRun(stdout="{}")
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    manifest = {"apiVersion": "v1", "kind": "Event"}
    asyncio.run(KubectlWrapper().create_resource(manifest))

    cmd, kwargs = fake.calls[0]
    assert cmd == ["kubectl", "create", "-f", "-", "-o", "json"]
    assert json.loads(kwargs["input"]) == manifest


def test_non_json_output(monkeypatch):
    fake = FakeRun(stdout="No resources found in istio-system namespace.\n")
    monkeypatch.setattr(k8s_client.subprocess, "run", fake)

    result = asyncio.run(KubectlWrapper().list_resources("daemonsets.apps", "istio-system"))

    assert result == {"success": True, "data": "No resources found in istio-system namespace."}

