#!/usr/bin/env python3
"""
测试各类工作负载的就绪判断，包括字段缺失时的默认值
"""

from mesh_readiness_checker.collectors.probes import (
    daemon_set_ready,
    deployment_ready,
    stateful_set_ready,
)

from fakes import daemon_set, deployment, make_resource, stateful_set


def test_deployment_available():
    """Available=True 才算就绪"""
    assert deployment_ready(deployment("istiod", "pilot", available=True))
    assert not deployment_ready(deployment("istiod", "pilot", available=False))


def test_deployment_missing_conditions():
    """缺少条件列表或 Available 条件时未就绪"""
    empty = make_resource("Deployment", "istiod", "pilot", {"conditions": []})
    assert not deployment_ready(empty), "空条件列表应视为未就绪"

    no_status = make_resource("Deployment", "istiod", "pilot")
    assert not deployment_ready(no_status), "缺少 status 应视为未就绪"

    only_progressing = make_resource(
        "Deployment", "istiod", "pilot",
        {"conditions": [{"type": "Progressing", "status": "True"}]}
    )
    assert not deployment_ready(only_progressing), "没有 Available 条件应视为未就绪"


def test_deployment_malformed_status():
    """status 无法解析时未就绪，不抛异常"""
    bad_conditions = make_resource("Deployment", "istiod", "pilot", {"conditions": "Available"})
    assert not deployment_ready(bad_conditions)

    bad_status = make_resource("Deployment", "istiod", "pilot", ["not", "a", "map"])
    assert not deployment_ready(bad_status)


def test_deployment_skips_unreadable_condition_entries():
    """无法解析的条件条目被跳过，后续的 Available 仍然生效"""
    resource = make_resource(
        "Deployment", "istiod", "pilot",
        {"conditions": ["garbage", {"type": "Available", "status": "True"}]}
    )
    assert deployment_ready(resource)


def test_stateful_set_replicas():
    """readyReplicas >= replicas 才算就绪"""
    assert stateful_set_ready(stateful_set("prometheus", "prometheus", replicas=2, ready_replicas=2))
    assert stateful_set_ready(stateful_set("prometheus", "prometheus", replicas=1, ready_replicas=2))
    assert not stateful_set_ready(stateful_set("prometheus", "prometheus", replicas=3, ready_replicas=1))


def test_stateful_set_missing_fields():
    """任一字段缺失时未就绪"""
    no_ready = make_resource("StatefulSet", "prometheus", "prometheus", {"replicas": 1})
    assert not stateful_set_ready(no_ready)

    no_replicas = make_resource("StatefulSet", "prometheus", "prometheus", {"readyReplicas": 1})
    assert not stateful_set_ready(no_replicas)

    no_status = make_resource("StatefulSet", "prometheus", "prometheus")
    assert not stateful_set_ready(no_status)


def test_stateful_set_malformed_status():
    """字段类型错误时未就绪"""
    resource = make_resource(
        "StatefulSet", "prometheus", "prometheus",
        {"replicas": "1", "readyReplicas": 1}
    )
    assert not stateful_set_ready(resource)


def test_daemon_set_absence_is_ready():
    """没有 numberUnavailable 时就绪（与 Deployment/StatefulSet 相反）"""
    istio_cni = daemon_set("istio-cni-node", "cni")
    assert "numberUnavailable" not in istio_cni["status"]
    assert daemon_set_ready(istio_cni)

    no_status = make_resource("DaemonSet", "istio-cni-node", "cni")
    assert daemon_set_ready(no_status)


def test_daemon_set_unavailable():
    assert daemon_set_ready(daemon_set("istio-cni-node", "cni", number_unavailable=0))
    assert not daemon_set_ready(daemon_set("istio-cni-node", "cni", number_unavailable=2))


def test_daemon_set_malformed_status():
    resource = make_resource("DaemonSet", "istio-cni-node", "cni", {"numberUnavailable": "two"})
    assert not daemon_set_ready(resource)
