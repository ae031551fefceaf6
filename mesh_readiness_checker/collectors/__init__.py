"""
收集器模块 - 服务网格控制面就绪数据收集

提供工作负载就绪判断、owner 资源扫描和就绪状态聚合
"""

from .k8s_client import KubectlWrapper
from .models import (
    WorkloadKind,
    FetchScope,
    WorkloadCheck,
    AggregateOutcome,
    OWNER_KEY,
    COMPONENT_KEY,
    CNI_COMPONENT,
)
from .probes import deployment_ready, stateful_set_ready, daemon_set_ready
from .owned_resources import (
    fetch_owned_resources,
    collect_not_ready_for_kind,
    collect_not_ready_for_cni,
)
from .readiness_collector import (
    WORKLOAD_CHECKS,
    CNI_CHECK,
    calculate_not_ready_state,
    resolve_namespace,
)

__all__ = [
    # K8s 客户端
    "KubectlWrapper",
    # 模型
    "WorkloadKind",
    "FetchScope",
    "WorkloadCheck",
    "AggregateOutcome",
    "OWNER_KEY",
    "COMPONENT_KEY",
    "CNI_COMPONENT",
    # 就绪判断
    "deployment_ready",
    "stateful_set_ready",
    "daemon_set_ready",
    # 扫描与聚合
    "fetch_owned_resources",
    "collect_not_ready_for_kind",
    "collect_not_ready_for_cni",
    "WORKLOAD_CHECKS",
    "CNI_CHECK",
    "calculate_not_ready_state",
    "resolve_namespace",
]
