"""
控制面就绪状态聚合

按固定顺序依次检查：
1. Deployment
2. StatefulSet
3. DaemonSet
4. CNI DaemonSet (仅在启用 CNI 时)

任一类型列表失败立即停止，返回已收集的部分结果和错误；
后续类型（包括 CNI）本轮都不会再检查。
"""

import logging

from .k8s_client import KubectlWrapper
from .models import (
    CNI_COMPONENT,
    CNI_LABELS,
    AggregateOutcome,
    FetchScope,
    ReadinessMap,
    WorkloadCheck,
    WorkloadKind,
)
from .owned_resources import collect_not_ready_for_cni, collect_not_ready_for_kind
from .probes import daemon_set_ready, deployment_ready, stateful_set_ready
from ..utils.errors import ProbeFetchError

logger = logging.getLogger(__name__)


# 检查顺序即表顺序
WORKLOAD_CHECKS = (
    WorkloadCheck(WorkloadKind.DEPLOYMENT, FetchScope.INSTANCE, deployment_ready),
    WorkloadCheck(WorkloadKind.STATEFULSET, FetchScope.INSTANCE, stateful_set_ready),
    WorkloadCheck(WorkloadKind.DAEMONSET, FetchScope.INSTANCE, daemon_set_ready),
)

CNI_CHECK = WorkloadCheck(
    WorkloadKind.DAEMONSET,
    FetchScope.OPERATOR,
    daemon_set_ready,
    extra_labels=CNI_LABELS,
    component=CNI_COMPONENT,
)


def resolve_namespace(
    check: WorkloadCheck,
    instance_namespace: str,
    operator_namespace: str
) -> str:
    """按检查的读取范围选择命名空间"""
    if check.scope == FetchScope.OPERATOR:
        return operator_namespace
    return instance_namespace


async def calculate_not_ready_state(
    client: KubectlWrapper,
    instance_namespace: str,
    cni_enabled: bool,
    operator_namespace: str
) -> AggregateOutcome:
    """
    计算本轮所有组件的未就绪状态

    每轮都从空字典开始，不会带入上一轮的结果。

    Args:
        client: kubectl 客户端
        instance_namespace: 控制面实例所在命名空间 (同时作为 owner)
        cni_enabled: 是否检查 CNI
        operator_namespace: operator 所在命名空间 (CNI 所在位置)

    Returns:
        AggregateOutcome(not_ready_state, error)
    """
    not_ready_state: ReadinessMap = {}

    for check in WORKLOAD_CHECKS:
        namespace = resolve_namespace(check, instance_namespace, operator_namespace)
        logger.debug("检查 %s 就绪状态 (namespace=%s)", check.kind.value, namespace)
        try:
            await collect_not_ready_for_kind(
                client, check, instance_namespace, namespace, not_ready_state
            )
        except ProbeFetchError as e:
            return AggregateOutcome(not_ready_state, e)

    cni_component = CNI_CHECK.component
    if not cni_enabled:
        not_ready_state[cni_component] = False
        return AggregateOutcome(not_ready_state)

    namespace = resolve_namespace(CNI_CHECK, instance_namespace, operator_namespace)
    logger.debug("检查 CNI 就绪状态 (namespace=%s)", namespace)
    try:
        not_ready_state[cni_component] = await collect_not_ready_for_cni(
            client, CNI_CHECK, namespace
        )
    except ProbeFetchError as e:
        not_ready_state[cni_component] = True
        return AggregateOutcome(not_ready_state, e)

    return AggregateOutcome(not_ready_state)
