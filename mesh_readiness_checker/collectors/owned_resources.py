"""
控制面拥有的工作负载扫描

按 maistra.io/owner 标签列出某类工作负载，并按
app.kubernetes.io/component 标签归并到组件级的未就绪状态。
"""

import logging
from typing import Any, Dict, List, Optional

from .k8s_client import KubectlWrapper
from .models import (
    COMPONENT_KEY,
    OWNER_KEY,
    ReadinessMap,
    WorkloadCheck,
    WorkloadKind,
)
from ..utils.errors import MisconfiguredResourceError, ProbeFetchError
from ..utils.unstructured import get_label, get_name

logger = logging.getLogger(__name__)


async def fetch_resources(
    client: KubectlWrapper,
    kind: WorkloadKind,
    namespace: str,
    labels: Dict[str, str]
) -> List[Dict[str, Any]]:
    """
    列出带有指定标签的资源

    Raises:
        ProbeFetchError: kubectl 调用失败或返回内容无法识别
    """
    result = await client.list_resources(kind.resource, namespace, labels)

    if not result.get("success"):
        raise ProbeFetchError(
            f"无法列出 {kind.value}: {result.get('error', 'Unknown error')}",
            kind=kind.value,
            namespace=namespace,
        )

    data = result.get("data")
    if not isinstance(data, dict):
        raise ProbeFetchError(
            f"{kind.value} 列表格式无法识别",
            kind=kind.value,
            namespace=namespace,
        )

    return data.get("items") or []


async def fetch_owned_resources(
    client: KubectlWrapper,
    kind: WorkloadKind,
    owner: str,
    namespace: str,
    extra_labels: Optional[Dict[str, str]] = None
) -> List[Dict[str, Any]]:
    """列出 owner 拥有的某类资源"""
    labels = {OWNER_KEY: owner}
    if extra_labels:
        labels.update(extra_labels)
    return await fetch_resources(client, kind, namespace, labels)


async def collect_not_ready_for_kind(
    client: KubectlWrapper,
    check: WorkloadCheck,
    owner: str,
    namespace: str,
    not_ready_state: ReadinessMap
) -> None:
    """
    扫描一类工作负载，结果以 OR 方式合并进 not_ready_state

    同一组件只要有一个资源未就绪，该组件即未就绪，本轮内不会被清除。
    列表失败时直接抛出，本类型不合并任何结果。

    Args:
        client: kubectl 客户端
        check: 工作负载检查方式
        owner: 控制面实例所在命名空间
        namespace: 读取的命名空间
        not_ready_state: 组件 -> 是否未就绪

    Raises:
        ProbeFetchError: 列表失败
    """
    resources = await fetch_owned_resources(
        client, check.kind, owner, namespace, check.extra_labels
    )

    for resource in resources:
        component, ok = get_label(resource, COMPONENT_KEY)
        if not ok:
            # 属于控制面却没有组件标签，无法归属到任何组件
            error = MisconfiguredResourceError(
                "跳过就绪检查: 资源缺少组件标签",
                kind=check.kind.value,
                name=get_name(resource),
            )
            logger.error("%s", error)
            continue

        not_ready = not check.is_ready(resource)
        not_ready_state[component] = not_ready_state.get(component, False) or not_ready


async def collect_not_ready_for_cni(
    client: KubectlWrapper,
    check: WorkloadCheck,
    operator_namespace: str
) -> bool:
    """
    检查 CNI DaemonSet

    CNI 由 operator 全局部署，不按实例的 owner 标签过滤。

    Returns:
        任一 CNI DaemonSet 未就绪时为 True

    Raises:
        ProbeFetchError: 列表失败
    """
    daemon_sets = await fetch_resources(
        client, check.kind, operator_namespace, check.extra_labels or {}
    )

    for daemon_set in daemon_sets:
        if not check.is_ready(daemon_set):
            return True
    return False
