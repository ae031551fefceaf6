"""
工作负载就绪判断

每种工作负载一个判断函数，输入为 kubectl -o json 的单个资源对象。
status 无法解析时记录日志并视为未就绪，不影响同类型其它资源的检查。

缺失字段时的默认值：
- Deployment: 缺少 Available 条件 → 未就绪
- StatefulSet: 缺少 replicas/readyReplicas → 未就绪
- DaemonSet: 缺少 numberUnavailable → 就绪 (与前两者不对称，保持兼容)
"""

import logging
from typing import Any, Dict

from ..utils.errors import StatusDocumentError
from ..utils.unstructured import get_name, nested_int, nested_slice

logger = logging.getLogger(__name__)


def deployment_ready(deployment: Dict[str, Any]) -> bool:
    """Deployment 存在 Available=True 条件时就绪"""
    try:
        conditions, found = nested_slice(deployment, "status", "conditions")
    except StatusDocumentError as e:
        logger.error("读取 Deployment.Status 失败: %s (Deployment=%s)", e, get_name(deployment))
        return False
    if not found:
        return False

    for condition in conditions:
        if not isinstance(condition, dict):
            logger.error("无法解析 Deployment 条件 (Deployment=%s): %r", get_name(deployment), condition)
            continue
        if condition.get("type") == "Available":
            return condition.get("status") == "True"

    return False


def stateful_set_ready(stateful_set: Dict[str, Any]) -> bool:
    """StatefulSet 的 readyReplicas >= replicas 时就绪"""
    try:
        replicas, found = nested_int(stateful_set, "status", "replicas")
        if not found:
            return False
        ready_replicas, found = nested_int(stateful_set, "status", "readyReplicas")
        if not found:
            return False
    except StatusDocumentError as e:
        logger.error("读取 StatefulSet.Status 失败: %s (StatefulSet=%s)", e, get_name(stateful_set))
        return False

    return ready_replicas >= replicas


def daemon_set_ready(daemon_set: Dict[str, Any]) -> bool:
    """DaemonSet 没有 numberUnavailable 或其为 0 时就绪"""
    try:
        unavailable, found = nested_int(daemon_set, "status", "numberUnavailable")
    except StatusDocumentError as e:
        logger.error("读取 DaemonSet.Status 失败: %s (DaemonSet=%s)", e, get_name(daemon_set))
        return False

    return not found or unavailable == 0
