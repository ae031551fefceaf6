"""
就绪收集器数据模型定义

使用枚举和类型常量（而非 Pydantic）以保持与收集器其它代码风格一致
"""

from enum import Enum
from typing import Any, Callable, Dict, NamedTuple, Optional

from ..utils.errors import ProbeFetchError


# 标签键
OWNER_KEY = "maistra.io/owner"
COMPONENT_KEY = "app.kubernetes.io/component"

# CNI 特殊处理
CNI_COMPONENT = "cni"
CNI_LABELS = {"istio": "cni"}


class WorkloadKind(str, Enum):
    """工作负载类型枚举"""
    DEPLOYMENT = "Deployment"
    STATEFULSET = "StatefulSet"
    DAEMONSET = "DaemonSet"

    @property
    def resource(self) -> str:
        """kubectl 使用的资源名"""
        return _KIND_RESOURCES[self]


_KIND_RESOURCES = {
    WorkloadKind.DEPLOYMENT: "deployments.apps",
    WorkloadKind.STATEFULSET: "statefulsets.apps",
    WorkloadKind.DAEMONSET: "daemonsets.apps",
}


class FetchScope(str, Enum):
    """资源读取范围"""
    INSTANCE = "instance"  # 控制面实例所在命名空间
    OPERATOR = "operator"  # operator 自身命名空间


ReadyPredicate = Callable[[Dict[str, Any]], bool]

# component -> not ready
ReadinessMap = Dict[str, bool]


class WorkloadCheck(NamedTuple):
    """一种工作负载的检查方式"""
    kind: WorkloadKind
    scope: FetchScope
    is_ready: ReadyPredicate
    extra_labels: Optional[Dict[str, str]] = None
    # 聚合结果中的固定组件名 (如 CNI)
    component: Optional[str] = None


class AggregateOutcome(NamedTuple):
    """一轮聚合的结果

    error 不为空时 not_ready_state 只包含出错前已完成的类型
    """
    not_ready_state: ReadinessMap
    error: Optional[ProbeFetchError] = None
