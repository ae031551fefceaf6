"""
状态模块 - Ready 条件、控制面实例模型和事件
"""

from .conditions import (
    Condition,
    ConditionType,
    ConditionStatus,
    ConditionReason,
    ControlPlaneStatus,
)
from .instance import ControlPlaneInstance
from .events import (
    EventRecorder,
    KubectlEventRecorder,
    EVENT_TYPE_NORMAL,
    EVENT_TYPE_WARNING,
    EVENT_REASON_READY,
    EVENT_REASON_NOT_READY,
)
from .transition import ReconcileOutcome, update_readiness_status

__all__ = [
    # 条件
    "Condition",
    "ConditionType",
    "ConditionStatus",
    "ConditionReason",
    "ControlPlaneStatus",
    # 实例
    "ControlPlaneInstance",
    # 事件
    "EventRecorder",
    "KubectlEventRecorder",
    "EVENT_TYPE_NORMAL",
    "EVENT_TYPE_WARNING",
    "EVENT_REASON_READY",
    "EVENT_REASON_NOT_READY",
    # 状态转换
    "ReconcileOutcome",
    "update_readiness_status",
]
