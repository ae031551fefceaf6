"""
Ready 条件状态转换

- 探测出错：每轮都写入 Unknown/ProbeError 并发出 Warning 事件，不做去重，
  保证探测失败期间持续可见。
- 探测成功：只在 Ready 的 status 值真正变化时写入并发出事件（边沿触发），
  稳定状态下不产生任何写入和事件。
"""

import logging
from typing import NamedTuple, Optional

from .conditions import (
    Condition,
    ConditionReason,
    ConditionStatus,
    ConditionType,
)
from .events import (
    EVENT_REASON_NOT_READY,
    EVENT_REASON_READY,
    EVENT_TYPE_NORMAL,
    EVENT_TYPE_WARNING,
    EventRecorder,
)
from .instance import ControlPlaneInstance
from ..collectors.models import AggregateOutcome
from ..utils.errors import ProbeFetchError

logger = logging.getLogger(__name__)


MESSAGE_PROBE_ERROR = "Error collecting ready state: {error}"
MESSAGE_NOT_READY = "Some components are not fully available: {components}"
MESSAGE_NOT_READY_EVENT = "The following components are not fully available: {components}"
MESSAGE_READY = "All component deployments are Available"


class ReconcileOutcome(NamedTuple):
    """状态转换结果，决定是否需要写回 status"""
    should_persist: bool
    error: Optional[ProbeFetchError] = None


async def update_readiness_status(
    instance: ControlPlaneInstance,
    outcome: AggregateOutcome,
    recorder: EventRecorder
) -> ReconcileOutcome:
    """
    根据聚合结果更新实例上的 Ready 条件

    只修改内存中的 instance.status，写回由调用方负责。

    Args:
        instance: 控制面实例
        outcome: 本轮聚合结果
        recorder: 事件接收方

    Returns:
        ReconcileOutcome(should_persist, error)
    """
    if outcome.error is not None:
        condition = Condition(
            type=ConditionType.READY.value,
            status=ConditionStatus.UNKNOWN,
            reason=ConditionReason.PROBE_ERROR.value,
            message=MESSAGE_PROBE_ERROR.format(error=outcome.error),
        )
        instance.status.set_condition(condition)
        await recorder.event(instance, EVENT_TYPE_WARNING, EVENT_REASON_NOT_READY, condition.message)
        return ReconcileOutcome(True, outcome.error)

    unready_components = sorted(
        component
        for component, not_ready in outcome.not_ready_state.items()
        if not_ready
    )
    for component in unready_components:
        logger.info("%s resources are not fully available", component)

    ready_condition = instance.status.get_condition(ConditionType.READY.value)

    if unready_components:
        if ready_condition.status != ConditionStatus.FALSE:
            components = ", ".join(unready_components)
            condition = Condition(
                type=ConditionType.READY.value,
                status=ConditionStatus.FALSE,
                reason=ConditionReason.COMPONENTS_NOT_READY.value,
                message=MESSAGE_NOT_READY.format(components=components),
            )
            instance.status.set_condition(condition)
            await recorder.event(
                instance,
                EVENT_TYPE_WARNING,
                EVENT_REASON_NOT_READY,
                MESSAGE_NOT_READY_EVENT.format(components=components),
            )
            return ReconcileOutcome(True)
    elif ready_condition.status != ConditionStatus.TRUE:
        condition = Condition(
            type=ConditionType.READY.value,
            status=ConditionStatus.TRUE,
            reason=ConditionReason.COMPONENTS_READY.value,
            message=MESSAGE_READY,
        )
        instance.status.set_condition(condition)
        await recorder.event(instance, EVENT_TYPE_NORMAL, EVENT_REASON_READY, condition.message)
        return ReconcileOutcome(True)

    return ReconcileOutcome(False)
