"""
控制面 status 条件模型

与 Kubernetes 条件约定一致：每种 type 只保留一条，
更新时整体替换；status 值变化时才刷新 lastTransitionTime。
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConditionType(str, Enum):
    """条件类型"""
    READY = "Ready"


class ConditionStatus(str, Enum):
    """条件状态，只有三种取值"""
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


class ConditionReason(str, Enum):
    """Ready 条件的原因"""
    PROBE_ERROR = "ProbeError"
    COMPONENTS_NOT_READY = "ComponentsNotReady"
    COMPONENTS_READY = "ComponentsReady"


def _now() -> datetime:
    # metav1.Time 精度为秒
    return datetime.now(timezone.utc).replace(microsecond=0)


class Condition(BaseModel):
    """单个状态条件"""

    model_config = ConfigDict(populate_by_name=True)

    # 实例上可能还有其它控制器写入的条件，type/reason 不限定为枚举
    type: str
    status: ConditionStatus = ConditionStatus.UNKNOWN
    reason: str = ""
    message: str = ""
    last_transition_time: Optional[datetime] = Field(default=None, alias="lastTransitionTime")

    def to_kube(self) -> Dict[str, Any]:
        """转换为 Kubernetes JSON 格式"""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


class ControlPlaneStatus(BaseModel):
    """控制面实例的 status

    只建模 conditions，其余字段原样保留但不会被写回。
    """

    model_config = ConfigDict(extra="allow")

    conditions: List[Condition] = Field(default_factory=list)

    @field_validator("conditions", mode="before")
    @classmethod
    def _null_conditions(cls, value: Any) -> Any:
        # 未写过条件的实例上可能是 conditions: null
        return [] if value is None else value

    def get_condition(self, condition_type: str) -> Condition:
        """按类型读取条件；不存在时返回 Unknown 状态的空条件"""
        for condition in self.conditions:
            if condition.type == condition_type:
                return condition
        return Condition(type=condition_type, status=ConditionStatus.UNKNOWN)

    def set_condition(self, condition: Condition) -> "ControlPlaneStatus":
        """按类型更新或新增条件

        Returns:
            self，便于链式调用
        """
        now = _now()
        for i, existing in enumerate(self.conditions):
            if existing.type == condition.type:
                if existing.status != condition.status:
                    transition_time = now
                else:
                    transition_time = existing.last_transition_time or now
                self.conditions[i] = condition.model_copy(
                    update={"last_transition_time": transition_time}
                )
                return self

        self.conditions.append(condition.model_copy(update={"last_transition_time": now}))
        return self

    def conditions_to_kube(self) -> List[Dict[str, Any]]:
        """全部条件的 Kubernetes JSON 格式"""
        return [condition.to_kube() for condition in self.conditions]
