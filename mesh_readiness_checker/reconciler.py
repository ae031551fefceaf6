"""
控制面就绪检查入口

一轮检查的顺序：
1. 聚合所有工作负载的就绪状态
2. 更新 Ready 条件（必要时发出事件）
3. 需要时写回 status（每轮最多一次）

错误优先级：探测错误比 status 写入错误更有价值。
- 写入失败且探测也失败：记录写入错误，抛出探测错误
- 写入失败、探测成功：抛出写入错误
- 其它情况：有探测错误则抛出，否则正常返回
"""

import logging
from typing import Optional

from .collectors.k8s_client import KubectlWrapper
from .collectors.readiness_collector import calculate_not_ready_state
from .config import ReadinessSettings
from .status.events import EventRecorder
from .status.instance import ControlPlaneInstance
from .status.transition import ReconcileOutcome, update_readiness_status
from .utils.errors import PersistenceError

logger = logging.getLogger(__name__)


class ReadinessReconciler:
    """单个控制面实例的就绪检查

    同一实例同一时间只能有一轮检查在执行；不同实例可以各自并发。
    """

    def __init__(
        self,
        client: KubectlWrapper,
        recorder: EventRecorder,
        instance: ControlPlaneInstance,
        settings: Optional[ReadinessSettings] = None
    ):
        self.client = client
        self.recorder = recorder
        self.instance = instance
        self.settings = settings or ReadinessSettings()

    async def update_readiness(self) -> None:
        """
        执行一轮就绪检查

        Raises:
            ProbeFetchError: 资源列表失败（即使 status 写入也失败）
            PersistenceError: 探测成功但 status 写入失败
        """
        outcome = await self.update_readiness_status()

        if outcome.should_persist and not self.skip_status_update():
            try:
                await self.post_status()
            except PersistenceError as status_error:
                if outcome.error is None:
                    raise
                logger.error("Error updating status: %s", status_error)

        if outcome.error is not None:
            raise outcome.error

    async def update_readiness_status(self) -> ReconcileOutcome:
        """聚合就绪状态并更新内存中的 Ready 条件"""
        logger.info(
            "Updating ServiceMeshControlPlane readiness state (%s/%s)",
            self.instance.namespace, self.instance.name
        )
        aggregate = await calculate_not_ready_state(
            self.client,
            self.instance.namespace,
            self.settings.cni_enabled,
            self.settings.operator_namespace,
        )
        return await update_readiness_status(self.instance, aggregate, self.recorder)

    async def post_status(self) -> None:
        """
        写回 conditions

        Raises:
            PersistenceError: kubectl patch 失败
        """
        status = {"conditions": self.instance.status.conditions_to_kube()}
        result = await self.client.patch_status(
            self.instance.resource,
            self.instance.name,
            self.instance.namespace,
            status,
        )
        if not result.get("success"):
            raise PersistenceError(
                f"写回 status 失败: {result.get('error', 'Unknown error')}",
                resource=self.instance.resource,
                name=f"{self.instance.namespace}/{self.instance.name}",
            )

    def skip_status_update(self) -> bool:
        """配置要求跳过，或实例正在删除时不写回 status"""
        return self.settings.skip_status_update or self.instance.deletion_timestamp is not None
