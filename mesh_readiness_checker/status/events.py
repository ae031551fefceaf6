"""
控制面事件记录

事件是发出即忘的：创建失败只记录日志，不影响就绪检查结果。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Protocol

from .instance import ControlPlaneInstance
from ..collectors.k8s_client import KubectlWrapper

logger = logging.getLogger(__name__)


EVENT_TYPE_NORMAL = "Normal"
EVENT_TYPE_WARNING = "Warning"

EVENT_REASON_READY = "Ready"
EVENT_REASON_NOT_READY = "NotReady"

EVENT_SOURCE = "servicemeshcontrolplane-controller"


class EventRecorder(Protocol):
    """事件接收方"""

    async def event(
        self,
        instance: ControlPlaneInstance,
        event_type: str,
        reason: str,
        message: str
    ) -> None:
        ...


def build_event(
    instance: ControlPlaneInstance,
    event_type: str,
    reason: str,
    message: str,
    component: str = EVENT_SOURCE
) -> Dict[str, Any]:
    """构造 core/v1 Event"""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    return {
        "apiVersion": "v1",
        "kind": "Event",
        "metadata": {
            "generateName": f"{instance.name}.",
            "namespace": instance.namespace,
        },
        "involvedObject": instance.object_reference(),
        "type": event_type,
        "reason": reason,
        "message": message,
        "source": {"component": component},
        "firstTimestamp": now,
        "lastTimestamp": now,
        "count": 1,
    }


class KubectlEventRecorder:
    """通过 kubectl create 写入 Event"""

    def __init__(self, client: KubectlWrapper, component: str = EVENT_SOURCE):
        self.client = client
        self.component = component

    async def event(
        self,
        instance: ControlPlaneInstance,
        event_type: str,
        reason: str,
        message: str
    ) -> None:
        manifest = build_event(instance, event_type, reason, message, self.component)
        result = await self.client.create_resource(manifest)
        if not result.get("success"):
            logger.warning(
                "创建事件失败 (%s/%s, reason=%s): %s",
                instance.namespace, instance.name, reason, result.get("error", "Unknown error")
            )
