"""
ServiceMeshControlPlane 实例模型
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from .conditions import ControlPlaneStatus
from ..collectors.k8s_client import CONTROL_PLANE_RESOURCE
from ..utils.errors import StatusDocumentError


class ControlPlaneInstance(BaseModel):
    """被检查的控制面实例"""

    api_version: str = "maistra.io/v2"
    kind: str = "ServiceMeshControlPlane"
    name: str
    namespace: str
    uid: str = ""
    resource_version: str = ""
    deletion_timestamp: Optional[str] = None
    status: ControlPlaneStatus = Field(default_factory=ControlPlaneStatus)

    @classmethod
    def from_kube(cls, obj: Dict[str, Any]) -> "ControlPlaneInstance":
        """从 kubectl -o json 输出构造

        Raises:
            StatusDocumentError: 实例内容不符合预期 (如条件 status 不是 True/False/Unknown)
        """
        metadata = obj.get("metadata") or {}
        try:
            return cls(
                api_version=obj.get("apiVersion", "maistra.io/v2"),
                kind=obj.get("kind", "ServiceMeshControlPlane"),
                name=metadata.get("name", ""),
                namespace=metadata.get("namespace", ""),
                uid=metadata.get("uid", ""),
                resource_version=metadata.get("resourceVersion", ""),
                deletion_timestamp=metadata.get("deletionTimestamp"),
                status=ControlPlaneStatus.model_validate(obj.get("status") or {}),
            )
        except ValidationError as e:
            errors = e.errors()
            field = ".".join(str(loc) for loc in errors[0]["loc"]) if errors else None
            raise StatusDocumentError(
                f"无法解析控制面实例: {e.error_count()} 个字段不合法",
                field=field,
                value=errors[0].get("input") if errors else None,
            ) from e

    @property
    def resource(self) -> str:
        """kubectl 使用的资源名"""
        return CONTROL_PLANE_RESOURCE

    def object_reference(self) -> Dict[str, str]:
        """Event.involvedObject"""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "name": self.name,
            "namespace": self.namespace,
            "uid": self.uid,
            "resourceVersion": self.resource_version,
        }
