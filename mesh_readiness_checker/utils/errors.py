"""
就绪检查错误类型定义

提供结构化的错误处理机制。只有 ProbeFetchError 和 PersistenceError
会被返回给调用方，其余两类在就绪判断中被吸收。
"""

from enum import Enum
from typing import Dict, Any, Optional


class ReadinessErrorCode(Enum):
    """就绪检查错误码枚举"""

    # 资源读取类错误
    PROBE_FETCH_ERROR = "PROBE_FETCH_ERROR"
    UNREADABLE_STATUS = "UNREADABLE_STATUS"
    MISCONFIGURED_RESOURCE = "MISCONFIGURED_RESOURCE"

    # 状态写入类错误
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"

    # 配置类错误
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # 未知错误
    UNKNOWN = "UNKNOWN"


class ReadinessError(Exception):
    """就绪检查异常基类

    Attributes:
        message: 错误消息
        code: 错误码
        details: 额外的错误详情
    """

    def __init__(
        self,
        message: str,
        code: ReadinessErrorCode = ReadinessErrorCode.UNKNOWN,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error": self.message,
            "code": self.code.value,
            "details": self.details
        }

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"[{self.code.value}] {self.message} ({details_str})"
        return f"[{self.code.value}] {self.message}"


class ProbeFetchError(ReadinessError):
    """资源列表获取失败

    中止本轮剩余的所有探测
    """

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
        namespace: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        all_details = details or {}
        if kind:
            all_details["kind"] = kind
        if namespace:
            all_details["namespace"] = namespace

        super().__init__(message, ReadinessErrorCode.PROBE_FETCH_ERROR, all_details)


class PersistenceError(ReadinessError):
    """状态写入失败"""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        all_details = details or {}
        if resource:
            all_details["resource"] = resource
        if name:
            all_details["name"] = name

        super().__init__(message, ReadinessErrorCode.PERSISTENCE_ERROR, all_details)


class StatusDocumentError(ReadinessError):
    """资源或控制面实例的 status 无法解析

    工作负载上出现时只会把该资源降级为未就绪，不会中断扫描
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, ReadinessErrorCode.UNREADABLE_STATUS, details)


class MisconfiguredResourceError(ReadinessError):
    """属于控制面但缺少组件标签的资源

    只记录日志，不计入未就绪原因
    """

    def __init__(self, message: str, kind: str, name: str):
        super().__init__(
            message,
            ReadinessErrorCode.MISCONFIGURED_RESOURCE,
            {"kind": kind, "name": name}
        )
