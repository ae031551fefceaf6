"""
kubectl JSON 输出的字段读取工具

按路径读取嵌套字段，返回 (value, found)。
路径中间节点或目标值类型不符时抛出 StatusDocumentError。
"""

from typing import Any, Dict, List, Optional, Tuple

from .errors import StatusDocumentError


def nested_field(obj: Dict[str, Any], *fields: str) -> Tuple[Any, bool]:
    """读取嵌套字段

    Args:
        obj: 资源对象 (kubectl -o json 的单个 item)
        *fields: 字段路径，如 "status", "conditions"

    Returns:
        (值, 是否存在)
    """
    current: Any = obj
    for i, field in enumerate(fields):
        if current is None:
            return None, False
        if not isinstance(current, dict):
            path = ".".join(fields[:i])
            raise StatusDocumentError(
                f"{path} 应为对象，实际为 {type(current).__name__}",
                field=path,
                value=current,
            )
        if field not in current:
            return None, False
        current = current[field]
    return current, True


def nested_slice(obj: Dict[str, Any], *fields: str) -> Tuple[Optional[List[Any]], bool]:
    """读取列表字段"""
    value, found = nested_field(obj, *fields)
    if not found or value is None:
        return None, False
    if not isinstance(value, list):
        raise StatusDocumentError(
            f"{'.'.join(fields)} 应为列表",
            field=".".join(fields),
            value=value,
        )
    return value, True


def nested_int(obj: Dict[str, Any], *fields: str) -> Tuple[int, bool]:
    """读取整数字段"""
    value, found = nested_field(obj, *fields)
    if not found or value is None:
        return 0, False
    # bool 是 int 的子类，需单独排除
    if isinstance(value, bool) or not isinstance(value, int):
        raise StatusDocumentError(
            f"{'.'.join(fields)} 应为整数",
            field=".".join(fields),
            value=value,
        )
    return value, True


def get_label(obj: Dict[str, Any], key: str) -> Tuple[str, bool]:
    """读取 metadata.labels 中的标签"""
    labels = (obj.get("metadata") or {}).get("labels") or {}
    if key in labels:
        return labels[key], True
    return "", False


def get_name(obj: Dict[str, Any]) -> str:
    """读取 metadata.name"""
    return (obj.get("metadata") or {}).get("name", "<unknown>")
