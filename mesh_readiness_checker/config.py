"""
就绪检查配置

优先级（后者覆盖前者）：
1. 默认值
2. 环境变量（支持 .env 文件）
3. YAML 配置文件
4. 命令行参数
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from .utils.errors import ReadinessError, ReadinessErrorCode


DEFAULT_OPERATOR_NAMESPACE = "istio-operator"

# 字段 -> 环境变量
ENV_KEYS = {
    "cni_enabled": "MESH_CNI_ENABLED",
    "operator_namespace": "POD_NAMESPACE",
    "skip_status_update": "MESH_SKIP_STATUS_UPDATE",
    "kube_context": "KUBE_CONTEXT",
    "watch_interval": "MESH_WATCH_INTERVAL",
}


class ReadinessSettings(BaseModel):
    """一轮检查使用的只读开关"""

    cni_enabled: bool = False
    operator_namespace: str = DEFAULT_OPERATOR_NAMESPACE
    skip_status_update: bool = False
    kube_context: Optional[str] = None
    watch_interval: float = Field(default=30.0, gt=0)


def _settings_from_env() -> Dict[str, Any]:
    values = {}
    for field, env_key in ENV_KEYS.items():
        val = os.getenv(env_key)
        if val:
            values[field] = val
    return values


def _settings_from_file(config_file: Union[str, Path]) -> Dict[str, Any]:
    path = Path(config_file)
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ReadinessError(
            f"无法读取配置文件: {e}",
            ReadinessErrorCode.CONFIGURATION_ERROR,
            {"file": str(path)}
        ) from e
    except yaml.YAMLError as e:
        raise ReadinessError(
            f"配置文件不是合法的 YAML: {e}",
            ReadinessErrorCode.CONFIGURATION_ERROR,
            {"file": str(path)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ReadinessError(
            "配置文件顶层必须是映射",
            ReadinessErrorCode.CONFIGURATION_ERROR,
            {"file": str(path)}
        )
    return data


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    **overrides: Any
) -> ReadinessSettings:
    """
    加载配置

    Args:
        config_file: YAML 配置文件路径（可选）
        **overrides: 命令行覆盖项，值为 None 的会被忽略

    Raises:
        ReadinessError: 配置文件无法读取或取值非法
    """
    load_dotenv()

    values = _settings_from_env()
    if config_file:
        values.update(_settings_from_file(config_file))
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ReadinessSettings(**values)
    except ValidationError as e:
        raise ReadinessError(
            f"配置取值非法: {e}",
            ReadinessErrorCode.CONFIGURATION_ERROR
        ) from e
