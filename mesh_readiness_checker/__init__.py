"""
服务网格控制面就绪检查

汇总 ServiceMeshControlPlane 拥有的工作负载状态，
写回实例上的 Ready 条件。
"""

from .reconciler import ReadinessReconciler
from .config import ReadinessSettings, load_settings

__version__ = "1.0.0"

__all__ = [
    "ReadinessReconciler",
    "ReadinessSettings",
    "load_settings",
]
