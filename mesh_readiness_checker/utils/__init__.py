"""
工具模块
"""

from .errors import (
    ReadinessError,
    ReadinessErrorCode,
    ProbeFetchError,
    PersistenceError,
    StatusDocumentError,
    MisconfiguredResourceError,
)
from .retry import retry_on_reconcile_error

__all__ = [
    "ReadinessError",
    "ReadinessErrorCode",
    "ProbeFetchError",
    "PersistenceError",
    "StatusDocumentError",
    "MisconfiguredResourceError",
    "retry_on_reconcile_error",
]
