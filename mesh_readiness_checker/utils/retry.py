"""
重试机制模块

基于 Tenacity 库提供指数退避重试功能。
就绪检查核心本身不做重试，这里只供外层控制循环 (CLI --watch) 使用。
"""

import logging
from typing import Type, Tuple

from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from .errors import ReadinessError

logger = logging.getLogger(__name__)


def retry_on_reconcile_error(
    max_attempts: int = 5,
    wait_min: float = 2,
    wait_max: float = 60,
    exceptions: Tuple[Type[Exception], ...] = (ReadinessError,)
):
    """就绪检查重试装饰器

    一轮检查返回错误时，由外层循环按指数退避重新执行整轮检查。
    核心逻辑是幂等的，重跑一轮即可。

    Args:
        max_attempts: 最大尝试次数 (默认 5)
        wait_min: 最小等待时间 (秒, 默认 2)
        wait_max: 最大等待时间 (秒, 默认 60)
        exceptions: 需要重试的异常类型

    Returns:
        装饰器函数

    Example:
        @retry_on_reconcile_error(max_attempts=3)
        async def run_pass():
            await reconciler.update_readiness()
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=1, min=wait_min, max=wait_max),
        retry=retry_if_exception_type(exceptions),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
