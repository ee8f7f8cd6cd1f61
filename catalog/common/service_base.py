"""
Base class for catalog services.

Provides a per-class logger and an async timing decorator that logs how long
each service operation took and whether its ``Result`` succeeded.
"""

import logging
import time
from functools import wraps
from typing import Awaitable, Callable, TypeVar

from .result import OperationResult

R = TypeVar("R")


class BaseService:
    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable[..., Awaitable[R]]) -> Callable[..., Awaitable[R]]:
        """
        Decorator for async service methods.

        Logs elapsed time at INFO for successful results and at WARNING with the
        error kind for failed ones. Exceptions are logged and re-raised.
        """

        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            start_time = time.perf_counter()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug("%s started", method_name)
                result = await func(self, *args, **kwargs)
            except Exception as e:
                elapsed_ms = (time.perf_counter() - start_time) * 1000
                self.logger.error("%s raised after %.2fms: %s", method_name, elapsed_ms, e)
                raise

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            if isinstance(result, OperationResult) and not result.ok:
                self.logger.warning(
                    "%s failed with '%s' in %.2fms", method_name, result.kind.value, elapsed_ms
                )
            else:
                self.logger.info("%s completed in %.2fms", method_name, elapsed_ms)
            return result

        return wrapper
