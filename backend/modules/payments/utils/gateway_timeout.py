# backend/modules/payments/utils/gateway_timeout.py

"""
Bounded-time execution of gateway calls.

Each call runs on a shared worker pool and is abandoned after the
configured timeout. Failures are reported once as ``GatewayError``; the
caller never retries.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Callable, Tuple, Type, TypeVar

import httpx

from backend.core.exceptions import APIError, GatewayError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Transport-level failures a real gateway client can raise
GATEWAY_FAILURES: Tuple[Type[Exception], ...] = (
    ConnectionError,
    TimeoutError,
    httpx.HTTPError,
)


class GatewayCallRunner:
    """Runs gateway operations with a timeout on a dedicated thread pool"""

    def __init__(self, timeout_seconds: float, max_workers: int = 8):
        self.timeout_seconds = timeout_seconds
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="payment-gateway"
        )

    def call(self, operation: str, fn: Callable[..., T], *args, **kwargs) -> T:
        future = self._executor.submit(fn, *args, **kwargs)
        try:
            return future.result(timeout=self.timeout_seconds)
        except FutureTimeout:
            future.cancel()
            logger.error(
                f"Gateway {operation} timed out after {self.timeout_seconds}s"
            )
            raise GatewayError(f"Payment gateway timed out during {operation}")
        except APIError:
            raise
        except GATEWAY_FAILURES as e:
            logger.error(f"Gateway {operation} failed: {e}")
            raise GatewayError(f"Payment gateway failed during {operation}")
        except Exception as e:
            logger.exception(f"Unexpected gateway error during {operation}: {e}")
            raise GatewayError(f"Payment gateway failed during {operation}")

    def shutdown(self):
        self._executor.shutdown(wait=False)
