"""
Request instrumentation

Wraps a backend call, times it and reports one observation to a metrics sink.
Errors are recorded and re-raised unchanged.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from botocore.exceptions import ClientError

from core.interfaces.metrics import BaseMetricsSink

logger = logging.getLogger(__name__)

T = TypeVar("T")


def error_code(err: BaseException | None) -> str:
    """
    Map a request outcome to a status code label

    Returns:
        "200" on success, "cancel" if the request was cancelled, the backend's
        HTTP status for ClientError, "500" for everything else

    Example:
        >>> error_code(None)
        '200'
        >>> error_code(asyncio.CancelledError())
        'cancel'
    """
    if err is None:
        return "200"
    if isinstance(err, asyncio.CancelledError):
        return "cancel"
    if isinstance(err, ClientError):
        status = err.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        if status:
            return str(status)
    return "500"


async def collected_request(
    operation: str, sink: BaseMetricsSink, fn: Callable[[], Awaitable[T]]
) -> T:
    """
    Await fn() and record its duration and outcome

    Args:
        operation: Operation label (e.g. OBS.ListObject)
        sink: Metrics sink receiving the observation
        fn: Zero-argument coroutine function doing the backend call

    Returns:
        Whatever fn() returns
    """
    start = time.perf_counter()
    err: BaseException | None = None
    try:
        return await fn()
    except BaseException as e:
        err = e
        raise
    finally:
        duration = time.perf_counter() - start
        status_code = error_code(err)
        sink.observe(operation, status_code, duration)
        if err is not None:
            logger.debug(f"{operation} failed after {duration:.3f}s (status {status_code}): {err!r}")
