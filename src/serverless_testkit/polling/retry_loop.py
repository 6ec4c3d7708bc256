"""
Poll-until-available retry loop shared by the DynamoDB pollers.

One attempt per iteration, a constant pause after every unsuccessful
attempt, and a terminal error once the attempt budget is spent. Errors raised
by an attempt are never retried.
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from ..config import RetryPolicy
from ..exceptions import RetriesExhaustedError
from ..utils.delay import delay

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def poll_until(
    attempt: Callable[[], Awaitable[T]],
    is_success: Callable[[T], bool],
    policy: RetryPolicy,
    *,
    sleep: Sleep = delay,
    operation: str = "poll",
    exhausted_error: type[RetriesExhaustedError] = RetriesExhaustedError,
    exhausted_message: str = "poll gave up after max retries",
) -> T:
    """
    Run ``attempt`` until ``is_success`` accepts its result.

    Args:
        attempt: Coroutine factory performing one store request
        is_success: Predicate over the attempt's result
        policy: Attempt budget and pause
        sleep: Pause primitive, awaited after each unsuccessful attempt
        operation: Name used in log events
        exhausted_error: Error class raised when the budget is spent
        exhausted_message: Message of that error

    Returns:
        The first result accepted by ``is_success``

    Raises:
        RetriesExhaustedError: ``exhausted_error`` after ``max_attempts``
            unsuccessful attempts
    """
    iteration = 1
    while iteration <= policy.max_attempts:
        result = await attempt()
        if is_success(result):
            if iteration > 1:
                logger.debug(
                    "Poll succeeded", operation=operation, iteration=iteration
                )
            return result

        logger.debug(
            "Poll attempt came back empty, pausing",
            operation=operation,
            iteration=iteration,
            max_attempts=policy.max_attempts,
            pause_seconds=policy.pause_seconds,
        )
        # The pause also follows the final attempt, before giving up.
        await sleep(policy.pause_seconds)
        iteration += 1

    logger.warning(
        "Poll attempts exhausted",
        operation=operation,
        max_attempts=policy.max_attempts,
    )
    raise exhausted_error(
        exhausted_message,
        attempts=policy.max_attempts,
        context={"operation": operation},
    )
