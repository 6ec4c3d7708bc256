"""Pause helper."""

import asyncio


async def delay(delay_in_seconds: float) -> None:
    """
    Pause the current coroutine for the given number of seconds.

    Other tasks on the event loop keep running, so several pollers can wait
    side by side.

    Args:
        delay_in_seconds: Number of seconds to wait
    """
    await asyncio.sleep(delay_in_seconds)
