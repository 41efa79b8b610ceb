"""HTTP calls with exponential backoff on rate limiting.

Only 429 responses and transport failures are retried. Any other status,
success or not, is handed straight back to the caller.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, Mapping

import httpx

LOGGER = logging.getLogger("gemini_proxy.serve.retry")

RATE_LIMITED = 429


class RetryExhaustedError(Exception):
    """Raised when every attempt was rate limited or failed in transport."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__("API request failed after multiple retries.")


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    method: str = "POST",
    headers: Mapping[str, str] | None = None,
    content: bytes | str | None = None,
    params: Mapping[str, str] | None = None,
    retries: int = 3,
    sleep: Callable[[float], Awaitable[None]] | None = None,
) -> httpx.Response:
    """
    Send a request, retrying on 429 and transport errors.

    Attempt i (from 0) that fails is followed by a 2**i second wait.

    Args:
        client: Client used for every attempt.
        url: Target URL.
        method: HTTP method.
        headers: Request headers.
        content: Raw request body.
        params: Query parameters.
        retries: Maximum number of attempts.
        sleep: Awaitable delay function; defaults to asyncio.sleep.

    Returns:
        The first response whose status is not 429.
    """
    sleep = sleep or asyncio.sleep
    last_exc: httpx.TransportError | None = None
    for attempt in range(retries):
        delay = 2 ** attempt
        try:
            response = await client.request(method, url, headers=headers, content=content, params=params)
        except httpx.TransportError as e:
            last_exc = e
            LOGGER.warning(
                "Attempt %d/%d failed (%s); backing off %ss",
                attempt + 1, retries, type(e).__name__, delay,
            )
        else:
            if response.status_code != RATE_LIMITED:
                return response
            await response.aclose()
            LOGGER.warning("Attempt %d/%d rate limited; backing off %ss", attempt + 1, retries, delay)
        await sleep(delay)
    raise RetryExhaustedError(retries) from last_exc
