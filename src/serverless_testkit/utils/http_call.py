"""
HTTP helpers for serverless-testkit.

Thin httpx wrappers with a bounded timeout that turn non-2xx responses and
transport failures into ``HTTPCallError``.
"""

from typing import Any

import httpx
import structlog

from ..config import get_settings
from ..exceptions import HTTPCallError

logger = structlog.get_logger(__name__)


def resolve_timeout(timeout: float | None) -> float:
    """Explicit timeout, or the configured default."""
    return timeout if timeout is not None else get_settings().http_timeout_seconds


async def send_request(
    method: str,
    url: str,
    *,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send one request and return the response if it is a 2xx.

    Args:
        method: HTTP method
        url: Full request URL
        timeout: Request timeout in seconds
        client: Client to reuse; a short-lived one is opened otherwise
        **kwargs: Passed through to ``httpx.AsyncClient.request``

    Raises:
        HTTPCallError: On a non-2xx status or a transport failure
    """
    timeout = resolve_timeout(timeout)
    try:
        if client is not None:
            response = await client.request(method, url, timeout=timeout, **kwargs)
        else:
            async with httpx.AsyncClient(timeout=timeout) as new_client:
                response = await new_client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logger.error("HTTP request failed", method=method, url=url, error=str(e))
        raise HTTPCallError(
            f"Request to {url} failed: {e}", context={"method": method, "url": url}
        ) from e

    if not response.is_success:
        logger.warning(
            "HTTP request returned an error status",
            method=method,
            url=url,
            status_code=response.status_code,
        )
        raise HTTPCallError(
            f"API Error: {response.status_code} - {response.text}",
            status_code=response.status_code,
            context={"method": method, "url": url},
        )
    return response


async def http_call(
    endpoint: str,
    resource: str,
    method: str,
    payload: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    Make a JSON request to an API endpoint.

    Useful for triggering the API under test and checking its response.

    Args:
        endpoint: Base URL, e.g. ``"https://api.example.com"``
        resource: Resource path, e.g. ``"/users/123"``
        method: HTTP method, any case
        payload: Optional JSON body
        headers: Extra headers, merged over ``Content-Type: application/json``
        timeout: Request timeout in seconds (defaults to 10)
        client: Client to reuse

    Returns:
        The parsed JSON response, or None for an empty body (e.g. a 204)

    Raises:
        HTTPCallError: If the request fails, returns a non-2xx status or
            returns a body that is not JSON

    Example:
        order = await http_call(
            "https://api.example.com",
            "/orders",
            "POST",
            {"productId": "PROD-123", "quantity": 2},
            {"Authorization": f"Bearer {token}"},
        )
    """
    request_headers = {"Content-Type": "application/json", **(headers or {})}
    kwargs: dict[str, Any] = {"headers": request_headers}
    if payload is not None:
        kwargs["json"] = payload

    response = await send_request(
        method.upper(),
        f"{endpoint}{resource}",
        timeout=timeout,
        client=client,
        **kwargs,
    )
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise HTTPCallError(
            f"Response from {endpoint}{resource} is not valid JSON",
            status_code=response.status_code,
            context={"method": method.upper(), "url": f"{endpoint}{resource}"},
        ) from e
