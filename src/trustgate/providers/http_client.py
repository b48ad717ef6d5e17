"""Shared async HTTP helper for node-backed providers.

Thin wrapper around ``httpx.AsyncClient`` with a standard timeout and
user-agent header. A 404 means "no record" and returns None; every other
failure raises ``ProviderError`` so the evaluator can score the factor
as 0.
"""

from __future__ import annotations

import logging
from typing import Any

from trustgate.exceptions import ProviderError

logger = logging.getLogger(__name__)

# Timeout for all node HTTP requests (seconds).
DEFAULT_TIMEOUT: float = 10.0

# User-Agent sent with every request.
USER_AGENT: str = "TrustGate-NodeAdapter/0.1"


def _ensure_httpx() -> Any:  # noqa: ANN401
    """Lazily import httpx and raise a friendly error if missing.

    Raises:
        ProviderError: If httpx is not installed.
    """
    try:
        import httpx  # noqa: F811

        return httpx
    except ImportError:
        raise ProviderError(
            "httpx is required for node-backed providers.\n"
            "Install it with: pip install trustgate[node]"
        ) from None


async def fetch_json(url: str, *, timeout: float = DEFAULT_TIMEOUT) -> Any:
    """Fetch a URL and parse the response as JSON.

    Args:
        url: The URL to fetch.
        timeout: Request timeout in seconds.

    Returns:
        Parsed JSON, or None if the node answered 404.

    Raises:
        ProviderError: On timeouts, other HTTP errors, or invalid JSON.
    """
    httpx = _ensure_httpx()
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        ) as client:
            resp = await client.get(url)
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            return resp.json()
    except httpx.TimeoutException as exc:
        logger.warning("Timeout fetching %s", url)
        raise ProviderError(f"Timeout fetching {url}") from exc
    except httpx.HTTPStatusError as exc:
        logger.warning("HTTP %d from %s", exc.response.status_code, url)
        raise ProviderError(f"HTTP {exc.response.status_code} from {url}") from exc
    except (httpx.RequestError, ValueError) as exc:
        logger.warning("Request error for %s: %s", url, exc)
        raise ProviderError(f"Request error for {url}: {exc}") from exc
