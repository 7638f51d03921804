"""Shared httpx client for outbound calls.

The only outbound traffic is optional enrichment (avatar lookups), so the
client is small and impatient: a slow third party costs the request at
most a few seconds and never fails it.
"""

import httpx

USER_AGENT = "LinkBoard/0.1 (+avatar lookup)"

OUTBOUND_TIMEOUT = httpx.Timeout(connect=2.0, read=3.0, write=3.0, pool=2.0)
OUTBOUND_LIMITS = httpx.Limits(max_connections=20, max_keepalive_connections=5)

_outbound_client: httpx.AsyncClient | None = None


def create_http_client(
    *,
    base_url: str = "",
    timeout: httpx.Timeout = OUTBOUND_TIMEOUT,
    limits: httpx.Limits = OUTBOUND_LIMITS,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        limits=limits,
        headers={"User-Agent": USER_AGENT},
        follow_redirects=True,
    )


def get_outbound_client() -> httpx.AsyncClient:
    """Process-wide client, created on first use.

    Closed by ``close_outbound_client`` from the app lifespan.
    """
    global _outbound_client
    if _outbound_client is None:
        _outbound_client = create_http_client()
    return _outbound_client


async def close_outbound_client() -> None:
    global _outbound_client
    if _outbound_client is not None:
        await _outbound_client.aclose()
        _outbound_client = None
