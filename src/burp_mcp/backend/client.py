"""Async client for the Burp Suite REST API.

Every request the adapter makes goes through :class:`BurpClient`.
Requests carry no authentication: the REST API is expected to run
with API keys disabled on a trusted interface.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from burp_mcp.core.errors import BackendError

if TYPE_CHECKING:
    from burp_mcp.config.schema import BackendConfig

logger = logging.getLogger(__name__)

API_PREFIX = "/v0.1"
SCAN_PATH = f"{API_PREFIX}/scan"
ISSUE_DEFINITIONS_PATH = f"{API_PREFIX}/knowledge_base/issue_definitions"
HTTP_REQUEST_PATH = f"{API_PREFIX}/http-request"


def _parse_body(response: httpx.Response) -> Any:
    """Return the response body as JSON, raw text, or ``None`` if empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class BurpClient:
    """Client for the Burp Suite REST API.

    Usage::

        async with BurpClient(config) as client:
            location = await client.start_scan("http://example.com")
    """

    def __init__(
        self,
        config: BackendConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._config.base_url

    async def __aenter__(self) -> BurpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        """Issue one request and raise :class:`BackendError` on failure."""
        logger.debug("%s %s%s", method, self.base_url, path)
        try:
            response = await self._client.request(method, path, json=json, timeout=timeout)
        except httpx.HTTPError as e:
            raise BackendError(str(e) or type(e).__name__) from e

        if not response.is_success:
            msg = f"Request failed with status code {response.status_code}"
            raise BackendError(
                msg,
                status_code=response.status_code,
                body=_parse_body(response),
            )
        return response

    async def start_scan(self, url: str) -> str | None:
        """Start a scan of *url*.

        Returns:
            The ``Location`` header of the response, which names the
            new scan task, or ``None`` if Burp did not send one.
        """
        response = await self._request("POST", SCAN_PATH, json={"urls": [url]})
        return response.headers.get("location")

    async def get_scan(self, task_id: str) -> Any:
        """Fetch the status, metrics and issue events of a scan task."""
        response = await self._request("GET", f"{SCAN_PATH}/{task_id}")
        return _parse_body(response)

    async def get_issue_definitions(self) -> Any:
        """Fetch every issue type Burp knows about."""
        response = await self._request("GET", ISSUE_DEFINITIONS_PATH)
        return _parse_body(response)

    async def send_http_request(
        self,
        url: str,
        method: str,
        headers: dict[str, Any],
        body: str,
    ) -> Any:
        """Have Burp send an HTTP request on our behalf."""
        payload = {"url": url, "method": method, "headers": headers, "body": body}
        response = await self._request("POST", HTTP_REQUEST_PATH, json=payload)
        return _parse_body(response)

    async def ping(self) -> int:
        """Check the REST API is reachable; return the HTTP status code."""
        response = await self._request(
            "GET",
            ISSUE_DEFINITIONS_PATH,
            timeout=self._config.connection_test_timeout,
        )
        return response.status_code
