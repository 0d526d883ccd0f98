"""Microsoft Graph API client."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Any, ClassVar, Self

import httpx

from ....application.exceptions import DirectoryOperationError, PaginationLimitExceededError
from .token_provider import AccessTokenProvider

logger = logging.getLogger(__name__)


def raise_for_status(description: str, response: httpx.Response) -> None:
    """Translate a non-success response into DirectoryOperationError."""
    if response.is_success:
        return

    try:
        body = response.json()
    except ValueError:
        body = None
    raise DirectoryOperationError(description, response.status_code, body)


class GraphClient:
    """
    Async client for Microsoft Graph API.

    Handles authentication, error translation and paginated requests. Use it
    as an async context manager, or pass a shared ``http_client``.
    """

    GRAPH_BASE_URL: ClassVar[str] = "https://graph.microsoft.com/v1.0"
    GRAPH_BETA_URL: ClassVar[str] = "https://graph.microsoft.com/beta"
    SCOPE: ClassVar[str] = "https://graph.microsoft.com/.default"
    MAX_PAGES: ClassVar[int] = 1000

    def __init__(
        self,
        token_provider: AccessTokenProvider,
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Graph client."""
        self._token_provider = token_provider
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str, *, beta: bool) -> str:
        # Continuation links are already absolute
        if path.startswith("http"):
            return path
        return f"{self.GRAPH_BETA_URL if beta else self.GRAPH_BASE_URL}{path}"

    async def _headers(self, content_type: str | None = "application/json") -> dict[str, str]:
        token = await self._token_provider.get_token(self.SCOPE)
        headers = {"Authorization": f"Bearer {token}"}
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        description: str,
        json: Any = None,
        params: dict[str, str] | None = None,
        content: bytes | None = None,
        content_type: str | None = "application/json",
        beta: bool = False,
    ) -> Any:
        """
        Send an authenticated request to the Graph API.

        Args:
            method: HTTP verb.
            path: Path below the API version, or an absolute URL.
            description: What the request does, used in error messages.
            json: JSON body.
            params: Query string parameters.
            content: Raw body, used instead of ``json``.
            content_type: Content-Type header of the body.
            beta: Send to the beta endpoint instead of v1.0.

        Returns:
            The decoded JSON body, or None for empty responses.

        Raises:
            DirectoryOperationError: If the response is not a success.
        """
        response = await self._client.request(
            method,
            self._url(path, beta=beta),
            headers=await self._headers(content_type),
            json=json,
            params=params,
            content=content,
        )
        raise_for_status(description, response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def iter_pages(
        self,
        path: str,
        *,
        description: str,
        params: dict[str, str] | None = None,
    ) -> AsyncIterator[list[dict[str, Any]]]:
        """
        Yield every page of a paginated endpoint.

        Iteration ends when a page carries no `@odata.nextLink`.

        Raises:
            PaginationLimitExceededError: If more than MAX_PAGES pages are returned.
        """
        url: str | None = path
        pages = 0

        while url:
            if pages >= self.MAX_PAGES:
                msg = f"Error {description}: more than {self.MAX_PAGES} pages returned"
                raise PaginationLimitExceededError(msg)

            # The continuation link already carries the query string
            data = await self.request("GET", url, description=description, params=params if pages == 0 else None)
            pages += 1

            yield data.get("value", [])
            url = data.get("@odata.nextLink")

    async def download(self, url: str, *, description: str) -> httpx.Response:
        """Fetch a public URL without Graph authentication."""
        response = await self._client.get(url, follow_redirects=True)
        raise_for_status(description, response)
        return response
