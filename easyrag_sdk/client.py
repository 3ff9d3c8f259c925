"""EasyRAG SDK main client."""

import asyncio
import time
from collections.abc import Mapping
from typing import Any

import httpx

from .config import ClientConfig, resolve_config
from .exceptions import (
    NetworkError,
    RequestTimeoutError,
    UnexpectedResponseError,
    error_from_response,
)
from .files import FilesClient
from .logging_config import get_logger
from .query import QueryClient
from .search import SearchClient
from .streaming import QueryStream
from .tokens import TokensClient

logger = get_logger(__name__)


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class EasyRAGClient:
    """
    Async client for the EasyRAG document ingestion and RAG API.

    Usage:
        async with EasyRAGClient("sk-...") as client:
            await client.files.upload("my-dataset", "./report.pdf")
            answer = await client.query.create("my-dataset", "What is in the report?")

    Args:
        config: API key or frontend token, a ClientConfig, a mapping of
            api_key/base_url/timeout, or None to read EASYRAG_* variables.
        api_key: Overrides the credential.
        base_url: Overrides the API endpoint.
        timeout: Overrides the request timeout, in seconds.
        http_client: Optional preconfigured httpx.AsyncClient. It is not
            closed by ``aclose``.
    """

    def __init__(
        self,
        config: "str | ClientConfig | Mapping[str, Any] | None" = None,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._config = resolve_config(
            config, api_key=api_key, base_url=base_url, timeout=timeout
        )
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(self._config.timeout)
        )

        self.files = FilesClient(self)
        self.search = SearchClient(self)
        self.query = QueryClient(self)
        self.tokens = TokensClient(self)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def __aenter__(self) -> "EasyRAGClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    def _headers(self, headers: Mapping[str, str] | None = None) -> httpx.Headers:
        merged = httpx.Headers(headers)
        # Caller headers may add to but never replace the credential
        merged["Authorization"] = f"Bearer {self._config.api_key}"
        return merged

    def _build_request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Request:
        return self._http.build_request(
            method,
            self._url(path),
            params=params,
            json=json,
            data=data,
            files=files,
            headers=self._headers(headers),
        )

    async def _send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        """Send within the configured deadline, normalizing transport failures."""
        try:
            return await asyncio.wait_for(
                self._http.send(request, stream=stream), self._config.timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(
                "EasyRAG request timed out",
                method=request.method,
                path=request.url.path,
                timeout=self._config.timeout,
            )
            raise RequestTimeoutError(details=e) from e
        except (httpx.HTTPError, OSError) as e:
            logger.warning(
                "EasyRAG request failed",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            raise NetworkError(str(e) or "Network error", details=e) from e

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        data: Mapping[str, Any] | None = None,
        files: Any = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """
        Perform one request and return the decoded JSON body.

        Raises:
            RequestTimeoutError: If the configured timeout elapsed.
            NetworkError: On a connection-level failure.
            APIStatusError: On a non-2xx response (subclass chosen by status).
            UnexpectedResponseError: If a 2xx body is not JSON.
        """
        request = self._build_request(
            method, path, params=params, json=json, data=data, files=files, headers=headers
        )
        logger.debug("EasyRAG request", method=method, path=path)
        start = time.monotonic()

        response = await self._send(request)

        logger.debug(
            "EasyRAG response",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=round((time.monotonic() - start) * 1000, 1),
        )

        if not response.is_success:
            error = error_from_response(response.status_code, _json_or_none(response))
            logger.warning(
                "EasyRAG API error",
                method=method,
                path=path,
                status=error.status,
                code=error.code,
            )
            raise error

        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise UnexpectedResponseError(
                "Response body is not valid JSON",
                status=response.status_code,
                details=response.text[:500],
            ) from e

    def _stream(
        self,
        path: str,
        *,
        json: Any,
        headers: Mapping[str, str] | None = None,
    ) -> QueryStream:
        """Return a QueryStream that POSTs to path when first opened or read."""
        return QueryStream(
            lambda: self._open_stream(path, json=json, headers=headers),
            read_timeout=self._config.timeout,
        )

    async def _open_stream(
        self,
        path: str,
        *,
        json: Any,
        headers: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """
        Start a streaming POST and return the response with its body unread.

        A non-2xx status fails here, before any event is read.
        """
        request = self._build_request("POST", path, json=json, headers=headers)
        logger.debug("EasyRAG stream request", path=path)

        response = await self._send(request, stream=True)

        if not response.is_success:
            try:
                await response.aread()
                body = _json_or_none(response)
            except httpx.HTTPError:
                body = None
            finally:
                await response.aclose()

            error = error_from_response(response.status_code, body)
            logger.warning(
                "EasyRAG stream rejected",
                path=path,
                status=error.status,
                code=error.code,
            )
            raise error

        return response
