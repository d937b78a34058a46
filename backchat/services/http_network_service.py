"""
HTTP implementation of a NetworkService, backed by ``httpx.AsyncClient``.

Each instance talks to one backend (its base URL) and keeps at most one
exchange in flight: starting a new ``send_request`` cancels the previous one,
whose caller receives ``RequestCancelledError``.

A request gets up to two attempts. The second one only happens when the first
was answered with 401 and a token hook is configured; the hook is then asked
for a fresh token. Transport failures are never retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING
from urllib.parse import urlsplit, urlunsplit

import httpx

from backchat.services import NetworkService, NetworkServiceResponse, TokenHook
from backchat.services.errors import (
    PreparingRequestError,
    RequestCancelledError,
    ResponseError,
    SendingRequestError,
)
from backchat.services.http_status import HTTPStatusCode, StatusBand, classify
from backchat.services.webservice_endpoint import EndpointRequest

if TYPE_CHECKING:
    from backchat.config.settings import Settings

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 2

SpecialStatusListener = Callable[["HTTPNetworkService", httpx.Response], None]


def default_client(*, timeout: float = 30.0, max_connections_per_host: int = 1) -> httpx.AsyncClient:
    """Client with one connection per host that revalidates instead of caching."""
    return httpx.AsyncClient(
        timeout=timeout,
        limits=httpx.Limits(max_connections=max_connections_per_host),
        headers={"Cache-Control": "no-cache"},
    )


class HTTPNetworkService(NetworkService):
    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        x_header_fields: Mapping[str, str] | None = None,
        special_status_code: int | None = None,
        token_hook: TokenHook | None = None,
        authorization_scheme: str | None = "Bearer",
        owns_client: bool | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the server to talk to.
            client: The ``httpx.AsyncClient`` to send with. Defaults to
                ``default_client()``, which this service then owns and closes.
            owns_client: Whether ``aclose()`` closes the client. Defaults to
                True only when the service builds the client itself.
            x_header_fields: Header fields added to every request.
            special_status_code: Client error status that, when received, is
                reported to the special status listeners.
            token_hook: Optional source of access tokens.
            authorization_scheme: Prefix for the token in the Authorization
                header. ``None`` sends the token as is.
        """
        super().__init__(
            base_url,
            x_header_fields=x_header_fields,
            special_status_code=special_status_code,
            token_hook=token_hook,
        )
        self._owns_client = client is None if owns_client is None else owns_client
        self._client = client if client is not None else default_client()
        self.authorization_scheme = authorization_scheme
        self._current_task: asyncio.Task[NetworkServiceResponse] | None = None
        self._superseded: set[asyncio.Task[NetworkServiceResponse]] = set()
        self._listeners: list[SpecialStatusListener] = []

    @classmethod
    def from_base_url(cls, base_url: str, **kwargs) -> HTTPNetworkService:
        """Create a service after checking that ``base_url`` is usable."""
        _split_base_url(base_url)
        return cls(base_url, **kwargs)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        token_hook: TokenHook | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> HTTPNetworkService:
        _split_base_url(settings.BASE_URL)
        owns_client = client is None
        if client is None:
            client = default_client(
                timeout=settings.TIMEOUT_SECONDS,
                max_connections_per_host=settings.MAX_CONNECTIONS_PER_HOST,
            )
        return cls(
            settings.BASE_URL,
            client=client,
            x_header_fields=settings.EXTRA_HEADERS,
            special_status_code=settings.SPECIAL_STATUS_CODE,
            token_hook=token_hook,
            authorization_scheme=settings.AUTH_SCHEME or None,
            owns_client=owns_client,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        current = self._current_task
        if current is not None and not current.done():
            self._superseded.add(current)
            current.cancel()
            await asyncio.wait({current})
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> HTTPNetworkService:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Special status notification
    # ------------------------------------------------------------------

    def add_special_status_listener(self, listener: SpecialStatusListener) -> None:
        """Register a callable invoked with ``(service, response)`` whenever
        the special status code is received."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_special_status_listener(self, listener: SpecialStatusListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify_special_status(self, response: httpx.Response) -> None:
        logger.info("[network] Special status code %d received from %s", response.status_code, response.url)
        for listener in list(self._listeners):
            try:
                listener(self, response)
            except Exception:
                logger.exception("[network] Special status listener %r failed", listener)

    # ------------------------------------------------------------------
    # Sending
    # ------------------------------------------------------------------

    async def send_request(self, request: EndpointRequest) -> NetworkServiceResponse:
        # Re-checked after every wait: another caller may have started in between.
        while (previous := self._current_task) is not None and not previous.done():
            logger.info("[network] Cancelling superseded request to %s", self.base_url)
            self._superseded.add(previous)
            previous.cancel()
            await asyncio.wait({previous})

        task = asyncio.create_task(self._send(request))
        self._current_task = task
        try:
            return await task
        except asyncio.CancelledError:
            if task not in self._superseded:
                raise
            raise RequestCancelledError(
                f"Request {request.method} {request.url} was superseded by a newer request",
                url=request.url,
            ) from None
        finally:
            self._superseded.discard(task)
            if self._current_task is task:
                self._current_task = None

    async def _send(self, request: EndpointRequest) -> NetworkServiceResponse:
        url = self.absolute_url(request.url)
        base_headers = httpx.Headers(request.headers)
        base_headers.update(self.x_header_fields)

        attempt = 0
        while True:
            headers = httpx.Headers(base_headers)
            await self._authorize(headers, attempt=attempt, url=url)

            http_request = self._client.build_request(
                request.method, url, headers=headers, content=request.content
            )
            try:
                response = await self._client.send(http_request)
            except httpx.RequestError as e:
                logger.warning("[network] %s %s failed: %r", request.method, url, e)
                raise SendingRequestError(
                    f"Got error {e!r} after sending request to {url}",
                    url=url,
                    recovery="Check connection",
                ) from e

            status = response.status_code
            band = classify(status)
            if band is StatusBand.SUCCESS:
                logger.info("[OK] %s %s -> %d", request.method, url, status)
                return NetworkServiceResponse(
                    status_code=status,
                    data=response.content,
                    headers=dict(response.headers),
                    url=url,
                )

            error = _response_error(response, url)
            if band is StatusBand.CLIENT_ERROR:
                if (
                    status == HTTPStatusCode.UNAUTHORIZED
                    and self.token_hook is not None
                    and attempt + 1 < MAX_ATTEMPTS
                ):
                    logger.info("[network] Unauthorized by %s, retrying with a fresh token", url)
                    attempt += 1
                    continue
                if self.special_status_code is not None and status == self.special_status_code:
                    self._notify_special_status(response)
            logger.warning("[network] %s %s -> %d", request.method, url, status)
            raise error

    async def _authorize(self, headers: httpx.Headers, *, attempt: int, url: str) -> None:
        if self.token_hook is None:
            return
        request_fresh = attempt > 0
        try:
            token = await self.token_hook(request_fresh)
        except Exception as e:
            logger.warning("[network] Token hook failed for %s: %r", url, e)
            raise PreparingRequestError(f"Could not get an access token for {url}: {e!r}") from e
        if token:
            logger.debug("[network] Got %s token for attempt %d", "new" if request_fresh else "current", attempt)
            headers["Authorization"] = f"{self.authorization_scheme} {token}" if self.authorization_scheme else token
        else:
            logger.info("[network] No token for attempt %d to %s, sending unauthenticated", attempt, url)

    def absolute_url(self, relative: str) -> str:
        """Resolve a request URL relative to this service's base URL.

        Paths are concatenated and query items merged, base items first.
        """
        base = _split_base_url(self.base_url)
        try:
            rel = urlsplit(relative)
        except ValueError as e:
            raise PreparingRequestError(f"Malformed relative URL {relative!r}") from e
        if rel.scheme or rel.netloc or not rel.path:
            raise PreparingRequestError(f"Missing relative path in request {relative!r}")

        rel_path = rel.path if rel.path.startswith("/") else f"/{rel.path}"
        path = base.path.rstrip("/") + rel_path
        query = "&".join(q for q in (base.query, rel.query) if q)
        url = urlunsplit((base.scheme, base.netloc, path, query, ""))
        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise PreparingRequestError(f"Couldn't create URL from {relative!r} and base {self.base_url!r}") from e
        return url


def _split_base_url(base_url: str):
    try:
        base = urlsplit(base_url)
    except ValueError as e:
        raise PreparingRequestError(f"Malformed base URL {base_url!r}") from e
    if base.scheme not in ("http", "https") or not base.netloc:
        raise PreparingRequestError(f"Malformed base URL {base_url!r}")
    return base


def _response_error(response: httpx.Response, url: str) -> ResponseError:
    status = response.status_code
    band = classify(status)
    if band is StatusBand.CLIENT_ERROR:
        message = f"Received client error with status code {status} from {url}"
    elif band is StatusBand.SERVER_ERROR:
        message = f"Received server error with status code {status} from {url}"
    else:
        message = f"Received response with status code {status} from {url}"
    return ResponseError(message, response=response, url=url)
