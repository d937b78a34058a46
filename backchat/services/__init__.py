"""
Base network service with optional bearer token hook.
All concrete network services (HTTP or fakes) inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from backchat.services.http_status import StatusBand, classify

if TYPE_CHECKING:
    from backchat.services.webservice_endpoint import EndpointRequest

# Called with ``request_fresh``: False asks for the current access token,
# True asks for a new one (e.g. obtained with the refresh token).
TokenHook = Callable[[bool], Awaitable[str | None]]


@dataclass(frozen=True)
class NetworkServiceResponse:
    """Status, headers and received bytes of a successful exchange."""
    status_code: int
    data: bytes
    headers: dict[str, str] = field(default_factory=dict)
    url: str = ""

    @property
    def band(self) -> StatusBand:
        return classify(self.status_code)


class NetworkService(ABC):
    def __init__(
        self,
        base_url: str,
        *,
        x_header_fields: Mapping[str, str] | None = None,
        special_status_code: int | None = None,
        token_hook: TokenHook | None = None,
    ) -> None:
        self.base_url = base_url
        self.x_header_fields: dict[str, str] = dict(x_header_fields or {})
        self.special_status_code = special_status_code
        self.token_hook = token_hook

    @abstractmethod
    async def send_request(self, request: EndpointRequest) -> NetworkServiceResponse:
        """Send an endpoint request to the server this service was created for.

        ``request`` is an ``EndpointRequest`` whose URL is relative to
        ``base_url``. Returns the response of the first successful attempt or
        raises a ``NetworkServiceError``.
        """
