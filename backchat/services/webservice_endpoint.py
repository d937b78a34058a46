"""
Endpoint descriptors for a web service.

An endpoint needs at least a ``path`` and an ``http_method``. The path is
appended to the base URL of a NetworkService; ``query_parameter`` is appended
to the path. Depending on the method there may be a ``body``, whose type is
given by ``content_type``. Specifying a body without a content type is a
programming error.

Concrete endpoints are usually small subclasses that fix the defaults:

    class UserDetails(WebServiceEndpoint):
        path: str = "/details"
        http_method: HttpMethod = HttpMethod.GET
"""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
from pydantic import BaseModel, ConfigDict, field_validator

from backchat.services.errors import EndpointContractError
from backchat.services.http_method import HttpMethod


@dataclass(frozen=True)
class EndpointRequest:
    """Request derived from an endpoint, still relative to a base URL."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    content: bytes | None = None


class WebServiceEndpoint(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    path: str
    http_method: HttpMethod
    content_type: str | None = None
    body: bytes | None = None
    query_parameter: str | None = None
    additional_header_fields: dict[str, str] | None = None

    @field_validator("path")
    @classmethod
    def _path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {value!r}")
        return value

    def _relative_url(self) -> str:
        path, _, inline_query = self.path.partition("?")
        extra_query = (self.query_parameter or "").removeprefix("?")
        query = "&".join(q for q in (inline_query, extra_query) if q)
        return f"{path}?{query}" if query else path

    def to_request(self) -> EndpointRequest:
        """Build the relative request described by this endpoint.

        Raises EndpointContractError if the endpoint can never produce a
        valid request.
        """
        name = type(self).__name__
        relative = self._relative_url()
        try:
            url = httpx.URL(relative)
        except httpx.InvalidURL as e:
            raise EndpointContractError(f"Couldn't create URL for endpoint {name} from {relative!r}") from e
        if url.scheme or url.host:
            raise EndpointContractError(f"Endpoint {name} must describe a relative URL, got {relative!r}")

        headers = dict(self.additional_header_fields or {})

        content = None
        if self.body:
            if not self.content_type:
                raise EndpointContractError(f"Body specified but missing content type for endpoint {name} ({self.path})")
            for key in [k for k in headers if k.lower() == "content-type"]:
                del headers[key]
            headers["Content-Type"] = self.content_type
            content = self.body

        return EndpointRequest(
            method=self.http_method.method,
            url=str(url),
            headers=headers,
            content=content,
        )

    @property
    def request(self) -> EndpointRequest:
        return self.to_request()
