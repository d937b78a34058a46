"""
Errors raised by network services and webservice adapters.

  BackchatError
    NetworkServiceError
      PreparingRequestError     local, pre-flight (malformed URL, bad endpoint)
        EndpointContractError   endpoint definition bug, never wrapped
      SendingRequestError       transport failure
      RequestCancelledError     superseded by a newer call (severity: info)
      ResponseError             non-success HTTP status
    WebServiceAdapterError
      InvokingEndpointError     sending failed; wraps the cause
      InvalidDataError          the validator refused the received data
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from backchat.services.http_status import StatusBand, classify

if TYPE_CHECKING:
    import httpx


class Severity(str, Enum):
    INFO = "info"
    ERROR = "error"


class BackchatError(Exception):
    """Base class for every failure surfaced by this package."""

    severity: Severity = Severity.ERROR

    def __init__(self, message: str, *, recovery: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.recovery = recovery

    def __str__(self) -> str:
        if self.recovery:
            return f"{self.message} ({self.recovery})"
        return self.message


# ---------------------------------------------------------------------------
# Network service
# ---------------------------------------------------------------------------

class NetworkServiceError(BackchatError):
    pass


class PreparingRequestError(NetworkServiceError):
    pass


class EndpointContractError(PreparingRequestError):
    """An endpoint describes a request that can never be valid.

    This is a bug in the endpoint definition, not a runtime condition, so
    adapters let it through instead of wrapping it.
    """


class SendingRequestError(NetworkServiceError):
    def __init__(self, message: str, *, url: str | None = None, recovery: str | None = None) -> None:
        super().__init__(message, recovery=recovery)
        self.url = url


class RequestCancelledError(NetworkServiceError):
    severity = Severity.INFO

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ResponseError(NetworkServiceError):
    """A response arrived but its status code is not a success."""

    def __init__(self, message: str, *, response: httpx.Response, url: str | None = None) -> None:
        super().__init__(message)
        self.response = response
        self.status_code: int = response.status_code
        self.band: StatusBand = classify(response.status_code)
        self.url = url

    @property
    def is_client_error(self) -> bool:
        return self.band is StatusBand.CLIENT_ERROR

    @property
    def is_server_error(self) -> bool:
        return self.band is StatusBand.SERVER_ERROR


# ---------------------------------------------------------------------------
# Webservice adapter
# ---------------------------------------------------------------------------

class WebServiceAdapterError(BackchatError):
    def __init__(
        self,
        message: str,
        *,
        cause: BaseException | None = None,
        recovery: str | None = None,
    ) -> None:
        super().__init__(message, recovery=recovery)
        self.cause = cause


class InvokingEndpointError(WebServiceAdapterError):
    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        cause: BaseException | None = None,
        recovery: str | None = "Check connection",
    ) -> None:
        super().__init__(message, cause=cause, recovery=recovery)
        self.method = method
        self.path = path


class InvalidDataError(WebServiceAdapterError):
    pass
