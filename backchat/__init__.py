"""
backchat: client-side HTTP networking layer.

Endpoints describe single API calls, a NetworkService sends them against a
base URL (standing headers, bearer tokens, one retry on 401), and adapters
tie both together with an optional response validator.
"""

from backchat.services import NetworkService, NetworkServiceResponse, TokenHook
from backchat.services.errors import (
    BackchatError,
    EndpointContractError,
    InvalidDataError,
    InvokingEndpointError,
    NetworkServiceError,
    PreparingRequestError,
    RequestCancelledError,
    ResponseError,
    SendingRequestError,
    WebServiceAdapterError,
)
from backchat.services.http_method import HttpMethod
from backchat.services.http_network_service import HTTPNetworkService
from backchat.services.http_status import HTTPStatusCode, StatusBand, classify
from backchat.services.json_validation import JSONValidating
from backchat.services.webservice_adapter import (
    WebServiceAdapter,
    WebServiceAdapterProviding,
    WebServiceDefaultAdapter,
)
from backchat.services.webservice_endpoint import EndpointRequest, WebServiceEndpoint

__all__ = [
    "BackchatError",
    "EndpointContractError",
    "EndpointRequest",
    "HTTPNetworkService",
    "HTTPStatusCode",
    "HttpMethod",
    "InvalidDataError",
    "InvokingEndpointError",
    "JSONValidating",
    "NetworkService",
    "NetworkServiceError",
    "NetworkServiceResponse",
    "PreparingRequestError",
    "RequestCancelledError",
    "ResponseError",
    "SendingRequestError",
    "StatusBand",
    "TokenHook",
    "WebServiceAdapter",
    "WebServiceAdapterError",
    "WebServiceAdapterProviding",
    "WebServiceDefaultAdapter",
    "WebServiceEndpoint",
    "classify",
]
