"""Tests for webservice adapters, against both a fake and an HTTP network service."""

import httpx
import pytest

from backchat.services import NetworkService, NetworkServiceResponse
from backchat.services.errors import (
    EndpointContractError,
    InvalidDataError,
    InvokingEndpointError,
    ResponseError,
    SendingRequestError,
)
from backchat.services.http_method import HttpMethod
from backchat.services.webservice_adapter import (
    WebServiceAdapter,
    WebServiceAdapterProviding,
    WebServiceDefaultAdapter,
)
from backchat.services.webservice_endpoint import EndpointRequest, WebServiceEndpoint


class FakeNetworkService(NetworkService):
    """Answers every request with a canned response or error."""

    def __init__(self, *, data: bytes = b"", error: Exception | None = None) -> None:
        super().__init__("https://fake.invalid")
        self.data = data
        self.error = error
        self.requests: list[EndpointRequest] = []

    async def send_request(self, request: EndpointRequest) -> NetworkServiceResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return NetworkServiceResponse(status_code=200, data=self.data, url=request.url)


class ListUsers(WebServiceEndpoint):
    path: str = "/users"
    http_method: HttpMethod = HttpMethod.GET


class UserList:
    """A model that knows how to load itself."""

    @classmethod
    def webservice_adapter(cls, user_info=None):
        if not user_info or "network_service" not in user_info:
            return None
        return WebServiceDefaultAdapter(endpoint=ListUsers(), network_service=user_info["network_service"])


async def test_invoke_returns_data():
    service = FakeNetworkService(data=b'[{"id": 1}]')
    adapter = WebServiceDefaultAdapter(endpoint=ListUsers(), network_service=service)

    assert await adapter.invoke() == b'[{"id": 1}]'
    assert service.requests == [EndpointRequest(method="GET", url="/users")]


async def test_validator_accepts():
    seen: list[bytes] = []

    def validator(data: bytes) -> bool:
        seen.append(data)
        return True

    adapter = WebServiceDefaultAdapter(
        endpoint=ListUsers(),
        network_service=FakeNetworkService(data=b"ok"),
        validator=validator,
    )

    assert await adapter.invoke() == b"ok"
    assert seen == [b"ok"]


async def test_validator_refusal_raises_invalid_data():
    adapter = WebServiceDefaultAdapter(
        endpoint=ListUsers(),
        network_service=FakeNetworkService(data=b"garbage"),
        validator=lambda data: False,
    )

    with pytest.raises(InvalidDataError):
        await adapter.invoke()


async def test_send_failure_is_wrapped_with_endpoint_context():
    cause = SendingRequestError("Connection refused", url="https://fake.invalid/users")
    adapter = WebServiceDefaultAdapter(endpoint=ListUsers(), network_service=FakeNetworkService(error=cause))

    with pytest.raises(InvokingEndpointError) as exc_info:
        await adapter.invoke()

    error = exc_info.value
    assert error.method == "GET"
    assert error.path == "/users"
    assert error.cause is cause
    assert error.__cause__ is cause
    assert "Invoking GET on /users" in str(error)
    assert error.recovery == "Check connection"


async def test_broken_endpoint_is_not_wrapped():
    service = FakeNetworkService()
    endpoint = WebServiceEndpoint(path="/upload", http_method=HttpMethod.POST, body=b"data")
    adapter = WebServiceDefaultAdapter(endpoint=endpoint, network_service=service)

    with pytest.raises(EndpointContractError):
        await adapter.invoke()
    assert service.requests == []


async def test_http_error_status_through_real_service(make_service):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"detail": "Not found"})

    adapter = WebServiceDefaultAdapter(
        endpoint=WebServiceEndpoint(path="/users/42", http_method=HttpMethod.DELETE),
        network_service=make_service(handler),
    )

    with pytest.raises(InvokingEndpointError) as exc_info:
        await adapter.invoke()

    assert exc_info.value.method == "DELETE"
    assert isinstance(exc_info.value.cause, ResponseError)
    assert exc_info.value.cause.status_code == 404


async def test_post_body_reaches_transport(make_service):
    captured: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(201, content=b'{"id": 7}')

    endpoint = WebServiceEndpoint(
        path="/users",
        http_method=HttpMethod.POST,
        content_type="application/json",
        body=b'{"name": "Ada"}',
    )
    adapter = WebServiceDefaultAdapter(endpoint=endpoint, network_service=make_service(handler))

    assert await adapter.invoke() == b'{"id": 7}'
    assert captured[0].method == "POST"
    assert captured[0].headers["content-type"] == "application/json"
    assert captured[0].content == b'{"name": "Ada"}'


async def test_custom_adapter_overrides_endpoint():
    class CachedUsersAdapter(WebServiceAdapter):
        validator = None

        def __init__(self, network_service: NetworkService) -> None:
            self.network_service = network_service

        @property
        def endpoint(self) -> WebServiceEndpoint:
            return ListUsers(query_parameter="cached=1")

    service = FakeNetworkService(data=b"[]")
    assert await CachedUsersAdapter(service).invoke() == b"[]"
    assert service.requests[0].url == "/users?cached=1"


async def test_models_can_provide_their_adapter():
    assert isinstance(UserList, WebServiceAdapterProviding)
    assert UserList.webservice_adapter(None) is None

    adapter = UserList.webservice_adapter({"network_service": FakeNetworkService(data=b"[]")})
    assert isinstance(adapter, WebServiceAdapter)
    assert await adapter.invoke() == b"[]"
