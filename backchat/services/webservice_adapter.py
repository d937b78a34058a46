"""
Webservice adapters tie a WebServiceEndpoint to a NetworkService.

The endpoint describes the request, the network service sends it, and the
optional ResponseDataValidator checks the received bytes before they are
handed to the caller for decoding.
"""

from __future__ import annotations

import logging
from abc import ABC
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from backchat.services import NetworkService
from backchat.services.errors import InvalidDataError, InvokingEndpointError
from backchat.services.webservice_endpoint import WebServiceEndpoint

logger = logging.getLogger(__name__)

# Returns True if the given data is valid in the context of the validator.
ResponseDataValidator = Callable[[bytes], bool]


class WebServiceAdapter(ABC):
    """
    Subclasses provide ``endpoint``, ``network_service`` and ``validator``
    (as attributes or properties) and may override ``invoke()`` to handle the
    response in a special way.
    """

    endpoint: WebServiceEndpoint
    network_service: NetworkService
    validator: ResponseDataValidator | None

    async def invoke(self) -> bytes:
        """Send the endpoint's request and return the validated response data.

        Raises:
            InvokingEndpointError: sending failed; the cause is chained.
            InvalidDataError: data was received but the validator refused it.
            EndpointContractError: the endpoint itself is broken.
        """
        endpoint = self.endpoint
        method = endpoint.http_method.method
        request = endpoint.to_request()

        try:
            response = await self.network_service.send_request(request)
        except Exception as e:
            logger.warning("[adapter] Invoking %s on %s failed: %s", method, endpoint.path, e)
            raise InvokingEndpointError(
                f"Invoking {method} on {endpoint.path}",
                method=method,
                path=endpoint.path,
                cause=e,
            ) from e

        if self.validator is not None and not self.validator(response.data):
            raise InvalidDataError(
                f"Data received from {method} {endpoint.path} but validator refused to validate it"
            )
        return response.data


@dataclass
class WebServiceDefaultAdapter(WebServiceAdapter):
    """Adapter for endpoints that need no special response handling."""
    endpoint: WebServiceEndpoint
    network_service: NetworkService
    validator: ResponseDataValidator | None = None


@runtime_checkable
class WebServiceAdapterProviding(Protocol):
    """Models that know how to build the adapter that loads them."""

    @classmethod
    def webservice_adapter(cls, user_info: Mapping[str, Any] | None = None) -> WebServiceAdapter | None:
        """Return a ready to use adapter, or None if ``user_info`` lacks
        what is needed to build it."""
        ...
