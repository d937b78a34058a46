from enum import Enum


class HttpMethod(str, Enum):
    """HTTP methods an endpoint can be invoked with."""
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def method(self) -> str:
        """Name of the method as sent on the wire."""
        return self.value
