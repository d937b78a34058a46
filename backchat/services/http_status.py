"""
HTTP status codes and their classification into bands.

Bands follow the named table below, with inclusive ranges:

  informational  100-102
  success        200-226
  redirection    300-308
  client error   400-499
  server error   500-599

Any other integer is ``StatusBand.UNKNOWN``.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class StatusBand(str, Enum):
    INFORMATIONAL = "informational"
    SUCCESS = "success"
    REDIRECTION = "redirection"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    UNKNOWN = "unknown"


class HTTPStatusCode(IntEnum):
    """Known HTTP status codes, including a few vendor specific ones."""

    # ---- 1xx Informational ----
    CONTINUE = 100
    SWITCHING_PROTOCOLS = 101
    PROCESSING = 102

    # ---- 2xx Success ----
    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NON_AUTHORITATIVE_INFORMATION = 203
    NO_CONTENT = 204
    RESET_CONTENT = 205
    PARTIAL_CONTENT = 206
    MULTI_STATUS = 207
    ALREADY_REPORTED = 208
    IM_USED = 226

    # ---- 3xx Redirection ----
    MULTIPLE_CHOICES = 300
    MOVED_PERMANENTLY = 301
    FOUND = 302
    SEE_OTHER = 303
    NOT_MODIFIED = 304
    USE_PROXY = 305
    SWITCH_PROXY = 306
    TEMPORARY_REDIRECT = 307
    PERMANENT_REDIRECT = 308  # also Google's "Resume Incomplete"

    # ---- 4xx Client error ----
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    PAYMENT_REQUIRED = 402
    FORBIDDEN = 403
    NOT_FOUND = 404
    METHOD_NOT_ALLOWED = 405
    NOT_ACCEPTABLE = 406
    PROXY_AUTHENTICATION_REQUIRED = 407
    REQUEST_TIMEOUT = 408
    CONFLICT = 409
    GONE = 410
    LENGTH_REQUIRED = 411
    PRECONDITION_FAILED = 412
    PAYLOAD_TOO_LARGE = 413
    REQUEST_URI_TOO_LONG = 414
    UNSUPPORTED_MEDIA_TYPE = 415
    REQUESTED_RANGE_NOT_SATISFIABLE = 416
    EXPECTATION_FAILED = 417
    IM_A_TEAPOT = 418
    AUTHENTICATION_TIMEOUT = 419
    ENHANCE_YOUR_CALM = 420  # Spring "Method Failure", Twitter rate limiting
    MISDIRECTED_REQUEST = 421
    UNPROCESSABLE_ENTITY = 422
    LOCKED = 423
    FAILED_DEPENDENCY = 424
    UPGRADE_REQUIRED = 426
    PRECONDITION_REQUIRED = 428
    TOO_MANY_REQUESTS = 429
    REQUEST_HEADER_FIELDS_TOO_LARGE = 431
    LOGIN_TIMEOUT = 440
    NO_RESPONSE = 444
    RETRY_WITH = 449
    BLOCKED_BY_WINDOWS_PARENTAL_CONTROLS = 450
    UNAVAILABLE_FOR_LEGAL_REASONS = 451
    REQUEST_HEADER_TOO_LARGE = 494
    CERT_ERROR = 495
    NO_CERT = 496
    HTTP_TO_HTTPS = 497
    TOKEN_EXPIRED_OR_INVALID = 498
    CLIENT_CLOSED_REQUEST = 499  # also "Token Required"

    # ---- 5xx Server error ----
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504
    HTTP_VERSION_NOT_SUPPORTED = 505
    VARIANT_ALSO_NEGOTIATES = 506
    INSUFFICIENT_STORAGE = 507
    LOOP_DETECTED = 508
    BANDWIDTH_LIMIT_EXCEEDED = 509
    NOT_EXTENDED = 510
    NETWORK_AUTHENTICATION_REQUIRED = 511
    UNKNOWN_ERROR = 520
    ORIGIN_CONNECTION_TIME_OUT = 522
    NETWORK_READ_TIMEOUT_ERROR = 598
    NETWORK_CONNECT_TIMEOUT_ERROR = 599

    @property
    def band(self) -> StatusBand:
        return classify(self.value)

    @property
    def is_informational(self) -> bool:
        return is_informational(self.value)

    @property
    def is_success(self) -> bool:
        return is_success(self.value)

    @property
    def is_redirection(self) -> bool:
        return is_redirection(self.value)

    @property
    def is_client_error(self) -> bool:
        return is_client_error(self.value)

    @property
    def is_server_error(self) -> bool:
        return is_server_error(self.value)


# Inclusive bounds, disjoint and ordered.
BAND_RANGES: dict[StatusBand, tuple[int, int]] = {
    StatusBand.INFORMATIONAL: (HTTPStatusCode.CONTINUE, HTTPStatusCode.PROCESSING),
    StatusBand.SUCCESS: (HTTPStatusCode.OK, HTTPStatusCode.IM_USED),
    StatusBand.REDIRECTION: (HTTPStatusCode.MULTIPLE_CHOICES, HTTPStatusCode.PERMANENT_REDIRECT),
    StatusBand.CLIENT_ERROR: (HTTPStatusCode.BAD_REQUEST, HTTPStatusCode.CLIENT_CLOSED_REQUEST),
    StatusBand.SERVER_ERROR: (HTTPStatusCode.INTERNAL_SERVER_ERROR, HTTPStatusCode.NETWORK_CONNECT_TIMEOUT_ERROR),
}


def classify(code: int) -> StatusBand:
    """Return the band a numeric status code falls into."""
    for band, (low, high) in BAND_RANGES.items():
        if low <= code <= high:
            return band
    return StatusBand.UNKNOWN


def is_informational(code: int) -> bool:
    return classify(code) is StatusBand.INFORMATIONAL


def is_success(code: int) -> bool:
    return classify(code) is StatusBand.SUCCESS


def is_redirection(code: int) -> bool:
    return classify(code) is StatusBand.REDIRECTION


def is_client_error(code: int) -> bool:
    return classify(code) is StatusBand.CLIENT_ERROR


def is_server_error(code: int) -> bool:
    return classify(code) is StatusBand.SERVER_ERROR
