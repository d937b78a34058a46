import pytest

from backchat.services import http_status
from backchat.services.http_status import HTTPStatusCode, StatusBand, classify

PREDICATES = {
    StatusBand.INFORMATIONAL: http_status.is_informational,
    StatusBand.SUCCESS: http_status.is_success,
    StatusBand.REDIRECTION: http_status.is_redirection,
    StatusBand.CLIENT_ERROR: http_status.is_client_error,
    StatusBand.SERVER_ERROR: http_status.is_server_error,
}


@pytest.mark.parametrize(
    "code, band",
    [
        (99, StatusBand.UNKNOWN),
        (100, StatusBand.INFORMATIONAL),
        (102, StatusBand.INFORMATIONAL),
        (103, StatusBand.UNKNOWN),
        (199, StatusBand.UNKNOWN),
        (200, StatusBand.SUCCESS),
        (204, StatusBand.SUCCESS),
        (209, StatusBand.SUCCESS),
        (226, StatusBand.SUCCESS),
        (227, StatusBand.UNKNOWN),
        (299, StatusBand.UNKNOWN),
        (300, StatusBand.REDIRECTION),
        (308, StatusBand.REDIRECTION),
        (309, StatusBand.UNKNOWN),
        (400, StatusBand.CLIENT_ERROR),
        (401, StatusBand.CLIENT_ERROR),
        (425, StatusBand.CLIENT_ERROR),
        (499, StatusBand.CLIENT_ERROR),
        (500, StatusBand.SERVER_ERROR),
        (599, StatusBand.SERVER_ERROR),
        (600, StatusBand.UNKNOWN),
        (0, StatusBand.UNKNOWN),
        (-1, StatusBand.UNKNOWN),
    ],
)
def test_classify_band_boundaries(code, band):
    assert classify(code) is band


def test_exactly_one_predicate_per_known_band():
    for code in range(100, 600):
        band = classify(code)
        hits = [b for b, predicate in PREDICATES.items() if predicate(code)]
        if band is StatusBand.UNKNOWN:
            assert hits == [], code
        else:
            assert hits == [band], code


def test_every_named_code_has_a_known_band():
    for status in HTTPStatusCode:
        assert status.band is not StatusBand.UNKNOWN, status


def test_member_properties_follow_band():
    assert HTTPStatusCode.OK.is_success
    assert HTTPStatusCode.IM_USED.is_success
    assert HTTPStatusCode.PROCESSING.is_informational
    assert HTTPStatusCode.PERMANENT_REDIRECT.is_redirection
    assert HTTPStatusCode.UNAUTHORIZED.is_client_error
    assert not HTTPStatusCode.UNAUTHORIZED.is_server_error
    assert HTTPStatusCode.NETWORK_CONNECT_TIMEOUT_ERROR.is_server_error


def test_named_codes_compare_as_ints():
    assert HTTPStatusCode.UNAUTHORIZED == 401
    assert HTTPStatusCode(404) is HTTPStatusCode.NOT_FOUND
