import pytest

from errors import ApiError, UnexpectedError
from settings import AppSettings
from vendors import ip_api
from vendors.ip_api import IPDetail, IpApiFailure, parse_envelope

from conftest import GOOGLE_DNS_PAYLOAD


@pytest.mark.parametrize("address", ["8.8.8.8", "203.0.113.7", "2001:4860:4860::8888", "::1"])
def test_path_segment_equals_the_address(transport, address):
    transport.respond({**GOOGLE_DNS_PAYLOAD, "query": address})

    ip_api.get(address)

    assert len(transport.requests) == 1
    assert transport.last_url.path == f"/json/{address}"


def test_omitted_address_uses_empty_segment(transport):
    transport.respond(GOOGLE_DNS_PAYLOAD)

    ip_api.get()

    assert transport.last_url.path == "/json/"


def test_returns_typed_detail(transport):
    transport.respond(GOOGLE_DNS_PAYLOAD)

    detail = ip_api.get("8.8.8.8")

    assert isinstance(detail, IPDetail)
    assert detail.city == "Mountain View"
    assert detail.as_ == "AS15169 Google LLC"
    assert detail.vendor_fields()["as"] == "AS15169 Google LLC"


def test_vendor_failure_on_http_200_is_an_api_error(transport):
    transport.respond({"status": "fail", "message": "private range", "query": "10.0.0.1"})

    with pytest.raises(ApiError, match="private range"):
        ip_api.get("10.0.0.1")


def test_vendor_failure_without_message(transport):
    transport.respond({"status": "fail"})

    with pytest.raises(ApiError, match="Unknown error"):
        ip_api.get("10.0.0.1")


def test_token_is_sent_as_key(transport):
    transport.respond(GOOGLE_DNS_PAYLOAD)

    ip_api.get("8.8.8.8", settings=AppSettings(ipapi_api_token="pro-token"))

    assert transport.last_params["key"] == ["pro-token"]


def test_malformed_success_payload_is_unexpected(transport):
    transport.respond({"status": "success", "lat": "not-a-number"})

    with pytest.raises(UnexpectedError):
        ip_api.get("8.8.8.8")


def test_envelope_is_tagged_by_status():
    assert isinstance(parse_envelope({"status": "fail", "message": "invalid query"}), IpApiFailure)
    assert isinstance(parse_envelope(GOOGLE_DNS_PAYLOAD), IPDetail)
