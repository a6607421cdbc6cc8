# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from datetime import datetime, timezone

import pytest

from cioclient import ClientSettings, TrackClient
from cioclient.errors import APIError, ParamError, ResponseDecodeError
from cioclient.http import HttpResponse, StubHttpClient
from cioclient.models import AccountRegion, Customer, Identifier, IdentifierType

BASE = "https://track.test"


def _client(stub: StubHttpClient) -> TrackClient:
    return TrackClient("site", "key", settings=ClientSettings(track_url=BASE), http_client=stub)


def _ok(url: str) -> StubHttpClient:
    return StubHttpClient({url: HttpResponse(ok=True, status_code=200)})


def _sent_json(stub: StubHttpClient, index: int = 0):
    return json.loads(stub.requests[index].body)


def test_identify_puts_attributes():
    url = f"{BASE}/api/v1/customers/42"
    stub = _ok(url)
    assert _client(stub).identify("42", {"plan": "pro"}) is None
    assert stub.requests[0].method == "PUT"
    assert _sent_json(stub) == {"plan": "pro"}


def test_identify_escapes_path_segments():
    url = f"{BASE}/api/v1/customers/a%2Fb%20c%40d"
    stub = _ok(url)
    _client(stub).identify("a/b c@d")
    assert stub.requests[0].url == url
    assert _sent_json(stub) == {}


def test_track_posts_named_event():
    url = f"{BASE}/api/v1/customers/42/events"
    stub = _ok(url)
    _client(stub).track("42", "purchase", {"amount": 10})
    assert stub.requests[0].method == "POST"
    assert _sent_json(stub) == {"name": "purchase", "data": {"amount": 10}}


def test_track_anonymous_includes_id_only_when_present():
    url = f"{BASE}/api/v1/events"
    stub = _ok(url)
    client = _client(stub)

    client.track_anonymous("", "visit")
    client.track_anonymous("anon-1", "visit", {"page": "/"})

    assert _sent_json(stub, 0) == {"name": "visit", "data": {}}
    assert _sent_json(stub, 1) == {"name": "visit", "data": {"page": "/"}, "anonymous_id": "anon-1"}


def test_delete_sends_no_body():
    url = f"{BASE}/api/v1/customers/42"
    stub = _ok(url)
    _client(stub).delete("42")
    assert stub.requests[0].method == "DELETE"
    assert stub.requests[0].body is None


def test_add_device_merges_data_under_device():
    url = f"{BASE}/api/v1/customers/42/devices"
    stub = _ok(url)
    _client(stub).add_device("42", "tok", "ios", {"last_used": 1700000000})
    assert _sent_json(stub) == {"device": {"id": "tok", "platform": "ios", "last_used": 1700000000}}


def test_add_device_data_overrides_id_and_platform():
    url = f"{BASE}/api/v1/customers/42/devices"
    stub = _ok(url)
    _client(stub).add_device("42", "tok", "ios", {"platform": "android"})
    assert _sent_json(stub) == {"device": {"id": "tok", "platform": "android"}}


def test_delete_device_escapes_both_ids():
    url = f"{BASE}/api/v1/customers/42/devices/tok%2F1"
    stub = _ok(url)
    _client(stub).delete_device("42", "tok/1")
    assert stub.requests[0].method == "DELETE"
    assert stub.requests[0].url == url


@pytest.mark.parametrize(
    "call,param",
    [
        (lambda c: c.identify("", {}), "customer_id"),
        (lambda c: c.add_or_update("", Customer()), "customer_id"),
        (lambda c: c.track("", "evt"), "customer_id"),
        (lambda c: c.track("42", ""), "event_name"),
        (lambda c: c.track_anonymous("anon", ""), "event_name"),
        (lambda c: c.delete(""), "customer_id"),
        (lambda c: c.add_device("", "tok", "ios"), "customer_id"),
        (lambda c: c.add_device("42", "", "ios"), "device_id"),
        (lambda c: c.add_device("42", "tok", ""), "platform"),
        (lambda c: c.delete_device("", "tok"), "customer_id"),
        (lambda c: c.delete_device("42", ""), "device_id"),
    ],
)
def test_blank_required_params_fail_without_network(call, param):
    stub = StubHttpClient()
    with pytest.raises(ParamError) as excinfo:
        call(_client(stub))
    assert excinfo.value.param == param
    assert stub.requests == []


def test_merge_customers_payload():
    url = f"{BASE}/api/v1/merge_customers"
    stub = _ok(url)
    _client(stub).merge_customers(
        Identifier(IdentifierType.EMAIL, "keep@example.com"),
        Identifier(IdentifierType.CIO_ID, "c2"),
    )
    assert _sent_json(stub) == {"primary": {"email": "keep@example.com"}, "secondary": {"cio_id": "c2"}}


@pytest.mark.parametrize(
    "primary,secondary,side",
    [
        (Identifier(IdentifierType.NAME, "bob"), Identifier(IdentifierType.ID, "2"), "primary"),
        (Identifier(IdentifierType.ID, "   "), Identifier(IdentifierType.ID, "2"), "primary"),
        (Identifier(IdentifierType.ID, "1"), Identifier(IdentifierType.OBJECT_ID, "2"), "secondary"),
        (Identifier(IdentifierType.ID, "1"), Identifier(IdentifierType.EMAIL, ""), "secondary"),
        (Identifier("nickname", "1"), Identifier(IdentifierType.ID, "2"), "primary"),
    ],
)
def test_merge_customers_rejects_invalid_identifiers(primary, secondary, side):
    stub = StubHttpClient()
    with pytest.raises(ParamError) as excinfo:
        _client(stub).merge_customers(primary, secondary)
    assert excinfo.value.param == side
    assert stub.requests == []


def test_add_or_update_sends_only_set_fields():
    url = f"{BASE}/api/v1/customers/42"
    stub = _ok(url)
    client = _client(stub)

    client.add_or_update("42", Customer(attributes={"plan": "pro"}))
    client.add_or_update(
        "42",
        Customer(
            attributes={"plan": "pro"},
            id="42",
            email="a@example.com",
            created_at=datetime(2020, 9, 13, 12, 26, 40, tzinfo=timezone.utc),
            unsubscribed=False,
        ),
    )

    assert _sent_json(stub, 0) == {"plan": "pro"}
    assert _sent_json(stub, 1) == {
        "plan": "pro",
        "created_at": 1600000000,
        "email": "a@example.com",
        "id": "42",
        "unsubscribed": False,
    }


def test_region_decodes_account_region():
    url = f"{BASE}/api/v1/accounts/region"
    stub = StubHttpClient(
        {url: HttpResponse.json_response(200, {"url": "https://track-eu.customer.io", "region": "eu", "environment_id": 7})}
    )
    assert _client(stub).region() == AccountRegion(url="https://track-eu.customer.io", region="eu", environment_id=7)


def test_region_rejects_malformed_body():
    url = f"{BASE}/api/v1/accounts/region"
    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=200, content=b"not json")})
    with pytest.raises(ResponseDecodeError):
        _client(stub).region()


def test_add_customers_to_segment_skips_customers_without_identifier():
    url = f"{BASE}/api/v1/segments/7/add_customers?id_type=email"
    stub = _ok(url)
    customers = [
        Customer(id="1", email="a@example.com"),
        Customer(id="2"),
        Customer(id="3", email="c@example.com"),
    ]

    count = _client(stub).add_customers_to_segment(7, customers, IdentifierType.EMAIL)

    assert count == 2
    assert _sent_json(stub) == {"ids": ["a@example.com", "c@example.com"]}


def test_add_customers_to_segment_by_cio_id_and_bad_type():
    url = f"{BASE}/api/v1/segments/7/add_customers?id_type=cio_id"
    stub = _ok(url)
    assert _client(stub).add_customers_to_segment(7, [Customer(cio_id="c1")], "cio_id") == 1

    with pytest.raises(ParamError) as excinfo:
        _client(StubHttpClient()).add_customers_to_segment(7, [], "nickname")
    assert excinfo.value.param == "id_type"


def test_track_batch_submits_actions_unchunked():
    url = f"{BASE}/api/v2/batch"
    stub = _ok(url)
    actions = [{"type": "person", "action": "identify", "identifiers": {"id": str(i)}} for i in range(250)]

    _client(stub).track_batch(actions)

    assert len(stub.requests) == 1
    assert _sent_json(stub) == {"batch": actions}


def test_track_batch_remote_limit_surfaces_as_api_error():
    url = f"{BASE}/api/v2/batch"
    stub = StubHttpClient({url: HttpResponse(ok=True, status_code=400, content=b"batch too large")})
    with pytest.raises(APIError) as excinfo:
        _client(stub).track_batch([{"type": "person"}])
    assert excinfo.value.status == 400
    assert excinfo.value.body == b"batch too large"


def test_context_manager_closes_owned_client_only():
    stub = StubHttpClient()
    with _client(stub):
        pass
    assert stub.closed is False
