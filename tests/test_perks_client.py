"""Tests for the requests-based Perks API client."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from perks_api.app.core.exceptions import ConflictError, NotFoundError, PerkAPIError, ValidationError
from perks_api.perks_client import PerksAPIClient


PERK = {
    "id": "abc123",
    "title": "Coffee",
    "description": "",
    "category": "food",
    "discountPercent": 10.0,
    "merchant": "Bean Bar",
    "createdAt": "2026-10-18T08:00:00+00:00",
}


def _response(status_code, body=None, text=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if body is not None:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    else:
        response.content = (text or "").encode()
        response.text = text or ""
        response.json.side_effect = ValueError("no json")
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return PerksAPIClient("http://perks.local/", timeout=3, session=session)


def test_create_perk_posts_fields(api, session):
    session.request.return_value = _response(201, {"perk": PERK})
    assert api.create_perk({"title": "Coffee"}) == PERK
    session.request.assert_called_once_with(
        method="POST",
        url="http://perks.local/api/v1/perks/",
        params=None,
        json={"title": "Coffee"},
        timeout=3,
    )


def test_get_perk(api, session):
    session.request.return_value = _response(200, {"perk": PERK})
    assert api.get_perk("abc123") == PERK
    assert session.request.call_args.kwargs["url"] == "http://perks.local/api/v1/perks/abc123"


def test_list_perks(api, session):
    session.request.return_value = _response(200, [PERK])
    assert api.list_perks() == [PERK]


def test_filter_perks_sends_title_param(api, session):
    session.request.return_value = _response(200, [])
    assert api.filter_perks("Coffee") == []
    kwargs = session.request.call_args.kwargs
    assert kwargs["url"].endswith("/api/v1/perks/filter")
    assert kwargs["params"] == {"title": "Coffee"}


def test_update_perk_uses_patch(api, session):
    session.request.return_value = _response(200, {"perk": dict(PERK, discountPercent=0.0)})
    assert api.update_perk("abc123", {"discountPercent": 0})["discountPercent"] == 0
    kwargs = session.request.call_args.kwargs
    assert kwargs["method"] == "PATCH"
    assert kwargs["json"] == {"discountPercent": 0}


def test_delete_perk(api, session):
    session.request.return_value = _response(200, {"ok": True})
    assert api.delete_perk("abc123") is True


@pytest.mark.parametrize(
    "status_code, error_cls",
    [(400, ValidationError), (404, NotFoundError), (409, ConflictError)],
)
def test_error_statuses_raise_typed_errors(api, session, status_code, error_cls):
    session.request.return_value = _response(status_code, {"message": "boom"})
    with pytest.raises(error_cls) as excinfo:
        api.get_perk("abc123")
    assert excinfo.value.message == "boom"


def test_unknown_error_status_keeps_code(api, session):
    session.request.return_value = _response(502, text="Bad gateway")
    with pytest.raises(PerkAPIError) as excinfo:
        api.list_perks()
    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "Bad gateway"


def test_transport_errors_propagate(api, session):
    session.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(requests.ConnectionError):
        api.list_perks()


def test_client_against_app(client):
    """The client speaks the same wire format the app serves."""

    class _Adapter:
        def request(self, method, url, params=None, json=None, timeout=None):
            path = url.replace("http://testserver", "")
            return client.request(method, path, params=params, json=json)

    api = PerksAPIClient("http://testserver", session=_Adapter())
    created = api.create_perk({"title": "Coffee", "merchant": "Bean Bar"})
    assert api.get_perk(created["id"]) == created
    assert api.filter_perks("Coffee") == [created]
    assert api.update_perk(created["id"], {"discountPercent": 0})["discountPercent"] == 0
    with pytest.raises(ConflictError):
        api.create_perk({"title": "Coffee", "merchant": "Bean Bar"})
    assert api.delete_perk(created["id"]) is True
    with pytest.raises(NotFoundError):
        api.get_perk(created["id"])
