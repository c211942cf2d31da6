"""Tests for request and response models."""

import dataclasses

import pytest

from minireq.exceptions import HTTPStatusError, TransferError
from minireq.models import HTTPMethod, Request, Response


def test_response_defaults_to_not_attempted():
    """A fresh response carries the -1 sentinel and no reason."""
    response = Response(url="https://example.com/")
    assert response.status_code == -1
    assert response.reason == ""
    assert response.content == ""
    assert response.elapsed == 0.0
    assert response.ok is False


def test_response_is_immutable():
    response = Response(url="https://example.com/", status_code=200)
    with pytest.raises(dataclasses.FrozenInstanceError):
        response.status_code = 500


def test_raise_for_status_on_client_error():
    """4xx statuses raise HTTPStatusError."""
    response = Response(url="https://example.com/x", status_code=404)
    with pytest.raises(HTTPStatusError) as excinfo:
        response.raise_for_status()
    assert excinfo.value.status_code == 404


def test_raise_for_status_reraises_transfer_error():
    error = TransferError("boom")
    response = Response(url="https://example.com/", reason="boom", error=error)
    with pytest.raises(TransferError):
        response.raise_for_status()


def test_raise_for_status_passes_on_success():
    Response(url="https://example.com/", status_code=200).raise_for_status()


def test_response_to_dict():
    response = Response(url="https://example.com/", status_code=200, content="hi", elapsed=0.5)
    assert response.to_dict() == {
        "url": "https://example.com/",
        "status_code": 200,
        "reason": "",
        "content": "hi",
        "elapsed": 0.5,
        "headers": {},
    }


def test_request_accepts_method_names():
    """Method strings are normalised to HTTPMethod members."""
    request = Request(url="https://example.com/", method="mkcol")
    assert request.method is HTTPMethod.MKCOL


def test_request_rejects_unknown_method():
    with pytest.raises(ValueError):
        Request(url="https://example.com/", method="FETCH")


def test_request_copies_mappings():
    """Request keeps its own copy of caller mappings."""
    headers = {"X-Test": "1"}
    request = Request(url="https://example.com/", headers=headers)
    headers["X-Other"] = "2"
    assert request.headers == {"X-Test": "1"}


def test_request_unused_fields():
    request = Request(url="https://example.com/", files={"f": "a.txt"}, auth="token")
    assert request.unused_fields == ["files", "auth"]
    assert Request(url="https://example.com/").unused_fields == []


def test_all_methods_present():
    assert [method.value for method in HTTPMethod] == [
        "GET", "POST", "PUT", "DELETE", "HEAD", "TRACE", "OPTIONS", "LOCK", "MKCOL", "COPY", "MOVE",
    ]
