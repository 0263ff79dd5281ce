"""Tests for the offline transport helpers."""

import pytest
import requests

from hosted_models.testing import StubSession, make_response


class TestMakeResponse:
  def test_json_body(self):
    response = make_response(201, {"status": "running"})

    assert response.status_code == 201
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"status": "running"}

  def test_text_body_and_custom_headers(self):
    response = make_response(503, "busy", content_type="text/plain", headers={"Retry-After": "1"})

    assert response.text == "busy"
    assert response.headers["Content-Type"] == "text/plain"
    assert response.headers["Retry-After"] == "1"

  def test_without_content_type(self):
    response = make_response(204, content_type=None)

    assert "Content-Type" not in response.headers
    assert response.content == b""


class TestStubSession:
  def test_replays_outcomes_in_order(self):
    first, second = make_response(429), make_response(200)
    session = StubSession(first, second)

    assert session.request("GET", "u1") is first
    assert session.request("POST", "u2", json={"a": 1}) is second
    assert session.calls == [("GET", "u1", {}), ("POST", "u2", {"json": {"a": 1}})]

  def test_raises_scripted_exception(self):
    session = StubSession(requests.Timeout("slow"))

    with pytest.raises(requests.Timeout):
      session.request("GET", "u")

  def test_exhausted_script(self):
    session = StubSession(make_response(200))
    session.request("GET", "u")

    with pytest.raises(AssertionError):
      session.request("GET", "u")

  def test_repeat_last(self):
    asleep = make_response(200, {"status": "asleep"})
    session = StubSession(make_response(502), asleep, repeat_last=True)

    session.request("GET", "u")
    assert session.request("GET", "u") is asleep
    assert session.request("GET", "u") is asleep
    assert session.call_count == 3
