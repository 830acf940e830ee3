import pytest
import requests

from pwned.errors import NetworkError
from pwned.models import CheckConfig
from pwned.range_client import (
    DEFAULT_USER_AGENT,
    RangeClient,
    RangeFailed,
    RangeOk,
    RangeRateLimited,
    parse_range_body,
)

from conftest import FakeResponse, FakeSession

BODY = "0018A45C4D1DEF81644B54AB7F969B88D65:1\r\n\r\n00D4F6E8FA6EECAD2A3AA415EEC418D38EC:2\r\ngarbage\r\n"


def make_client(session, sleeps):
    return RangeClient(
        base_url="https://range.test/", session=session, sleep=sleeps, timeout=5
    )


def test_parse_range_body_drops_lines_without_colon():
    assert parse_range_body(BODY) == [
        "0018A45C4D1DEF81644B54AB7F969B88D65:1",
        "00D4F6E8FA6EECAD2A3AA415EEC418D38EC:2",
    ]


def test_query_sends_prefix_only_with_headers(sleeps):
    session = FakeSession({"5BAA6": [FakeResponse(200, BODY)]})
    lines = make_client(session, sleeps).query("5BAA6")

    assert len(lines) == 2
    (call,) = session.calls
    assert call["url"] == "https://range.test/range/5BAA6"
    assert call["headers"]["User-Agent"] == DEFAULT_USER_AGENT
    assert call["headers"]["Add-Padding"] == "true"
    assert call["timeout"] == 5
    assert sleeps.calls == []


def test_padding_header_omitted_when_disabled(sleeps):
    session = FakeSession({"5BAA6": [FakeResponse(200, BODY)]})
    make_client(session, sleeps).query("5BAA6", CheckConfig(disable_padding=True))
    assert "Add-Padding" not in session.calls[0]["headers"]
    assert "User-Agent" in session.calls[0]["headers"]


@pytest.mark.parametrize("prefix", ["5baa6", "5BAA", "5BAA61", "GGGGG", ""])
def test_bad_prefix_rejected_before_request(prefix, sleeps):
    session = FakeSession()
    with pytest.raises(ValueError):
        make_client(session, sleeps).query(prefix)
    assert session.calls == []


def test_empty_user_agent_rejected():
    with pytest.raises(ValueError):
        RangeClient(user_agent="", session=FakeSession())


def test_retry_after_429_then_success(sleeps):
    session = FakeSession(
        {"5BAA6": [FakeResponse(429), FakeResponse(200, BODY)]}
    )
    lines = make_client(session, sleeps).query("5BAA6", CheckConfig(throttle_ms=0))
    assert len(lines) == 2
    assert len(session.calls) == 2
    assert sleeps.calls == [1.6]


def test_retry_delay_uses_larger_throttle(sleeps):
    session = FakeSession({"5BAA6": [FakeResponse(429), FakeResponse(200, BODY)]})
    make_client(session, sleeps).query("5BAA6", CheckConfig(throttle_ms=2500))
    assert sleeps.calls == [2.5]


def test_429_exhausts_after_three_attempts(sleeps):
    session = FakeSession({"5BAA6": [FakeResponse(429)]})
    with pytest.raises(NetworkError) as exc:
        make_client(session, sleeps).query("5BAA6")
    assert len(session.calls) == 3
    assert sleeps.calls == [1.6, 1.6]
    assert exc.value.prefix == "5BAA6"
    assert exc.value.status == 429


@pytest.mark.parametrize("status", [400, 403, 500, 503])
def test_other_statuses_are_not_retried(status, sleeps):
    session = FakeSession({"5BAA6": [FakeResponse(status, reason="Nope")]})
    with pytest.raises(NetworkError) as exc:
        make_client(session, sleeps).query("5BAA6")
    assert len(session.calls) == 1
    assert sleeps.calls == []
    assert exc.value.status == status
    assert "5BAA6" in str(exc.value)
    assert f"HTTP {status}" in str(exc.value)


def test_connection_error_wrapped(connection_error, sleeps):
    session = FakeSession({"5BAA6": [connection_error]})
    with pytest.raises(NetworkError) as exc:
        make_client(session, sleeps).query("5BAA6")
    assert exc.value.status is None
    assert exc.value.cause is connection_error
    assert exc.value.__cause__ is connection_error
    assert len(session.calls) == 1


def test_attempt_classifies_outcomes(sleeps):
    session = FakeSession(
        {
            "AAAAA": [FakeResponse(200, BODY)],
            "BBBBB": [FakeResponse(429)],
            "CCCCC": [FakeResponse(503)],
            "DDDDD": [requests.Timeout("slow")],
        }
    )
    client = make_client(session, sleeps)
    config = CheckConfig()
    assert isinstance(client.attempt("AAAAA", config), RangeOk)
    assert isinstance(client.attempt("BBBBB", config), RangeRateLimited)
    failed = client.attempt("CCCCC", config)
    assert isinstance(failed, RangeFailed) and failed.status == 503
    timed_out = client.attempt("DDDDD", config)
    assert isinstance(timed_out, RangeFailed) and timed_out.status is None


def test_close_closes_session(sleeps):
    session = FakeSession()
    make_client(session, sleeps).close()
    assert session.closed
