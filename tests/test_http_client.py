import base64

import pytest
import requests

from kirimemail_smtp.exceptions import (
    ApiError,
    AuthenticationError,
    ErrorKind,
    NetworkError,
    NotFoundError,
    ProtocolError,
    RequestTimeoutError,
    ServerError,
    ValidationError,
)
from kirimemail_smtp.transport import Failure, FileUpload, Success
from kirimemail_smtp.transport.http_client import DEFAULT_USER_AGENT, Endpoint, SmtpClient
from kirimemail_smtp.transport.retry_policy import no_retry_policy

from conftest import FakeResponse, FakeSession


def _basic(username, token):
    return "Basic " + base64.b64encode(f"{username}:{token}".encode()).decode()


class TestUrlAndHeaders:
    def test_joins_base_and_path_with_one_slash(self, make_client):
        client, session = make_client(base_url="https://api.test/")
        client.execute("GET", "/api/domains")
        assert session.last_call["url"] == "https://api.test/api/domains"

    def test_set_base_url_applies_to_next_call(self, make_client):
        client, session = make_client()
        client.set_base_url("https://other.test//")
        client.execute("GET", "api/domains")
        assert session.last_call["url"] == "https://other.test/api/domains"

    def test_authorization_sent_when_credentials_set(self, make_client):
        client, session = make_client()
        client.execute("GET", "api/domains")
        assert session.last_call["headers"]["Authorization"] == _basic("user", "secret")

    def test_no_authorization_without_credentials(self, make_client):
        client, session = make_client(username=None, token=None)
        client.execute("GET", "api/domains")
        assert "Authorization" not in session.last_call["headers"]
        assert client.has_basic_auth() is False

    def test_credentials_need_both_parts(self):
        assert SmtpClient("user", None, session=FakeSession()).has_basic_auth() is False

    def test_set_basic_auth_is_used_by_next_call(self, make_client):
        client, session = make_client(username=None, token=None)
        client.set_basic_auth("other", "tok")
        client.execute("GET", "api/domains")
        assert session.last_call["headers"]["Authorization"] == _basic("other", "tok")

        client.clear_basic_auth()
        client.execute("GET", "api/domains")
        assert "Authorization" not in session.last_call["headers"]

    def test_authorization_overrides_caller_header(self, make_client):
        client, session = make_client()
        client.execute("GET", "api/domains", headers={"Authorization": "Bearer x", "X-Trace": "1"})
        headers = session.last_call["headers"]
        assert headers["Authorization"] == _basic("user", "secret")
        assert headers["X-Trace"] == "1"

    def test_default_headers(self, make_client):
        client, session = make_client()
        client.execute("GET", "api/domains")
        headers = session.last_call["headers"]
        assert headers["User-Agent"] == DEFAULT_USER_AGENT
        assert headers["Accept"] == "application/json"
        assert "Content-Type" not in headers

    def test_json_body_sets_content_type(self, make_client):
        client, session = make_client()
        client.execute("POST", "api/domains", json={"domain": "example.com"})
        call = session.last_call
        assert call["json"] == {"domain": "example.com"}
        assert call["headers"]["Content-Type"] == "application/json"

    def test_query_is_stringified_and_none_omitted(self, make_client):
        client, session = make_client()
        client.execute("GET", "api/domains", query={"limit": 10, "search": None, "active": True})
        assert session.last_call["params"] == [("limit", "10"), ("active", "true")]

    def test_per_call_timeout_overrides_default(self, make_client):
        client, session = make_client(timeout=12.0)
        client.execute("GET", "api/domains")
        assert session.last_call["timeout"] == 12.0
        client.execute("GET", "api/domains", timeout=3.0)
        assert session.last_call["timeout"] == 3.0


class TestResponseClassification:
    def test_created_is_success(self, make_client):
        client, _ = make_client(FakeResponse(201, {"success": True, "data": {"id": 1}}))
        result = client.execute("POST", "api/domains", json={"domain": "example.com"})
        assert isinstance(result, Success)
        assert result.ok
        assert result.status_code == 201
        assert result.data == {"success": True, "data": {"id": 1}}

    def test_no_content_is_success_without_data(self, make_client):
        client, _ = make_client(FakeResponse(204))
        result = client.execute("DELETE", "api/domains/example.com")
        assert result == Success(data=None, status_code=204)

    def test_not_found_failure(self, make_client):
        client, session = make_client(FakeResponse(404, {"message": "Domain not found"}, reason="Not Found"))
        result = client.execute("GET", "api/domains/missing.com")
        assert isinstance(result, Failure)
        assert not result.ok
        assert result.kind is ErrorKind.NOT_FOUND
        assert result.message == "Domain not found"
        assert result.status_code == 404
        assert len(session.calls) == 1

    def test_validation_failure_keeps_field_errors(self, make_client):
        body = {"message": "Invalid", "errors": {"domain": ["The domain field is required."]}}
        client, _ = make_client(FakeResponse(422, body))
        result = client.execute("POST", "api/domains", json={})
        assert result.kind is ErrorKind.VALIDATION
        assert result.errors == {"domain": ["The domain field is required."]}

    def test_failure_without_json_body_uses_reason(self, make_client):
        client, _ = make_client(FakeResponse(401, content=b"<html>nope</html>", reason="Unauthorized"))
        result = client.execute("GET", "api/domains")
        assert result.kind is ErrorKind.AUTHENTICATION
        assert result.message == "Unauthorized"

    def test_malformed_success_body_is_protocol_failure(self, make_client):
        client, _ = make_client(FakeResponse(200, content=b"{not json"))
        result = client.execute("GET", "api/domains")
        assert result.kind is ErrorKind.PROTOCOL
        assert result.status_code == 200

    def test_response_is_closed(self, make_client):
        response = FakeResponse(200, {"ok": True})
        client, _ = make_client(response)
        client.execute("GET", "api/domains")
        assert response.closed

    def test_transport_timeout_is_not_raised(self, make_client):
        client, _ = make_client(requests.Timeout("read timed out"), retry_policy=no_retry_policy())
        result = client.execute("GET", "api/domains")
        assert result.kind is ErrorKind.TIMEOUT
        assert result.status_code is None

    def test_connection_error_is_network_failure(self, make_client):
        client, _ = make_client(requests.ConnectionError("refused"), retry_policy=no_retry_policy())
        result = client.execute("GET", "api/domains")
        assert result.kind is ErrorKind.NETWORK


class TestRetries:
    def test_server_error_retried_until_budget_spent(self, make_client, sleeps):
        client, session = make_client(FakeResponse(500, {"message": "boom"}))
        result = client.execute("GET", "api/domains")
        assert len(session.calls) == 3
        assert result.kind is ErrorKind.SERVER
        assert result.message == "boom"
        assert sleeps == [0.5, 1.0]

    def test_client_error_not_retried(self, make_client, sleeps):
        client, session = make_client(FakeResponse(400, {"message": "bad"}))
        client.execute("GET", "api/domains")
        assert len(session.calls) == 1
        assert sleeps == []

    def test_post_not_retried(self, make_client):
        client, session = make_client(FakeResponse(503, {}))
        client.execute("POST", "api/domains", json={"domain": "example.com"})
        assert len(session.calls) == 1

    def test_recovers_after_transient_failure(self, make_client):
        client, session = make_client(
            FakeResponse(503, {}),
            requests.ConnectionError("reset"),
            FakeResponse(200, {"data": []}),
        )
        result = client.execute("GET", "api/domains")
        assert isinstance(result, Success)
        assert result.data == {"data": []}
        assert len(session.calls) == 3

    def test_per_call_retry_budget(self, make_client):
        client, session = make_client(FakeResponse(502, {}))
        client.execute("GET", "api/domains", retries=0)
        assert len(session.calls) == 1

    def test_rate_limit_is_retried(self, make_client):
        client, session = make_client(FakeResponse(429, {}), FakeResponse(200, {}))
        assert client.execute("GET", "api/domains").ok
        assert len(session.calls) == 2


class TestConvenienceVerbs:
    def test_get_returns_body(self, make_client):
        client, session = make_client(FakeResponse(200, {"data": {"id": 1}}))
        assert client.get("api/domains", {"page": 2}) == {"data": {"id": 1}}
        assert session.last_call["params"] == [("page", "2")]

    @pytest.mark.parametrize("status, error_cls", [
        (400, ValidationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (500, ServerError),
        (418, ApiError),
    ])
    def test_raise_typed_errors(self, make_client, status, error_cls):
        client, _ = make_client(FakeResponse(status, {"message": "nope"}), retry_policy=no_retry_policy())
        with pytest.raises(error_cls) as info:
            client.get("api/domains")
        assert info.value.status_code == status
        assert type(info.value) is error_cls

    def test_protocol_error_raised(self, make_client):
        client, _ = make_client(FakeResponse(200, content=b"oops"))
        with pytest.raises(ProtocolError):
            client.get("api/domains")

    def test_timeout_raised_after_retries(self, make_client):
        client, session = make_client(requests.Timeout("slow"))
        with pytest.raises(RequestTimeoutError):
            client.delete("api/domains/example.com")
        assert len(session.calls) == 3

    def test_network_error_raised(self, make_client):
        client, _ = make_client(requests.ConnectionError("down"), retry_policy=no_retry_policy())
        with pytest.raises(NetworkError):
            client.put("api/domains/example.com", {"open_track": True})

    def test_post_multipart_sends_encoded_body(self, make_client):
        client, session = make_client(FakeResponse(200, {"success": True}))
        upload = FileUpload("attachments", "a.txt", b"hello", "text/plain")
        client.post_multipart("api/domains/example.com/message", {"to": ["a@x.com", "b@x.com"]}, [upload])

        call = session.last_call
        content_type = call["headers"]["Content-Type"]
        assert content_type.startswith("multipart/form-data; boundary=")
        assert call["json"] is None
        assert b'name="to[]"' in call["data"]
        assert b'filename="a.txt"' in call["data"]
        assert content_type.split("boundary=")[1].encode() in call["data"]

    def test_multipart_content_type_overrides_caller_header(self, make_client):
        client, session = make_client()
        client.post_multipart("upload", {"a": "1"}, headers={"Content-Type": "text/plain"})
        assert session.last_call["headers"]["Content-Type"].startswith("multipart/form-data")


class TestClientLifecycle:
    def test_context_manager_closes_session(self):
        session = FakeSession()
        with SmtpClient(session=session):
            pass
        assert session.closed

    def test_endpoint_build_normalizes(self):
        endpoint = Endpoint.build("get", "api/x", {"a": None, "b": [1, 2]}, {"X": "y"})
        assert endpoint.method == "GET"
        assert endpoint.query == (("b", "1"), ("b", "2"))
        assert endpoint.headers == (("X", "y"),)

    def test_failure_unwrap_raises_matching_error(self):
        failure = Failure(ErrorKind.NOT_FOUND, "gone", 404)
        with pytest.raises(NotFoundError):
            failure.unwrap()
