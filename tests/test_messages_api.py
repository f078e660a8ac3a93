import pytest

from kirimemail_smtp.api import MessagesApi
from kirimemail_smtp.exceptions import ServerError, ValidationError
from kirimemail_smtp.models import EmailMessage, TemplateMessage
from kirimemail_smtp.transport import FileUpload

from conftest import FakeResponse

SENT = {"success": True, "message": "Email queued", "data": {"message_guid": "m-1"}}


def test_send_message(make_client):
    client, session = make_client(FakeResponse(200, SENT))
    message = EmailMessage(from_="a@example.com", to="b@example.com", subject="Hi", html="<p>Hi</p>")

    response = MessagesApi(client).send_message("example.com", message)

    call = session.last_call
    assert call["method"] == "POST"
    assert call["url"] == "https://api.test/api/domains/example.com/message"
    assert call["json"] == {"from": "a@example.com", "to": "b@example.com", "subject": "Hi", "html": "<p>Hi</p>"}
    assert response == SENT


def test_send_message_accepts_dict(make_client):
    client, session = make_client(FakeResponse(200, SENT))
    MessagesApi(client).send_message("example.com", {"from": "a@example.com", "to": "b@example.com"})
    assert session.last_call["json"]["from"] == "a@example.com"


def test_send_bulk_message(make_client):
    client, session = make_client(FakeResponse(200, SENT))
    message = EmailMessage(from_="a@example.com", to=["b@example.com", "c@example.com"], subject="Hi", text="x")
    MessagesApi(client).send_bulk_message("example.com", message)
    assert session.last_call["json"]["to"] == ["b@example.com", "c@example.com"]


def test_send_message_not_retried(make_client):
    client, session = make_client(FakeResponse(503, {"message": "busy"}))
    with pytest.raises(ServerError):
        MessagesApi(client).send_message("example.com", {"from": "a@example.com"})
    assert len(session.calls) == 1


def test_send_with_attachments(make_client):
    client, session = make_client(FakeResponse(200, SENT))
    api = MessagesApi(client)
    upload = api.create_file_upload("attachments", "invoice.pdf", b"%PDF-1.4", "application/pdf")
    message = EmailMessage(from_="a@example.com", to=["b@example.com", "c@example.com"], subject="Invoice", text="See attached")

    api.send_message_with_attachments("example.com", message, [upload])

    call = session.last_call
    body = call["data"]
    assert call["headers"]["Content-Type"].startswith("multipart/form-data; boundary=")
    assert body.count(b'name="to[]"') == 2
    assert b'name="from"' in body
    assert b'filename="invoice.pdf"' in body
    assert b"Content-Type: application/pdf" in body
    assert b"%PDF-1.4" in body


def test_send_template_message(make_client):
    client, session = make_client(FakeResponse(200, SENT))
    template = TemplateMessage("tpl-1", "b@example.com", {"name": "Bob"})
    MessagesApi(client).send_template_message("example.com", template)
    call = session.last_call
    assert call["url"].endswith("/api/domains/example.com/message/template")
    assert call["json"] == {"template_guid": "tpl-1", "to": "b@example.com", "variables": {"name": "Bob"}}


def test_server_validation_error(make_client):
    body = {"message": "The given data was invalid.", "errors": {"to": ["The to field is required."]}}
    client, _ = make_client(FakeResponse(422, body))
    with pytest.raises(ValidationError) as info:
        MessagesApi(client).send_message("example.com", {"from": "a@example.com"})
    assert info.value.errors_for_field("to") == ["The to field is required."]


class TestValidateMessage:
    def test_valid(self, make_client):
        client, session = make_client()
        message = EmailMessage(from_="a@example.com", to="b@example.com", subject="Hi", text="x")
        result = MessagesApi(client).validate_message(message)
        assert result.valid
        assert result.errors == []
        assert session.calls == []

    def test_everything_missing(self, make_client):
        client, _ = make_client()
        result = MessagesApi(client).validate_message({})
        assert not result.valid
        assert result.errors == [
            "From address is required",
            "To address is required",
            "Subject is required",
            "Either text or HTML content is required",
        ]

    def test_html_only_is_enough(self, make_client):
        client, _ = make_client()
        message = {"from": "a@example.com", "to": ["b@example.com"], "subject": "Hi", "html": "<b>x</b>"}
        assert MessagesApi(client).validate_message(message).valid


def test_create_file_upload_defaults():
    upload = MessagesApi.create_file_upload("attachments", "notes.txt", "plain text")
    assert upload == FileUpload("attachments", "notes.txt", "plain text")
    assert upload.resolved_content_type == "text/plain"
