"""Sending email.

POST /api/domains/:domain/message            - Send (JSON, or multipart with attachments)
POST /api/domains/:domain/message/template   - Send from a stored template
"""

from typing import Any, Mapping, Optional, Sequence, Union

from ..models.message import EmailMessage, MessageValidation, TemplateMessage
from ..transport.multipart import FileUpload
from .base import ResourceApi, api_call, domain_path

MessageLike = Union[EmailMessage, Mapping[str, Any]]
TemplateLike = Union[TemplateMessage, Mapping[str, Any]]


def _payload(message: Any) -> dict[str, Any]:
    if hasattr(message, "to_dict"):
        return message.to_dict()
    return dict(message)


class MessagesApi(ResourceApi):
    """Sends messages through a domain."""

    @api_call
    def send_message(self, domain: str, message: MessageLike) -> dict[str, Any]:
        """Send a single email.

        Returns:
            The API response (``success``, ``message``, ``data``).
        """
        return self.client.post(domain_path(domain, "message"), _payload(message))

    @api_call
    def send_message_with_attachments(
        self,
        domain: str,
        message: MessageLike,
        files: Sequence[FileUpload],
    ) -> dict[str, Any]:
        """Send an email with attachments as multipart/form-data.

        List fields such as ``to`` are sent as repeated ``to[]`` parts.
        """
        return self.client.post_multipart(
            domain_path(domain, "message"), _payload(message), list(files)
        )

    @api_call
    def send_bulk_message(self, domain: str, message: MessageLike) -> dict[str, Any]:
        """Send one email to many recipients; ``to`` should be a list."""
        return self.client.post(domain_path(domain, "message"), _payload(message))

    @api_call
    def send_template_message(self, domain: str, template: TemplateLike) -> dict[str, Any]:
        return self.client.post(domain_path(domain, "message", "template"), _payload(template))

    def validate_message(self, message: MessageLike) -> MessageValidation:
        """Check required fields locally, without calling the API."""
        data = _payload(message)
        errors: list[str] = []

        if not data.get("from"):
            errors.append("From address is required")
        if not data.get("to"):
            errors.append("To address is required")
        if not data.get("subject"):
            errors.append("Subject is required")
        if not data.get("text") and not data.get("html"):
            errors.append("Either text or HTML content is required")

        return MessageValidation(valid=not errors, errors=errors)

    @staticmethod
    def create_file_upload(
        field: str,
        filename: str,
        content: Union[bytes, str],
        content_type: Optional[str] = None,
    ) -> FileUpload:
        return FileUpload(field=field, filename=filename, content=content, content_type=content_type)
