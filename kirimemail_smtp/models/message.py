"""Outgoing message payloads."""

from dataclasses import dataclass, field
from typing import Any, Optional, Union

Recipients = Union[str, list[str]]


@dataclass
class EmailMessage:
    """An email to send through a domain.

    ``from_`` is sent as ``from`` on the wire.
    """
    from_: str
    to: Recipients
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None
    cc: Optional[Recipients] = None
    bcc: Optional[Recipients] = None
    headers: Optional[dict[str, str]] = None

    def to_dict(self) -> dict[str, Any]:
        out = {"from": self.from_}
        for key, value in self.__dict__.items():
            if key != "from_" and value is not None:
                out[key] = value
        return out


@dataclass
class TemplateMessage:
    """An email rendered from a stored template."""
    template_guid: str
    to: Recipients
    variables: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass
class MessageValidation:
    """Result of client-side message validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        if self.valid:
            return "Valid"
        return f"Invalid: {'; '.join(self.errors)}"
