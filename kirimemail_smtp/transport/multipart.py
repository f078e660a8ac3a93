"""Multipart/form-data encoding for file-upload requests."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

from urllib3.filepost import encode_multipart_formdata

from .params import stringify

DEFAULT_BINARY_TYPE = "application/octet-stream"
DEFAULT_TEXT_TYPE = "text/plain"


@dataclass(frozen=True)
class FileUpload:
    """A file attached to a multipart request."""
    field: str
    filename: str
    content: Union[bytes, str]
    content_type: Optional[str] = None

    @property
    def resolved_content_type(self) -> str:
        if self.content_type:
            return self.content_type
        if isinstance(self.content, str):
            return DEFAULT_TEXT_TYPE
        return DEFAULT_BINARY_TYPE


@dataclass(frozen=True)
class MultipartBody:
    """Encoded body plus the boundary-bearing Content-Type header value."""
    body: bytes
    content_type: str


def build_parts(
    fields: Optional[Mapping[str, Any]] = None,
    files: Sequence[FileUpload] = (),
) -> list[tuple[str, Any]]:
    """Flatten fields and files into ordered multipart parts.

    Array values become one ``key[]`` part per element; ``None`` values are
    skipped.
    """
    parts: list[tuple[str, Any]] = []

    for key, value in (fields or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            for item in value:
                if item is not None:
                    parts.append((f"{key}[]", stringify(item)))
        else:
            parts.append((key, stringify(value)))

    for upload in files:
        parts.append((
            upload.field,
            (upload.filename, upload.content, upload.resolved_content_type),
        ))

    return parts


def encode_multipart(
    fields: Optional[Mapping[str, Any]] = None,
    files: Sequence[FileUpload] = (),
    boundary: Optional[str] = None,
) -> MultipartBody:
    """Encode fields and files as a multipart/form-data body.

    File contents are passed through untouched; size and type limits are
    enforced by the server.
    """
    body, content_type = encode_multipart_formdata(build_parts(fields, files), boundary=boundary)
    return MultipartBody(body=body, content_type=content_type)
