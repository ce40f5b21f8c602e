"""
Wire payloads of the dogbin/hastebin APIs and the normalized document.

Both dialects answer a retrieval with the same outer wrapper
(``{"data": ..., "key": ...}``). Dogbin additionally nests the full document
under ``"document"``; hastebin does not, so its documents always report
``is_url=False`` and ``view_count=0``.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from .urls import DOGBIN_SERVER_URL, ServerURLs

logger = logging.getLogger(__name__)


def _field(data: dict, key: str, kind: type, default: Any) -> Any:
    """Read an optional typed field; null counts as absent."""
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass, never accept it as a count
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ValueError(
            f"field '{key}': expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def load_json_object(body: str) -> dict:
    """Parse a response body that must hold a JSON object.

    Raises:
        ValueError: body is not JSON, or the JSON is not an object
    """
    data = json.loads(body)
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class ServerConfig:
    """Paste server to talk to.

    - server: host, optionally with scheme and port (https is assumed)
    - api_key: dogbin API key, only sent when set
    """

    server: str = DOGBIN_SERVER_URL
    api_key: Optional[str] = None


@dataclass(frozen=True)
class UploadRequest:
    """Body of an extended-dialect upload (custom slug)."""

    slug: str
    content: str

    def to_dict(self) -> dict:
        return {"slug": self.slug, "content": self.content}


@dataclass(frozen=True)
class UploadResult:
    """Result of a successful upload."""

    slug: str
    is_url: bool = False
    url: str = ""

    @classmethod
    def from_api_response(cls, data: dict, urls: ServerURLs) -> "UploadResult":
        """Create from upload response; the shareable URL is built locally."""
        slug = _field(data, "key", str, "")
        return cls(
            slug=slug,
            is_url=_field(data, "isUrl", bool, False),
            url=urls.document_url(slug),
        )

    def to_dict(self) -> dict:
        return {"isUrl": self.is_url, "key": self.slug, "url": self.url}


@dataclass(frozen=True)
class ErrorMessage:
    """Error envelope used by the servers: ``{"message": "..."}``."""

    message: str = ""

    @classmethod
    def from_api_response(cls, data: dict) -> "ErrorMessage":
        return cls(message=_field(data, "message", str, ""))


def decode_error_message(body: str) -> tuple[str, bool]:
    """
    Extract the server's error message from an error response body.

    Returns ``(message, found)``; ``found`` is False when the envelope has no
    message or an empty one, which callers treat the same way.

    Raises:
        ValueError: body is not a JSON object
    """
    message = ErrorMessage.from_api_response(load_json_object(body)).message
    return message, bool(message)


@dataclass(frozen=True)
class ExtendedDocument:
    """Document metadata only returned by dogbin servers."""

    slug: str = ""
    is_url: bool = False
    content: str = ""
    view_count: int = 0

    @classmethod
    def from_api_response(cls, data: dict) -> "ExtendedDocument":
        # Server-internal fields (owner, version, ...) are ignored
        return cls(
            slug=_field(data, "_id", str, ""),
            is_url=_field(data, "isUrl", bool, False),
            content=_field(data, "content", str, ""),
            view_count=_field(data, "viewCount", int, 0),
        )


@dataclass(frozen=True)
class ResponseWrapper:
    """Outer envelope of a retrieval response, present in both dialects."""

    content: str = ""
    slug: str = ""
    document: Optional[ExtendedDocument] = None

    @classmethod
    def from_api_response(cls, data: dict) -> "ResponseWrapper":
        raw_document = data.get("document")
        document = None
        if raw_document is not None:
            if not isinstance(raw_document, dict):
                raise ValueError(
                    f"field 'document': expected object, got {type(raw_document).__name__}"
                )
            document = ExtendedDocument.from_api_response(raw_document)

        return cls(
            content=_field(data, "data", str, ""),
            slug=_field(data, "key", str, ""),
            document=document,
        )

    @property
    def is_empty(self) -> bool:
        """Nothing identifiable: no content, no slug and no extended document."""
        return not self.content and not self.slug and self.document is None


@dataclass(frozen=True)
class Document:
    """Normalized paste, independent of the server dialect."""

    slug: str
    content: str
    is_url: bool = False
    view_count: int = 0

    @classmethod
    def from_wrapper(cls, wrapper: ResponseWrapper) -> "Document":
        """Merge the wrapper with the extended document, if the server sent one."""
        if wrapper.document is None:
            return cls(slug=wrapper.slug, content=wrapper.content)

        if wrapper.document.slug and wrapper.document.slug != wrapper.slug:
            logger.warning(
                f"Document id '{wrapper.document.slug}' differs from key '{wrapper.slug}'"
            )
        return cls(
            slug=wrapper.slug,
            content=wrapper.content,
            is_url=wrapper.document.is_url,
            view_count=wrapper.document.view_count,
        )

    def to_dict(self) -> dict:
        return {
            "_id": self.slug,
            "isUrl": self.is_url,
            "content": self.content,
            "viewCount": self.view_count,
        }
