"""
Dogbin / hastebin API Client.

Provides:
- Upload pastes, with a custom slug on dogbin servers
- Retrieve pastes, normalized across the dogbin and hastebin dialects
- Typed errors for rejected requests and unusable responses

One request per operation, no retries.
"""

from .client import DogbinClient
from .errors import (
    DecodeError,
    DogbinAPIError,
    DogbinError,
    EmptyContentError,
    EmptyDocumentError,
    InvalidServerSpecifierError,
    RequestFailedError,
    ServerRejectedError,
)
from .models import Document, ServerConfig, UploadResult
from .urls import DOGBIN_SERVER_URL, HASTEBIN_SERVER_URL, ServerURLs

__all__ = [
    "DogbinClient",
    "Document",
    "UploadResult",
    "ServerConfig",
    "ServerURLs",
    "DOGBIN_SERVER_URL",
    "HASTEBIN_SERVER_URL",
    "DogbinError",
    "DogbinAPIError",
    "EmptyContentError",
    "InvalidServerSpecifierError",
    "ServerRejectedError",
    "RequestFailedError",
    "DecodeError",
    "EmptyDocumentError",
]
