"""
Dogbin / hastebin API client implementation.
"""

import json
import logging
from typing import Optional

import requests

from .. import __version__
from .errors import (
    DecodeError,
    EmptyContentError,
    EmptyDocumentError,
    RequestFailedError,
    ServerRejectedError,
)
from .models import (
    Document,
    ResponseWrapper,
    ServerConfig,
    UploadRequest,
    UploadResult,
    decode_error_message,
    load_json_object,
)
from .urls import DOGBIN_SERVER_URL, HASTEBIN_SERVER_URL, ServerURLs

logger = logging.getLogger(__name__)


def _status_line(response: requests.Response) -> str:
    """Status line as the server sent it, e.g. "409 Conflict"."""
    return f"{response.status_code} {response.reason or ''}".strip()


class DogbinClient:
    """
    Client for dogbin and hastebin servers.

    Features:
    - Upload with a server-assigned slug (plain text, both dialects)
    - Upload with a custom slug (JSON, dogbin only)
    - Retrieve a document, normalized across both dialects

    Every operation performs exactly one request. There is no retry and no
    default timeout; pass ``timeout`` to bound a request.
    """

    API_KEY_HEADER = "X-Api-Key"

    def __init__(
        self,
        server: str,
        api_key: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize dogbin client.

        Args:
            server: Server specifier (e.g., "del.dog" or "http://localhost:8082")
            api_key: Optional dogbin API key
            timeout: Optional request timeout in seconds
            session: Optional session to send requests with
        """
        self.server = server
        self.api_key = (api_key or "").strip() or None
        self.timeout = timeout
        self.urls = ServerURLs(server)
        self.session = session or requests.Session()

        self.headers = {
            "User-Agent": f"inu/{__version__}",
            "Accept": "application/json",
        }
        if self.api_key:
            self.headers[self.API_KEY_HEADER] = self.api_key

    @classmethod
    def from_config(cls, config: ServerConfig, **kwargs) -> "DogbinClient":
        return cls(config.server, config.api_key, **kwargs)

    @classmethod
    def dogbin(cls, **kwargs) -> "DogbinClient":
        """Client for the public del.dog instance."""
        return cls(DOGBIN_SERVER_URL, **kwargs)

    @classmethod
    def hastebin(cls, **kwargs) -> "DogbinClient":
        """Client for the public hastebin.com instance."""
        return cls(HASTEBIN_SERVER_URL, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "DogbinClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(
        self,
        method: str,
        url: str,
        body: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> requests.Response:
        """Send a single request; transport errors propagate unchanged."""
        headers = dict(self.headers)
        if content_type:
            headers["Content-Type"] = content_type

        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method=method,
                url=url,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise

        logger.debug(f"{method} {url} -> {_status_line(response)}")
        return response

    def put(self, slug: str, content: str) -> UploadResult:
        """
        Upload content to the server.

        A non-empty slug assumes the server supports the extended dogbin API
        and sends JSON; otherwise the raw content is posted as plain text and
        the server picks the slug.

        Args:
            slug: Custom slug, or "" to let the server choose
            content: Text to upload

        Returns:
            UploadResult with the slug and shareable URL

        Raises:
            EmptyContentError: content is empty
            ServerRejectedError: server answered with a non-200 status
            DecodeError: server answered 200 with an unusable body
        """
        if not content:
            raise EmptyContentError()

        url = self.urls.upload_url()

        if slug:
            body = json.dumps(UploadRequest(slug=slug, content=content).to_dict())
            content_type = "application/json"
        else:
            body = content
            content_type = "text/plain"

        with self._request("POST", url, body.encode("utf-8"), content_type) as response:
            text = response.text

            if response.status_code != requests.codes.ok:
                status = _status_line(response)
                message = status
                try:
                    decoded, found = decode_error_message(text)
                    if found:
                        message = decoded
                except ValueError as e:
                    logger.debug(f"Ignoring undecodable error body from {url}: {e}")
                raise ServerRejectedError(
                    status_code=response.status_code,
                    status=status,
                    message=message,
                    response_body=text,
                )

            try:
                data = load_json_object(text)
                result = UploadResult.from_api_response(data, self.urls)
            except ValueError as e:
                raise DecodeError(str(e), text) from e

        if not result.slug:
            logger.warning(f"Upload to {url} succeeded but the server returned no key")
        return result

    def get(self, slug: str) -> Document:
        """
        Get a document by slug.

        Args:
            slug: Slug of the paste

        Returns:
            Document; is_url/view_count are only populated by dogbin servers

        Raises:
            RequestFailedError: server answered with a non-200 status
            DecodeError: server answered 200 with a body that is not JSON
            EmptyDocumentError: server answered 200 with an empty document
        """
        url = self.urls.get_url(slug)

        with self._request("GET", url) as response:
            text = response.text

            if response.status_code != requests.codes.ok:
                status = _status_line(response)
                try:
                    message, found = decode_error_message(text)
                except ValueError as e:
                    raise RequestFailedError(
                        status_code=response.status_code,
                        status=status,
                        message=status,
                        response_body=text,
                        decode_error=str(e),
                    ) from e
                raise RequestFailedError(
                    status_code=response.status_code,
                    status=status,
                    message=message if found else status,
                    response_body=text,
                )

            try:
                wrapper = ResponseWrapper.from_api_response(load_json_object(text))
            except ValueError as e:
                raise DecodeError(str(e), text) from e

        if wrapper.is_empty:
            raise EmptyDocumentError(text)

        return Document.from_wrapper(wrapper)
