"""
Error taxonomy of the dogbin client.

- EmptyContentError: put called without content, no request is made
- InvalidServerSpecifierError: the server string is not a usable URL
- ServerRejectedError: upload answered with a non-200 status
- RequestFailedError: retrieval answered with a non-200 status
- DecodeError / EmptyDocumentError: 200 response with an unusable body

Transport failures (connection refused, DNS, timeouts) are not wrapped and
surface as ``requests.exceptions.RequestException``.
"""

from typing import Optional


class DogbinError(Exception):
    """Base exception for dogbin client errors."""

    pass


class EmptyContentError(DogbinError, ValueError):
    """Put was called with empty content."""

    def __init__(self, message: str = "no content was provided"):
        super().__init__(message)


class InvalidServerSpecifierError(DogbinError):
    """Server specifier could not be parsed as a URL."""

    def __init__(self, server: str, reason: str):
        self.server = server
        self.reason = reason
        super().__init__(f"unable to parse server URL '{server}': {reason}")


class DogbinAPIError(DogbinError):
    """Server answered with a non-success status."""

    def __init__(
        self,
        status_code: int,
        status: str,
        message: str,
        response_body: Optional[str] = None,
        text: Optional[str] = None,
    ):
        self.status_code = status_code
        self.status = status
        self.message = message
        self.response_body = response_body
        super().__init__(text if text is not None else message)


class ServerRejectedError(DogbinAPIError):
    """Upload rejected by the server (e.g. slug already taken)."""

    pass


class RequestFailedError(DogbinAPIError):
    """Retrieval failed; ``decode_error`` is set when the error body was not JSON."""

    def __init__(
        self,
        status_code: int,
        status: str,
        message: str,
        response_body: Optional[str] = None,
        decode_error: Optional[str] = None,
    ):
        self.decode_error = decode_error
        if decode_error is not None:
            text = f"unable to make request ({status}) and decode response: {decode_error}"
        else:
            text = f"unable to make request: {message}"
        super().__init__(status_code, status, message, response_body, text=text)


class DecodeError(DogbinError):
    """Success response whose body is not valid JSON of the expected shape."""

    def __init__(self, detail: str, response_body: Optional[str] = None):
        self.detail = detail
        self.response_body = response_body
        super().__init__(f"unable to decode response: {detail}")


class EmptyDocumentError(DecodeError):
    """Success response that decoded to a document with nothing in it."""

    def __init__(self, response_body: Optional[str] = None):
        super().__init__("document is empty", response_body)
