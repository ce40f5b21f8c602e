"""
Endpoint URL construction for dogbin/hastebin servers.
"""

from urllib.parse import urlsplit, urlunsplit

from .errors import InvalidServerSpecifierError

DOGBIN_SERVER_URL = "del.dog"
HASTEBIN_SERVER_URL = "hastebin.com"

DEFAULT_SCHEME = "https"


class ServerURLs:
    """
    Derives the endpoint URLs of a paste server.

    The specifier may be a bare host ("del.dog"), a host with port, or a full
    URL ("http://host:90"). A missing scheme defaults to https, an explicit
    scheme and port are kept as given.
    """

    def __init__(self, server: str):
        self.server = server

    def base_url(self) -> str:
        """Return the normalized absolute base URL, without trailing slash."""
        server = self.server.strip()
        if not server:
            raise InvalidServerSpecifierError(self.server, "empty server")

        if server.startswith("//"):
            server = f"{DEFAULT_SCHEME}:{server}"
        elif "://" not in server:
            server = f"{DEFAULT_SCHEME}://{server}"

        try:
            parts = urlsplit(server)
            parts.port  # raises on a malformed port
        except ValueError as e:
            raise InvalidServerSpecifierError(self.server, str(e)) from e

        if not parts.scheme:
            raise InvalidServerSpecifierError(self.server, "missing scheme")
        if not parts.hostname:
            raise InvalidServerSpecifierError(self.server, "missing host")

        return urlunsplit((parts.scheme, parts.netloc, parts.path.rstrip("/"), "", ""))

    def upload_url(self) -> str:
        return f"{self.base_url()}/documents"

    def get_url(self, slug: str) -> str:
        return f"{self.base_url()}/documents/{slug}"

    def document_url(self, slug: str) -> str:
        """Human-facing shareable link of a paste."""
        return f"{self.base_url()}/{slug}"
