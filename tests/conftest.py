"""Test fixtures and utilities."""

import json
import re

import pytest
import responses

from inu.dogbin_client import DogbinClient

from fixtures import BASE_URL


@pytest.fixture
def client() -> DogbinClient:
    """Client bound to the mocked test server."""
    return DogbinClient(BASE_URL)


class InMemoryPasteServer:
    """Minimal dogbin server served through `responses` callbacks."""

    def __init__(self, base_url: str):
        self.base_url = base_url
        self.documents: dict[str, str] = {}
        self._counter = 0

    def register(self, mock: responses.RequestsMock) -> None:
        mock.add_callback(
            responses.POST,
            f"{self.base_url}/documents",
            callback=self._handle_post,
        )
        mock.add_callback(
            responses.GET,
            re.compile(rf"{re.escape(self.base_url)}/documents/.+"),
            callback=self._handle_get,
        )

    def _handle_post(self, request):
        body = request.body.decode("utf-8") if isinstance(request.body, bytes) else request.body
        if request.headers.get("Content-Type") == "application/json":
            payload = json.loads(body)
            slug, content = payload["slug"], payload["content"]
            if slug in self.documents:
                return 409, {}, json.dumps({"message": "This URL is already in use"})
        else:
            self._counter += 1
            slug, content = f"haste{self._counter}", body

        self.documents[slug] = content
        return 200, {}, json.dumps({"key": slug, "isUrl": False})

    def _handle_get(self, request):
        slug = request.path_url[len("/documents/"):]
        if slug not in self.documents:
            return 404, {}, json.dumps({"message": "Document not found."})
        content = self.documents[slug]
        return 200, {}, json.dumps({
            "data": content,
            "key": slug,
            "document": {"_id": slug, "content": content, "isUrl": False, "viewCount": 1},
        })


@pytest.fixture
def paste_server():
    """In-memory paste server, active for the duration of the test."""
    server = InMemoryPasteServer(BASE_URL)
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        server.register(mock)
        yield server
