"""
Test fixtures for the paste server dialects.

- DOGBIN_DOCUMENT_RESPONSE: retrieval response of the extended dogbin API
- HASTEBIN_DOCUMENT_RESPONSE: retrieval response of the legacy hastebin API
"""

BASE_URL = "http://dogbin.test:8082"

DOGBIN_DOCUMENT_RESPONSE = {
    "data": "works",
    "document": {
        "_id": "exists",
        "content": "works",
        "isUrl": False,
        "owner": {"$oid": "5b20334e5e7034132c431e78"},
        "version": 2,
        "viewCount": 12,
    },
    "key": "exists",
}

HASTEBIN_DOCUMENT_RESPONSE = {"data": "works", "key": "existshaste"}
