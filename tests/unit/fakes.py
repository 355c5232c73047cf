"""Fake implementations and payload builders for testing the client."""

from typing import Any

from prismic_kit.errors import TransportError
from prismic_kit.transport import FetchResult

API_URL = "https://lesbonneschoses.prismic.io/api"
SEARCH_URL = "https://lesbonneschoses.prismic.io/api/documents/search"


def make_descriptor(**overrides: Any) -> dict[str, Any]:
    """Create a minimal /api document with an "everything" form."""
    descriptor: dict[str, Any] = {
        "refs": [
            {"id": "master", "ref": "UlfoxUnM0wkXYXbX", "label": "Master", "isMasterRef": True},
            {
                "id": "release1",
                "ref": "UlfoxUnM0wkXYXbl",
                "label": "San Francisco Grand opening",
                "scheduledAt": 1385546400000,
            },
        ],
        "bookmarks": {"about": "Ue0EDd_mqb8Dhk3j"},
        "types": {"blog-post": "Blog post", "product": "Product"},
        "tags": ["Cupcake", "Pie"],
        "forms": {
            "everything": {
                "method": "GET",
                "enctype": "application/x-www-form-urlencoded",
                "action": SEARCH_URL,
                "fields": {
                    "ref": {"type": "String", "multiple": False},
                    "q": {"type": "String", "multiple": True},
                    "page": {"type": "Integer", "multiple": False, "default": "1"},
                    "pageSize": {"type": "Integer", "multiple": False, "default": "20"},
                    "orderings": {"type": "String", "multiple": False},
                },
            },
            "products": {
                "name": "All Products",
                "method": "GET",
                "rel": "collection",
                "enctype": "application/x-www-form-urlencoded",
                "action": SEARCH_URL,
                "fields": {
                    "ref": {"type": "String", "multiple": False},
                    "q": {
                        "type": "String",
                        "multiple": True,
                        "default": '[[:d = any(document.type, ["product"])]]',
                    },
                },
            },
        },
        "oauth_initiate": "https://lesbonneschoses.prismic.io/auth",
        "oauth_token": "https://lesbonneschoses.prismic.io/auth/token",
    }
    descriptor.update(overrides)
    return descriptor


def make_search_response(results: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    results = results or []
    return {
        "page": 1,
        "results_per_page": 20,
        "results_size": len(results),
        "total_results_size": len(results),
        "total_pages": 1,
        "next_page": None,
        "prev_page": None,
        "results": results,
    }


class FakeTransport:
    """In-memory fake for RequestsTransport.

    Stores predefined responses keyed by URL prefix and records all fetches.
    """

    def __init__(self) -> None:
        self.responses: dict[str, FetchResult | TransportError] = {}
        self.calls: list[str] = []

    def add_response(self, url: str, data: Any, *, max_age: int | None = None) -> None:
        """Register a JSON response for every URL starting with ``url``."""
        self.responses[url] = FetchResult(data=data, max_age=max_age)

    def add_error(self, url: str, status: int = 500) -> None:
        self.responses[url] = TransportError(url, status=status)

    def fetch(self, url: str) -> FetchResult:
        """Return the longest matching predefined response and record the call."""
        self.calls.append(url)
        matches = [prefix for prefix in self.responses if url.startswith(prefix)]
        if not matches:
            msg = f"FakeTransport: no response registered for {url!r}"
            raise KeyError(msg)
        response = self.responses[max(matches, key=len)]
        if isinstance(response, TransportError):
            raise response
        return response
