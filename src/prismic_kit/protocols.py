"""Protocols for dependency injection in the client."""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from prismic_kit.transport import FetchResult

# Called as link_resolver(document_link, is_broken) -> url
LinkResolver = Callable[[Any, bool], str]


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for HTTP transports."""

    def fetch(self, url: str) -> FetchResult:
        """GET the URL and return the parsed JSON; raise TransportError on failure."""
        ...


@runtime_checkable
class RendererProtocol(Protocol):
    """Protocol for per-fragment-kind renderers."""

    def as_html(self, fragment: Any, link_resolver: LinkResolver | None) -> str | None:
        """Render the fragment as HTML, or None to leave it out."""
        ...

    def as_text(self, fragment: Any, link_resolver: LinkResolver | None) -> str | None:
        """Render the fragment as plain text, or None to leave it out."""
        ...
