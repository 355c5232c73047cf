"""Pluggable fragment renderers.

The document model does not know how to turn fragments into HTML or text; it
looks up a renderer for the fragment's class in a RendererRegistry. Kinds
without a registered renderer render as an empty string.
"""

from html import escape
from typing import Any

from prismic_kit.models.fragments import (
    Color,
    Date,
    DocumentLink,
    GeoPoint,
    Number,
    Select,
    Text,
    Timestamp,
    WebLink,
)
from prismic_kit.protocols import LinkResolver, RendererProtocol


class RendererRegistry:
    """Map fragment classes to renderers."""

    def __init__(self) -> None:
        self._renderers: dict[type, RendererProtocol] = {}

    def register(self, fragment_type: type, renderer: RendererProtocol) -> None:
        self._renderers[fragment_type] = renderer

    def get(self, fragment: Any) -> RendererProtocol | None:
        return self._renderers.get(type(fragment))

    def as_html(self, fragment: Any, link_resolver: LinkResolver | None = None) -> str | None:
        """Render a fragment as HTML, or None when no renderer is registered."""
        renderer = self.get(fragment)
        if renderer is None:
            return None
        return renderer.as_html(fragment, link_resolver)

    def as_text(self, fragment: Any, link_resolver: LinkResolver | None = None) -> str | None:
        renderer = self.get(fragment)
        if renderer is None:
            return None
        return renderer.as_text(fragment, link_resolver)


class ValueRenderer:
    """Render a scalar fragment's ``value`` inside a span."""

    def __init__(self, css_class: str) -> None:
        self.css_class = css_class

    def as_text(self, fragment: Any, link_resolver: LinkResolver | None) -> str:
        value = fragment.value
        return value.isoformat() if hasattr(value, "isoformat") else str(value)

    def as_html(self, fragment: Any, link_resolver: LinkResolver | None) -> str:
        text = escape(self.as_text(fragment, link_resolver))
        return f'<span class="{self.css_class}">{text}</span>'


class LinkRenderer:
    """Render links; document links are left out when there is no resolver."""

    def as_text(
        self, fragment: WebLink | DocumentLink, link_resolver: LinkResolver | None
    ) -> str | None:
        if isinstance(fragment, DocumentLink) and link_resolver is None:
            return None
        return fragment.resolve_url(link_resolver)

    def as_html(
        self, fragment: WebLink | DocumentLink, link_resolver: LinkResolver | None
    ) -> str | None:
        if isinstance(fragment, DocumentLink) and link_resolver is None:
            return None
        url = escape(fragment.resolve_url(link_resolver))
        label = escape(fragment.slug or url) if isinstance(fragment, DocumentLink) else url
        return f'<a href="{url}">{label}</a>'


class GeoPointRenderer:
    def as_text(self, fragment: GeoPoint, link_resolver: LinkResolver | None) -> str:
        return f"{fragment.latitude}, {fragment.longitude}"

    def as_html(self, fragment: GeoPoint, link_resolver: LinkResolver | None) -> str:
        return (
            '<div class="geopoint">'
            f'<span class="latitude">{fragment.latitude}</span>'
            f'<span class="longitude">{fragment.longitude}</span>'
            "</div>"
        )


def default_registry() -> RendererRegistry:
    """Registry with plain renderers for the scalar and link kinds."""
    registry = RendererRegistry()
    registry.register(Text, ValueRenderer("text"))
    registry.register(Number, ValueRenderer("number"))
    registry.register(Select, ValueRenderer("text"))
    registry.register(Color, ValueRenderer("color"))
    registry.register(Date, ValueRenderer("date"))
    registry.register(Timestamp, ValueRenderer("date"))
    registry.register(WebLink, LinkRenderer())
    registry.register(DocumentLink, LinkRenderer())
    registry.register(GeoPoint, GeoPointRenderer())
    return registry
