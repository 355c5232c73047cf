"""Documents, search responses and typed fragment access."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from prismic_kit.models.fragments import (
    Color,
    DocumentLink,
    FileLink,
    Fragment,
    GeoPoint,
    Group,
    Image,
    ImageLink,
    ImageView,
    Link,
    Number,
    Select,
    StructuredText,
    Text,
    TextBlock,
    Timestamp,
    WebLink,
    init_field,
    valid_spans,
)
from prismic_kit.models.fragments import (
    Date as DateFragment,
)
from prismic_kit.protocols import LinkResolver
from prismic_kit.render import RendererRegistry, default_registry

_TRUE_VALUES = frozenset({"yes", "on", "true"})


@dataclass(frozen=True)
class LinkedDocument:
    """A related document listed on a search result row (not a hyperlink)."""

    id: str
    slug: str | None = None
    type: str | None = None
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Document:
    """A document as returned by a search.

    ``fragments`` holds the raw fragment JSON keyed by ``"<type>.<field>"``; a
    multiple field is stored as a list. Typed accessors return None (or False)
    when the fragment is missing or of another kind.
    """

    id: str
    type: str
    href: str | None = None
    tags: tuple[str, ...] = ()
    slugs: tuple[str, ...] = ()
    linked_documents: tuple[LinkedDocument, ...] = ()
    fragments: dict[str, Any] = field(default_factory=dict)

    @property
    def slug(self) -> str:
        """The current slug, ``"-"`` if the document has none."""
        return self.slugs[0] if self.slugs else "-"

    def _raw_fragments(self, name: str) -> list[dict[str, Any]]:
        raw = self.fragments.get(name)
        if not raw:
            return []
        return raw if isinstance(raw, list) else [raw]

    def get(self, name: str) -> Fragment | None:
        """Return the (first) fragment named e.g. ``"blog-post.author"``."""
        raws = self._raw_fragments(name)
        return init_field(raws[0]) if raws else None

    def get_all(self, name: str) -> list[Fragment | None]:
        return [init_field(raw) for raw in self._raw_fragments(name)]

    def get_text(self, name: str, after: str = "") -> str | None:
        """Return the fragment as a string.

        Works for StructuredText (block texts joined by newlines), Text, Number,
        Select and Color fragments. ``after`` is appended to each value.
        """
        fragment = self.get(name)
        if isinstance(fragment, StructuredText):
            return "\n".join(
                b.text + after for b in fragment.blocks if isinstance(b, TextBlock) and b.text
            )
        if isinstance(fragment, Text | Number | Select | Color) and fragment.value:
            return f"{fragment.value}{after}"
        return None

    def get_number(self, name: str) -> int | float | None:
        fragment = self.get(name)
        return fragment.value if isinstance(fragment, Number) else None

    def get_color(self, name: str) -> str | None:
        fragment = self.get(name)
        return fragment.value if isinstance(fragment, Color) else None

    def get_date(self, name: str) -> date | None:
        fragment = self.get(name)
        return fragment.value if isinstance(fragment, DateFragment) else None

    def get_timestamp(self, name: str) -> datetime | None:
        fragment = self.get(name)
        return fragment.value if isinstance(fragment, Timestamp) else None

    def get_boolean(self, name: str) -> bool:
        """True for Select/Text values "yes", "on" or "true" (any case)."""
        fragment = self.get(name)
        value = getattr(fragment, "value", None)
        return isinstance(value, str) and value.lower() in _TRUE_VALUES

    def get_geo_point(self, name: str) -> GeoPoint | None:
        fragment = self.get(name)
        return fragment if isinstance(fragment, GeoPoint) else None

    def get_group(self, name: str) -> Group | None:
        fragment = self.get(name)
        return fragment if isinstance(fragment, Group) else None

    def get_link(self, name: str) -> Link | None:
        fragment = self.get(name)
        if isinstance(fragment, WebLink | DocumentLink | ImageLink | FileLink):
            return fragment
        return None

    def get_structured_text(self, name: str) -> StructuredText | None:
        fragment = self.get(name)
        return fragment if isinstance(fragment, StructuredText) else None

    def get_image(self, name: str) -> Image | None:
        """Return an Image fragment, or the first image of a StructuredText."""
        fragment = self.get(name)
        if isinstance(fragment, Image):
            return fragment
        if isinstance(fragment, StructuredText):
            view = fragment.get_first_image()
            return Image(main=view) if view is not None else None
        return None

    def get_all_images(self, name: str) -> list[Image | None]:
        return [f if isinstance(f, Image) else None for f in self.get_all(name)]

    def get_image_view(self, name: str, view: str) -> ImageView | None:
        fragment = self.get(name)
        if isinstance(fragment, Image):
            return fragment.get_view(view)
        if isinstance(fragment, StructuredText):
            return fragment.get_first_image()
        return None

    def get_all_image_views(self, name: str, view: str) -> list[ImageView | None]:
        return [image.get_view(view) if image else None for image in self.get_all_images(name)]

    def get_html(
        self,
        name: str,
        link_resolver: LinkResolver | None = None,
        *,
        renderers: RendererRegistry | None = None,
    ) -> str | None:
        fragment = self.get(name)
        if fragment is None:
            return None
        return (renderers or default_registry()).as_html(fragment, link_resolver)

    def as_html(
        self,
        link_resolver: LinkResolver | None = None,
        *,
        renderers: RendererRegistry | None = None,
    ) -> str:
        """Render every fragment, each in a ``<section data-field="...">``."""
        registry = renderers or default_registry()
        htmls = []
        for name in self.fragments:
            fragment = self.get(name)
            html = registry.as_html(fragment, link_resolver) if fragment is not None else None
            if html is None:
                htmls.append("")
            else:
                htmls.append(f'<section data-field="{name}">{html}</section>')
        return "".join(htmls)

    def as_text(
        self,
        link_resolver: LinkResolver | None = None,
        *,
        renderers: RendererRegistry | None = None,
    ) -> str:
        registry = renderers or default_registry()
        texts = []
        for name in self.fragments:
            fragment = self.get(name)
            text = registry.as_text(fragment, link_resolver) if fragment is not None else None
            texts.append(text or "")
        return "".join(texts)


@dataclass(frozen=True)
class Response:
    """One page of search results with its pagination envelope."""

    page: int
    results_per_page: int
    results_size: int
    total_results_size: int
    total_pages: int
    next_page: str | None
    prev_page: str | None
    results: tuple[Document, ...] = ()


def _clean_fragment(raw: Any) -> Any:
    """Drop empty spans from StructuredText, including inside groups."""
    if isinstance(raw, list):
        return [_clean_fragment(r) for r in raw]
    if not isinstance(raw, dict):
        return raw
    kind = raw.get("type")
    if kind == "StructuredText":
        blocks = [
            {**b, "spans": valid_spans(b["spans"])} if "spans" in b else b
            for b in raw.get("value") or []
        ]
        return {**raw, "value": blocks}
    if kind == "Group":
        items = [
            {name: _clean_fragment(sub) for name, sub in item.items()}
            for item in raw.get("value") or []
        ]
        return {**raw, "value": items}
    return raw


def parse_document(data: dict[str, Any]) -> Document:
    """Build a Document from one ``results`` row of a search response."""
    linked = tuple(
        LinkedDocument(
            id=ld["id"],
            slug=ld.get("slug"),
            type=ld.get("type"),
            tags=tuple(ld.get("tags") or ()),
        )
        for ld in data.get("linked_documents") or []
    )

    doc_type = data["type"]
    own_data = (data.get("data") or {}).get(doc_type) or {}
    fragments = {f"{doc_type}.{name}": _clean_fragment(raw) for name, raw in own_data.items()}

    return Document(
        id=data["id"],
        type=doc_type,
        href=data.get("href"),
        tags=tuple(data.get("tags") or ()),
        slugs=tuple(data.get("slugs") or ()),
        linked_documents=linked,
        fragments=fragments,
    )


def parse_response(data: dict[str, Any]) -> Response:
    """Build a Response from a search response body."""
    return Response(
        page=data.get("page", 1),
        results_per_page=data.get("results_per_page", 0),
        results_size=data.get("results_size", 0),
        total_results_size=data.get("total_results_size", 0),
        total_pages=data.get("total_pages", 0),
        next_page=data.get("next_page"),
        prev_page=data.get("prev_page"),
        results=tuple(parse_document(row) for row in data.get("results") or []),
    )
