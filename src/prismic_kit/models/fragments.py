"""Typed fragments: one frozen dataclass per fragment kind.

Raw fragments come from the ``data`` section of a search result row and look
like ``{"type": "Text", "value": "Hello"}``. ``init_field`` turns such a dict
into the matching dataclass, or ``None`` when the type is not known.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from loguru import logger

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@dataclass(frozen=True)
class Span:
    """An inline annotation (strong, em, hyperlink) over a slice of block text."""

    start: int
    end: int
    type: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImageView:
    """A single rendition of an image."""

    url: str
    width: int | None = None
    height: int | None = None
    alt: str | None = None
    copyright: str | None = None

    @property
    def ratio(self) -> float | None:
        if not self.width or not self.height:
            return None
        return self.width / self.height


@dataclass(frozen=True)
class TextBlock:
    """A heading, paragraph, preformatted or list item block."""

    type: str
    text: str
    spans: tuple[Span, ...] = ()
    label: str | None = None


@dataclass(frozen=True)
class ImageBlock:
    view: ImageView
    label: str | None = None
    type: str = "image"


@dataclass(frozen=True)
class EmbedBlock:
    oembed: dict[str, Any]
    label: str | None = None
    type: str = "embed"


Block = TextBlock | ImageBlock | EmbedBlock


@dataclass(frozen=True)
class StructuredText:
    """Rich text made of blocks."""

    blocks: tuple[Block, ...]

    def get_title(self) -> TextBlock | None:
        """Return the first heading block, preferring higher levels."""
        headings = [
            b for b in self.blocks if isinstance(b, TextBlock) and b.type.startswith("heading")
        ]
        if not headings:
            return None
        return min(headings, key=lambda b: b.type)

    def get_first_paragraph(self) -> TextBlock | None:
        for block in self.blocks:
            if isinstance(block, TextBlock) and block.type == "paragraph":
                return block
        return None

    def get_first_image(self) -> ImageView | None:
        for block in self.blocks:
            if isinstance(block, ImageBlock):
                return block.view
        return None


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Number:
    value: int | float


@dataclass(frozen=True)
class Select:
    value: str


@dataclass(frozen=True)
class Color:
    value: str


@dataclass(frozen=True)
class Date:
    value: date


@dataclass(frozen=True)
class Timestamp:
    value: datetime


@dataclass(frozen=True)
class Embed:
    oembed: dict[str, Any]


@dataclass(frozen=True)
class Image:
    """An image with its main view and any named alternative views."""

    main: ImageView
    views: dict[str, ImageView] = field(default_factory=dict)

    def get_view(self, name: str) -> ImageView | None:
        if name == "main":
            return self.main
        return self.views.get(name)


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class WebLink:
    url: str

    def resolve_url(self, link_resolver: Callable[..., str] | None = None) -> str:
        return self.url


@dataclass(frozen=True)
class DocumentLink:
    """A link to another document of the repository."""

    id: str
    type: str
    tags: tuple[str, ...] = ()
    slug: str | None = None
    is_broken: bool = False

    def resolve_url(self, link_resolver: Callable[..., str] | None = None) -> str:
        """Turn the link into a URL with the application's link resolver."""
        if link_resolver is None:
            msg = "A link resolver is required to build a document link URL"
            raise ValueError(msg)
        return link_resolver(self, self.is_broken)


@dataclass(frozen=True)
class ImageLink:
    url: str
    name: str | None = None
    kind: str | None = None
    size: int | None = None
    width: int | None = None
    height: int | None = None

    def resolve_url(self, link_resolver: Callable[..., str] | None = None) -> str:
        return self.url


@dataclass(frozen=True)
class FileLink:
    url: str
    name: str | None = None
    kind: str | None = None
    size: int | None = None

    def resolve_url(self, link_resolver: Callable[..., str] | None = None) -> str:
        return self.url


@dataclass(frozen=True)
class Group:
    """A repeatable set of sub-fragments; each item maps field name to fragment."""

    items: tuple[dict[str, "Fragment"], ...]

    def __len__(self) -> int:
        return len(self.items)


Link = WebLink | DocumentLink | ImageLink | FileLink

Fragment = (
    StructuredText
    | Text
    | Number
    | Select
    | Color
    | Date
    | Timestamp
    | Embed
    | Image
    | GeoPoint
    | Group
    | WebLink
    | DocumentLink
    | ImageLink
    | FileLink
)


def valid_spans(raw_spans: list[dict[str, Any]] | None) -> list[dict[str, Any]]:
    """Drop spans that do not cover at least one character."""
    return [s for s in raw_spans or [] if s.get("start", 0) < s.get("end", 0)]


def _parse_view(raw: dict[str, Any]) -> ImageView:
    dimensions = raw.get("dimensions") or {}
    return ImageView(
        url=raw["url"],
        width=dimensions.get("width"),
        height=dimensions.get("height"),
        alt=raw.get("alt"),
        copyright=raw.get("copyright"),
    )


def _parse_block(raw: dict[str, Any]) -> Block:
    label = raw.get("label")
    if raw["type"] == "image":
        return ImageBlock(view=_parse_view(raw), label=label)
    if raw["type"] == "embed":
        return EmbedBlock(oembed=raw.get("oembed") or {}, label=label)
    spans = tuple(
        Span(start=s["start"], end=s["end"], type=s["type"], data=s.get("data") or {})
        for s in valid_spans(raw.get("spans"))
    )
    return TextBlock(type=raw["type"], text=raw.get("text", ""), spans=spans, label=label)


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value)


def _parse_group(value: list[dict[str, Any]]) -> Group:
    items = []
    for raw_item in value:
        item: dict[str, Fragment] = {}
        for name, raw_fragment in raw_item.items():
            fragment = init_field(raw_fragment)
            if fragment is not None:
                item[name] = fragment
        items.append(item)
    return Group(items=tuple(items))


def init_field(raw: dict[str, Any]) -> Fragment | None:
    """Build the typed fragment for a raw ``{"type", "value"}`` dict.

    Returns None for unknown fragment types and for date values that cannot be
    parsed.
    """
    kind = raw.get("type")
    value = raw.get("value")

    if kind == "StructuredText":
        return StructuredText(blocks=tuple(_parse_block(b) for b in value or []))
    if kind == "Text":
        return Text(value=value)
    if kind == "Number":
        return Number(value=value)
    if kind == "Select":
        return Select(value=value)
    if kind == "Color":
        return Color(value=value)
    if kind == "Date":
        try:
            return Date(value=date.fromisoformat(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable Date fragment value {!r}", value)
            return None
    if kind == "Timestamp":
        try:
            return Timestamp(value=_parse_timestamp(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring unparseable Timestamp fragment value {!r}", value)
            return None
    if kind == "Embed":
        return Embed(oembed=value.get("oembed") or {})
    if kind == "Image":
        views = {name: _parse_view(v) for name, v in (value.get("views") or {}).items()}
        return Image(main=_parse_view(value["main"]), views=views)
    if kind == "GeoPoint":
        return GeoPoint(latitude=value["latitude"], longitude=value["longitude"])
    if kind == "Group":
        return _parse_group(value or [])
    if kind == "Link.web":
        return WebLink(url=value["url"])
    if kind == "Link.document":
        doc = value["document"]
        return DocumentLink(
            id=doc["id"],
            type=doc["type"],
            tags=tuple(doc.get("tags") or ()),
            slug=doc.get("slug"),
            is_broken=bool(value.get("isBroken", False)),
        )
    if kind == "Link.image":
        img = value["image"]
        return ImageLink(
            url=img["url"],
            name=img.get("name"),
            kind=img.get("kind"),
            size=_as_int(img.get("size")),
            width=_as_int(img.get("width")),
            height=_as_int(img.get("height")),
        )
    if kind == "Link.file":
        f = value["file"]
        return FileLink(
            url=f["url"], name=f.get("name"), kind=f.get("kind"), size=_as_int(f.get("size"))
        )

    logger.debug("Unknown fragment type {!r}", kind)
    return None


def _as_int(value: Any) -> int | None:
    # The API sends file sizes and dimensions as strings.
    if value is None or value == "":
        return None
    return int(value)
