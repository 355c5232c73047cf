"""Domain models for the repository descriptor (the /api document)."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Ref:
    """A point-in-time view of the repository content."""

    ref: str
    label: str
    is_master: bool = False
    scheduled_at: int | None = None
    id: str | None = None


@dataclass(frozen=True)
class FieldSpec:
    """A declared form field."""

    type: str = "String"
    multiple: bool = False
    default: Any = None


@dataclass(frozen=True)
class Form:
    """A submittable query endpoint as declared by the descriptor."""

    name: str | None
    fields: dict[str, FieldSpec]
    action: str
    method: str = "GET"
    rel: str | None = None
    enctype: str | None = None


@dataclass(frozen=True)
class Descriptor:
    """The parsed /api document."""

    refs: tuple[Ref, ...]
    master: Ref
    forms: dict[str, Form]
    types: dict[str, str] = field(default_factory=dict)
    tags: tuple[str, ...] = ()
    bookmarks: dict[str, str] = field(default_factory=dict)
    oauth_initiate: str | None = None
    oauth_token: str | None = None
