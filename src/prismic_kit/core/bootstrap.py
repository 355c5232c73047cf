"""Parse the raw /api document into a Descriptor."""

from typing import Any

from prismic_kit.errors import MissingMasterRef
from prismic_kit.models.api import Descriptor, FieldSpec, Form, Ref

ACCESS_TOKEN_FIELD = "access_token"


def parse_field(raw: dict[str, Any]) -> FieldSpec:
    return FieldSpec(
        type=raw.get("type", "String"),
        multiple=bool(raw.get("multiple", False)),
        default=raw.get("default"),
    )


def parse_form(raw: dict[str, Any], *, access_token: str | None = None) -> Form:
    """Parse one form; with an access token, add it as a defaulted hidden field."""
    fields = {name: parse_field(spec) for name, spec in (raw.get("fields") or {}).items()}
    if access_token:
        fields[ACCESS_TOKEN_FIELD] = FieldSpec(type="String", default=access_token)
    return Form(
        name=raw.get("name"),
        fields=fields,
        action=raw["action"],
        method=raw.get("form_method") or raw.get("method") or "GET",
        rel=raw.get("rel"),
        enctype=raw.get("enctype"),
    )


def parse_descriptor(data: dict[str, Any], *, access_token: str | None = None) -> Descriptor:
    """Parse the /api document.

    Args:
        data: Raw JSON of the descriptor.
        access_token: When set, every form gets an ``access_token`` field
            defaulting to it, so each query is authenticated.

    Raises:
        MissingMasterRef: Not exactly one ref is flagged as the master ref.
    """
    forms = {
        form_id: parse_form(raw_form, access_token=access_token)
        for form_id, raw_form in (data.get("forms") or {}).items()
    }

    refs = tuple(
        Ref(
            ref=r["ref"],
            label=r.get("label", ""),
            is_master=r.get("isMasterRef") is True,
            scheduled_at=r.get("scheduledAt"),
            id=r.get("id"),
        )
        for r in data.get("refs") or []
    )

    masters = [r for r in refs if r.is_master]
    if not masters:
        msg = "No master ref."
        raise MissingMasterRef(msg)
    if len(masters) > 1:
        msg = f"Expected exactly one master ref, found {len(masters)}: {[r.ref for r in masters]!r}"
        raise MissingMasterRef(msg)

    return Descriptor(
        refs=refs,
        master=masters[0],
        forms=forms,
        types=data.get("types") or {},
        tags=tuple(data.get("tags") or ()),
        bookmarks=data.get("bookmarks") or {},
        oauth_initiate=data.get("oauth_initiate"),
        oauth_token=data.get("oauth_token"),
    )
