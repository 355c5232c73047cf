"""Build and submit search queries against a descriptor form."""

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from loguru import logger

from prismic_kit.core.query import Predicate, compile_predicates
from prismic_kit.errors import UnknownField
from prismic_kit.models.api import Form, Ref
from prismic_kit.models.document import Response, parse_response
from prismic_kit.protocols import TransportProtocol

# Characters encodeURIComponent leaves alone, besides alphanumerics and "-_.".
_SAFE_CHARS = "!~*'()"


class SearchForm:
    """Accumulate field values for one query, then submit it.

    Every field default declared on the form is set up front. A ref must be set
    before ``submit``; the server's behaviour without one is undefined.
    """

    def __init__(self, transport: TransportProtocol, form: Form) -> None:
        self._transport = transport
        self.form = form
        self.data: dict[str, list[Any] | None] = {}
        for name, spec in form.fields.items():
            if spec.default is not None and spec.default != "":
                self.data[name] = [spec.default]

    def set(self, field: str, value: Any) -> "SearchForm":
        """Set a field value.

        Multiple fields accumulate values, other fields are replaced. An empty
        string or None clears a single-valued field.

        Raises:
            UnknownField: The form does not declare ``field``.
        """
        spec = self.form.fields.get(field)
        if spec is None:
            raise UnknownField(field)
        if value == "":
            value = None
        if spec.multiple:
            values = self.data.get(field) or []
            if value is not None:
                values.append(value)
            self.data[field] = values
        else:
            self.data[field] = [value] if value is not None else None
        return self

    def ref(self, ref: str | Ref) -> "SearchForm":
        return self.set("ref", ref.ref if isinstance(ref, Ref) else ref)

    def query(self, query: str | Predicate, *predicates: Predicate) -> "SearchForm":
        """Set the query, either as a raw string or as one or more predicates."""
        if isinstance(query, str):
            return self.set("q", query)
        return self.set("q", compile_predicates([query, *predicates]))

    def page_size(self, size: int) -> "SearchForm":
        return self.set("pageSize", size)

    def page(self, page: int) -> "SearchForm":
        return self.set("page", page)

    def orderings(self, orderings: str | Sequence[str]) -> "SearchForm":
        """Set orderings, e.g. ``"[my.product.price desc]"`` or a list of paths."""
        if not isinstance(orderings, str):
            orderings = "[" + ",".join(orderings) + "]"
        return self.set("orderings", orderings)

    def url(self) -> str:
        """The form action with every set value as a query parameter."""
        url = self.form.action
        sep = "&" if "?" in url else "?"
        for key, values in self.data.items():
            for value in values or ():
                url += f"{sep}{key}={_encode(value)}"
                sep = "&"
        return url

    def submit(self) -> Response:
        """Run the query and return the page of results."""
        url = self.url()
        logger.debug("Submitting form {!r}: {}", self.form.name, url)
        result = self._transport.fetch(url)
        return parse_response(result.data)


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_SAFE_CHARS)
