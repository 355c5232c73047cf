"""prismic.io API client: descriptor resolution and form access."""

from typing import Any

from loguru import logger

from prismic_kit.config import DEFAULT_API_TTL
from prismic_kit.core.bootstrap import parse_descriptor
from prismic_kit.core.cache import ApiCache, CacheResult
from prismic_kit.core.search import SearchForm
from prismic_kit.models.api import Descriptor, Form, Ref
from prismic_kit.models.document import Document, parse_document
from prismic_kit.protocols import TransportProtocol
from prismic_kit.transport import RequestsTransport

# Shared by every Api that is not handed a cache of its own.
_default_cache = ApiCache()


class Api:
    """Entry point for a repository, e.g. ``https://lesbonneschoses.prismic.io/api``.

    The descriptor is fetched lazily by ``get()`` and cached for
    DEFAULT_API_TTL seconds under the URL (plus the access token, if any).
    """

    def __init__(
        self,
        url: str,
        *,
        access_token: str | None = None,
        transport: TransportProtocol | None = None,
        cache: ApiCache | None = None,
    ) -> None:
        if access_token:
            url += ("&" if "?" in url else "?") + f"access_token={access_token}"
        self.url = url
        self.access_token = access_token
        self.transport = transport or RequestsTransport()
        self.cache = cache if cache is not None else _default_cache
        self._data: Descriptor | None = None

        logger.debug(f"API ready: url {url!r}, access token {'set' if access_token else 'unset'}")

    @classmethod
    def connect(cls, url: str, **kwargs: Any) -> "Api":
        """Create an Api and resolve its descriptor right away."""
        return cls(url, **kwargs).get()

    @property
    def cache_key(self) -> str:
        return self.url + (f"#{self.access_token}" if self.access_token else "")

    def get(self) -> "Api":
        """Resolve the descriptor, from the cache when it is fresh."""
        self._data = self.cache.get_or_set(self.cache_key, DEFAULT_API_TTL, self._fetch_descriptor)
        return self

    def _fetch_descriptor(self) -> Descriptor | CacheResult:
        result = self.transport.fetch(self.url)
        descriptor = parse_descriptor(result.data, access_token=self.access_token)
        logger.debug(
            "Fetched descriptor: {} refs, {} forms, master {!r}",
            len(descriptor.refs),
            len(descriptor.forms),
            descriptor.master.ref,
        )
        if result.max_age:
            # A TTL of 0 never expires, so max-age=0 keeps the default.
            return CacheResult(descriptor, result.max_age)
        return descriptor

    @property
    def data(self) -> Descriptor:
        if self._data is None:
            msg = "API descriptor not loaded, call get() first"
            raise RuntimeError(msg)
        return self._data

    @property
    def refs(self) -> tuple[Ref, ...]:
        return self.data.refs

    @property
    def forms(self) -> dict[str, Form]:
        return self.data.forms

    @property
    def bookmarks(self) -> dict[str, str]:
        return self.data.bookmarks

    @property
    def types(self) -> dict[str, str]:
        return self.data.types

    @property
    def tags(self) -> tuple[str, ...]:
        return self.data.tags

    @property
    def oauth_initiate(self) -> str | None:
        return self.data.oauth_initiate

    @property
    def oauth_token(self) -> str | None:
        return self.data.oauth_token

    def form(self, form_id: str) -> SearchForm | None:
        """A fresh SearchForm for a form id like "everything", or None."""
        form = self.data.forms.get(form_id)
        if form is None:
            return None
        return SearchForm(self.transport, form)

    def master(self) -> str:
        """The id of the master ref."""
        return self.data.master.ref

    def ref(self, label: str) -> str | None:
        """The ref id for a ref label."""
        for r in self.data.refs:
            if r.label == label:
                return r.ref
        return None

    def bookmark(self, name: str) -> str | None:
        """The document id a bookmark points to."""
        return self.data.bookmarks.get(name)

    @staticmethod
    def parse_doc(data: dict[str, Any]) -> Document:
        return parse_document(data)
