"""Default HTTP transport built on requests."""

import re
from dataclasses import dataclass
from typing import Any

import requests
from loguru import logger

from prismic_kit.config import REQUEST_TIMEOUT, USER_AGENT
from prismic_kit.core.cache import ApiCache
from prismic_kit.errors import TransportError

_MAX_AGE_RE = re.compile(r"max-age=(\d+)")


@dataclass(frozen=True)
class FetchResult:
    """Parsed JSON body plus the response metadata the client cares about."""

    data: Any
    max_age: int | None = None
    status: int = 200


def parse_max_age(cache_control: str | None) -> int | None:
    if not cache_control:
        return None
    match = _MAX_AGE_RE.search(cache_control)
    return int(match.group(1)) if match else None


class RequestsTransport:
    """GET JSON documents with a requests session.

    When given an ApiCache, responses that carry a ``max-age`` directive are
    kept under their URL for that many seconds.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        cache: ApiCache | None = None,
        timeout: float | None = REQUEST_TIMEOUT,
    ) -> None:
        self.sess = session or requests.Session()
        self.sess.headers.update({"Accept": "application/json", "User-Agent": USER_AGENT})
        self.cache = cache
        self.timeout = timeout

    def fetch(self, url: str) -> FetchResult:
        """GET the URL, return its JSON body."""
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                logger.debug("Filled from response cache: {!r}", url)
                return cached  # type: ignore[no-any-return]

        logger.debug("Making request: {!r}", url)
        try:
            r = self.sess.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(url, reason=str(e)) from e

        if not 200 <= r.status_code < 300:
            raise TransportError(url, status=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise TransportError(url, status=r.status_code, reason=f"invalid JSON: {e}") from e

        result = FetchResult(
            data=data,
            max_age=parse_max_age(r.headers.get("Cache-Control")),
            status=r.status_code,
        )
        if self.cache is not None and result.max_age:
            self.cache.set(url, result, result.max_age)
        return result
