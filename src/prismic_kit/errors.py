"""Exceptions raised by prismic-kit."""


class PrismicError(Exception):
    """Base class for every error raised by this package."""


class TransportError(PrismicError, RuntimeError):
    """A request failed: network error, timeout or non-2xx status."""

    def __init__(self, url: str, status: int | None = None, reason: str = "") -> None:
        self.url = url
        self.status = status
        if status is not None:
            msg = f"Unexpected status code [{status}] on URL {url}"
        else:
            msg = f"Request failed on URL {url}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class MissingMasterRef(PrismicError, ValueError):
    """The descriptor declares no master ref."""


class UnknownField(PrismicError, ValueError):
    """A search form field was set that the form does not declare."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unknown field {field}")
