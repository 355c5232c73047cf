"""Client kit for prismic.io content repositories."""

__version__ = "0.1.0"

from prismic_kit.api import Api  # noqa: E402
from prismic_kit.core.cache import ApiCache  # noqa: E402
from prismic_kit.core.search import SearchForm  # noqa: E402
from prismic_kit.errors import (  # noqa: E402
    MissingMasterRef,
    PrismicError,
    TransportError,
    UnknownField,
)
from prismic_kit.models.document import Document, Response  # noqa: E402
from prismic_kit.protocols import TransportProtocol  # noqa: E402
from prismic_kit.transport import FetchResult, RequestsTransport  # noqa: E402

__all__ = [
    "Api",
    "ApiCache",
    "Document",
    "FetchResult",
    "MissingMasterRef",
    "PrismicError",
    "RequestsTransport",
    "Response",
    "SearchForm",
    "TransportError",
    "TransportProtocol",
    "UnknownField",
    "__version__",
]
