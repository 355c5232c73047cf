"""Configuration constants for prismic-kit."""

import os
from pathlib import Path

from prismic_kit import __version__

# Descriptor (/api document) lifetime in the client cache, in seconds.
DEFAULT_API_TTL: int = 5

USER_AGENT: str = f"prismic-kit/{__version__}"

# Per-request timeout handed to requests, in seconds.
REQUEST_TIMEOUT: float = 30.0

# Access token. The environment variable wins, then the first file found.
ACCESS_TOKEN_ENV: str = "PRISMIC_ACCESS_TOKEN"

ACCESS_TOKEN_FILES: list[Path] = [
    Path("~/.config/prismic-token.txt").expanduser(),
    Path("~/.config/secret/prismic-token.txt").expanduser(),
]


def resolve_access_token() -> str | None:
    """Return the configured access token, or None for public repositories."""
    token = os.environ.get(ACCESS_TOKEN_ENV, "").strip()
    if token:
        return token
    for token_path in ACCESS_TOKEN_FILES:
        try:
            return token_path.read_text(encoding="utf-8").strip() or None
        except FileNotFoundError:
            pass
    return None
