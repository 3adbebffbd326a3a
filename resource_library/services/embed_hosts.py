# resource_library/services/embed_hosts.py
"""
Host allowlist shared by embed URL validation and the HTML sanitizer.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import ParseResult, urlparse

from resource_library.app.domain.errors import BlockedEmbedHostError

ALLOWED_EMBED_HOSTS: frozenset[str] = frozenset(
    {
        "docs.google.com",
        "drive.google.com",
        "www.youtube.com",
        "youtube.com",
        "youtu.be",
        "player.vimeo.com",
        "vimeo.com",
        "iharc.ca",
    }
)


def _parse_embed_url(raw_url: object) -> Optional[ParseResult]:
    """
    Parse an embed URL, or return None when its host cannot be trusted.

    Browsers read `\\` as `/`, so `https://evil.example.com\\@www.youtube.com/`
    loads evil.example.com while urlparse reports www.youtube.com. URLs with a
    backslash or userinfo are refused outright.
    """
    if not isinstance(raw_url, str):
        return None
    text = raw_url.strip()
    if "\\" in text:
        return None
    try:
        parsed = urlparse(text)
        if parsed.username is not None or parsed.password is not None:
            return None
    except ValueError:
        return None
    return parsed


def embed_hostname(raw_url: object) -> str:
    """Lower-cased hostname of a URL, or "" when it cannot be parsed."""
    parsed = _parse_embed_url(raw_url)
    if parsed is None:
        return ""
    return (parsed.hostname or "").lower()


def is_allowed_host(raw_url: object) -> bool:
    return embed_hostname(raw_url) in ALLOWED_EMBED_HOSTS


def is_allowed_embed_url(raw_url: object) -> bool:
    """True only for https URLs whose host is in ALLOWED_EMBED_HOSTS."""
    parsed = _parse_embed_url(raw_url)
    if parsed is None or parsed.scheme.lower() != "https":
        return False
    return (parsed.hostname or "").lower() in ALLOWED_EMBED_HOSTS


def assert_allowed_embed_url(raw_url: str, context: str) -> str:
    if not is_allowed_embed_url(raw_url):
        raise BlockedEmbedHostError(context, raw_url)
    return raw_url
