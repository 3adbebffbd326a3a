# resource_library/services/normalize.py
"""
Tolerant normalization of filter input and persisted JSON.

Nothing here raises: malformed input degrades to None, [] or a default so
rows written before a schema change never break the read path.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Optional

from resource_library.app.domain.models import (
    ExternalEmbed,
    GoogleDocEmbed,
    HtmlEmbed,
    NormalizedResourceFilters,
    Pagination,
    PdfEmbed,
    ResourceAttachment,
    ResourceEmbed,
    ResourceFilters,
    ResourceKind,
    VideoEmbed,
)

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

VIDEO_PROVIDERS = ("youtube", "vimeo")

_YEAR_RE = re.compile(r"[0-9]{4}")


def _read_filter(filters: ResourceFilters | Mapping[str, Any] | None, name: str) -> Any:
    if filters is None:
        return None
    if isinstance(filters, Mapping):
        return filters.get(name)
    return getattr(filters, name, None)


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_kind(value: Any) -> Optional[ResourceKind]:
    if isinstance(value, ResourceKind):
        return value
    text = _clean_text(value)
    if text is None:
        return None
    try:
        return ResourceKind(text)
    except ValueError:
        return None


def normalize_filters(
    filters: ResourceFilters | Mapping[str, Any] | None,
) -> NormalizedResourceFilters:
    q = _clean_text(_read_filter(filters, "q"))
    tag = _clean_text(_read_filter(filters, "tag"))
    year = _clean_text(_read_filter(filters, "year"))

    if year is not None and not _YEAR_RE.fullmatch(year):
        year = None

    return NormalizedResourceFilters(
        q=q,
        kind=_coerce_kind(_read_filter(filters, "kind")),
        tag=tag.lower() if tag else None,
        year=year,
    )


def _coerce_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def resolve_pagination(page: Any = None, page_size: Any = None) -> Pagination:
    """Clamp the requested window: page >= 1, page_size within [1, MAX_PAGE_SIZE]."""
    resolved_page = max(1, _coerce_int(page, DEFAULT_PAGE))
    resolved_size = min(MAX_PAGE_SIZE, max(1, _coerce_int(page_size, DEFAULT_PAGE_SIZE)))
    start = (resolved_page - 1) * resolved_size
    return Pagination(
        page=resolved_page,
        page_size=resolved_size,
        start=start,
        end=start + resolved_size - 1,
    )


def has_more_results(total: int, pagination: Pagination) -> bool:
    return total > pagination.end + 1


def _attachment_field(entry: Mapping[str, Any], name: str) -> str:
    value = entry.get(name)
    if value is None:
        return ""
    return str(value)


def normalize_attachment_list(value: Any) -> list[ResourceAttachment]:
    if not isinstance(value, list):
        return []

    attachments: list[ResourceAttachment] = []
    for entry in value:
        if not isinstance(entry, Mapping):
            continue
        label = _attachment_field(entry, "label")
        url = _attachment_field(entry, "url")
        if not label or not url:
            continue
        attachments.append(ResourceAttachment(label=label, url=url))
    return attachments


def _string_field(value: Mapping[str, Any], name: str) -> Optional[str]:
    candidate = value.get(name)
    if isinstance(candidate, str) and candidate:
        return candidate
    return None


def normalize_embed(value: Any) -> Optional[ResourceEmbed]:
    """
    Rebuild the embed variant from untyped JSON.

    Returns None for anything that is not a complete known shape; a variant is
    never constructed from partial data.
    """
    if not isinstance(value, Mapping):
        return None

    embed_type = value.get("type")
    if not isinstance(embed_type, str) or not embed_type:
        return None

    if embed_type in ("google-doc", "pdf"):
        url = _string_field(value, "url")
        if not url:
            return None
        return GoogleDocEmbed(url=url) if embed_type == "google-doc" else PdfEmbed(url=url)

    if embed_type == "video":
        url = _string_field(value, "url")
        provider = value.get("provider")
        if not url or provider not in VIDEO_PROVIDERS:
            return None
        return VideoEmbed(url=url, provider=provider)

    if embed_type == "external":
        url = _string_field(value, "url")
        if not url:
            return None
        label = value.get("label")
        return ExternalEmbed(url=url, label=label if isinstance(label, str) else None)

    if embed_type == "html":
        html = _string_field(value, "html")
        if not html:
            return None
        return HtmlEmbed(html=html)

    return None


def embed_to_payload(embed: Optional[ResourceEmbed]) -> Optional[dict[str, str]]:
    """JSON shape of an embed, as stored in `resource_pages.embed`."""
    if embed is None:
        return None
    if isinstance(embed, (GoogleDocEmbed, PdfEmbed)):
        return {"type": embed.type, "url": embed.url}
    if isinstance(embed, VideoEmbed):
        return {"type": embed.type, "url": embed.url, "provider": embed.provider}
    if isinstance(embed, ExternalEmbed):
        payload = {"type": embed.type, "url": embed.url}
        if embed.label is not None:
            payload["label"] = embed.label
        return payload
    return {"type": embed.type, "html": embed.html}
