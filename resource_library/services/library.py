# resource_library/services/library.py
from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from resource_library.app.domain.models import (
    RESOURCE_KIND_LABELS,
    Resource,
    ResourceFilters,
    ResourceKind,
)
from resource_library.services.normalize import normalize_filters

_YEAR_PREFIX_RE = re.compile(r"[0-9]{4}")


def get_kind_label(kind: ResourceKind | str) -> str:
    try:
        return RESOURCE_KIND_LABELS[ResourceKind(kind)]
    except ValueError:
        return RESOURCE_KIND_LABELS[ResourceKind.OTHER]


def kind_options() -> list[dict[str, str]]:
    return [{"value": kind.value, "label": label} for kind, label in RESOURCE_KIND_LABELS.items()]


def get_resource_years(resources: Iterable[Resource]) -> list[str]:
    """Distinct publication years, newest first."""
    years: set[str] = set()
    for resource in resources:
        prefix = (resource.date_published or "")[:4]
        if _YEAR_PREFIX_RE.fullmatch(prefix):
            years.add(prefix)
    return sorted(years, key=int, reverse=True)


def get_resource_tags(resources: Iterable[Resource]) -> list[str]:
    """Distinct lower-cased tags in lexical order."""
    tags: set[str] = set()
    for resource in resources:
        for tag in resource.tags:
            tags.add(str(tag).lower())
    return sorted(tags)


def format_resource_date(value: str) -> str:
    """Long en-CA style date, e.g. "January 5, 2024"."""
    try:
        parsed = date.fromisoformat(str(value)[:10])
    except ValueError:
        return value
    return f"{parsed:%B} {parsed.day}, {parsed.year}"


def _matches_search(resource: Resource, term: str) -> bool:
    haystack = " ".join(
        [
            resource.title,
            resource.summary or "",
            resource.location or "",
            " ".join(resource.tags),
        ]
    ).lower()
    return term in haystack


def filter_resources(
    resources: Iterable[Resource],
    filters: ResourceFilters | Mapping[str, Any] | None = None,
) -> list[Resource]:
    """
    In-memory counterpart of the store query for an already fetched list.

    Only published entries survive. Results are ordered by publication date,
    then by last update, newest first.
    """
    normalized = normalize_filters(filters)
    term = normalized.q.lower() if normalized.q else None

    items: list[Resource] = []
    for resource in resources:
        if not resource.is_published:
            continue
        if normalized.kind and resource.kind != normalized.kind:
            continue
        if normalized.year and not (resource.date_published or "").startswith(normalized.year):
            continue
        if normalized.tag and not any(str(tag).lower() == normalized.tag for tag in resource.tags):
            continue
        if term and not _matches_search(resource, term):
            continue
        items.append(resource)

    items.sort(key=lambda r: (r.date_published or "", r.updated_at or ""), reverse=True)
    return items
