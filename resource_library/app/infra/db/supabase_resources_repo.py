from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from resource_library.app.domain.models import (
    EmbedPlacement,
    FetchOptions,
    NormalizedResourceFilters,
    Resource,
    ResourceFilters,
    ResourceKind,
    ResourceListResult,
)
from resource_library.app.infra.db.base import ResourceRepository
from resource_library.services.normalize import (
    has_more_results,
    normalize_attachment_list,
    normalize_embed,
    normalize_filters,
    resolve_pagination,
)
from resource_library.services.slugify import normalize_resource_slug

logger = logging.getLogger(__name__)

NO_ROWS_ERROR_CODE = "PGRST116"
DEFAULT_SCHEMA = "portal"

RESOURCE_COLUMNS = ",".join(
    [
        "id",
        "slug",
        "title",
        "kind",
        "summary",
        "location",
        "date_published",
        "tags",
        "attachments",
        "embed",
        "embed_placement",
        "body_html",
        "is_published",
        "cover_image",
        "created_by_profile_id",
        "updated_by_profile_id",
        "created_at",
        "updated_at",
    ]
)

SEARCH_COLUMNS = ("title", "summary", "location")

# Characters with meaning inside a PostgREST `or=` expression or an ilike pattern.
_SEARCH_RESERVED_RE = re.compile(r"[,()%*\\]+")


def _safe_str(value: object) -> str | None:
    return str(value) if value is not None else None


def _coerce_kind(value: object) -> ResourceKind:
    try:
        return ResourceKind(str(value))
    except ValueError:
        return ResourceKind.OTHER


def _coerce_placement(value: object) -> EmbedPlacement:
    try:
        return EmbedPlacement(str(value))
    except ValueError:
        return EmbedPlacement.ABOVE


def row_to_resource(row: Mapping[str, Any]) -> Resource:
    """Map a raw `resource_pages` row to a Resource. Never raises on malformed JSON columns."""
    tags = row.get("tags")
    return Resource(
        id=str(row.get("id") or ""),
        slug=str(row.get("slug") or ""),
        title=str(row.get("title") or ""),
        kind=_coerce_kind(row.get("kind")),
        date_published=str(row.get("date_published") or ""),
        summary=_safe_str(row.get("summary")),
        location=_safe_str(row.get("location")),
        tags=list(tags) if isinstance(tags, list) else [],
        attachments=normalize_attachment_list(row.get("attachments")),
        embed=normalize_embed(row.get("embed")),
        embed_placement=_coerce_placement(row.get("embed_placement")),
        body_html=str(row.get("body_html") or ""),
        is_published=bool(row.get("is_published")),
        cover_image=_safe_str(row.get("cover_image")),
        created_at=_safe_str(row.get("created_at")),
        updated_at=_safe_str(row.get("updated_at")),
    )


def build_search_expression(term: str) -> str | None:
    """PostgREST `or` expression matching `term` in any search column, case-insensitively."""
    cleaned = " ".join(_SEARCH_RESERVED_RE.sub(" ", term).split())
    if not cleaned:
        return None
    return ",".join(f"{column}.ilike.%{cleaned}%" for column in SEARCH_COLUMNS)


def year_bounds(year: str) -> tuple[str, str]:
    """Half-open date range [year-01-01, year+1-01-01)."""
    return f"{year}-01-01", f"{int(year) + 1:04d}-01-01"


def _create_supabase_client() -> Client:
    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY required")
    return create_client(url, key)


class SupabaseResourceRepository(ResourceRepository):
    TABLE_NAME = "resource_pages"

    def __init__(self, client: Client | None = None, schema: str = DEFAULT_SCHEMA):
        self._client = client or _create_supabase_client()
        self._schema = schema
        logger.info("SupabaseResourceRepository initialized: schema=%s", schema)

    def _table(self):
        return self._client.schema(self._schema).table(self.TABLE_NAME)

    def _base_query(self, options: FetchOptions, *, count: str | None = None):
        if count:
            query = self._table().select(RESOURCE_COLUMNS, count=count)
        else:
            query = self._table().select(RESOURCE_COLUMNS)
        if not options.include_unpublished:
            query = query.eq("is_published", True)
        return query

    @staticmethod
    def _ordered(query):
        return query.order("date_published", desc=True).order("created_at", desc=True)

    @staticmethod
    def _apply_filters(query, filters: NormalizedResourceFilters):
        if filters.kind:
            query = query.eq("kind", filters.kind.value)
        if filters.tag:
            # stored tags are lower-cased on write, so the lowered tag matches exactly
            query = query.contains("tags", [filters.tag])
        if filters.year:
            start, end = year_bounds(filters.year)
            query = query.gte("date_published", start).lt("date_published", end)
        if filters.q:
            expression = build_search_expression(filters.q)
            if expression:
                query = query.or_(expression)
        return query

    def list_resources(
        self,
        filters: ResourceFilters | Mapping[str, Any] | None = None,
        options: Optional[FetchOptions] = None,
        *,
        page: Any = None,
        page_size: Any = None,
    ) -> ResourceListResult:
        options = options or FetchOptions()
        normalized = normalize_filters(filters)
        pagination = resolve_pagination(page, page_size)

        query = self._apply_filters(self._base_query(options, count="exact"), normalized)
        response = self._ordered(query).range(pagination.start, pagination.end).execute()

        rows = response.data or []
        total = getattr(response, "count", None)
        if total is None:
            total = pagination.start + len(rows)

        items = [row_to_resource(row) for row in rows]
        logger.debug(
            "Listed resources: filters=%s, page=%d, page_size=%d, returned=%d, total=%d",
            normalized,
            pagination.page,
            pagination.page_size,
            len(items),
            total,
        )
        return ResourceListResult(
            items=items,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
            has_more=has_more_results(total, pagination),
        )

    def get_resource_by_slug(
        self,
        slug: str,
        options: Optional[FetchOptions] = None,
    ) -> Optional[Resource]:
        options = options or FetchOptions()
        slug = normalize_resource_slug(slug)
        if not slug:
            return None
        query = self._base_query(options).eq("slug", slug).limit(1)

        try:
            response = query.maybe_single().execute()
        except APIError as error:
            if error.code == NO_ROWS_ERROR_CODE:
                logger.debug("No resource for slug=%s", slug)
                return None
            raise

        if response is None or not response.data:
            return None
        return row_to_resource(response.data)

    def fetch_resource_library(self, options: Optional[FetchOptions] = None) -> list[Resource]:
        options = options or FetchOptions()
        response = self._ordered(self._base_query(options)).execute()
        return [row_to_resource(row) for row in response.data or []]
