# resource_library/app/routers/resources.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from resource_library.app.deps import get_resource_repository
from resource_library.app.domain.models import HtmlEmbed, Resource, ResourceFilters
from resource_library.app.infra.db.base import ResourceRepository
from resource_library.app.schemas.resources import (
    AttachmentItem,
    KindOption,
    ResourceFilterOptions,
    ResourceListResponse,
    ResourceResponse,
)
from resource_library.services.library import (
    format_resource_date,
    get_kind_label,
    get_resource_tags,
    get_resource_years,
    kind_options,
)
from resource_library.services.normalize import embed_to_payload
from resource_library.services.sanitize_embed import sanitize_embed_html

router = APIRouter(prefix="/resources", tags=["resources"])


def _resource_to_response(resource: Resource) -> ResourceResponse:
    embed = resource.embed
    if isinstance(embed, HtmlEmbed):
        embed = HtmlEmbed(html=sanitize_embed_html(embed.html))

    return ResourceResponse(
        id=resource.id,
        slug=resource.slug,
        title=resource.title,
        kind=resource.kind.value,
        kindLabel=get_kind_label(resource.kind),
        datePublished=resource.date_published,
        dateLabel=format_resource_date(resource.date_published),
        summary=resource.summary,
        location=resource.location,
        tags=list(resource.tags),
        attachments=[AttachmentItem(label=a.label, url=a.url) for a in resource.attachments],
        embed=embed_to_payload(embed),
        embedPlacement=resource.embed_placement.value,
        bodyHtml=sanitize_embed_html(resource.body_html),
        isPublished=resource.is_published,
        coverImage=resource.cover_image,
        createdAt=resource.created_at,
        updatedAt=resource.updated_at,
    )


@router.get("/", response_model=ResourceListResponse)
async def list_resources(
    q: Optional[str] = None,
    kind: Optional[str] = None,
    tag: Optional[str] = None,
    year: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = Query(default=None, alias="pageSize"),
    repo: ResourceRepository = Depends(get_resource_repository),
) -> ResourceListResponse:
    result = repo.list_resources(
        ResourceFilters(q=q, kind=kind, tag=tag, year=year),
        page=page,
        page_size=page_size,
    )
    return ResourceListResponse(
        items=[_resource_to_response(resource) for resource in result.items],
        total=result.total,
        page=result.page,
        pageSize=result.page_size,
        hasMore=result.has_more,
    )


@router.get("/filters", response_model=ResourceFilterOptions)
async def get_filter_options(
    repo: ResourceRepository = Depends(get_resource_repository),
) -> ResourceFilterOptions:
    library = repo.fetch_resource_library()
    return ResourceFilterOptions(
        kinds=[KindOption(**option) for option in kind_options()],
        years=get_resource_years(library),
        tags=get_resource_tags(library),
    )


@router.get("/{slug}", response_model=ResourceResponse)
async def get_resource(
    slug: str,
    repo: ResourceRepository = Depends(get_resource_repository),
) -> ResourceResponse:
    resource = repo.get_resource_by_slug(slug)
    if resource is None:
        raise HTTPException(status_code=404, detail="Resource not found")
    return _resource_to_response(resource)
