# resource_library/app/routers/admin_resources.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from resource_library.app.deps import CurrentUser, get_current_user, get_resource_repository
from resource_library.app.domain.errors import BlockedEmbedHostError, ResourceInputError
from resource_library.app.domain.models import FetchOptions, ResourceFilters
from resource_library.app.infra.db.base import ResourceRepository
from resource_library.app.routers.resources import _resource_to_response
from resource_library.app.schemas.resources import (
    EmbedPayloadRequest,
    EmbedPayloadResponse,
    ResourceListResponse,
    SanitizeRequest,
    SanitizeResponse,
)
from resource_library.services.resource_inputs import build_resource_embed_payload
from resource_library.services.sanitize_embed import sanitize_embed_html

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/resources", tags=["admin-resources"])


@router.get("/", response_model=ResourceListResponse)
async def list_all_resources(
    q: Optional[str] = None,
    kind: Optional[str] = None,
    tag: Optional[str] = None,
    year: Optional[str] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = Query(default=None, alias="pageSize"),
    user: CurrentUser = Depends(get_current_user),
    repo: ResourceRepository = Depends(get_resource_repository),
) -> ResourceListResponse:
    result = repo.list_resources(
        ResourceFilters(q=q, kind=kind, tag=tag, year=year),
        FetchOptions(include_unpublished=True),
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


@router.post("/embed", response_model=EmbedPayloadResponse)
async def build_embed(
    payload: EmbedPayloadRequest,
    user: CurrentUser = Depends(get_current_user),
) -> EmbedPayloadResponse:
    try:
        embed = build_resource_embed_payload(payload.model_dump())
    except BlockedEmbedHostError as exc:
        logger.info("Rejected embed from user=%s: context=%s, url=%s", user.id, exc.context, exc.url)
        raise HTTPException(status_code=400, detail=str(exc))
    except ResourceInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return EmbedPayloadResponse(embed=embed)


@router.post("/sanitize", response_model=SanitizeResponse)
async def sanitize_html(
    payload: SanitizeRequest,
    user: CurrentUser = Depends(get_current_user),
) -> SanitizeResponse:
    return SanitizeResponse(html=sanitize_embed_html(payload.html))
