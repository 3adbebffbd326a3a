# resource_library/app/schemas/resources.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

EmbedType = Literal["none", "google-doc", "pdf", "video", "external", "html"]


class AttachmentItem(BaseModel):
    label: str
    url: str


class ResourceResponse(BaseModel):
    id: str
    slug: str
    title: str
    kind: str
    kindLabel: str
    datePublished: str
    dateLabel: str
    summary: Optional[str] = None
    location: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    attachments: list[AttachmentItem] = Field(default_factory=list)
    embed: Optional[dict[str, str]] = None
    embedPlacement: Literal["above", "below"] = "above"
    bodyHtml: str = ""
    isPublished: bool
    coverImage: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None


class ResourceListResponse(BaseModel):
    items: list[ResourceResponse] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    pageSize: int = 50
    hasMore: bool = False


class KindOption(BaseModel):
    value: str
    label: str


class ResourceFilterOptions(BaseModel):
    kinds: list[KindOption] = Field(default_factory=list)
    years: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class EmbedPayloadRequest(BaseModel):
    type: EmbedType = "none"
    url: Optional[str] = Field(default=None, max_length=2048)
    provider: Optional[Literal["youtube", "vimeo"]] = None
    label: Optional[str] = Field(default=None, max_length=160)
    html: Optional[str] = None


class EmbedPayloadResponse(BaseModel):
    embed: Optional[dict[str, str]] = None


class SanitizeRequest(BaseModel):
    html: str = ""


class SanitizeResponse(BaseModel):
    html: str
