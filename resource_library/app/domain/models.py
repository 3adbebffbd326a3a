# resource_library/app/domain/models.py
"""
Domain models for the resource library.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Union


class ResourceKind(str, Enum):
    """Content categories a library entry can belong to."""
    DELEGATION = "delegation"
    REPORT = "report"
    PRESENTATION = "presentation"
    POLICY = "policy"
    PRESS = "press"
    DATASET = "dataset"
    OTHER = "other"


RESOURCE_KIND_LABELS: dict[ResourceKind, str] = {
    ResourceKind.DELEGATION: "Delegation",
    ResourceKind.REPORT: "Report",
    ResourceKind.PRESENTATION: "Presentation",
    ResourceKind.POLICY: "Policy Brief",
    ResourceKind.PRESS: "Press",
    ResourceKind.DATASET: "Dataset",
    ResourceKind.OTHER: "Other Resource",
}


class EmbedPlacement(str, Enum):
    """Where the embed renders relative to the body."""
    ABOVE = "above"
    BELOW = "below"


VideoProvider = Literal["youtube", "vimeo"]


@dataclass(frozen=True)
class ResourceAttachment:
    label: str
    url: str


# Embed variants. `type` is the discriminant and is fixed per class.

@dataclass(frozen=True)
class GoogleDocEmbed:
    url: str
    type: Literal["google-doc"] = field(default="google-doc", init=False)


@dataclass(frozen=True)
class PdfEmbed:
    url: str
    type: Literal["pdf"] = field(default="pdf", init=False)


@dataclass(frozen=True)
class VideoEmbed:
    url: str
    provider: VideoProvider
    type: Literal["video"] = field(default="video", init=False)


@dataclass(frozen=True)
class ExternalEmbed:
    url: str
    label: Optional[str] = None
    type: Literal["external"] = field(default="external", init=False)


@dataclass(frozen=True)
class HtmlEmbed:
    html: str
    type: Literal["html"] = field(default="html", init=False)


ResourceEmbed = Union[GoogleDocEmbed, PdfEmbed, VideoEmbed, ExternalEmbed, HtmlEmbed]


@dataclass(frozen=True)
class Resource:
    """
    One publishable library entry.
    Read-only projection of a `resource_pages` row; built fresh on every fetch.
    """
    id: str
    slug: str
    title: str
    kind: ResourceKind
    date_published: str  # YYYY-MM-DD
    summary: Optional[str] = None
    location: Optional[str] = None
    tags: list[str] = field(default_factory=list)
    attachments: list[ResourceAttachment] = field(default_factory=list)
    embed: Optional[ResourceEmbed] = None
    embed_placement: EmbedPlacement = EmbedPlacement.ABOVE
    body_html: str = ""
    is_published: bool = False
    cover_image: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class ResourceFilters:
    """Query intent as supplied by the caller."""
    q: Optional[str] = None
    kind: Optional[str] = None
    tag: Optional[str] = None
    year: Optional[str] = None


@dataclass(frozen=True)
class NormalizedResourceFilters:
    """Validated filters. Every field is either a usable value or None."""
    q: Optional[str]
    kind: Optional[ResourceKind]
    tag: Optional[str]
    year: Optional[str]


@dataclass(frozen=True)
class Pagination:
    """Resolved page window. `start` and `end` are zero-based and inclusive."""
    page: int
    page_size: int
    start: int
    end: int


@dataclass(frozen=True)
class FetchOptions:
    include_unpublished: bool = False


@dataclass
class ResourceListResult:
    """One page of resources plus the size of the full filtered set."""
    items: list[Resource]
    total: int
    page: int
    page_size: int
    has_more: bool
