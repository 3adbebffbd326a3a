# resource_library/app/infra/db/base.py
"""
Abstract base class for the resource library repository.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional

from resource_library.app.domain.models import (
    FetchOptions,
    Resource,
    ResourceFilters,
    ResourceListResult,
)


class ResourceRepository(ABC):
    """
    Read access to published library entries.

    Implementations:
    - SupabaseResourceRepository: `portal.resource_pages` through PostgREST
    """

    @abstractmethod
    def list_resources(
        self,
        filters: ResourceFilters | Mapping[str, Any] | None = None,
        options: Optional[FetchOptions] = None,
        *,
        page: Any = None,
        page_size: Any = None,
    ) -> ResourceListResult:
        """
        Fetch one page of resources matching `filters`.

        Args:
            filters: Raw filter input; normalized before use
            options: Visibility options (unpublished rows are hidden by default)
            page: 1-based page number
            page_size: Rows per page, clamped to [1, 200]

        Returns:
            The page of resources with the total count of the filtered set
        """
        pass

    @abstractmethod
    def get_resource_by_slug(
        self,
        slug: str,
        options: Optional[FetchOptions] = None,
    ) -> Optional[Resource]:
        """
        Fetch a single resource by exact slug.

        Returns:
            The resource, or None if no visible row matches
        """
        pass

    @abstractmethod
    def fetch_resource_library(self, options: Optional[FetchOptions] = None) -> list[Resource]:
        """Fetch every visible resource, newest first, without pagination."""
        pass
