from __future__ import annotations

from typing import Any

from resource_library.app.domain.models import Resource, ResourceFilters, ResourceKind
from resource_library.services.library import (
    filter_resources,
    format_resource_date,
    get_kind_label,
    get_resource_tags,
    get_resource_years,
    kind_options,
)


def _resource(slug: str, **overrides: Any) -> Resource:
    values: dict[str, Any] = {
        "id": slug,
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "kind": ResourceKind.REPORT,
        "date_published": "2024-01-15",
        "tags": [],
        "is_published": True,
        "updated_at": "2024-01-15T00:00:00+00:00",
    }
    values.update(overrides)
    return Resource(**values)


class TestGetResourceYears:
    def test_distinct_years_newest_first(self) -> None:
        resources = [
            _resource("a", date_published="2022-05-01"),
            _resource("b", date_published="2024-01-01"),
            _resource("c", date_published="2022-11-30"),
            _resource("d", date_published="2023-07-07"),
        ]

        assert get_resource_years(resources) == ["2024", "2023", "2022"]

    def test_ignores_missing_or_malformed_dates(self) -> None:
        resources = [_resource("a", date_published=""), _resource("b", date_published="n/a")]
        assert get_resource_years(resources) == []


class TestGetResourceTags:
    def test_distinct_lowercase_sorted(self) -> None:
        resources = [
            _resource("a", tags=["Housing", "winter"]),
            _resource("b", tags=["housing", "Advocacy"]),
        ]

        assert get_resource_tags(resources) == ["advocacy", "housing", "winter"]

    def test_empty(self) -> None:
        assert get_resource_tags([]) == []


class TestFormatResourceDate:
    def test_long_format(self) -> None:
        assert format_resource_date("2024-01-05") == "January 5, 2024"

    def test_timestamp_input(self) -> None:
        assert format_resource_date("2023-11-30T12:00:00+00:00") == "November 30, 2023"

    def test_unparseable_value_is_returned(self) -> None:
        assert format_resource_date("soon") == "soon"


class TestKindLabels:
    def test_known_kind(self) -> None:
        assert get_kind_label(ResourceKind.POLICY) == "Policy Brief"
        assert get_kind_label("press") == "Press"

    def test_unknown_kind_falls_back(self) -> None:
        assert get_kind_label("novel") == "Other Resource"

    def test_options_cover_every_kind(self) -> None:
        values = [option["value"] for option in kind_options()]
        assert values == [kind.value for kind in ResourceKind]


class TestFilterResources:
    def test_excludes_unpublished(self) -> None:
        resources = [_resource("live"), _resource("draft", is_published=False)]
        assert [r.slug for r in filter_resources(resources)] == ["live"]

    def test_kind_filter(self) -> None:
        resources = [_resource("report"), _resource("press", kind=ResourceKind.PRESS)]
        assert [r.slug for r in filter_resources(resources, {"kind": "press"})] == ["press"]

    def test_year_filter(self) -> None:
        resources = [_resource("old", date_published="2021-03-01"), _resource("new")]
        assert [r.slug for r in filter_resources(resources, ResourceFilters(year="2021"))] == ["old"]

    def test_tag_filter_is_case_insensitive(self) -> None:
        resources = [_resource("tagged", tags=["Housing"]), _resource("other", tags=["food"])]
        assert [r.slug for r in filter_resources(resources, {"tag": "HOUSING"})] == ["tagged"]

    def test_search_across_fields(self) -> None:
        resources = [
            _resource("by-title", title="Shelter capacity"),
            _resource("by-summary", summary="Notes on SHELTER use"),
            _resource("by-location", location="Shelter Road"),
            _resource("by-tag", tags=["shelter"]),
            _resource("miss", title="Food bank"),
        ]

        slugs = {r.slug for r in filter_resources(resources, {"q": "shelter"})}

        assert slugs == {"by-title", "by-summary", "by-location", "by-tag"}

    def test_sorted_newest_first_with_update_tiebreak(self) -> None:
        resources = [
            _resource("older", date_published="2023-01-01"),
            _resource("same-day-early", updated_at="2024-01-15T08:00:00+00:00"),
            _resource("same-day-late", updated_at="2024-01-15T18:00:00+00:00"),
        ]

        assert [r.slug for r in filter_resources(resources)] == ["same-day-late", "same-day-early", "older"]
