from __future__ import annotations

import pytest

from resource_library.app.domain.errors import BlockedEmbedHostError, ResourceInputError
from resource_library.app.domain.models import (
    ExternalEmbed,
    HtmlEmbed,
    Resource,
    ResourceAttachment,
    ResourceKind,
    VideoEmbed,
)
from resource_library.services.normalize import normalize_embed
from resource_library.services.resource_inputs import (
    MAX_ATTACHMENTS,
    MAX_TAGS,
    attachments_to_textarea,
    build_resource_embed_payload,
    get_resource_embed_defaults,
    parse_resource_attachments_input,
    parse_resource_tags_input,
)


class TestParseResourceTagsInput:
    def test_splits_trims_and_lowercases(self) -> None:
        assert parse_resource_tags_input(" Housing, winter ,, Advocacy ") == ["housing", "winter", "advocacy"]

    def test_limits_count(self) -> None:
        text = ",".join(f"tag{i}" for i in range(30))
        assert len(parse_resource_tags_input(text)) == MAX_TAGS

    def test_empty(self) -> None:
        assert parse_resource_tags_input("") == []


class TestParseResourceAttachmentsInput:
    def test_label_and_url(self) -> None:
        attachments = parse_resource_attachments_input("Full report | https://iharc.ca/report.pdf")
        assert attachments == [ResourceAttachment(label="Full report", url="https://iharc.ca/report.pdf")]

    def test_bare_url_is_its_own_label(self) -> None:
        attachments = parse_resource_attachments_input("https://iharc.ca/a.pdf")
        assert attachments == [ResourceAttachment(label="https://iharc.ca/a.pdf", url="https://iharc.ca/a.pdf")]

    def test_mailto_is_allowed(self) -> None:
        attachments = parse_resource_attachments_input("Contact | mailto:info@iharc.ca")
        assert attachments[0].url == "mailto:info@iharc.ca"

    def test_skips_blank_lines(self) -> None:
        text = "\n\nA | https://iharc.ca/a\n   \nB | https://iharc.ca/b\n"
        assert [a.label for a in parse_resource_attachments_input(text)] == ["A", "B"]

    def test_rejects_http(self) -> None:
        with pytest.raises(ResourceInputError) as exc_info:
            parse_resource_attachments_input("Old | http://iharc.ca/a.pdf")
        assert "https or mailto" in str(exc_info.value)

    def test_rejects_invalid_url(self) -> None:
        with pytest.raises(ResourceInputError):
            parse_resource_attachments_input("Broken | https://")

    def test_truncates_label(self) -> None:
        attachments = parse_resource_attachments_input(f"{'x' * 300} | https://iharc.ca/a")
        assert len(attachments[0].label) == 160

    def test_limits_count(self) -> None:
        text = "\n".join(f"https://iharc.ca/{i}" for i in range(15))
        assert len(parse_resource_attachments_input(text)) == MAX_ATTACHMENTS

    def test_textarea_round_trip(self) -> None:
        attachments = [
            ResourceAttachment(label="A", url="https://iharc.ca/a"),
            ResourceAttachment(label="B", url="mailto:b@iharc.ca"),
        ]
        text = attachments_to_textarea(attachments)

        assert text == "A | https://iharc.ca/a\nB | mailto:b@iharc.ca"
        assert parse_resource_attachments_input(text) == attachments

    def test_textarea_empty(self) -> None:
        assert attachments_to_textarea([]) == ""


class TestBuildResourceEmbedPayload:
    @pytest.mark.parametrize("values", [{}, {"type": None}, {"type": "none", "url": "https://iharc.ca"}])
    def test_no_embed(self, values: dict) -> None:
        assert build_resource_embed_payload(values) is None

    def test_google_doc(self) -> None:
        payload = build_resource_embed_payload({"type": "google-doc", "url": " https://docs.google.com/d/1 "})
        assert payload == {"type": "google-doc", "url": "https://docs.google.com/d/1"}

    def test_pdf_on_blocked_host(self) -> None:
        with pytest.raises(BlockedEmbedHostError) as exc_info:
            build_resource_embed_payload({"type": "pdf", "url": "https://evil.example.com/a.pdf"})
        assert exc_info.value.context == "resource_embed"

    def test_missing_url(self) -> None:
        with pytest.raises(ResourceInputError):
            build_resource_embed_payload({"type": "pdf", "url": "  "})

    def test_video_defaults_provider(self) -> None:
        payload = build_resource_embed_payload({"type": "video", "url": "https://youtu.be/abc", "provider": "other"})
        assert payload == {"type": "video", "url": "https://youtu.be/abc", "provider": "youtube"}

    def test_video_blocked_host_context(self) -> None:
        with pytest.raises(BlockedEmbedHostError) as exc_info:
            build_resource_embed_payload({"type": "video", "url": "https://videos.example.com/1"})
        assert exc_info.value.context == "resource_video_embed"

    def test_external_requires_https(self) -> None:
        with pytest.raises(ResourceInputError):
            build_resource_embed_payload({"type": "external", "url": "http://example.org"})

    def test_external_any_https_host(self) -> None:
        payload = build_resource_embed_payload({"type": "external", "url": "https://example.org", "label": " Site "})
        assert payload == {"type": "external", "url": "https://example.org", "label": "Site"}

    def test_external_without_label(self) -> None:
        payload = build_resource_embed_payload({"type": "external", "url": "https://example.org", "label": ""})
        assert payload == {"type": "external", "url": "https://example.org"}

    def test_html_is_sanitized(self) -> None:
        payload = build_resource_embed_payload(
            {"type": "html", "html": '<p>Hi</p><script>x()</script><iframe src="https://evil.example.com"></iframe>'}
        )
        assert payload == {"type": "html", "html": "<p>Hi</p>"}

    def test_html_required(self) -> None:
        with pytest.raises(ResourceInputError):
            build_resource_embed_payload({"type": "html", "html": ""})

    def test_payload_normalizes_back(self) -> None:
        payload = build_resource_embed_payload({"type": "video", "url": "https://player.vimeo.com/1", "provider": "vimeo"})
        assert normalize_embed(payload) == VideoEmbed(url="https://player.vimeo.com/1", provider="vimeo")

    def test_unknown_type(self) -> None:
        assert build_resource_embed_payload({"type": "podcast"}) is None


class TestGetResourceEmbedDefaults:
    def _resource(self, embed: object) -> Resource:
        return Resource(
            id="1",
            slug="r",
            title="R",
            kind=ResourceKind.OTHER,
            date_published="2024-01-01",
            embed=embed,
        )

    def test_no_embed(self) -> None:
        assert get_resource_embed_defaults(self._resource(None)) == {
            "type": "none",
            "url": "",
            "provider": "youtube",
            "label": "",
            "html": "",
        }

    def test_video(self) -> None:
        defaults = get_resource_embed_defaults(self._resource(VideoEmbed(url="https://vimeo.com/1", provider="vimeo")))
        assert defaults["type"] == "video"
        assert defaults["provider"] == "vimeo"

    def test_external_without_label(self) -> None:
        defaults = get_resource_embed_defaults(self._resource(ExternalEmbed(url="https://example.org")))
        assert defaults["label"] == ""
        assert defaults["url"] == "https://example.org"

    def test_html(self) -> None:
        defaults = get_resource_embed_defaults(self._resource(HtmlEmbed(html="<p>x</p>")))
        assert defaults["type"] == "html"
        assert defaults["html"] == "<p>x</p>"
