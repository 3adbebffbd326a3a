# resource_library/services/resource_inputs.py
"""
Parsing of staff form input into the shapes stored on `resource_pages`.

Unlike the read path, these helpers are strict: bad input raises
ResourceInputError or BlockedEmbedHostError so the admin save is rejected.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional
from urllib.parse import urlparse

from resource_library.app.domain.errors import ResourceInputError
from resource_library.app.domain.models import (
    ExternalEmbed,
    GoogleDocEmbed,
    HtmlEmbed,
    PdfEmbed,
    Resource,
    ResourceAttachment,
    VideoEmbed,
)
from resource_library.services.embed_hosts import assert_allowed_embed_url
from resource_library.services.sanitize_embed import sanitize_embed_html

MAX_TAGS = 20
MAX_ATTACHMENTS = 10
MAX_ATTACHMENT_LABEL_LENGTH = 160

ALLOWED_ATTACHMENT_SCHEMES = frozenset({"https", "mailto"})


def parse_resource_tags_input(text: str) -> list[str]:
    """Comma separated tags, lower-cased. Tags are stored lower-case."""
    tags = [entry.strip().lower() for entry in (text or "").split(",")]
    return [tag for tag in tags if tag][:MAX_TAGS]


def _normalize_attachment_url(candidate: str) -> str:
    invalid = ResourceInputError(f"Attachment URL must be valid. Check: {candidate}", field="attachments")
    try:
        parsed = urlparse(candidate)
    except ValueError:
        raise invalid

    scheme = parsed.scheme.lower()
    if scheme not in ALLOWED_ATTACHMENT_SCHEMES:
        raise ResourceInputError(
            f"Attachments must use https or mailto links. Check: {candidate}",
            field="attachments",
        )
    if not (parsed.netloc if scheme == "https" else parsed.path):
        raise invalid
    return parsed.geturl()


def parse_resource_attachments_input(text: str) -> list[ResourceAttachment]:
    """
    One attachment per line, as `Label | https://...` or a bare URL.
    A bare URL doubles as its own label.
    """
    attachments: list[ResourceAttachment] = []

    for line in (text or "").splitlines():
        line = line.strip()
        if not line:
            continue

        parts = [segment.strip() for segment in line.split("|")]
        label_part = parts[0]
        url_part = parts[1] if len(parts) > 1 else None
        candidate = url_part or label_part
        if not candidate:
            continue

        url = _normalize_attachment_url(candidate)
        label = label_part if label_part and url_part else url
        attachments.append(ResourceAttachment(label=label[:MAX_ATTACHMENT_LABEL_LENGTH], url=url))

    return attachments[:MAX_ATTACHMENTS]


def attachments_to_textarea(attachments: list[ResourceAttachment]) -> str:
    return "\n".join(f"{attachment.label} | {attachment.url}" for attachment in attachments)


def _clean(values: Mapping[str, Any], name: str) -> str:
    value = values.get(name)
    return str(value).strip() if value is not None else ""


def build_resource_embed_payload(values: Mapping[str, Any]) -> Optional[dict[str, str]]:
    """Validate embed form values and return the JSON stored in `embed`."""
    embed_type = values.get("type") or "none"
    if embed_type == "none":
        return None

    if embed_type in ("google-doc", "pdf"):
        url = _clean(values, "url")
        if not url:
            raise ResourceInputError("Provide a URL for the embed.", field="url")
        assert_allowed_embed_url(url, "resource_embed")
        return {"type": embed_type, "url": url}

    if embed_type == "video":
        url = _clean(values, "url")
        provider = "vimeo" if values.get("provider") == "vimeo" else "youtube"
        if not url:
            raise ResourceInputError("Provide a video URL to embed.", field="url")
        assert_allowed_embed_url(url, "resource_video_embed")
        return {"type": "video", "url": url, "provider": provider}

    if embed_type == "external":
        url = _clean(values, "url")
        if not url:
            raise ResourceInputError("Provide the external resource URL.", field="url")
        try:
            parsed = urlparse(url)
        except ValueError:
            raise ResourceInputError("Provide a valid https URL for the external resource.", field="url")
        if parsed.scheme.lower() != "https" or not parsed.netloc:
            raise ResourceInputError("External resource URLs must use https.", field="url")
        payload = {"type": "external", "url": url}
        label = _clean(values, "label")
        if label:
            payload["label"] = label
        return payload

    if embed_type == "html":
        html = _clean(values, "html")
        if not html:
            raise ResourceInputError("Paste the HTML snippet you would like to embed.", field="html")
        return {"type": "html", "html": sanitize_embed_html(html)}

    return None


def get_resource_embed_defaults(resource: Resource) -> dict[str, str]:
    """Initial embed form values for an existing resource."""
    defaults = {"type": "none", "url": "", "provider": "youtube", "label": "", "html": ""}
    embed = resource.embed

    if isinstance(embed, (GoogleDocEmbed, PdfEmbed)):
        defaults.update(type=embed.type, url=embed.url)
    elif isinstance(embed, VideoEmbed):
        defaults.update(type="video", url=embed.url, provider=embed.provider)
    elif isinstance(embed, ExternalEmbed):
        defaults.update(type="external", url=embed.url, label=embed.label or "")
    elif isinstance(embed, HtmlEmbed):
        defaults.update(type="html", html=embed.html)

    return defaults
