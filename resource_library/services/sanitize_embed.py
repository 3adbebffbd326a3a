# resource_library/services/sanitize_embed.py
"""
Allowlist sanitizer for staff-authored HTML.

Used for `html` embeds and for body HTML that may carry iframes or links.
Everything not explicitly allowed is removed:
- unknown tags are unwrapped (text kept); script-like tags are removed whole
- attributes are filtered per tag; URL attributes are checked by scheme
- iframes must point at a host in ALLOWED_EMBED_HOSTS
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction, Tag

from resource_library.services.embed_hosts import is_allowed_host

logger = logging.getLogger(__name__)

BASE_ALLOWED_TAGS = frozenset(
    {
        "address", "article", "aside", "footer", "header", "hgroup", "main", "nav", "section",
        "h1", "h2", "h3", "h4", "h5", "h6",
        "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure", "hr", "li", "ol", "p", "pre", "ul",
        "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em", "i", "kbd", "mark",
        "q", "s", "samp", "small", "span", "strong", "sub", "sup", "time", "u", "var", "wbr",
        "caption", "col", "colgroup", "table", "tbody", "td", "tfoot", "th", "thead", "tr",
    }
)

ALLOWED_TAGS = BASE_ALLOWED_TAGS | {"iframe"}

# Removed together with their content instead of being unwrapped.
DROPPED_CONTENT_TAGS = frozenset({"script", "style", "textarea", "option", "noscript", "template"})

ALLOWED_ATTRIBUTES: dict[str, frozenset[str]] = {
    "a": frozenset({"href", "title", "rel", "target"}),
    "iframe": frozenset({"src", "title", "allow", "allowfullscreen", "loading", "referrerpolicy"}),
}

URL_ATTRIBUTES = frozenset({"href", "src"})

ALLOWED_SCHEMES: dict[str, frozenset[str]] = {
    "a": frozenset({"http", "https", "mailto"}),
    "iframe": frozenset({"http", "https"}),
}

IFRAME_DEFAULTS = {
    "loading": "lazy",
    "referrerpolicy": "no-referrer-when-downgrade",
}

ANCHOR_DEFAULTS = {
    "rel": "noopener noreferrer",
    "target": "_blank",
}

_SCHEME_RE = re.compile(r"^([a-zA-Z][a-zA-Z0-9.+-]*):")
_IGNORED_URL_CHARS_RE = re.compile(r"[\x00-\x20\x7f]+")


def _url_scheme(value: str) -> Optional[str]:
    """Scheme of a URL attribute, or None for relative URLs."""
    match = _SCHEME_RE.match(_IGNORED_URL_CHARS_RE.sub("", value))
    return match.group(1).lower() if match else None


def _is_allowed_url(tag_name: str, value: str) -> bool:
    scheme = _url_scheme(value)
    if scheme is None:
        # relative links stay; an iframe source must name its scheme
        return tag_name != "iframe"
    return scheme in ALLOWED_SCHEMES.get(tag_name, frozenset())


def _filter_attributes(tag: Tag) -> None:
    allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
    kept: dict[str, str] = {}
    for name, value in tag.attrs.items():
        key = name.lower()
        if key not in allowed:
            continue
        text = value if isinstance(value, str) else " ".join(value)
        if key in URL_ATTRIBUTES and not _is_allowed_url(tag.name, text):
            continue
        kept[key] = text
    tag.attrs = kept


def _apply_defaults(tag: Tag, defaults: dict[str, str]) -> None:
    for name, value in defaults.items():
        if name not in tag.attrs:
            tag[name] = value


def _gate_iframe(tag: Tag) -> None:
    if not is_allowed_host(tag.get("src")):
        logger.debug("Blocked iframe source: %s", tag.get("src"))
        tag.attrs = {}
        tag.clear()


def _sanitize_tag(tag: Tag) -> None:
    name = (tag.name or "").lower()
    tag.name = name

    if name in DROPPED_CONTENT_TAGS:
        tag.decompose()
        return
    if name not in ALLOWED_TAGS:
        tag.unwrap()
        return

    _filter_attributes(tag)

    if name == "iframe":
        _gate_iframe(tag)
        if tag.attrs:
            _apply_defaults(tag, IFRAME_DEFAULTS)
    elif name == "a":
        _apply_defaults(tag, ANCHOR_DEFAULTS)


def _drop_unapproved_iframes(soup: BeautifulSoup) -> None:
    for iframe in soup.find_all("iframe"):
        if not is_allowed_host(iframe.get("src")):
            iframe.decompose()


def sanitize_embed_html(html: object) -> str:
    """
    Return a render-safe copy of `html`.

    Pure and total: the same input always yields the same output, and any
    input that cannot be processed yields an empty string.
    """
    if not isinstance(html, str) or not html.strip():
        return ""

    try:
        soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

        for node in soup.find_all(
            string=lambda text: isinstance(text, (Comment, Declaration, Doctype, ProcessingInstruction, CData))
        ):
            node.extract()

        # deepest elements first so unwrapping a parent never revisits its children
        for tag in reversed(soup.find_all(True)):
            _sanitize_tag(tag)

        _drop_unapproved_iframes(soup)
        return soup.decode(formatter="minimal")
    except Exception as error:
        logger.warning("Discarding HTML that could not be sanitized: %s", error)
        return ""
