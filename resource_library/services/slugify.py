# resource_library/services/slugify.py
import re

MAX_SLUG_LENGTH = 80

_NON_SLUG_RE = re.compile(r"[^a-z0-9]+")


def normalize_resource_slug(text: str) -> str:
    """Turns text into a resource slug: lowercase, hyphen separated, at most 80 chars."""
    t = _NON_SLUG_RE.sub("-", str(text).strip().lower())
    # a cut at 80 can leave a trailing hyphen
    return t.strip("-")[:MAX_SLUG_LENGTH].strip("-")
