from __future__ import annotations

import bleach
from django.utils.safestring import SafeString, mark_safe

allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS) | {
    "h3", "h4", "pre", "p", "br", "dl", "dt", "dd",
    "del", "ins", "s", "sub", "sup", "u",
}
allowed_attributes = dict(bleach.sanitizer.ALLOWED_ATTRIBUTES)
allowed_attributes["pre"] = ["lang"]


def sanitize_html(html) -> SafeString:
    """
    Sanitize HTML from a course configuration so it's safe to include in the page
    """
    return mark_safe(bleach.clean(str(html), tags=allowed_tags, attributes=allowed_attributes, strip=True))
