import re

HTML_TAG_RE = re.compile(r"<[^>]*>")


def sanitize_string(v):
    """Strip HTML tags and surrounding whitespace from client text. Non-strings pass through untouched."""
    if not isinstance(v, str):
        return v
    return HTML_TAG_RE.sub("", v).strip()
