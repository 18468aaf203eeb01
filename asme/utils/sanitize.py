"""HTML sanitization for rich-text editor content."""

import nh3

# Allowed HTML tags for notes (plain rich text)
NOTE_TAGS = {"p", "br", "strong", "em", "u", "ul", "ol", "li", "a", "blockquote", "code", "pre"}

# Blog posts and campaign bodies also carry headings, images and simple tables
RICH_TAGS = NOTE_TAGS | {
    "h1", "h2", "h3", "h4", "h5", "h6", "img", "hr", "span", "div",
    "table", "thead", "tbody", "tr", "th", "td", "figure", "figcaption",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "target", "title"},
    "img": {"src", "alt", "title", "width", "height"},
    "td": {"colspan", "rowspan"},
    "th": {"colspan", "rowspan"},
}


def sanitize_html(html: str | None, *, rich: bool = False) -> str:
    """Sanitize HTML to prevent XSS, allowing only safe rich text tags."""
    if not html:
        return ""
    tags = RICH_TAGS if rich else NOTE_TAGS
    attributes = {tag: attrs for tag, attrs in ALLOWED_ATTRIBUTES.items() if tag in tags}
    return nh3.clean(html, tags=tags, attributes=attributes)
