"""
Noteful Backend — Output Sanitizer
===================================

What:  Neutralizes markup/script content in user-supplied text before it is
       echoed back in a response.
Why:   `name` and `content` are stored exactly as submitted. A client that
       renders them as HTML must not execute anything a previous client
       injected, e.g. `<script>alert("xss");</script>`.
How:   bleach.clean() with a small whitelist of inline formatting tags.
       Disallowed tags are escaped (not stripped), so the text a user typed
       stays readable: `<script>` becomes `&lt;script&gt;`. Event-handler
       attributes such as `onerror` are dropped from allowed tags.
       Bare ampersands are plain text and come back unchanged: bleach would
       turn `Tom & Jerry` into `Tom &amp; Jerry`, so they are swapped for a
       placeholder before cleaning and restored afterwards.
When:  Applied by the response schemas on every read and write response.

Examples:
    sanitize('Naughty <script>alert("xss");</script>')
        → 'Naughty &lt;script&gt;alert("xss");&lt;/script&gt;'
    sanitize('Bad image <img src="https://x/y.png" onerror="alert(1)">')
        → 'Bad image <img src="https://x/y.png">'
"""

import re
from html.entities import html5
from typing import Optional

import bleach

ALLOWED_TAGS = frozenset({
    "a", "abbr", "b", "blockquote", "br", "code", "em", "i", "img",
    "li", "ol", "p", "pre", "strong", "u", "ul",
})

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "img": ["src", "alt", "title"],
}

ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})

# Every "&", with the character reference it starts (if any) in group 1
AMPERSAND = re.compile(r"&(#[0-9]+;|#[xX][0-9a-fA-F]+;|[A-Za-z][A-Za-z0-9]*;)?")

# Private-use code point; never produced by bleach
AMPERSAND_PLACEHOLDER = "\ue000"


def _protect_bare_ampersand(match: re.Match) -> str:
    reference = match.group(1)
    if reference is None:
        return AMPERSAND_PLACEHOLDER
    if not reference.startswith("#") and reference not in html5:
        # "R&D;" is text, not an entity
        return AMPERSAND_PLACEHOLDER + reference
    return match.group(0)


def sanitize(value: Optional[str]) -> Optional[str]:
    """Returns `value` with script-capable markup escaped or removed."""
    if value is None:
        return None

    protect = AMPERSAND_PLACEHOLDER not in value
    if protect:
        value = AMPERSAND.sub(_protect_bare_ampersand, value)

    cleaned = bleach.clean(
        value,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=False,
        strip_comments=True,
    )
    if protect:
        cleaned = cleaned.replace(AMPERSAND_PLACEHOLDER, "&")
    return cleaned
