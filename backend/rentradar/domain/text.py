# rentradar/domain/text.py
from __future__ import annotations

import re

_CDATA_RE = re.compile(r"<!\[CDATA\[(.*?)\]\]>", re.DOTALL)
_TAG_RE = re.compile(r"<[^>]+>")
_STRAY_BRACKET_RE = re.compile(r"[<>]")
_WS_RE = re.compile(r"\s+")

# Order matters: &amp; first, same as the feeds we consume expect.
_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def decode_entities(text: str | None) -> str:
    """
    Unwrap CDATA sections (inner content kept literally) and decode the five
    standard XML entities. Anything else is left untouched.
    """
    if not text:
        return ""
    out = _CDATA_RE.sub(r"\1", text)
    for entity, char in _ENTITIES:
        out = out.replace(entity, char)
    return out


def strip_markup(text: str | None) -> str:
    """Decoded, tag-free, single-spaced text. Never contains `<` or `>`."""
    out = decode_entities(text)
    out = _TAG_RE.sub(" ", out)
    out = _STRAY_BRACKET_RE.sub(" ", out)
    return _WS_RE.sub(" ", out).strip()
