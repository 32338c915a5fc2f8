"""Text helpers shared by renderers and view models."""

import re

_MARKDOWN_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ("\\", "\\\\"),
    ("[", "\\["),
    ("]", "\\]"),
    ("*", "\\*"),
    ("_", "\\_"),
    ("~", "\\~"),
]

_HTML_ESCAPES = [
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
]

FLAVORS = ("text", "markdown", "html")


def escape_text(s: str, flavor: str) -> str:
    """Escape a raw text leaf for the requested output flavor."""
    if flavor == "text":
        return s
    if flavor == "markdown":
        table = _MARKDOWN_ESCAPES
    elif flavor == "html":
        table = _HTML_ESCAPES
    else:
        raise ValueError(f"unsupported flavor {flavor!r}")
    for old, new in table:
        s = s.replace(old, new)
    return s


def strip_leading_and_trailing_new_lines(s: str) -> str:
    return s.strip("\n")


def join_with_last(items: list[str], sep: str = ", ", last_sep: str = " and ") -> str:
    """Join items, using a different separator before the last one."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return sep.join(items[:-1]) + last_sep + items[-1]


def is_url(s: str) -> bool:
    return re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*://", s) is not None


def format_duration(millis: float) -> str:
    """Format a duration for progress messages."""
    if millis < 1000:
        return f"{int(millis)} ms"
    if millis < 100_000:
        return f"{millis / 1000:.1f} sec"
    return f"{millis / 60_000:.1f} min"


def strip_trailing_period(s: str) -> str:
    return re.sub(r"\.$", "", s.strip())
