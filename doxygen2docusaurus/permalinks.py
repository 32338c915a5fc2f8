"""Path and anchor transforms used to build permalinks.

Doxygen member ids are the owning compound id followed by ``_1`` and an
anchor, e.g. ``classfoo_1a3b4c...``. Text anchors (``xrefsect`` targets)
use ``_1_`` followed by a plain identifier, e.g. ``todo_1_todo000001``.
"""

import re

_SANITIZE_REPLACEMENTS = [
    ("*", "2a"),
    ("&", "26"),
    ("<", "3c"),
    (">", "3e"),
    ("(", "28"),
    (")", "29"),
]


def sanitize_hierarchical_path(path: str) -> str:
    """Make a `/` separated name safe for use as a URL path."""
    path = path.lower().replace(" ", "")
    for old, new in _SANITIZE_REPLACEMENTS:
        path = path.replace(old, new)
    return re.sub(r"[^a-z0-9/-]", "-", path)


def sanitize_anonymous_namespace(name: str) -> str:
    return name.replace("anonymous_namespace{", "anonymous{")


def flatten_path(path: str) -> str:
    """Turn a hierarchical path into a single file-name-safe segment."""
    return path.replace("/", "-")


def strip_permalink_hex_anchor(refid: str) -> str:
    """Return the compound id part of a member id."""
    return re.sub(r"_1[0-9a-fg]*$", "", refid)


def strip_permalink_text_anchor(refid: str) -> str:
    """Return the compound id part of a text anchor id."""
    return re.sub(r"_1_[0-9a-z]*$", "", refid)


def get_permalink_anchor(refid: str) -> str:
    """Return the in-page anchor of a member id."""
    return re.sub(r"^.*_1", "", refid)
