"""Content type tags and extension-based detection.

ContentType drives dispatch in ``minify()``. Detection is a
case-insensitive match on the file extension; anything unrecognised is
``ContentType.UNKNOWN``, which the dispatcher rejects.
"""

from __future__ import annotations

import os
from enum import Enum


class ContentType(Enum):
    """Languages minifyx knows how to minify."""

    HTML = "html"
    CSS = "css"
    JS = "js"
    JSON = "json"
    XML = "xml"
    UNKNOWN = "unknown"

    @classmethod
    def from_name(cls, name: str) -> ContentType:
        """Look up a type by name ("html", "JS", ...); UNKNOWN if no match."""
        try:
            return cls(name.strip().lower())
        except ValueError:
            return cls.UNKNOWN


_EXTENSIONS: dict[str, ContentType] = {
    ".html": ContentType.HTML,
    ".htm": ContentType.HTML,
    ".css": ContentType.CSS,
    ".js": ContentType.JS,
    ".json": ContentType.JSON,
    ".xml": ContentType.XML,
}


def detect_type(path: str | os.PathLike[str]) -> ContentType:
    """Detect the content type of a path or bare extension.

    Args:
        path: File path, file name, or extension ("css" and ".css" both work)

    Returns:
        Matching ContentType, or ContentType.UNKNOWN

    Example:
        >>> detect_type("site/INDEX.HTM")
        <ContentType.HTML: 'html'>
        >>> detect_type("notes.txt")
        <ContentType.UNKNOWN: 'unknown'>
    """
    name = os.fspath(path)
    ext = os.path.splitext(name)[1]
    if not ext:
        # Bare extension, with or without the dot
        ext = name if name.startswith(".") else f".{name}"
    return _EXTENSIONS.get(ext.lower(), ContentType.UNKNOWN)


__all__ = ["ContentType", "detect_type"]
