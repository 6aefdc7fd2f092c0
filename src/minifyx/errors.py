"""Exception classes for minifyx.

Scanners are total functions over their input and never raise on malformed
source. The only core-level failure is asking for a content type that is
not one of the supported kinds.
"""

from __future__ import annotations


class MinifyxError(Exception):
    """Base exception for all minifyx errors.

    Subclass this for specific error categories.
    """

    pass


class UnsupportedTypeError(MinifyxError):
    """Content type cannot be determined or is not supported.

    Raised by ``minify()`` and the file helpers when the requested content
    type is ``ContentType.UNKNOWN`` or an unrecognised name.
    """

    def __init__(
        self,
        content_type: object,
        source_file: str | None = None,
    ) -> None:
        """Initialize unsupported type error.

        Args:
            content_type: The offending type value (enum member, name or None)
            source_file: Path that was being processed (optional)
        """
        self.content_type = content_type
        self.source_file = source_file

        location = f"{source_file}: " if source_file else ""
        super().__init__(
            f"{location}unsupported content type {content_type!r} "
            "(expected one of: html, css, js, json, xml)"
        )
