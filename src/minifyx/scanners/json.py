"""JSON scanner.

Removes every whitespace character outside double-quoted strings. String
contents, escape sequences included, are copied verbatim. The input is
assumed to be JSON and is not validated.
"""

from __future__ import annotations

from minifyx.scanners.modes import WHITESPACE
from minifyx.stringbuilder import StringBuilder


def minify_json(source: str) -> str:
    """Minify a JSON document.

    Args:
        source: JSON source text

    Returns:
        The document with all insignificant whitespace removed

    Example:
        >>> minify_json('{\\n  "name": "João",\\n  "age": 30\\n}')
        '{"name":"João","age":30}'
    """
    out = StringBuilder()
    in_string = False
    escaped = False
    run_start = 0

    for pos, char in enumerate(source):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char in WHITESPACE:
            # Flush the run of significant characters before this one
            out.append(source[run_start:pos])
            run_start = pos + 1
        elif char == '"':
            in_string = True

    out.append(source[run_start:])
    return out.build()
