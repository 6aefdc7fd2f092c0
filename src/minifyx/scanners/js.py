"""JavaScript scanner.

Two passes over the source, sharing one vocabulary of lexical modes:

1. Structure pass: drops comments and raw line breaks, collapses runs of
   spaces to one, and copies string, template and regex literals. Raw
   line breaks in the text of a template literal become the two-character
   ``\\n`` escape so the output stays on one line; the code inside
   ``${ ... }`` is copied as written. When a line break (or a line
   comment) follows ``return``, ``throw``, ``break`` or ``continue``, an
   explicit ``;`` is written so the statement cannot merge with the next.
   Dropping a line break or comment never leaves a ``/`` touching a
   following ``/`` or ``*``; one space is kept between them.

2. Tightening pass: re-scans the result and removes every space that sits
   next to punctuation where no space is needed. Literals are copied
   verbatim.

No syntax is validated. Unterminated literals and comments run to the end
of input and whatever was scanned is returned.

Regex vs. division:
    A ``/`` starts a regex literal when nothing significant precedes it,
    when the previous character is one of ``= ( { [ , ! ? : ; & | ^ ~ < >
    + - * %``, or when the previous token is a keyword such as ``return``
    or ``typeof``. Anything else is division.

"""

from __future__ import annotations

from minifyx.scanners.modes import (
    JS_ASI_KEYWORDS,
    JS_NO_SPACE_PUNCT,
    JS_REGEX_KEYWORDS,
    JS_REGEX_PRECEDERS,
    WHITESPACE,
    JsMode,
    is_ident_char,
)
from minifyx.stringbuilder import StringBuilder


def minify_js(source: str) -> str:
    """Minify JavaScript source.

    Args:
        source: JavaScript source text

    Returns:
        Minified JavaScript on a single line (apart from escaped line
        continuations inside literals)

    Example:
        >>> minify_js("const url = 'http://x'; // note\\nreturn\\nx")
        "const url='http://x';return;x"
    """
    return _tighten_pass(_strip_pass(source))


# =========================================================================
# Pass 1: comments, line breaks, ASI
# =========================================================================


def _strip_pass(source: str) -> str:
    out = StringBuilder()
    n = len(source)
    pos = 0

    prev = ""  # Last significant character written
    last_word = ""  # Most recently completed identifier
    asi_pending = False
    gap_at = -1  # Output size when a line break or comment was last dropped

    while pos < n:
        char = source[pos]

        if is_ident_char(char):
            end = _word_end(source, pos)
            last_word = source[pos:end]
            out.append(last_word)
            prev = last_word[-1]
            asi_pending = last_word in JS_ASI_KEYWORDS
            pos = end
            continue

        if char == "/":
            mode = _classify_slash(source, pos, prev, last_word)
            if mode is JsMode.LINE_COMMENT:
                # The line break itself is handled on the next iteration
                pos = _line_end(source, pos)
                gap_at = len(out)
                continue
            if mode is JsMode.BLOCK_COMMENT:
                end = source.find("*/", pos + 2)
                pos = n if end == -1 else end + 2
                if is_ident_char(out.last):
                    out.append_space()
                gap_at = len(out)
                continue

            if gap_at == len(out) and out.last == "/":
                out.append(" ")
            if mode is JsMode.REGEX:
                end = _regex_end(source, pos)
                out.append(source[pos:end])
                prev = "/"
                pos = end
            else:
                out.append(char)
                prev = char
                pos += 1
            asi_pending = False
            continue

        if char == "'" or char == '"':
            end = _string_end(source, pos)
            out.append(source[pos:end])
            prev = char
            asi_pending = False
            pos = end
            continue

        if char == "`":
            literal, pos = _copy_template(source, pos)
            out.append(literal)
            prev = char
            asi_pending = False
            continue

        if char == " " or char == "\t":
            out.append_space()
            pos += 1
            continue

        if char == "\n" or char == "\r":
            if asi_pending:
                if out.last != ";":
                    out.append(";")
                    prev = ";"
                asi_pending = False
            elif is_ident_char(out.last):
                # Keep adjacent identifiers on separate lines apart
                out.append_space()
            else:
                gap_at = len(out)
            pos += 1
            continue

        if char == "*" and gap_at == len(out) and out.last == "/":
            out.append(" ")
        out.append(char)
        prev = char
        asi_pending = False
        pos += 1

    return out.build()


# =========================================================================
# Pass 2: space tightening
# =========================================================================


def _tighten_pass(code: str) -> str:
    out = StringBuilder()
    n = len(code)
    pos = 0

    prev = ""
    last_word = ""
    after_regex = False

    while pos < n:
        char = code[pos]

        if is_ident_char(char):
            end = _word_end(code, pos)
            last_word = code[pos:end]
            out.append(last_word)
            prev = last_word[-1]
            after_regex = False
            pos = end
            continue

        if char in WHITESPACE:
            end = pos + 1
            while end < n and code[end] in WHITESPACE:
                end += 1
            if end < n and not _can_drop_space(prev, code[end], after_regex):
                out.append_space()
            pos = end
            continue

        after_regex = False

        if char == "/" and _is_regex_start(prev, last_word):
            end = _regex_end(code, pos)
            after_regex = True
        elif char == "'" or char == '"':
            end = _string_end(code, pos)
        elif char == "`":
            end = _copy_template(code, pos)[1]
        else:
            end = pos + 1

        out.append(code[pos:end])
        prev = char
        pos = end

    return out.build()


def _can_drop_space(prev: str, nxt: str, after_regex: bool) -> bool:
    """Decide whether a space between prev and nxt can go."""
    if not prev:
        return True
    if prev == "/" and (nxt == "/" or nxt == "*"):
        # "a / /re/" must not become a comment opener
        return False
    if after_regex and is_ident_char(nxt):
        # "/re/ in x" must not turn "in" into regex flags
        return False
    return prev in JS_NO_SPACE_PUNCT or nxt in JS_NO_SPACE_PUNCT


# =========================================================================
# Shared classification and literal extents
# =========================================================================


def _is_regex_start(prev: str, last_word: str) -> bool:
    """Return True if a "/" after prev/last_word opens a regex literal."""
    if not prev or prev in JS_REGEX_PRECEDERS:
        return True
    # Only a keyword that is itself the previous token counts
    return is_ident_char(prev) and last_word in JS_REGEX_KEYWORDS


def _classify_slash(source: str, pos: int, prev: str, last_word: str) -> JsMode:
    """Classify the "/" at pos as comment opener, regex start, or division."""
    nxt = source[pos + 1 : pos + 2]
    if nxt == "/":
        return JsMode.LINE_COMMENT
    if nxt == "*":
        return JsMode.BLOCK_COMMENT
    if _is_regex_start(prev, last_word):
        return JsMode.REGEX
    return JsMode.NORMAL


def _word_end(source: str, pos: int) -> int:
    n = len(source)
    end = pos + 1
    while end < n and is_ident_char(source[end]):
        end += 1
    return end


def _line_end(source: str, pos: int) -> int:
    """Position of the next CR or LF at or after pos (or end of input)."""
    n = len(source)
    lf = source.find("\n", pos)
    cr = source.find("\r", pos)
    lf = n if lf == -1 else lf
    cr = n if cr == -1 else cr
    return min(lf, cr)


def _string_end(source: str, pos: int) -> int:
    """End (exclusive) of the quoted string opening at pos."""
    quote = source[pos]
    n = len(source)
    i = pos + 1
    while i < n:
        char = source[i]
        if char == "\\":
            i += 2
            continue
        i += 1
        if char == quote:
            return i
    return n


def _copy_template(source: str, pos: int) -> tuple[str, int]:
    """Copy the template literal opening at pos.

    Returns the literal, with raw line breaks in its text replaced by
    ``\\n``, and the position just past it. A ``${`` substitution runs to
    its matching ``}`` and is copied as written, nested literals included.
    CRLF counts as one line break, and a line break right after a
    backslash is a line continuation that stays as written.
    """
    parts = ["`"]
    n = len(source)
    i = pos + 1
    while i < n:
        char = source[i]
        if char == "\\":
            step = 3 if source.startswith("\r\n", i + 1) else 2
            parts.append(source[i : i + step])
            i += step
        elif char == "`":
            parts.append(char)
            return "".join(parts), i + 1
        elif char == "$" and source.startswith("{", i + 1):
            end = _substitution_end(source, i + 2)
            parts.append(source[i:end])
            i = end
        elif char == "\n" or char == "\r":
            parts.append("\\n")
            i += 2 if source.startswith("\r\n", i) else 1
        else:
            parts.append(char)
            i += 1
    return "".join(parts), n


def _substitution_end(source: str, pos: int) -> int:
    """End (exclusive) of a ``${ ... }`` body starting at pos, past its ``}``."""
    n = len(source)
    depth = 0
    i = pos
    while i < n:
        char = source[i]
        if char == "'" or char == '"':
            i = _string_end(source, i)
            continue
        if char == "`":
            i = _copy_template(source, i)[1]
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            if depth == 0:
                return i + 1
            depth -= 1
        i += 1
    return n


def _regex_end(source: str, pos: int) -> int:
    """End (exclusive) of the regex literal opening at pos.

    A "/" inside a character class does not close the regex. An
    unterminated regex runs to the end of input.
    """
    n = len(source)
    i = pos + 1
    in_class = False
    while i < n:
        char = source[i]
        if char == "\\":
            i += 2
            continue
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
        elif char == "/" and not in_class:
            return i + 1
        i += 1
    return n
