"""Error-path and malformed input tests.

Unsupported content types are the only error minifyx raises. Every
scanner is total: malformed input yields best-effort output, never an
exception.
"""

import pytest

from minifyx import ContentType, MinifyxError, UnsupportedTypeError, minify
from minifyx.minifier import minify_html
from minifyx.scanners import minify_css, minify_js, minify_json, minify_xml

# =========================================================================
# UnsupportedTypeError construction and formatting
# =========================================================================


class TestUnsupportedTypeErrorFormatting:
    """Verify UnsupportedTypeError produces well-formatted messages."""

    def test_is_minifyx_error(self) -> None:
        assert issubclass(UnsupportedTypeError, MinifyxError)
        assert issubclass(MinifyxError, Exception)

    def test_message_names_value(self) -> None:
        err = UnsupportedTypeError("yaml")
        assert "'yaml'" in str(err)
        assert "html, css, js, json, xml" in str(err)
        assert err.content_type == "yaml"
        assert err.source_file is None

    def test_with_source_file(self) -> None:
        err = UnsupportedTypeError(ContentType.UNKNOWN, source_file="notes.txt")
        assert str(err).startswith("notes.txt: ")
        assert err.source_file == "notes.txt"


class TestMinifyRejectsUnknownTypes:
    """minify() dispatch failures."""

    def test_unknown_enum(self) -> None:
        with pytest.raises(UnsupportedTypeError) as exc_info:
            minify("x", ContentType.UNKNOWN)
        assert exc_info.value.content_type is ContentType.UNKNOWN

    @pytest.mark.parametrize("name", ["yaml", "", "unknown", "htm"])
    def test_unknown_name(self, name: str) -> None:
        with pytest.raises(UnsupportedTypeError):
            minify("x", name)

    def test_non_string_type(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            minify("x", 42)  # type: ignore[arg-type]

    def test_catchable_as_base(self) -> None:
        with pytest.raises(MinifyxError):
            minify("x", "txt")


# =========================================================================
# Malformed input degrades gracefully
# =========================================================================


class TestMalformedInput:
    """Unterminated constructs run to end of input."""

    def test_css_unterminated_comment(self) -> None:
        assert minify_css("a{color:red} /* never closed") == "a{color:red}"

    def test_css_unterminated_string(self) -> None:
        assert minify_css('a{content:"open') == 'a{content:"open'

    def test_json_unterminated_string(self) -> None:
        assert minify_json('{"a": "b  c') == '{"a":"b  c'

    def test_js_unterminated_string(self) -> None:
        assert minify_js("x = 'abc  def") == "x='abc  def"

    def test_js_unterminated_block_comment(self) -> None:
        assert minify_js("a = 1; /* trailing") == "a=1;"

    def test_js_unterminated_template(self) -> None:
        assert minify_js("s = `a\nb") == "s=`a\\nb"

    def test_xml_unterminated_comment(self) -> None:
        assert minify_xml("<r><!-- x") == "<r>"

    def test_xml_unterminated_cdata(self) -> None:
        assert minify_xml("<r><![CDATA[ x ") == "<r><![CDATA[ x "

    def test_html_unclosed_pre(self) -> None:
        """An unclosed protected element is not protected."""
        assert minify_html("<div>\n<pre>  a   b") == "<div><pre> a b"

    def test_html_unclosed_tag(self) -> None:
        assert minify_html("<p>a</p>   <div class='x'") == "<p>a</p><div class='x'"

    @pytest.mark.parametrize("kind", ["html", "css", "js", "json", "xml"])
    def test_empty_input(self, kind: str) -> None:
        assert minify("", kind) == ""

    @pytest.mark.parametrize("kind", ["html", "css", "js", "json", "xml"])
    def test_whitespace_only_input(self, kind: str) -> None:
        assert minify(" \n\t \r\n ", kind) == ""
