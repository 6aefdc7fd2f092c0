"""Tests for the public API: dispatch, detection, files and streams."""

import io
import logging
from pathlib import Path

import pytest

from minifyx import (
    ContentType,
    MinifyOptions,
    UnsupportedTypeError,
    detect_type,
    minify,
    minify_file,
    minify_stream,
    minify_to_stream,
)


class TestDetectType:
    """Extension-based content type detection."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("index.html", ContentType.HTML),
            ("INDEX.HTM", ContentType.HTML),
            ("site/main.css", ContentType.CSS),
            ("app.min.js", ContentType.JS),
            ("data.JSON", ContentType.JSON),
            ("feed.xml", ContentType.XML),
            ("notes.txt", ContentType.UNKNOWN),
            ("Makefile", ContentType.UNKNOWN),
            ("archive.tar.gz", ContentType.UNKNOWN),
        ],
    )
    def test_paths(self, path: str, expected: ContentType) -> None:
        assert detect_type(path) is expected

    @pytest.mark.parametrize("ext", ["css", ".css", "CSS", ".Css"])
    def test_bare_extension(self, ext: str) -> None:
        assert detect_type(ext) is ContentType.CSS

    def test_pathlib(self) -> None:
        assert detect_type(Path("a") / "b.xml") is ContentType.XML


class TestMinifyDispatch:
    """minify() routes to the right scanner."""

    @pytest.mark.parametrize(
        ("kind", "source", "expected"),
        [
            (ContentType.HTML, "<div>\n  <p>a</p>\n</div>", "<div><p>a</p></div>"),
            (ContentType.CSS, "a { b : c ; }", "a{b:c;}"),
            (ContentType.JS, "var a = 1 ;", "var a=1;"),
            (ContentType.JSON, '{ "a" : [1, 2] }', '{"a":[1,2]}'),
            (ContentType.XML, "<r>\n <c/>\n</r>", "<r><c/></r>"),
        ],
    )
    def test_each_type(self, kind: ContentType, source: str, expected: str) -> None:
        assert minify(source, kind) == expected

    @pytest.mark.parametrize("name", ["json", "JSON", " json "])
    def test_type_by_name(self, name: str) -> None:
        assert minify('{ "a": 1 }', name) == '{"a":1}'

    def test_options_forwarded_to_html(self) -> None:
        opts = MinifyOptions(remove_html_comments=False)
        assert minify("<p><!--x--></p>", ContentType.HTML, opts) == "<p><!--x--></p>"

    def test_options_forwarded_to_xml(self) -> None:
        opts = MinifyOptions(xml_remove_comments=False)
        assert minify("<r><!--x--></r>", "xml", opts) == "<r><!--x--></r>"

    def test_deterministic(self) -> None:
        source = "<div> <script> return\n1 </script> <pre> x </pre> </div>"
        assert minify(source, "html") == minify(source, "html")


class TestMinifyFile:
    """File helper."""

    def test_detects_type(self, tmp_path: Path) -> None:
        path = tmp_path / "style.css"
        path.write_text("a { color : red ; }\n", encoding="utf-8")
        assert minify_file(path) == "a{color:red;}"

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text('{ "a": "João" }', encoding="utf-8")
        assert minify_file(str(path)) == '{"a":"João"}'

    def test_forced_type(self, tmp_path: Path) -> None:
        path = tmp_path / "page.tpl"
        path.write_text("<div>\n  <p>a</p>\n</div>", encoding="utf-8")
        assert minify_file(path, content_type="html") == "<div><p>a</p></div>"

    def test_unknown_type_fails_before_reading(self, tmp_path: Path) -> None:
        """The type check comes first, so a missing file still reports the type."""
        missing = tmp_path / "missing.txt"
        with pytest.raises(UnsupportedTypeError) as exc_info:
            minify_file(missing)
        assert exc_info.value.source_file == str(missing)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            minify_file(tmp_path / "missing.css")

    def test_logs_detected_type(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        path = tmp_path / "a.js"
        path.write_text("x = 1", encoding="utf-8")
        with caplog.at_level(logging.DEBUG, logger="minifyx"):
            minify_file(path)
        assert any("as js" in record.getMessage() for record in caplog.records)


class TestStreams:
    """Reader/writer helpers."""

    def test_minify_stream(self) -> None:
        assert minify_stream(io.StringIO("a { b : c }"), "css") == "a{b:c}"

    def test_minify_to_stream(self) -> None:
        writer = io.StringIO()
        minify_to_stream(io.StringIO("[1, 2]"), writer, ContentType.JSON)
        assert writer.getvalue() == "[1,2]"

    def test_unknown_type_does_not_read(self) -> None:
        reader = io.StringIO("data")
        with pytest.raises(UnsupportedTypeError):
            minify_stream(reader, "yaml")
        assert reader.tell() == 0

    def test_to_stream_writes_nothing_on_error(self) -> None:
        writer = io.StringIO()
        with pytest.raises(UnsupportedTypeError):
            minify_to_stream(io.StringIO("x"), writer, ContentType.UNKNOWN)
        assert writer.getvalue() == ""
