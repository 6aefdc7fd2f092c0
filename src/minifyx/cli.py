"""Command-line interface for minifyx.

Usage:
    minifyx index.html main.css app.js          # writes *.min.* next to inputs
    minifyx -o dist/ index.html main.css        # writes into dist/
    minifyx --stdout data.json
    cat page.html | minifyx --stdin --type html

Exit codes:
    0   success (or nothing to do)
    1   a file could not be read or written
    2   unsupported content type, or --stdin without a valid --type

Files are minified in parallel on a thread pool. A failing file is
reported and the rest of the batch still runs; the exit code reflects the
worst failure seen.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from minifyx import __version__
from minifyx.config import MinifyOptions
from minifyx.content import ContentType
from minifyx.errors import UnsupportedTypeError
from minifyx.minifier import minify, minify_file
from minifyx.utils.logger import get_logger

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_TYPE_ERROR = 2

_TYPE_CHOICES = ("html", "css", "js", "json", "xml")


def resolve_version() -> str:
    """Installed distribution version, or the package version when not installed."""
    try:
        return version("minifyx")
    except PackageNotFoundError:
        return __version__


def build_parser(cli_version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minifyx",
        description="Minify HTML, CSS, JavaScript, JSON and XML files.",
        epilog="Example: minifyx --parallel 4 index.html style.css app.js",
    )
    parser.add_argument("files", nargs="*", help="Files to minify")
    parser.add_argument("-o", "--output", help="Output file or directory")
    parser.add_argument("--stdout", action="store_true", help="Write results to stdout")
    parser.add_argument("--stdin", action="store_true", help="Read input from stdin (needs --type)")
    parser.add_argument(
        "--type",
        dest="content_type",
        type=str.lower,
        help="Force content type: html|css|js|json|xml",
    )
    parser.add_argument(
        "--parallel",
        type=int,
        default=os.cpu_count() or 1,
        help="Number of files minified concurrently (default: CPU count)",
    )
    parser.add_argument("--version", action="version", version=f"minifyx {cli_version}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    html = parser.add_argument_group("HTML options")
    html.add_argument(
        "--no-preserve-precode",
        dest="preserve_precode",
        action="store_false",
        help="Do not protect <pre> or collapse <code> content",
    )
    html.add_argument(
        "--keep-html-comments",
        dest="remove_html_comments",
        action="store_false",
        help="Keep <!-- ... --> comments",
    )
    html.add_argument(
        "--no-html-whitespace",
        dest="html_whitespace",
        action="store_false",
        help="Do not collapse whitespace outside protected blocks",
    )
    html.add_argument(
        "--no-html-templates",
        dest="html_templates",
        action="store_false",
        help="Do not minify <template> and template <script> content",
    )
    html.add_argument(
        "--no-html-json",
        dest="html_json",
        action="store_false",
        help="Do not minify JSON scripts and data-json attributes",
    )

    xml = parser.add_argument_group("XML options")
    xml.add_argument(
        "--keep-xml-comments",
        dest="remove_xml_comments",
        action="store_false",
        help="Keep XML comments",
    )
    xml.add_argument(
        "--no-xml-whitespace",
        dest="xml_whitespace",
        action="store_false",
        help="Do not collapse whitespace and indentation in XML",
    )
    return parser


def options_from_args(args: argparse.Namespace) -> MinifyOptions:
    """Translate parsed CLI flags into MinifyOptions."""
    changes: dict[str, bool] = {
        "remove_html_comments": args.remove_html_comments,
        "xml_remove_comments": args.remove_xml_comments,
        # --preserve-precode also collapses <code> to one line
        "preserve_pre": args.preserve_precode,
        "trim_pre_right": args.preserve_precode,
        "minify_code_blocks": args.preserve_precode,
    }
    if not args.xml_whitespace:
        changes["xml_collapse_tag_whitespace"] = False
        changes["xml_collapse_attr_whitespace"] = False
    if not args.html_templates:
        changes["minify_html_templates"] = False
        changes["minify_script_templates"] = False
    if not args.html_json:
        changes["minify_json_scripts"] = False
        changes["minify_data_json"] = False
    if not args.html_whitespace:
        changes["collapse_html_whitespace"] = False
        changes["tighten_block_tag_gaps"] = False
    return MinifyOptions().replace(**changes)


def output_path(source: str, output: str | None, forced_type: str | None) -> Path:
    """Where the minified copy of source is written.

    Without -o the result lands next to the input as ``name.min.ext``. When
    -o is a directory it lands there instead (with --type replacing the
    extension); any other -o value is used as the file name.
    """
    path = Path(source)
    if output is None:
        return path.with_name(f"{path.stem}.min{path.suffix}")

    dest = Path(output)
    if dest.is_dir():
        suffix = f".{forced_type}" if forced_type else path.suffix
        return dest / f"{path.stem}.min{suffix}"
    return dest


def _run_stdin(args: argparse.Namespace, opts: MinifyOptions) -> int:
    if args.content_type not in _TYPE_CHOICES:
        logger.error("--type is required with --stdin (html|css|js|json|xml)")
        return EXIT_TYPE_ERROR

    try:
        source = sys.stdin.read()
    except OSError as e:
        logger.error("Error reading stdin: %s", e)
        return EXIT_IO_ERROR

    result = minify(source, args.content_type, opts)

    if args.stdout or args.output is None:
        sys.stdout.write(result)
        return EXIT_OK

    try:
        Path(args.output).write_text(result, encoding="utf-8")
    except OSError as e:
        logger.error("Error writing %s: %s", args.output, e)
        return EXIT_IO_ERROR
    return EXIT_OK


def _run_files(args: argparse.Namespace, opts: MinifyOptions) -> int:
    forced = ContentType.from_name(args.content_type) if args.content_type else None
    workers = max(1, args.parallel)
    exit_code = EXIT_OK

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            (path, executor.submit(minify_file, path, opts, forced)) for path in args.files
        ]

        # Report in input order so --stdout output is deterministic
        for path, future in futures:
            try:
                result = future.result()
            except UnsupportedTypeError as e:
                logger.error("%s", e)
                exit_code = max(exit_code, EXIT_TYPE_ERROR)
                continue
            except OSError as e:
                logger.error("Error reading %s: %s", path, e)
                exit_code = max(exit_code, EXIT_IO_ERROR)
                continue

            if args.stdout:
                print(result)
                continue

            dest = output_path(path, args.output, args.content_type)
            try:
                dest.write_text(result, encoding="utf-8")
            except OSError as e:
                logger.error("Error writing %s: %s", dest, e)
                exit_code = max(exit_code, EXIT_IO_ERROR)
                continue
            logger.info("Minified: %s", dest)

    return exit_code


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for the ``minifyx`` console script."""
    parser = build_parser(resolve_version())
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    opts = options_from_args(args)

    if args.stdin:
        return _run_stdin(args, opts)

    if not args.files:
        parser.print_usage()
        return EXIT_OK

    return _run_files(args, opts)


if __name__ == "__main__":
    sys.exit(main())
