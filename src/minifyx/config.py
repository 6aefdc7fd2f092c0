"""Minification options and ContextVar-based defaults for minifyx.

Options are an immutable record of boolean toggles, one per optional
behavior. Every entry point accepts an explicit ``MinifyOptions``; when
none is given, the options active in the current context are used.

Thread Safety:
    MinifyOptions is frozen, so a single instance can be shared freely.
    The context default lives in a ContextVar, which is thread-local by
    design. Setting it in one thread never affects another, and nothing
    in minifyx mutates process-wide configuration.

Usage:
    # Explicit options (preferred)
    from minifyx import MinifyOptions, minify_html

    opts = MinifyOptions(minify_code_blocks=True)
    html = minify_html(source, opts)

    # Context-local defaults
    from minifyx.config import minify_options_context

    with minify_options_context(MinifyOptions(remove_html_comments=False)):
        html = minify_html(source)  # comments kept here

"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class MinifyOptions:
    """Immutable minification options.

    All collapsing and removal behaviors default to on. The exceptions are
    ``minify_code_blocks`` (raw ``<code>`` content is left alone) and the two
    comment-preservation switches, which only matter when comment removal
    is on.

    Attributes:
        remove_html_comments: Drop ``<!-- ... -->`` blocks from HTML
        preserve_conditional_comments: Keep ``<!--[if ...]>`` comments when removing
        preserve_license_comments: Keep ``<!--! ... -->`` comments when removing
        preserve_pre: Protect ``<pre>`` elements from whitespace collapsing
        trim_pre_right: Drop exactly one trailing line break inside ``<pre>``
        minify_code_blocks: Collapse ``<code>`` content to a single line
        minify_textarea: Trim leading/trailing whitespace inside ``<textarea>``
        minify_html_templates: Minify HTML inside ``<template>``
        minify_script_templates: Minify HTML inside template-type ``<script>``
        minify_inline_css: Run the CSS scanner over ``<style>`` content
        minify_inline_js: Run the JS scanner over ``<script>`` content
        minify_json_scripts: Run the JSON scanner over JSON ``<script>`` content
        minify_data_json: Run the JSON scanner over ``data-json`` attribute values
        collapse_html_whitespace: Apply the HTML-aware whitespace pass
        preserve_inline_tag_spaces: Keep one space between adjacent inline tags
        tighten_block_tag_gaps: Remove whitespace before block-level tags
        xml_remove_comments: Drop XML comments
        xml_collapse_attr_whitespace: Collapse whitespace inside XML tags
        xml_collapse_tag_whitespace: Drop whitespace-only XML text nodes
        xml_preserve_cdata: CDATA is copied verbatim (always honored)

    """

    # HTML comments
    remove_html_comments: bool = True
    preserve_conditional_comments: bool = False
    preserve_license_comments: bool = False

    # Special text/code blocks
    preserve_pre: bool = True
    trim_pre_right: bool = True
    minify_code_blocks: bool = False
    minify_textarea: bool = True

    # Templates
    minify_html_templates: bool = True
    minify_script_templates: bool = True

    # Embedded CSS / JS / JSON
    minify_inline_css: bool = True
    minify_inline_js: bool = True
    minify_json_scripts: bool = True
    minify_data_json: bool = True

    # Outer HTML whitespace
    collapse_html_whitespace: bool = True
    preserve_inline_tag_spaces: bool = True
    tighten_block_tag_gaps: bool = True

    # XML only
    xml_remove_comments: bool = True
    xml_collapse_attr_whitespace: bool = True
    xml_collapse_tag_whitespace: bool = True
    xml_preserve_cdata: bool = True

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> MinifyOptions:
        """Create MinifyOptions from a mapping.

        Useful when options come from external sources (CLI layers, TOML
        or YAML files). Only keys that are MinifyOptions fields are used;
        unknown keys are silently ignored.

        Args:
            config_dict: Mapping with option values keyed by field name.

        Returns:
            New MinifyOptions instance.

        Example:
            >>> opts = MinifyOptions.from_dict({
            ...     "minify_code_blocks": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> opts.minify_code_blocks
            True

        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)

    def replace(self, **changes: bool) -> MinifyOptions:
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


# Module-level default options (reused, never recreated)
_DEFAULT_OPTIONS: MinifyOptions = MinifyOptions()

_minify_options: ContextVar[MinifyOptions] = ContextVar(
    "minify_options",
    default=_DEFAULT_OPTIONS,
)


def get_minify_options() -> MinifyOptions:
    """Get the options active in the current context.

    Returns:
        The active MinifyOptions for this thread/context.

    """
    return _minify_options.get()


def set_minify_options(options: MinifyOptions) -> None:
    """Set the default options for the current context.

    Args:
        options: MinifyOptions instance to use for this context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _minify_options.set(options)


def reset_minify_options() -> None:
    """Reset the current context to the default options."""
    _minify_options.set(_DEFAULT_OPTIONS)


@contextmanager
def minify_options_context(options: MinifyOptions) -> Iterator[None]:
    """Context manager for temporary option changes.

    Args:
        options: MinifyOptions to use within the context.

    Yields:
        None

    Example:
        >>> with minify_options_context(MinifyOptions(preserve_pre=False)):
        ...     out = minify_html("<pre> a </pre>")
        >>> # Previous options restored here

    Thread Safety:
        Only affects the current thread's context. Properly restores the
        previous options even if an exception is raised.

    """
    previous = _minify_options.get()
    _minify_options.set(options)
    try:
        yield
    finally:
        _minify_options.set(previous)


def resolve_options(options: MinifyOptions | None) -> MinifyOptions:
    """Return ``options`` or, when None, the context default."""
    return options if options is not None else _minify_options.get()


__all__ = [
    "MinifyOptions",
    "get_minify_options",
    "minify_options_context",
    "reset_minify_options",
    "resolve_options",
    "set_minify_options",
]
