"""Pelican plugin to inline SVG icons referenced from generated pages.

Usage in templates or content::

    <image inline src="theme/static/icons/rss.svg">

After Pelican writes a page, every ``image`` element carrying the ``inline``
attribute and a ``src`` pointing at an ``.svg`` file is replaced with the
optimised contents of that file. Paths are resolved relative to the working
directory Pelican runs from. Everything else in the page is left byte for
byte as written.

Configuration (optional in pelicanconf.py)::

    INLINE_SVG_OPTIMIZER = {'digits': 3}  # scour option overrides

If any referenced file cannot be read or optimised, the page is left exactly
as Pelican wrote it and a warning is logged.
"""
from __future__ import annotations

import asyncio
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from pelican import signals

from .exceptions import (
    InlineSVGError,
    MalformedReferenceError,
    ParseError,
    ReadError,
)
from .svg_optimizer import Optimizer, optimize_svg, scour_optimizer

logger = logging.getLogger(__name__)

IMAGE_TAG = 'image'
INLINE_ATTR = 'inline'
SVG_MARKER = '.svg'
HTML_SUFFIXES = ('.html', '.htm')

# Same tolerance as html.parser: quoted or bare values, stray slashes.
START_TAG = re.compile(
    r"""<[^\s/>]+"""
    r"""(?:\s*(?:/(?!>)|[^\s"'>/=]+(?![^\s"'>/=])"""
    r"""(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+(?![^\s"'>])))?))*"""
    r"""\s*/?>"""
)
END_TAG = re.compile(r'</image\s*>', re.IGNORECASE)


@dataclass(frozen=True)
class Span:
    start: int
    end: int


def parse_document(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, 'html.parser')
    except ParserRejectedMarkup as exc:
        raise ParseError(str(exc)) from exc


# --- Node matching ---
def is_inline_image(node) -> bool:
    return isinstance(node, Tag) and node.name == IMAGE_TAG and INLINE_ATTR in node.attrs


def source_path(node: Tag) -> str:
    src = node.get('src')
    if not src or SVG_MARKER not in src:
        raise MalformedReferenceError(f"<{IMAGE_TAG} {INLINE_ATTR}> needs an {SVG_MARKER} src, got {src!r}")
    return src


def is_eligible(node) -> bool:
    if not is_inline_image(node):
        return False
    try:
        source_path(node)
    except MalformedReferenceError as exc:
        logger.debug("Skipping inline image: %s", exc)
        return False
    return True


# --- Tree walking ---
def _walk(document) -> Iterator[Tag]:
    # Explicit stack: generated pages can nest deeper than the recursion limit.
    stack = [child for child in reversed(document.contents) if isinstance(child, Tag)]
    while stack:
        node = stack.pop()
        if is_eligible(node):
            yield node
        else:
            stack.extend(child for child in reversed(node.contents) if isinstance(child, Tag))


def collect_all(document) -> List[Tag]:
    return list(_walk(document))


def find_first(document) -> Optional[Tag]:
    return next(_walk(document), None)


# --- Splicing ---
def _line_starts(html: str) -> List[int]:
    starts = [0]
    starts.extend(match.end() for match in re.finditer('\n', html))
    return starts


def node_span(html: str, node: Tag, line_starts: Optional[List[int]] = None) -> Span:
    """Locate *node*'s markup in *html*, the string it was parsed from.

    The span covers the start tag, plus a ``</image>`` directly after it.
    """
    if line_starts is None:
        line_starts = _line_starts(html)
    start = line_starts[node.sourceline - 1] + node.sourcepos
    match = START_TAG.match(html, start)
    end = match.end() if match else html.index('>', start) + 1
    closing = END_TAG.match(html, end)
    if closing:
        end = closing.end()
    return Span(start, end)


def splice(html: str, span: Span, replacement: str) -> str:
    return html[:span.start] + replacement + html[span.end:]


# --- Loading ---
async def load_svg(path: str) -> str:
    location = Path.cwd() / path
    try:
        return await asyncio.to_thread(location.read_text, encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path) from exc


# --- Pipeline ---
async def _inline_images(html: str, config, optimizer: Optimizer) -> str:
    pending = collect_all(parse_document(html))
    if not pending:
        return html
    logger.debug("Found %d inline SVG image(s)", len(pending))

    # Splicing shifts every later offset, so each step re-parses the latest
    # string and takes the first image after the last inlined content.
    # Markers inside an inlined SVG are never followed.
    cursor = 0
    for _ in range(len(pending)):
        found = _next_after(html, cursor)
        if found is None:
            break
        node, span = found
        path = source_path(node)
        raw = await load_svg(path)
        svg = await optimize_svg(raw, config, optimizer, path=path)
        html = splice(html, span, svg)
        cursor = span.start + len(svg)
        logger.debug("Inlined %s", path)
    return html


def _next_after(html: str, cursor: int):
    line_starts = _line_starts(html)
    for node in _walk(parse_document(html)):
        span = node_span(html, node, line_starts)
        if span.start >= cursor:
            return node, span
    return None


async def process_document(html: str, config=None, *, optimizer: Optimizer = scour_optimizer) -> str:
    """Return *html* with every eligible image inlined.

    Never raises for a broken reference: if any image fails to load or
    optimise, the original *html* is returned unchanged.
    """
    try:
        return await _inline_images(html, config or {}, optimizer)
    except InlineSVGError as exc:
        logger.warning("Inline SVG skipped, page left unchanged: %s (%s)", exc, exc.__cause__)
        return html


# --- Pelican hooks ---
def optimizer_config(settings) -> dict:
    value = settings.get('INLINE_SVG_OPTIMIZER') if settings else None
    return dict(value) if isinstance(value, Mapping) else {}


def inline_written_page(path, context=None):
    page = Path(path)
    if page.suffix.lower() not in HTML_SUFFIXES:
        return

    html = page.read_text(encoding='utf-8')
    result = asyncio.run(process_document(html, optimizer_config(context)))
    if result and result != html:
        page.write_text(result, encoding='utf-8')
        logger.info("Inlined SVG images in %s", page)


def register():  # Pelican entry point
    signals.content_written.connect(inline_written_page)
