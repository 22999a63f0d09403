"""Errors raised while inlining SVG images."""
from __future__ import annotations


class InlineSVGError(Exception):
    """Base class; any of these aborts a pass and leaves the page untouched."""


class ParseError(InlineSVGError):
    pass


class MalformedReferenceError(InlineSVGError):
    """An ``<image inline>`` without a usable ``.svg`` src. Never fatal."""


class ReadError(InlineSVGError):
    def __init__(self, path: str):
        super().__init__(f"could not read {path}")
        self.path = path


class OptimizeError(InlineSVGError):
    def __init__(self, path: str):
        super().__init__(f"optimizer failed on {path}")
        self.path = path
