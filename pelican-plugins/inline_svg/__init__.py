from .exceptions import (  # noqa: F401
    InlineSVGError,
    MalformedReferenceError,
    OptimizeError,
    ParseError,
    ReadError,
)
from .inline_svg import process_document, register  # noqa: F401
