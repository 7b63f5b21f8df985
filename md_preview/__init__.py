"""
md-preview: preview HTML for loosely formatted markdown-like text.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-preview notes.md

Library Usage:
    from md_preview import convert, convert_document

    html = convert("# Title\\n\\n- first\\n- second")

    result = convert_document(text)
    if not result.ok:
        print(result.diagnostic)
"""

from .converter import convert, convert_document
from .exceptions import RecoverableTransformError
from .lists import classify_list_item, match_list_item, scan_lines
from .models import ConversionOutcome, ConversionResult

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "convert",
    "convert_document",
    # Data models
    "ConversionOutcome",
    "ConversionResult",
    # Utilities
    "classify_list_item",
    "match_list_item",
    "scan_lines",
    # Exceptions
    "RecoverableTransformError",
    # Version
    "__version__",
]
