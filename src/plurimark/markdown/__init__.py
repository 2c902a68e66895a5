"""Markdown placeholder compiler.

Python 3.13+. Uses markdown-it-py.
"""

from .placeholders import (
    ExtractionResult,
    PlaceholderMapping,
    apply_placeholders,
    compile_markdown,
    compile_markdown_with_mappings,
    extract_placeholders,
)

__all__ = [
    "ExtractionResult",
    "PlaceholderMapping",
    "apply_placeholders",
    "compile_markdown",
    "compile_markdown_with_mappings",
    "extract_placeholders",
]
