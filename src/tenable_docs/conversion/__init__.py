"""Content conversion for tenable_docs (cleaning, code preservation, Markdown)."""

from .cleaner import CleaningOptions, HtmlCleaner, clean_html
from .markdown import (
    ConversionOptions,
    ConversionResult,
    HtmlToMarkdown,
    Rule,
    clean_markdown,
    count_words,
    html_to_markdown,
    html_to_markdown_with_stats,
)
from .metadata import PageMetadata, extract_metadata, extract_title
from .preserver import (
    PreservedMarkup,
    clean_html_preserving_code_blocks,
    preserve_code_blocks,
    restore_code_blocks,
)

__all__ = [
    # Cleaning
    "CleaningOptions",
    "HtmlCleaner",
    "clean_html",
    # Code preservation
    "PreservedMarkup",
    "preserve_code_blocks",
    "restore_code_blocks",
    "clean_html_preserving_code_blocks",
    # Markdown
    "ConversionOptions",
    "ConversionResult",
    "HtmlToMarkdown",
    "Rule",
    "clean_markdown",
    "count_words",
    "html_to_markdown",
    "html_to_markdown_with_stats",
    # Metadata
    "PageMetadata",
    "extract_metadata",
    "extract_title",
]
