"""Shield code samples from the cleaner with opaque placeholders."""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup

from .cleaner import CleaningOptions, clean_html

CODE_BLOCK_SELECTOR = 'pre, code[class*="language-"], code[class*="hljs"]'
PLACEHOLDER_TEMPLATE = "__CODE_BLOCK_{index}__"
_TAG_PATTERN = r"<(/?){name}(?=[\s/>])[^>]*>"

logger = logging.getLogger(__name__)


@dataclass
class PreservedMarkup:
    """
    Markup with code blocks swapped out for placeholders.

    Attributes:
        markup: Markup containing ``__CODE_BLOCK_<n>__`` tokens
        code_blocks: token -> original source markup of the element
    """

    markup: str
    code_blocks: dict[str, str] = field(default_factory=dict)


def preserve_code_blocks(html: str) -> PreservedMarkup:
    """
    Replace code blocks with placeholder tokens, in document order.

    Selects every ``pre`` and every ``code`` carrying a ``language-`` or
    ``hljs`` class. A match nested inside an earlier match stays inside its
    ancestor's saved markup.

    Each block is saved as the exact slice of ``html`` it was parsed from and
    the placeholder is spliced into the raw string, so restoring gives back
    the input byte for byte. An element with no closing tag in the source is
    left in place.

    Args:
        html: Markup to process

    Returns:
        PreservedMarkup with placeholder markup and the token map
    """
    soup = BeautifulSoup(html, "html.parser")
    line_starts = _line_starts(html)
    code_blocks: dict[str, str] = {}
    pieces: list[str] = []
    cursor = 0

    for element in soup.select(CODE_BLOCK_SELECTOR):
        if element.sourceline is None or element.sourcepos is None:
            continue
        start = line_starts[element.sourceline - 1] + element.sourcepos
        # Nested in a block that was already swapped out
        if start < cursor:
            continue
        end = _element_end(html, element.name, start)
        if end is None:
            logger.debug(f"No closing tag for <{element.name}> at offset {start}, not preserved")
            continue

        placeholder = PLACEHOLDER_TEMPLATE.format(index=len(code_blocks))
        code_blocks[placeholder] = html[start:end]
        pieces.append(html[cursor:start])
        pieces.append(placeholder)
        cursor = end

    pieces.append(html[cursor:])
    return PreservedMarkup(markup="".join(pieces), code_blocks=code_blocks)


def _line_starts(text: str) -> list[int]:
    """Offset of the first character of every line."""
    return [0] + [index + 1 for index, char in enumerate(text) if char == "\n"]


def _element_end(html: str, name: str, start: int) -> Optional[int]:
    """Offset just past the end tag closing the element whose start tag is at start."""
    pattern = re.compile(_TAG_PATTERN.format(name=re.escape(name)), re.IGNORECASE)
    depth = 0
    for match in pattern.finditer(html, start):
        if match.group(1):
            depth -= 1
        elif not match.group(0).endswith("/>"):
            depth += 1
        if depth == 0:
            return match.end()
    return None


def restore_code_blocks(html: str, code_blocks: dict[str, str]) -> str:
    """
    Substitute every placeholder token with its original markup.

    Args:
        html: Markup containing placeholder tokens
        code_blocks: token -> original markup

    Returns:
        Markup with code blocks restored
    """
    for placeholder, original in code_blocks.items():
        html = html.replace(placeholder, original)
    return html


def clean_html_preserving_code_blocks(html: str, options: Optional[CleaningOptions] = None) -> str:
    """
    Clean HTML while guaranteeing code samples come through unchanged.

    Args:
        html: Raw page markup
        options: Optional selector overrides for the cleaner

    Returns:
        Cleaned markup with code blocks restored verbatim
    """
    preserved = preserve_code_blocks(html)
    cleaned = clean_html(preserved.markup, options)
    return restore_code_blocks(cleaned, preserved.code_blocks)
