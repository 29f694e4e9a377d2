"""HTML to Markdown conversion driven by an ordered rule table on top of markdownify."""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, NavigableString, Tag
from markdownify import ATX, UNDERLINED, MarkdownConverter

from ..errors import ConversionError

logger = logging.getLogger(__name__)

# Never rendered
SKIPPED_TAGS = ("head", "script", "style", "noscript", "template", "title")

# URL schemes left alone when resolving against a base URL
_UNRESOLVED_PREFIXES = ("#", "mailto:", "tel:", "data:", "javascript:")

FENCE = "```"

_LANGUAGE_CLASS = re.compile(r"language-(\w+)")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_BLANK_LINE_SPACES = re.compile(r"^[ \t]+$", re.MULTILINE)
_TRAILING_SPACES = re.compile(r"[ \t]+$", re.MULTILINE)


@dataclass(frozen=True)
class ConversionOptions:
    """
    Markdown flavour settings.

    Attributes:
        heading_style: ``atx`` (``# Title``) or ``setext`` (underlined h1/h2)
        code_block_style: ``fenced`` or ``indented``
        bullet_list_marker: Marker for unordered list items
        base_url: If set, relative link and image URLs are resolved against it
    """

    heading_style: Literal["atx", "setext"] = "atx"
    code_block_style: Literal["fenced", "indented"] = "fenced"
    bullet_list_marker: Literal["-", "*", "+"] = "-"
    base_url: Optional[str] = None

    def __post_init__(self) -> None:
        if self.heading_style not in ("atx", "setext"):
            raise ValueError(f"Invalid heading style: {self.heading_style}")
        if self.code_block_style not in ("fenced", "indented"):
            raise ValueError(f"Invalid code block style: {self.code_block_style}")
        if self.bullet_list_marker not in ("-", "*", "+"):
            raise ValueError(f"Invalid bullet list marker: {self.bullet_list_marker}")

    def markdownify_options(self) -> dict[str, Any]:
        """Keyword options for ``markdownify.MarkdownConverter``."""
        return {
            "heading_style": UNDERLINED if self.heading_style == "setext" else ATX,
            "bullets": self.bullet_list_marker,
            "code_language_callback": code_language,
            "escape_asterisks": False,
            "escape_underscores": False,
            "escape_misc": False,
        }


Predicate = Callable[[Tag, ConversionOptions], bool]
Renderer = Callable[[str, Tag, ConversionOptions], str]


@dataclass(frozen=True)
class Rule:
    """
    One entry of the conversion rule table.

    The first rule whose predicate accepts an element renders it. The renderer
    receives the element's already-converted children as ``content``.
    """

    name: str
    predicate: Predicate
    render: Renderer


def _tags(*names: str) -> Predicate:
    wanted = frozenset(names)
    return lambda node, options: node.name in wanted


def _attr(node: Tag, name: str) -> str:
    value = node.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or ""


def _first_element_child(node: Tag) -> Optional[Tag]:
    for child in node.children:
        if isinstance(child, Tag):
            return child
        if isinstance(child, NavigableString) and child.strip():
            return None
    return None


def code_language(node: Tag) -> str:
    """Language named by a ``language-*`` class on a ``pre`` or its leading ``code``."""
    candidates = [node]
    first = _first_element_child(node)
    if first is not None and first.name == "code":
        candidates.insert(0, first)
    for candidate in candidates:
        match = _LANGUAGE_CLASS.search(_attr(candidate, "class"))
        if match:
            return match.group(1)
    return ""


def _code_block(code: str, language: str, options: ConversionOptions) -> str:
    if options.code_block_style == "indented":
        indented = "\n".join("    " + line for line in code.rstrip("\n").split("\n"))
        return f"\n\n{indented}\n\n"
    if not code.endswith("\n"):
        code += "\n"
    return f"\n\n{FENCE}{language}\n{code}{FENCE}\n\n"


# Rules, highest priority first. Elements none of them accept are rendered by
# markdownify's own convert_<tag> methods.


def _is_code_block_with_language(node: Tag, options: ConversionOptions) -> bool:
    if node.name != "pre":
        return False
    first = _first_element_child(node)
    return first is not None and first.name == "code"


def _render_code_block_with_language(content: str, node: Tag, options: ConversionOptions) -> str:
    return _code_block(node.get_text(), code_language(node), options)


def _is_inline_code(node: Tag, options: ConversionOptions) -> bool:
    return node.name == "code" and node.find_parent("pre") is None


def _render_inline_code(content: str, node: Tag, options: ConversionOptions) -> str:
    text = node.get_text()
    return f"`{text}`" if text else ""


def _render_table(content: str, node: Tag, options: ConversionOptions) -> str:
    rows = content.strip("\n")
    return f"\n\n{rows}\n\n"


def _is_link_with_title(node: Tag, options: ConversionOptions) -> bool:
    return node.name == "a" and bool(_attr(node, "href")) and bool(_attr(node, "title"))


def _render_link_with_title(content: str, node: Tag, options: ConversionOptions) -> str:
    return f'[{content.strip()}]({_attr(node, "href")} "{_attr(node, "title")}")'


def _render_image(content: str, node: Tag, options: ConversionOptions) -> str:
    src = _attr(node, "src")
    if not src:
        return ""
    title = _attr(node, "title")
    title_part = f' "{title}"' if title else ""
    return f"![{_attr(node, 'alt')}]({src}{title_part})"


def _is_empty_paragraph(node: Tag, options: ConversionOptions) -> bool:
    return node.name == "p" and not node.get_text().strip()


def _render_blockquote(content: str, node: Tag, options: ConversionOptions) -> str:
    body = _EXCESS_NEWLINES.sub("\n\n", content.strip("\n"))
    quoted = "\n".join("> " + line for line in body.split("\n"))
    return f"\n\n{quoted}\n\n"


CUSTOM_RULES: tuple[Rule, ...] = (
    Rule("codeBlockWithLanguage", _is_code_block_with_language, _render_code_block_with_language),
    Rule("inlineCode", _is_inline_code, _render_inline_code),
    Rule("table", _tags("table"), _render_table),
    Rule("linkWithTitle", _is_link_with_title, _render_link_with_title),
    Rule("image", _tags("img"), _render_image),
    Rule("emptyParagraph", _is_empty_paragraph, lambda content, node, options: "\n"),
    Rule("horizontalRule", _tags("hr"), lambda content, node, options: "\n\n---\n\n"),
    Rule("blockquote", _tags("blockquote"), _render_blockquote),
    Rule("lineBreak", _tags("br"), lambda content, node, options: "  \n"),
)


class RuleTableConverter(MarkdownConverter):
    """
    markdownify converter that consults a rule table before its own
    ``convert_<tag>`` methods.

    markdownify caches one conversion function per tag name, so the lookup
    happens inside the returned function, once per element.
    """

    def __init__(self, rules: Sequence[Rule], options: ConversionOptions, **kwargs: Any):
        self._rules = tuple(rules)
        self._conversion = options
        super().__init__(**{**options.markdownify_options(), **kwargs})

    def get_conv_fn(self, tag_name: str) -> Callable[..., str]:
        default = super().get_conv_fn(tag_name)

        def convert(el: Tag, text: str, parent_tags: Optional[set[str]] = None) -> str:
            for rule in self._rules:
                if rule.predicate(el, self._conversion):
                    return rule.render(text, el, self._conversion)
            if default is None:
                return text
            return default(el, text, parent_tags=parent_tags)

        return convert

    def convert_pre(self, el: Tag, text: str, parent_tags: Optional[set[str]] = None) -> str:
        if self._conversion.code_block_style == "indented":
            return _code_block(el.get_text(), "", self._conversion)
        return super().convert_pre(el, text, parent_tags=parent_tags)


def _resolve_urls(soup: BeautifulSoup, base_url: str) -> None:
    """Resolve relative link and image URLs in place."""
    for tag in soup.find_all(["a", "img"]):
        attribute = "href" if tag.name == "a" else "src"
        value = tag.get(attribute)
        if isinstance(value, str) and value and not value.startswith(_UNRESOLVED_PREFIXES):
            tag[attribute] = urljoin(base_url, value)


@dataclass
class ConversionResult:
    """Markdown plus its word count."""

    markdown: str
    word_count: int


class HtmlToMarkdown:
    """
    Converts cleaned documentation HTML to Markdown.

    Elements are rendered by the first matching rule in
    ``extra_rules + CUSTOM_RULES``; everything else goes through markdownify's
    per-tag defaults (headings, paragraphs, emphasis, lists, links, ``pre``).

    Example:
        converter = HtmlToMarkdown(ConversionOptions(bullet_list_marker="*"))
        markdown = converter.convert(html_string)
    """

    def __init__(
        self,
        options: Optional[ConversionOptions] = None,
        extra_rules: Sequence[Rule] = (),
    ):
        """
        Initialize the Markdown converter.

        Args:
            options: Markdown flavour settings
            extra_rules: Rules consulted before the built-in ones
        """
        self._options = options or ConversionOptions()
        self._rules: tuple[Rule, ...] = (*extra_rules, *CUSTOM_RULES)

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def _post_process(self, markdown: str) -> str:
        markdown = _BLANK_LINE_SPACES.sub("", markdown)
        markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)
        return markdown.strip()

    def convert(self, html: str, base_url: Optional[str] = None) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            base_url: Optional URL for resolving relative links and images

        Returns:
            Markdown string

        Raises:
            ConversionError: If the transform fails for any reason
        """
        options = self._options
        if base_url:
            options = dataclasses.replace(options, base_url=base_url)

        try:
            soup = BeautifulSoup(html, "html.parser")
            for element in soup.find_all(list(SKIPPED_TAGS)):
                # Already gone with a skipped ancestor
                if not element.decomposed:
                    element.decompose()
            if options.base_url:
                _resolve_urls(soup, options.base_url)

            markdown = RuleTableConverter(self._rules, options).convert_soup(soup)
            return self._post_process(markdown)
        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e!r}")
            raise ConversionError(
                "Failed to convert HTML to Markdown",
                {"error": str(e) or type(e).__name__},
            ) from e

    def convert_with_stats(self, html: str, base_url: Optional[str] = None) -> ConversionResult:
        """Convert HTML and count the words of the result."""
        markdown = self.convert(html, base_url)
        return ConversionResult(markdown=markdown, word_count=count_words(markdown))


def count_words(markdown: str) -> int:
    """
    Count prose words in Markdown.

    Fenced code, inline code and images are ignored; links count as their
    text.
    """
    text = re.sub(r"```[\s\S]*?```", "", markdown)
    text = re.sub(r"`[^`]+`", "", text)
    text = re.sub(r"!\[[^\]]*\]\([^)]+\)", "", text)
    text = re.sub(r"\[([^\]]+)\]\([^)]+\)", r"\1", text)
    return len(text.split())


def clean_markdown(markdown: str) -> str:
    """Collapse blank-line runs, strip trailing spaces and trim. Idempotent."""
    markdown = _TRAILING_SPACES.sub("", markdown)
    markdown = _EXCESS_NEWLINES.sub("\n\n", markdown)
    return markdown.strip()


def html_to_markdown(html: str, options: Optional[ConversionOptions] = None) -> str:
    return HtmlToMarkdown(options).convert(html)


def html_to_markdown_with_stats(
    html: str,
    options: Optional[ConversionOptions] = None,
) -> ConversionResult:
    return HtmlToMarkdown(options).convert_with_stats(html)
