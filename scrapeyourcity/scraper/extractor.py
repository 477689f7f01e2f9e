"""
Project page extraction and canonicalization.

Turns a fetched project page into a ProjectSnapshot whose markup is
deterministic: re-fetching an unchanged page yields identical text, which is
what makes content fingerprints meaningful.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Comment, Tag
from markdownify import markdownify as md

from scrapeyourcity.exceptions import ExtractionError
from scrapeyourcity.scraper.models import ExtractionRules, ProjectSnapshot

logger = logging.getLogger(__name__)

DEFAULT_RULES = ExtractionRules()

PRESERVE_WHITESPACE_TAGS = ["pre", "textarea"]


def absolutize(href: str, base_url: str) -> str:
    """
    Resolve a possibly relative reference against a base URL.

    Args:
        href: Link or image reference as found in the page
        base_url: URL of the page the reference appears on

    Returns:
        Absolute URL, or "" if the reference cannot be parsed
    """
    try:
        return urljoin(base_url, href.strip())
    except ValueError:
        return ""


def sanitize_content(container: Tag, base_url: str, rules: ExtractionRules = DEFAULT_RULES) -> Tag:
    """
    Remove noise from a content container in place.

    Applies the rule set: drops noise elements, strips volatile attributes
    and rewrites relative links and images to absolute URLs.

    Args:
        container: Content element of the page
        base_url: URL used to resolve relative references
        rules: Extraction rules

    Returns:
        The same container, sanitized
    """
    for selector in rules.remove_selectors:
        for element in container.select(selector):
            element.decompose()

    for comment in container.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for selector, attribute in rules.strip_attributes:
        for element in container.select(selector):
            element.attrs.pop(attribute, None)

    for selector, attribute in rules.absolutize_attributes:
        for element in container.select(f"{selector}[{attribute}]"):
            element[attribute] = absolutize(element[attribute], base_url)

    return container


def normalize_whitespace(container: Tag) -> Tag:
    """Collapse whitespace in text nodes in place, except inside pre/textarea."""
    for string in container.find_all(string=True):
        if string.find_parent(PRESERVE_WHITESPACE_TAGS):
            continue
        collapsed = " ".join(string.split())
        if collapsed:
            if collapsed != string:
                string.replace_with(collapsed)
        else:
            string.extract()
    return container


def format_html(container: Tag) -> str:
    """
    Pretty-print the children of an element, one tag per line.

    Whitespace in text is normalized first (the container is modified), so
    whitespace differences in the source do not change the output.

    Args:
        container: Element whose inner markup is formatted

    Returns:
        Indented markup ending in a single newline ("" if empty)
    """
    normalize_whitespace(container)

    parts = []
    for child in container.children:
        if isinstance(child, Tag):
            parts.append(child.prettify())
        else:
            text = " ".join(child.split())
            if text:
                parts.append(text + "\n")

    formatted = "".join(parts).strip()
    return formatted + "\n" if formatted else ""


def html_to_markdown(html: str) -> str:
    """
    Convert HTML to Markdown using markdownify.

    Pure function of its input; used to derive the stored Markdown form.

    Args:
        html: Canonical markup

    Returns:
        Markdown string
    """
    markdown = md(
        html,
        heading_style="ATX",
        bullets="-",
        escape_asterisks=False,
        escape_underscores=False,
    )

    # Collapse runs of blank lines
    lines = markdown.split("\n")
    cleaned_lines = []
    prev_blank = False

    for line in lines:
        line = line.rstrip()
        is_blank = not line

        if is_blank and prev_blank:
            continue

        cleaned_lines.append(line)
        prev_blank = is_blank

    return "\n".join(cleaned_lines).strip()


def extract_project(
    html: str,
    url: str,
    state: str = "",
    rules: ExtractionRules = DEFAULT_RULES,
) -> ProjectSnapshot:
    """
    Full extraction pipeline: find container → sanitize → title → format.

    Args:
        html: Raw project page HTML
        url: Canonical project URL
        state: Project state from the listing tile
        rules: Extraction rules

    Returns:
        ProjectSnapshot with canonical markup

    Raises:
        ExtractionError: If the content container is missing
    """
    soup = BeautifulSoup(html, "lxml")

    container = soup.select_one(rules.content_selector)
    if container is None:
        raise ExtractionError(url, f"content container {rules.content_selector!r} not found")

    sanitize_content(container, url, rules)

    title_element = container.select_one(rules.title_selector)
    title = title_element.get_text(" ", strip=True) if title_element else ""
    if not title:
        logger.warning(f"No title found for {url}")

    return ProjectSnapshot(url=url, title=title, state=state, html=format_html(container))
