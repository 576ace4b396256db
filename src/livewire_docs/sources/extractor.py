"""Structural extraction of Livewire documentation pages.

Turns one page of HTML into a ``Document``: title, description, sections
split at ``h2`` headings with their code examples, the ``wire:`` directives
those examples use, and links to other documentation pages.

Extraction never raises. Markup that is missing or shaped differently from
what we expect simply produces empty fields.
"""

import re
from datetime import datetime

from bs4 import BeautifulSoup, Tag
from loguru import logger

from livewire_docs.catalog import FUNCTIONAL_MARKERS, base_directive, categorize
from livewire_docs.config import settings
from livewire_docs.models import DiscoveredPage, Document, Example, Section

# Description candidates, most specific first
_DESCRIPTION_SELECTORS = (
    "main p:first-of-type",
    "article p:first-of-type",
    ".prose p:first-of-type",
    "h1 + p",
)
_MIN_DESCRIPTION_LENGTH = 20
_MIN_PARAGRAPH_LENGTH = 5
_MAX_RELATED = 10

_DIRECTIVE_RE = re.compile(r"wire:[a-z][a-z0-9.-]*", re.IGNORECASE)


def _parse(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")


def _clean_text(node: Tag) -> str:
    """Element text with runs of whitespace collapsed."""
    return " ".join(node.get_text().split())


def _slug_re(version: str) -> re.Pattern[str]:
    return re.compile(r"/docs/" + re.escape(version) + r"/([^/?#]+)")


def _docs_links(soup: BeautifulSoup, version: str):
    """Yield ``(slug, anchor)`` for every link into the versioned docs tree."""
    marker = f"/docs/{version}/"
    pattern = _slug_re(version)
    for anchor in soup.find_all("a", href=True):
        href = anchor["href"]
        if marker not in href:
            continue
        match = pattern.search(href)
        if match:
            yield match.group(1), anchor


# ---------------------------------------------------------------------------
# Page fields
# ---------------------------------------------------------------------------


def extract_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    return _clean_text(h1) if h1 else ""


def extract_description(soup: BeautifulSoup) -> str:
    """First candidate paragraph longer than the minimum length, else ''."""
    for selector in _DESCRIPTION_SELECTORS:
        node = soup.select_one(selector)
        if node is None:
            continue
        text = _clean_text(node)
        if len(text) > _MIN_DESCRIPTION_LENGTH:
            return text
    return ""


def classify_example(code: str) -> str:
    if any(marker in code for marker in FUNCTIONAL_MARKERS):
        return "functional"
    return "class"


def _self_and_descendants(node: Tag):
    yield node
    yield from node.find_all(True)


def _collect_section_content(node: Tag, section: Section, lines: list[str]) -> None:
    """Pull paragraphs and code blocks out of one sibling of a heading."""
    for el in _self_and_descendants(node):
        if el.name == "p":
            text = _clean_text(el)
            if len(text) > _MIN_PARAGRAPH_LENGTH:
                lines.append(text)

    seen = {example.code for example in section.examples}
    for el in _self_and_descendants(node):
        is_code = el.name == "pre" or (
            el.name == "code" and el.find_parent("pre") is not None
        )
        if not is_code:
            continue
        code = el.get_text().strip()
        if not code or code in seen:
            continue
        seen.add(code)
        section.examples.append(Example(code=code, type=classify_example(code)))


def extract_sections(soup: BeautifulSoup) -> list[Section]:
    """Split the page at every ``h2``.

    A section owns the heading's following siblings up to the next ``h2``.
    Sections left with neither content nor examples are dropped.
    """
    sections: list[Section] = []

    for heading in soup.find_all("h2"):
        section = Section(title=_clean_text(heading))
        lines: list[str] = []

        for sibling in heading.next_siblings:
            if not isinstance(sibling, Tag):
                continue
            if sibling.name == "h2":
                break
            _collect_section_content(sibling, section, lines)

        section.content = "".join(f"{line}\n" for line in lines).strip()
        if section.content or section.examples:
            sections.append(section)

    return sections


def find_directives(code: str) -> set[str]:
    """Base directives referenced in one code snippet."""
    return {base_directive(match) for match in _DIRECTIVE_RE.findall(code)}


def extract_directives_from_content(sections: list[Section]) -> list[str]:
    """Base ``wire:`` directives used by any example, sorted.

    Modifiers are dropped, so ``wire:model.live`` and ``wire:model.blur``
    both count as ``wire:model``.
    """
    directives: set[str] = set()
    for section in sections:
        for example in section.examples:
            directives |= find_directives(example.code)
    return sorted(directives)


def extract_related(soup: BeautifulSoup, current_slug: str, version: str) -> list[str]:
    related: list[str] = []
    for slug, _anchor in _docs_links(soup, version):
        if slug != current_slug and slug not in related:
            related.append(slug)
    return related[:_MAX_RELATED]


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def extract_document(
    html: str,
    slug: str,
    *,
    url: str = "",
    version: str | None = None,
    default_category: str | None = None,
) -> Document:
    """Build a Document from raw page HTML."""
    version = version or settings.docs_version
    soup = _parse(html)
    sections = extract_sections(soup)

    return Document(
        slug=slug,
        title=extract_title(soup),
        description=extract_description(soup),
        category=categorize(slug, default_category or settings.default_category),
        url=url,
        sections=sections,
        directives_used=extract_directives_from_content(sections),
        related=extract_related(soup, slug, version),
        scraped_at=datetime.now().astimezone().isoformat(timespec="seconds"),
    )


def discover_pages(html: str, version: str | None = None) -> list[DiscoveredPage]:
    """List every documentation page linked from a navigation page."""
    version = version or settings.docs_version
    pages: list[DiscoveredPage] = []
    seen: set[str] = set()

    for slug, anchor in _docs_links(_parse(html), version):
        if slug in seen:
            continue
        seen.add(slug)
        pages.append(
            DiscoveredPage(
                slug=slug,
                category=categorize(slug, settings.default_category),
                title=_clean_text(anchor),
            )
        )

    logger.debug(f"Discovered {len(pages)} documentation pages")
    return pages


def scrape_page(client, slug: str, version: str | None = None) -> Document | None:
    """Fetch and extract one page. Returns None when the fetch fails."""
    version = version or settings.docs_version
    path = settings.docs_path(slug, version)
    html = client.fetch(path)
    if html is None:
        logger.warning(f"No content for {slug}, skipping")
        return None
    return extract_document(html, slug, url=client.url_for(path), version=version)
