"""Tests for src/livewire_docs/sources/extractor.py — page extraction.

Covers title/description selection, section splitting, example
classification and de-duplication, directive extraction, related links,
discovery, and degradation on missing markup.
"""

from unittest.mock import MagicMock

from bs4 import BeautifulSoup

from livewire_docs.models import Example, Section
from livewire_docs.sources.extractor import (
    classify_example,
    discover_pages,
    extract_description,
    extract_directives_from_content,
    extract_document,
    extract_related,
    extract_sections,
    extract_title,
    scrape_page,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# -----------------------------------------------------------------------
# Full document
# -----------------------------------------------------------------------


class TestExtractDocument:
    def test_fields(self, forms_html):
        doc = extract_document(forms_html, "forms", url="https://x/docs/3.x/forms")

        assert doc.slug == "forms"
        assert doc.title == "Forms"
        assert doc.description.startswith("Forms are the backbone")
        assert doc.category == "essentials"
        assert doc.url == "https://x/docs/3.x/forms"
        assert doc.directives_used == ["wire:model", "wire:submit"]
        assert doc.related == ["quickstart", "properties"]
        assert doc.scraped_at

    def test_sections(self, forms_html):
        doc = extract_document(forms_html, "forms")
        titles = [s.title for s in doc.sections]

        # "Empty section" has nothing between it and the next h2
        assert titles == ["Submitting a form", "Using Volt"]

        submitting = doc.sections[0]
        assert submitting.content == "Let's start by looking at a very simple form."
        assert len(submitting.examples) == 1
        assert submitting.examples[0].type == "class"
        assert 'wire:model.live="title"' in submitting.examples[0].code
        # Line structure of code is kept
        assert "\n" in submitting.examples[0].code

    def test_functional_example(self, forms_html):
        doc = extract_document(forms_html, "forms")
        volt = doc.sections[1]
        assert volt.content == "The same form written as a functional component."
        assert volt.examples[0].type == "functional"

    def test_empty_markup_degrades(self):
        doc = extract_document("", "mystery-page")
        assert doc.title == ""
        assert doc.description == ""
        assert doc.sections == []
        assert doc.directives_used == []
        assert doc.related == []
        assert doc.category == "features"

    def test_malformed_markup_does_not_raise(self):
        doc = extract_document("<h1>Broken<h2>Oops<p>never closed", "broken")
        assert doc.title.startswith("Broken")


# -----------------------------------------------------------------------
# Title / description
# -----------------------------------------------------------------------


class TestTitleAndDescription:
    def test_title_whitespace_collapsed(self):
        assert extract_title(_soup("<h1>  Lifecycle\n   hooks </h1>")) == "Lifecycle hooks"

    def test_missing_title(self):
        assert extract_title(_soup("<p>No heading</p>")) == ""

    def test_short_candidates_skipped(self):
        html = "<main><p>Too short</p></main><h1>T</h1><p>This paragraph is long enough to count.</p>"
        assert extract_description(_soup(html)) == "This paragraph is long enough to count."

    def test_exactly_twenty_chars_rejected(self):
        html = "<main><p>12345678901234567890</p></main>"
        assert extract_description(_soup(html)) == ""

    def test_article_fallback(self):
        html = "<article><p>Article paragraphs describe the page too.</p></article>"
        assert extract_description(_soup(html)) == "Article paragraphs describe the page too."


# -----------------------------------------------------------------------
# Sections and examples
# -----------------------------------------------------------------------


class TestSections:
    def test_duplicate_code_dropped(self):
        html = """
        <h2>Twice</h2>
        <pre><code>$this-&gt;save();</code></pre>
        <pre><code>$this-&gt;save();</code></pre>
        <pre><code>$this-&gt;reset();</code></pre>
        """
        sections = extract_sections(_soup(html))
        codes = [e.code for e in sections[0].examples]
        assert codes == ["$this->save();", "$this->reset();"]

    def test_section_stops_at_next_h2(self):
        html = "<h2>One</h2><p>First section text.</p><h2>Two</h2><p>Second section text.</p>"
        sections = extract_sections(_soup(html))
        assert [s.content for s in sections] == [
            "First section text.",
            "Second section text.",
        ]

    def test_paragraphs_joined_with_newlines(self):
        html = "<h2>Multi</h2><p>Paragraph one.</p><div><p>Paragraph two.</p></div>"
        sections = extract_sections(_soup(html))
        assert sections[0].content == "Paragraph one.\nParagraph two."

    def test_examples_only_section_kept(self):
        html = "<h2>Code only</h2><pre>php artisan livewire:make counter</pre>"
        sections = extract_sections(_soup(html))
        assert sections[0].content == ""
        assert sections[0].examples[0].code == "php artisan livewire:make counter"

    def test_classify(self):
        assert classify_example("Volt::route('/', 'counter');") == "functional"
        assert classify_example("state(['count' => 0]);") == "functional"
        assert classify_example("class Counter extends Component {}") == "class"


# -----------------------------------------------------------------------
# Directive references
# -----------------------------------------------------------------------


class TestDirectives:
    def test_modifiers_collapse_to_base(self):
        sections = [
            Section(
                title="Binding",
                examples=[
                    Example(code='<input wire:model.live="name">'),
                    Example(code='<input wire:model.blur="email">'),
                ],
            )
        ]
        assert extract_directives_from_content(sections) == ["wire:model"]

    def test_sorted_across_sections(self):
        sections = [
            Section(title="A", examples=[Example(code='<button wire:click.prevent="go">')]),
            Section(title="B", examples=[Example(code="<div wire:poll.5s wire:loading>")]),
        ]
        assert extract_directives_from_content(sections) == [
            "wire:click",
            "wire:loading",
            "wire:poll",
        ]

    def test_no_examples(self):
        assert extract_directives_from_content([Section(title="Prose", content="text")]) == []


# -----------------------------------------------------------------------
# Related links and discovery
# -----------------------------------------------------------------------


class TestRelatedAndDiscovery:
    def test_related_capped_at_ten(self):
        links = "".join(f'<a href="/docs/3.x/page-{i}">p{i}</a>' for i in range(15))
        related = extract_related(_soup(links), "page-0", "3.x")
        assert related == [f"page-{i}" for i in range(1, 11)]

    def test_other_versions_ignored(self):
        html = '<a href="/docs/2.x/properties">old</a><a href="/docs/3.x/events">new</a>'
        assert extract_related(_soup(html), "forms", "3.x") == ["events"]

    def test_discover_pages(self, forms_html):
        pages = discover_pages(forms_html, "3.x")
        assert [p.slug for p in pages] == ["quickstart", "properties", "forms"]
        assert pages[0].category == "getting-started"
        assert pages[1].title == "Properties"


class TestScrapePage:
    def test_fetch_failure_returns_none(self):
        client = MagicMock()
        client.fetch.return_value = None
        assert scrape_page(client, "forms", "3.x") is None
        client.fetch.assert_called_once_with("/docs/3.x/forms")

    def test_success(self, forms_html):
        client = MagicMock()
        client.fetch.return_value = forms_html
        client.url_for.return_value = "https://livewire.laravel.com/docs/3.x/forms"

        doc = scrape_page(client, "forms", "3.x")

        assert doc is not None
        assert doc.url == "https://livewire.laravel.com/docs/3.x/forms"
        assert doc.title == "Forms"
