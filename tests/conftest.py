"""Pytest configuration and fixtures."""

import pytest

from livewire_docs.models import Document, Example, Section
from livewire_docs.store import DocStore

FORMS_PAGE = r"""<!DOCTYPE html>
<html>
<body>
<nav>
  <a href="/docs/3.x/quickstart">Quickstart</a>
  <a href="/docs/3.x/properties">Properties</a>
  <a href="/docs/3.x/forms#submitting">Forms</a>
  <a href="https://livewire.laravel.com/docs/3.x/properties?ref=nav">Properties again</a>
  <a href="/blog/announcing-livewire">Blog</a>
</nav>
<main>
  <h1>Forms</h1>
  <p>Forms are the backbone of most web applications built with Livewire.</p>
  <h2>Submitting a form</h2>
  <p>Let's start by looking at a very simple form.</p>
  <pre><code>&lt;form wire:submit="save"&gt;
    &lt;input type="text" wire:model.live="title"&gt;
    &lt;input type="text" wire:model.blur="content"&gt;
&lt;/form&gt;</code></pre>
  <p>Short</p>
  <h2>Empty section</h2>
  <h2>Using Volt</h2>
  <div class="example">
    <p>The same form written as a functional component.</p>
    <pre><code>&lt;?php
use function Livewire\Volt\state;

state(['title' =&gt; '']);</code></pre>
  </div>
</main>
</body>
</html>
"""


@pytest.fixture
def forms_html():
    """A documentation page with sections, code and nav links."""
    return FORMS_PAGE


@pytest.fixture
def store(tmp_path):
    """Create an empty DocStore rooted in a temporary directory."""
    return DocStore(tmp_path / "data")


def make_document(slug: str, category: str = "essentials", **overrides) -> Document:
    fields = {
        "slug": slug,
        "title": slug.replace("-", " ").title(),
        "description": f"All about {slug}.",
        "category": category,
        "url": f"https://livewire.laravel.com/docs/3.x/{slug}",
        "sections": [
            Section(
                title="Basics",
                content=f"How {slug} works.",
                examples=[Example(code=f'<div wire:key="{slug}"></div>')],
            )
        ],
        "directives_used": ["wire:key"],
        "related": [],
        "scraped_at": "2024-05-01T12:00:00+00:00",
    }
    fields.update(overrides)
    return Document(**fields)


@pytest.fixture
def document_factory():
    """Factory for Document records with sensible defaults."""
    return make_document
