"""Directive reference records.

Directive pages are not scraped one by one: their variants and descriptions
come from the static tables in ``catalog``, and the scraped corpus supplies
related topics and example snippets.
"""

from collections.abc import Iterable

from livewire_docs.catalog import (
    DIRECTIVE_DESCRIPTIONS,
    DIRECTIVE_VARIANTS,
    GENERIC_DIRECTIVE_DESCRIPTION,
    KNOWN_DIRECTIVES,
)
from livewire_docs.models import Directive, Document, Variant
from livewire_docs.sources.extractor import find_directives

_MAX_EXAMPLES = 3


def build_directive(name: str) -> Directive:
    """Directive record for ``name`` from the static tables."""
    variants = DIRECTIVE_VARIANTS.get(name, ((name, GENERIC_DIRECTIVE_DESCRIPTION),))
    return Directive(
        name=name,
        description=DIRECTIVE_DESCRIPTIONS.get(name, GENERIC_DIRECTIVE_DESCRIPTION),
        variants=[Variant(syntax=s, description=d) for s, d in variants],
    )


def generate_directives() -> dict[str, Directive]:
    return {name: build_directive(name) for name in KNOWN_DIRECTIVES}


def enrich_directive(
    directive: Directive,
    documents: Iterable[Document],
    max_examples: int = _MAX_EXAMPLES,
) -> Directive:
    """Fill related topics and examples from the pages that use the directive."""
    related: list[str] = []
    examples: list[str] = []

    for doc in documents:
        if directive.name not in doc.directives_used:
            continue
        if doc.slug not in related:
            related.append(doc.slug)
        for section in doc.sections:
            for example in section.examples:
                if len(examples) >= max_examples:
                    break
                if example.code in examples:
                    continue
                if directive.name in find_directives(example.code):
                    examples.append(example.code)

    return directive.model_copy(update={"related_topics": related, "examples": examples})
