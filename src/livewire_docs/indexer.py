"""Search index derivation.

The index is always rebuilt from the whole corpus. Nothing is merged with
or patched into a previous index.
"""

from datetime import datetime

from loguru import logger

from livewire_docs.catalog import strip_prefix
from livewire_docs.models import (
    Directive,
    DirectiveEntry,
    Document,
    SearchIndex,
    TopicEntry,
)
from livewire_docs.store import DocStore

INDEX_VERSION = "1.0"


def _unique(items) -> list[str]:
    return list(dict.fromkeys(item for item in items if item))


def topic_keywords(doc: Document) -> list[str]:
    """Title words, related slugs, section titles and directives used."""
    keywords: list[str] = []
    if doc.title:
        keywords.extend(doc.title.lower().split(" "))
    keywords.extend(doc.related)
    keywords.extend(s.title.lower() for s in doc.sections if s.title)
    keywords.extend(doc.directives_used)
    return _unique(keywords)


def directive_keywords(directive: Directive) -> list[str]:
    keywords = [directive.name, strip_prefix(directive.name)]
    keywords.extend(v.syntax for v in directive.variants)
    keywords.extend(directive.related_topics)
    return _unique(keywords)


def build_index(store: DocStore) -> SearchIndex:
    """Derive a fresh index from every page and directive in ``store``."""
    topics = [
        TopicEntry(
            slug=doc.slug or slug,
            title=doc.title or slug.capitalize(),
            description=doc.description,
            category=category,
            keywords=topic_keywords(doc),
        )
        for category in store.topic_categories
        for slug in store.list_category(category)
        if (doc := store.find(slug, category)) is not None
    ]

    directives = [
        DirectiveEntry(
            name=directive.name,
            description=directive.description,
            keywords=directive_keywords(directive),
            variants=[v.syntax for v in directive.variants],
        )
        for directive in store.list_directives()
    ]

    return SearchIndex(
        version=INDEX_VERSION,
        updated_at=datetime.now().astimezone().isoformat(timespec="seconds"),
        topics=topics,
        directives=directives,
    )


def rebuild_index(store: DocStore) -> SearchIndex:
    """Build the index and replace ``index.json`` with it."""
    index = build_index(store)
    store.save_index(index)
    logger.info(
        f"Search index rebuilt: {len(index.topics)} topics, "
        f"{len(index.directives)} directives"
    )
    return index
