"""Relevance-ranked fuzzy search over the search index.

Scoring works on the index alone and never touches the page files. Exact
slug/title (or directive name/variant) matches return a fixed top score;
everything else accumulates points from partial matches, keyword hits and
a small edit-distance bonus on slugs.
"""

from livewire_docs.catalog import DIRECTIVE_PREFIX, strip_prefix
from livewire_docs.fuzzy import levenshtein
from livewire_docs.models import DirectiveEntry, SearchIndex, SearchResult, TopicEntry
from livewire_docs.store import DocStore

# Topic scores
_SLUG_EXACT = 100
_TITLE_EXACT = 95
_SLUG_PREFIX = 80
_SLUG_CONTAINS = 60
_TITLE_PREFIX = 50
_TITLE_CONTAINS = 40
_DESCRIPTION_CONTAINS = 20
_KEYWORD_EXACT = 15
_KEYWORD_CONTAINS = 10
_FUZZY_BASE = 25
_FUZZY_STEP = 10
_FUZZY_MAX_DISTANCE = 2

# Directive scores
_NAME_EXACT = 100
_VARIANT_EXACT = 95
_NAME_CONTAINS = 70
_VARIANT_CONTAINS = 50


def score_topic(query: str, item: TopicEntry) -> tuple[int, str]:
    """Score one topic against a lowercased query.

    Returns ``(score, match_source)``; the first rule that fires names the
    source, later rules still add to the score.
    """
    slug = item.slug.lower()
    title = item.title.lower()
    description = item.description.lower()

    if slug == query:
        return _SLUG_EXACT, "slug"
    if title == query:
        return _TITLE_EXACT, "title"

    score = 0
    source: str | None = None

    if slug.startswith(query):
        score += _SLUG_PREFIX
        source = "slug"
    elif query in slug:
        score += _SLUG_CONTAINS
        source = "slug"

    if title.startswith(query):
        score += _TITLE_PREFIX
        source = source or "title"
    elif query in title:
        score += _TITLE_CONTAINS
        source = source or "title"

    if query in description:
        score += _DESCRIPTION_CONTAINS
        source = source or "description"

    for keyword in (k.lower() for k in item.keywords):
        if keyword == query:
            score += _KEYWORD_EXACT
            source = source or "keyword"
        elif query in keyword:
            score += _KEYWORD_CONTAINS
            source = source or "keyword"

    distance = levenshtein(query, slug)
    if 0 < distance <= _FUZZY_MAX_DISTANCE:
        score += max(0, _FUZZY_BASE - distance * _FUZZY_STEP)
        source = source or "fuzzy"

    return score, source or "keyword"


def score_directive(query: str, item: DirectiveEntry) -> tuple[int, str]:
    """Score one directive; ``wire:`` is optional on both sides."""
    name = item.name.lower()
    description = item.description.lower()
    variants = [v.lower() for v in item.variants]

    normalized_query = strip_prefix(query)
    normalized_name = strip_prefix(name)

    if (
        name == query
        or name == f"{DIRECTIVE_PREFIX}{query}"
        or normalized_name == normalized_query
    ):
        return _NAME_EXACT, "name"

    for variant in variants:
        if variant == query or strip_prefix(variant) == normalized_query:
            return _VARIANT_EXACT, "variant"

    score = 0
    source: str | None = None

    if query in name or normalized_query in normalized_name:
        score += _NAME_CONTAINS
        source = "name"

    for variant in variants:
        if query in variant or normalized_query in variant:
            score += _VARIANT_CONTAINS
            source = source or "variant"
            break

    if query in description:
        score += _DESCRIPTION_CONTAINS
        source = source or "description"

    return score, source or "keyword"


def search(index: SearchIndex | None, query: str, limit: int = 10) -> list[SearchResult]:
    """Rank topics and directives for ``query``; zero scores are dropped.

    Ties keep production order: topics first, then directives, each in
    index order.
    """
    if index is None:
        return []

    query = query.strip().lower()
    if not query or limit <= 0:
        return []

    results: list[SearchResult] = []

    for topic in index.topics:
        score, source = score_topic(query, topic)
        if score > 0:
            results.append(
                SearchResult(
                    **topic.model_dump(), type="topic", score=score, match_source=source
                )
            )

    for directive in index.directives:
        score, source = score_directive(query, directive)
        if score > 0:
            results.append(
                SearchResult(
                    **directive.model_dump(),
                    type="directive",
                    score=score,
                    match_source=source,
                )
            )

    # sorted() is stable, so equal scores keep the order above
    results = sorted(results, key=lambda r: r.score, reverse=True)
    return results[:limit]


class SearchEngine:
    """Answers queries from the store's persisted index."""

    def __init__(self, store: DocStore):
        self._store = store

    def search(self, query: str, limit: int = 10) -> list[SearchResult]:
        return search(self._store.load_index(), query, limit)
