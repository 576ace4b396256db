"""Markdown rendering of pages, directives and listings."""

from livewire_docs.catalog import CATEGORY_TITLES, DIRECTIVES_CATEGORY
from livewire_docs.models import Directive, Document, SearchResult
from livewire_docs.store import DocStore


def _fence_language(code: str) -> str:
    stripped = code.strip()
    if stripped.startswith("<?"):
        return "php"
    if "<" in code and ">" in code:
        return "blade"
    return "php"


def render_document(doc: Document, section: str | None = None) -> str:
    """Render a page; ``section`` narrows output to one section by title.

    An unknown section title falls back to the full page with a notice.
    """
    lines = [f"# {doc.title or doc.slug}"]
    if doc.description:
        lines.append(doc.description)
    if doc.url:
        lines.append(f"Source: {doc.url}")
    lines.append("")

    wanted = section.lower() if section else None
    if wanted and not any(s.title.lower() == wanted for s in doc.sections):
        lines += [f"Section '{section}' not found, showing all sections.", ""]
        wanted = None

    for s in doc.sections:
        if wanted and s.title.lower() != wanted:
            continue
        lines.append(f"## {s.title}")
        if s.content:
            lines.append(s.content)
        for example in s.examples:
            lines.append("")
            if example.type == "functional":
                lines.append("*Volt (functional):*")
            lines += [f"```{_fence_language(example.code)}", example.code, "```"]
        lines.append("")

    if not wanted:
        if doc.directives_used:
            lines += ["## Directives Used", ", ".join(doc.directives_used), ""]
        if doc.related:
            lines += ["## Related", ", ".join(doc.related), ""]

    return "\n".join(lines).rstrip() + "\n"


def render_directive(directive: Directive) -> str:
    lines = [f"# {directive.name}", ""]
    if directive.description:
        lines += [directive.description, ""]

    if directive.variants:
        lines += ["## Variants", "", "| Syntax | Description |", "| --- | --- |"]
        lines += [f"| `{v.syntax}` | {v.description} |" for v in directive.variants]
        lines.append("")

    if directive.examples:
        lines += ["## Examples", ""]
        for example in directive.examples:
            lines += ["```blade", example, "```", ""]

    if directive.related_topics:
        lines += ["## Related Topics", ", ".join(directive.related_topics), ""]

    return "\n".join(lines).rstrip() + "\n"


def render_listing(store: DocStore, category: str | None = None) -> str:
    lines = ["# Livewire Documentation", ""]
    total = 0
    for cat, slugs in store.list_by_category(category).items():
        if not slugs:
            continue
        lines.append(f"## {CATEGORY_TITLES.get(cat, cat.capitalize())}")
        for slug in slugs:
            if cat == DIRECTIVES_CATEGORY:
                directive = store.find_directive(slug)
                title = directive.name if directive else slug
            else:
                doc = store.find(slug, cat)
                title = doc.title if doc and doc.title else slug.replace("-", " ").capitalize()
            lines.append(f"  {slug} - {title}")
            total += 1
        lines.append("")
    lines.append(f"Total: {total} topics")
    return "\n".join(lines) + "\n"


def render_results(query: str, results: list[SearchResult]) -> str:
    if not results:
        return f"No results for: {query}\n"

    lines = [f"Results for: {query}", "", "| Name | Category | Description |", "| --- | --- | --- |"]
    for r in results:
        name = r.slug or r.name or ""
        category = "directive" if r.type == "directive" else r.category
        desc = r.description[:50] + ("..." if len(r.description) > 50 else "")
        lines.append(f"| {name} | {category} | {desc} |")
    return "\n".join(lines) + "\n"
