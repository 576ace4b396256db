"""Livewire Docs MCP Server - Main server definition."""

import asyncio
import json
import sys
from contextlib import asynccontextmanager
from importlib.resources import files

from loguru import logger
from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from livewire_docs.catalog import CATEGORIES
from livewire_docs.config import settings
from livewire_docs.errors import LivewireDocsError
from livewire_docs.indexer import rebuild_index
from livewire_docs.render import (
    render_directive,
    render_document,
    render_listing,
    render_results,
)
from livewire_docs.search import SearchEngine
from livewire_docs.sources.fetcher import DocsClient
from livewire_docs.store import DocStore
from livewire_docs.updater import update_all, update_directives, update_single

# Configure logging
logger.remove()
logger.add(sys.stderr, level=settings.log_level)

_SUGGESTION_LIMIT = 5
_DIRECTIVE_HINT_LIMIT = 10

# Module-level state (set during lifespan, created lazily otherwise)
_store: DocStore | None = None


def _get_store() -> DocStore:
    global _store
    if _store is None:
        _store = DocStore(settings.get_data_dir())
    return _store


def _dumps(payload) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


@asynccontextmanager
async def _lifespan(_server: FastMCP):
    """Server lifespan: open the corpus store and report its state."""
    global _store

    logger.info("Starting Livewire Docs MCP Server...")
    _store = DocStore(settings.get_data_dir())

    if _store.load_index() is None:
        logger.warning(
            f"No search index at {_store.index_path}. "
            "Run `livewire-docs update` or the manage tool with action='update'."
        )

    yield

    logger.info("Shutting down Livewire Docs MCP Server...")
    _store = None


mcp = FastMCP(
    name="livewire-docs",
    instructions=(
        "Offline Livewire v3 documentation. "
        "Use `docs` to list, show and search topics and wire: directives. "
        "Use `manage` to refresh the corpus from livewire.laravel.com."
    ),
    lifespan=_lifespan,
)


# ---------------------------------------------------------------------------
# docs tool: list, show, search, directive, directives
# ---------------------------------------------------------------------------


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def docs(
    action: str,
    topic: str | None = None,
    query: str | None = None,
    name: str | None = None,
    category: str | None = None,
    section: str | None = None,
    limit: int = 0,
    format: str = "markdown",
) -> str:
    """Read the offline Livewire documentation.
    - list: Topics per category (optional category)
    - show: One topic (requires topic, optional section)
    - search: Fuzzy search over topics and directives (requires query)
    - directive: One wire: directive (requires name, e.g. model, wire:model.live)
    - directives: All directives
    Set format="json" for raw records. Use `help` tool for full documentation.
    """
    store = _get_store()
    as_json = format == "json"

    match action:
        case "list":
            if category and category not in CATEGORIES:
                return (
                    f"Error: Unknown category '{category}'. "
                    f"Valid categories: {', '.join(CATEGORIES)}"
                )
            if as_json:
                return _dumps(store.list_by_category(category))
            return render_listing(store, category)

        case "show":
            if not topic:
                return "Error: topic is required for show action"
            doc = store.find(topic)
            if doc is None:
                suggestions = store.suggest(topic, _SUGGESTION_LIMIT)
                if as_json:
                    return _dumps(
                        {"error": f"Not found: {topic}", "suggestions": suggestions}
                    )
                hint = "".join(f"\n  - {s}" for s in suggestions)
                return f"Error: Not found: {topic}" + (
                    f"\nDid you mean:{hint}" if hint else ""
                )
            if as_json:
                return _dumps(doc.model_dump())
            return render_document(doc, section)

        case "search":
            if not query:
                return "Error: query is required for search action"
            results = SearchEngine(store).search(query, limit or settings.search_limit)
            if as_json:
                return _dumps([r.model_dump() for r in results])
            return render_results(query, results)

        case "directive":
            if not name:
                return "Error: name is required for directive action"
            directive = store.find_directive(name)
            if directive is None:
                available = [d.name for d in store.list_directives()][:_DIRECTIVE_HINT_LIMIT]
                if as_json:
                    return _dumps(
                        {"error": f"Directive not found: {name}", "available": available}
                    )
                hint = "".join(f"\n  - {d}" for d in available)
                return f"Error: Directive not found: {name}" + (
                    f"\nAvailable directives:{hint}" if hint else ""
                )
            if as_json:
                return _dumps(directive.model_dump())
            return render_directive(directive)

        case "directives":
            directives = store.list_directives()
            if as_json:
                return _dumps([d.model_dump() for d in directives])
            return "\n".join(f"- {d.name}: {d.description}" for d in directives) + "\n"

        case _:
            return (
                f"Error: Unknown action '{action}'. "
                "Valid actions: list, show, search, directive, directives"
            )


# ---------------------------------------------------------------------------
# manage tool: status, update, directives, reindex
# ---------------------------------------------------------------------------


def _run_update(item: str | None, dry_run: bool, delay_ms: int | None) -> dict:
    store = _get_store()
    with DocsClient() as client:
        if item:
            doc = update_single(client, store, item, dry_run=dry_run)
            return {"status": "dry_run" if dry_run else "saved", "document": doc.model_dump()}
        report = update_all(client, store, delay_ms=delay_ms, dry_run=dry_run)
        return report.model_dump()


@mcp.tool(
    description=(
        "Corpus management. Actions: status|update|directives|reindex. "
        "Use help tool with tool_name='manage' for full docs."
    ),
    annotations=ToolAnnotations(
        title="Manage",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=True,
    ),
)
async def manage(
    action: str,
    item: str | None = None,
    dry_run: bool = False,
    delay_ms: int | None = None,
) -> str:
    """Corpus management.

    Actions:
    - status: Data directory, counts per category, index timestamp
    - update: Scrape the site (item = single slug, otherwise everything)
    - directives: Regenerate directive files and the index
    - reindex: Rebuild the search index and back-links from stored pages
    """
    store = _get_store()

    match action:
        case "status":
            status = store.stats()
            status["source"] = {
                "base_url": settings.docs_base_url,
                "version": settings.docs_version,
                "request_delay_ms": settings.request_delay_ms,
            }
            return _dumps(status)

        case "update":
            try:
                result = await asyncio.to_thread(_run_update, item, dry_run, delay_ms)
            except LivewireDocsError as e:
                return _dumps({"error": str(e)})
            return _dumps(result)

        case "directives":
            try:
                directives = await asyncio.to_thread(
                    update_directives, store, dry_run=dry_run
                )
            except LivewireDocsError as e:
                return _dumps({"error": str(e)})
            return _dumps(
                {
                    "status": "dry_run" if dry_run else "generated",
                    "directives": [d.name for d in directives],
                }
            )

        case "reindex":
            try:
                index = await asyncio.to_thread(rebuild_index, store)
                links = await asyncio.to_thread(store.ensure_bidirectional_links)
            except LivewireDocsError as e:
                return _dumps({"error": str(e)})
            return _dumps(
                {
                    "status": "rebuilt",
                    "topics": len(index.topics),
                    "directives": len(index.directives),
                    "links_added": links,
                    "updated_at": index.updated_at,
                }
            )

        case _:
            return _dumps(
                {
                    "error": f"Unknown action: {action}",
                    "valid_actions": ["status", "update", "directives", "reindex"],
                }
            )


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=True,
        openWorldHint=False,
        idempotentHint=True,
    ),
)
async def help(tool_name: str = "docs") -> str:
    """Get full documentation for a tool.
    Valid tool names: docs, manage.
    """
    try:
        doc_file = files("livewire_docs.docs").joinpath(f"{tool_name}.md")
        return doc_file.read_text()
    except FileNotFoundError:
        return f"Error: No documentation found for tool '{tool_name}'"


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


@mcp.prompt()
def livewire_question(question: str) -> str:
    """Generate a prompt to answer a Livewire question from the offline docs."""
    return (
        f"Answer this Livewire question: {question}\n\n"
        "1. Use the docs tool with action='search' to find matching topics.\n"
        "2. Use action='show' on the best topic, or action='directive' for wire: "
        "attributes.\n"
        "3. Quote the relevant code examples in your answer."
    )


def main() -> None:
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
