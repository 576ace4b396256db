"""Update pipeline: scrape the site, persist pages, regenerate derived data.

Pages are fetched one at a time with a pause after every request so the
documentation server is never hit in parallel. A page that cannot be
fetched or written is counted as a failure and the run moves on; pages
already written stay in place if the run is interrupted.
"""

import time

from loguru import logger

from livewire_docs.catalog import directive_key
from livewire_docs.config import settings
from livewire_docs.errors import StorageError, UpdateError
from livewire_docs.indexer import rebuild_index
from livewire_docs.models import Directive, DiscoveredPage, Document, UpdateReport
from livewire_docs.sources.directives import enrich_directive, generate_directives
from livewire_docs.sources.extractor import discover_pages, scrape_page
from livewire_docs.sources.fetcher import DocsClient
from livewire_docs.store import DocStore

# Navigation on this page links to every other documentation page
_DISCOVERY_SLUG = "quickstart"


def discover(client: DocsClient, version: str | None = None) -> list[DiscoveredPage]:
    version = version or settings.docs_version
    html = client.fetch(settings.docs_path(_DISCOVERY_SLUG, version))
    if html is None:
        return []
    return discover_pages(html, version)


def build_directives(store: DocStore) -> list[Directive]:
    """Known directives, enriched with topics and examples from the corpus."""
    documents = [doc for _category, doc in store.iter_documents()]
    return [enrich_directive(d, documents) for d in generate_directives().values()]


def update_directives(store: DocStore, *, dry_run: bool = False) -> list[Directive]:
    """Regenerate every directive file and the index."""
    directives = build_directives(store)
    if dry_run:
        logger.info(f"Dry run: would write {len(directives)} directive files")
        return directives

    for directive in directives:
        store.save_directive(directive)
    logger.info(f"Generated {len(directives)} directive files")

    rebuild_index(store)
    return directives


def update_single(
    client: DocsClient,
    store: DocStore,
    slug: str,
    *,
    dry_run: bool = False,
) -> Document:
    """Scrape and store one page, then refresh the index and links."""
    logger.info(f"Scraping: {slug}")
    doc = scrape_page(client, slug)
    if doc is None:
        raise UpdateError(f"Failed to scrape: {slug}")

    if dry_run:
        return doc

    store.save(doc.category, slug, doc)
    logger.info(f"Saved to: {doc.category}/{slug}.json")
    rebuild_index(store)
    store.ensure_bidirectional_links()
    return doc


def update_all(
    client: DocsClient,
    store: DocStore,
    *,
    delay_ms: int | None = None,
    dry_run: bool = False,
) -> UpdateReport:
    """Scrape every discovered page, then rebuild directives, index and links."""
    delay_ms = settings.request_delay_ms if delay_ms is None else delay_ms

    logger.info(f"Discovering documentation from {client.base_url}...")
    pages = discover(client)
    if not pages:
        raise UpdateError("No items discovered. Check network connection.")

    logger.info(f"Found {len(pages)} documentation pages")
    report = UpdateReport(
        discovered=len(pages), dry_run=dry_run, data_dir=str(store.data_dir)
    )

    for i, page in enumerate(pages, start=1):
        logger.debug(f"[{i}/{len(pages)}] {page.category}: {page.slug}")
        doc = scrape_page(client, page.slug)

        if doc is None:
            report.failed += 1
            report.failures.append(page.slug)
        elif dry_run:
            report.succeeded += 1
        else:
            try:
                store.save(doc.category, page.slug, doc)
                report.succeeded += 1
            except StorageError as e:
                logger.error(str(e))
                report.failed += 1
                report.failures.append(page.slug)

        if delay_ms > 0:
            time.sleep(delay_ms / 1000)

    if not dry_run:
        for directive in build_directives(store):
            try:
                store.save_directive(directive)
                report.directives += 1
            except StorageError as e:
                logger.error(str(e))
                report.failures.append(f"directives/{directive_key(directive.name)}")

        logger.info("Rebuilding search index...")
        rebuild_index(store)

        logger.info("Ensuring bidirectional links...")
        report.links_added = store.ensure_bidirectional_links()

    logger.info(
        f"Update complete: {report.succeeded} succeeded, {report.failed} failed"
    )
    return report
