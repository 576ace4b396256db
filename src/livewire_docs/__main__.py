"""Livewire Docs entry point."""

import json
import sys


def _update(args: list[str]) -> int:
    """Scrape the documentation site into the local corpus.

    Usage:
        livewire-docs update            # every page, then directives + index
        livewire-docs update forms      # a single page
        livewire-docs update --dry-run  # scrape without writing
    """
    from livewire_docs.config import settings
    from livewire_docs.errors import LivewireDocsError
    from livewire_docs.sources.fetcher import DocsClient
    from livewire_docs.store import DocStore
    from livewire_docs.updater import update_all, update_single

    dry_run = "--dry-run" in args
    items = [a for a in args if not a.startswith("--")]
    store = DocStore(settings.get_data_dir())

    try:
        with DocsClient() as client:
            if items:
                doc = update_single(client, store, items[0], dry_run=dry_run)
                if dry_run:
                    print(json.dumps(doc.model_dump(), indent=4, ensure_ascii=False))
                else:
                    print(f"Saved to: {doc.category}/{items[0]}.json")
                return 0

            report = update_all(client, store, dry_run=dry_run)
    except LivewireDocsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Update complete: {report.succeeded} succeeded, {report.failed} failed")
    if not dry_run:
        print(f"Data saved to: {report.data_dir}")
    return 0


def _reindex() -> int:
    from livewire_docs.config import settings
    from livewire_docs.indexer import rebuild_index
    from livewire_docs.store import DocStore

    store = DocStore(settings.get_data_dir())
    index = rebuild_index(store)
    links = store.ensure_bidirectional_links()
    print(
        f"Index rebuilt: {len(index.topics)} topics, {len(index.directives)} "
        f"directives, {links} back-links added"
    )
    return 0


def _directives() -> int:
    from livewire_docs.config import settings
    from livewire_docs.store import DocStore
    from livewire_docs.updater import update_directives

    directives = update_directives(DocStore(settings.get_data_dir()))
    print(f"Generated {len(directives)} directive files.")
    return 0


def _cli() -> None:
    """CLI dispatcher: server (default), update, directives or reindex."""
    command = sys.argv[1] if len(sys.argv) >= 2 else ""
    if command == "update":
        sys.exit(_update(sys.argv[2:]))
    elif command == "directives":
        sys.exit(_directives())
    elif command == "reindex":
        sys.exit(_reindex())
    else:
        from livewire_docs.server import main

        main()


if __name__ == "__main__":
    _cli()
