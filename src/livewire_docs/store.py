"""File-backed storage for the documentation corpus.

Layout under the data directory::

    {category}/{slug}.json      one Document per page
    directives/{name}.json      one Directive per base directive name
    index.json                  the consolidated search index

Records are pretty-printed JSON written through a temporary file and an
atomic rename. Files that cannot be read or validated are reported and
treated as absent so batch operations keep going.
"""

import json
import os
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ValidationError

from livewire_docs.catalog import CATEGORIES, DIRECTIVES_CATEGORY, directive_key
from livewire_docs.errors import StorageError
from livewire_docs.fuzzy import levenshtein
from livewire_docs.models import Directive, Document, SearchIndex

_INDEX_FILE = "index.json"


def _dump(record: BaseModel) -> str:
    return json.dumps(record.model_dump(), indent=4, ensure_ascii=False) + "\n"


class DocStore:
    """Corpus of Documents and Directives keyed by category and slug."""

    def __init__(self, data_dir: Path, categories: tuple[str, ...] = CATEGORIES):
        self._data_dir = Path(data_dir)
        self._categories = categories
        logger.debug(f"DocStore initialized at {self._data_dir}")

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    @property
    def topic_categories(self) -> tuple[str, ...]:
        return tuple(c for c in self._categories if c != DIRECTIVES_CATEGORY)

    # -----------------------------------------------------------------------
    # Raw file access
    # -----------------------------------------------------------------------

    def _path(self, category: str, key: str) -> Path:
        """Record path for ``category/key``, confined to its category directory."""
        path = self._data_dir / category / f"{key}.json"

        root = self._data_dir.resolve()
        resolved = path.resolve()
        if not resolved.is_relative_to(root) or resolved.parent != (root / category).resolve():
            raise StorageError(f"Path traversal attempt detected for {category}/{key}")
        return path

    def _load(self, category: str, key: str, model: type[BaseModel]):
        try:
            path = self._path(category, key)
        except StorageError as e:
            logger.warning(str(e))
            return None
        return self._read(path, model)

    def _read(self, path: Path, model: type[BaseModel]):
        if not path.is_file():
            return None
        try:
            return model.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"Skipping unreadable record {path}: {e}")
            return None

    def _write(self, path: Path, payload: str) -> None:
        """Write ``payload`` to ``path`` via a temporary file in the same directory."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

    # -----------------------------------------------------------------------
    # Listing
    # -----------------------------------------------------------------------

    def list_category(self, category: str) -> list[str]:
        """Sorted slugs stored under ``category``."""
        path = self._data_dir / category
        if not path.is_dir():
            return []
        return sorted(p.stem for p in path.glob("*.json") if not p.name.startswith("."))

    def list_by_category(self, category: str | None = None) -> dict[str, list[str]]:
        """Slugs grouped by category, optionally for a single category."""
        categories = [category] if category else self._categories
        return {cat: self.list_category(cat) for cat in categories}

    def all_slugs(self) -> list[str]:
        """Every stored slug, categories in canonical order, no duplicates."""
        slugs: list[str] = []
        seen: set[str] = set()
        for category in self._categories:
            for slug in self.list_category(category):
                if slug not in seen:
                    seen.add(slug)
                    slugs.append(slug)
        return slugs

    def iter_documents(self):
        """Yield ``(category, Document)`` for every readable topic page."""
        for category in self.topic_categories:
            for slug in self.list_category(category):
                doc = self.find(slug, category)
                if doc is not None:
                    yield category, doc

    # -----------------------------------------------------------------------
    # Documents
    # -----------------------------------------------------------------------

    def find(self, slug: str, category: str | None = None) -> Document | None:
        """Look up a page; without a category, probe topic categories in order."""
        categories = [category] if category else self.topic_categories
        for cat in categories:
            doc = self._load(cat, slug, Document)
            if doc is not None:
                return doc
        return None

    def save(self, category: str, slug: str, document: BaseModel) -> Path:
        path = self._path(category, slug)
        self._write(path, _dump(document))
        logger.debug(f"Saved {category}/{slug}.json")
        return path

    def suggest(self, name: str, limit: int = 5) -> list[str]:
        """Closest known slugs by edit distance, ties in corpus order."""
        query = name.lower()
        ranked = sorted(self.all_slugs(), key=lambda slug: levenshtein(query, slug.lower()))
        return ranked[: max(limit, 0)]

    # -----------------------------------------------------------------------
    # Directives
    # -----------------------------------------------------------------------

    def find_directive(self, name: str) -> Directive | None:
        """Look up a directive by any spelling: ``wire:model.live``, ``model``..."""
        key = directive_key(name)
        if not key:
            return None
        return self._load(DIRECTIVES_CATEGORY, key, Directive)

    def list_directives(self) -> list[Directive]:
        directives = []
        for key in self.list_category(DIRECTIVES_CATEGORY):
            directive = self._load(DIRECTIVES_CATEGORY, key, Directive)
            if directive is not None:
                directives.append(directive)
        return sorted(directives, key=lambda d: d.name)

    def save_directive(self, directive: Directive) -> Path:
        return self.save(DIRECTIVES_CATEGORY, directive_key(directive.name), directive)

    # -----------------------------------------------------------------------
    # Index
    # -----------------------------------------------------------------------

    @property
    def index_path(self) -> Path:
        return self._data_dir / _INDEX_FILE

    def load_index(self) -> SearchIndex | None:
        return self._read(self.index_path, SearchIndex)

    def save_index(self, index: SearchIndex) -> Path:
        self._write(self.index_path, _dump(index))
        return self.index_path

    # -----------------------------------------------------------------------
    # Link maintenance
    # -----------------------------------------------------------------------

    def ensure_bidirectional_links(self) -> int:
        """Make every related link point back, one hop deep.

        Works on a snapshot of all pages taken up front: if A lists B and B
        exists, A is appended to B's related list. Pages changed during the
        pass are not re-scanned, so A -> B -> C does not produce C -> A.

        Returns the number of pages written; a second run returns 0.
        """
        # Keyed by file name, which is what related lists refer to
        snapshot: dict[str, tuple[str, Document]] = {}
        for category in self.topic_categories:
            for slug in self.list_category(category):
                if slug in snapshot:
                    continue
                doc = self.find(slug, category)
                if doc is not None:
                    snapshot[slug] = (category, doc)

        writes = 0
        for slug, (_category, doc) in list(snapshot.items()):
            for related_slug in list(doc.related):
                if related_slug not in snapshot or related_slug == slug:
                    continue
                target_category, target = snapshot[related_slug]
                if slug in target.related:
                    continue

                related = list(dict.fromkeys([*target.related, slug]))
                target = target.model_copy(update={"related": related})
                self.save(target_category, related_slug, target)
                snapshot[related_slug] = (target_category, target)
                writes += 1

        if writes:
            logger.info(f"Added back-links to {writes} pages")
        return writes

    # -----------------------------------------------------------------------
    # Stats
    # -----------------------------------------------------------------------

    def stats(self) -> dict:
        counts = {cat: len(self.list_category(cat)) for cat in self._categories}
        index = self.load_index()
        return {
            "data_dir": str(self._data_dir),
            "categories": counts,
            "topics": sum(n for cat, n in counts.items() if cat != DIRECTIVES_CATEGORY),
            "directives": counts.get(DIRECTIVES_CATEGORY, 0),
            "index_updated_at": index.updated_at if index else None,
        }
