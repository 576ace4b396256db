"""Records persisted in the corpus and returned by the core.

Field names match the JSON files on disk, so ``model_dump()`` output can be
written or returned to callers verbatim.
"""

from typing import Literal

from pydantic import BaseModel, Field

ExampleType = Literal["class", "functional"]


class Example(BaseModel):
    code: str
    type: ExampleType = "class"


class Section(BaseModel):
    title: str = ""
    content: str = ""
    examples: list[Example] = Field(default_factory=list)


class Document(BaseModel):
    """One documentation page, stored at ``{category}/{slug}.json``."""

    slug: str
    title: str = ""
    description: str = ""
    category: str
    url: str = ""
    sections: list[Section] = Field(default_factory=list)
    directives_used: list[str] = Field(default_factory=list)
    related: list[str] = Field(default_factory=list)
    scraped_at: str = ""


class Variant(BaseModel):
    syntax: str
    description: str = ""


class Directive(BaseModel):
    """A ``wire:`` directive, stored at ``directives/{base_name}.json``."""

    name: str
    description: str = ""
    variants: list[Variant] = Field(default_factory=list)
    examples: list[str] = Field(default_factory=list)
    related_topics: list[str] = Field(default_factory=list)


class TopicEntry(BaseModel):
    slug: str
    title: str = ""
    description: str = ""
    category: str = ""
    keywords: list[str] = Field(default_factory=list)


class DirectiveEntry(BaseModel):
    name: str
    description: str = ""
    keywords: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)


class SearchIndex(BaseModel):
    """Flattened view of the whole corpus, rebuilt from scratch every time."""

    version: str = "1.0"
    updated_at: str = ""
    topics: list[TopicEntry] = Field(default_factory=list)
    directives: list[DirectiveEntry] = Field(default_factory=list)


class SearchResult(BaseModel):
    """A scored index entry. Topic results carry ``slug``, directives ``name``."""

    type: Literal["topic", "directive"]
    score: int
    match_source: str
    slug: str | None = None
    name: str | None = None
    title: str = ""
    description: str = ""
    category: str = ""
    keywords: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)


class DiscoveredPage(BaseModel):
    slug: str
    category: str
    title: str = ""


class UpdateReport(BaseModel):
    """Aggregate outcome of an update run."""

    discovered: int = 0
    succeeded: int = 0
    failed: int = 0
    directives: int = 0
    links_added: int = 0
    dry_run: bool = False
    data_dir: str = ""
    failures: list[str] = Field(default_factory=list)
