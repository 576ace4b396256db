"""Livewire Docs - offline Livewire v3 documentation with fuzzy search."""

from importlib.metadata import version

from livewire_docs.__main__ import _cli as main

__version__ = version("livewire-docs")
__all__ = ["main", "__version__"]
