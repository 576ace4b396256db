"""Bundled tool documentation served by the help tool."""
