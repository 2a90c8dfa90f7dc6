"""Authoring helpers that operate on markdown text."""

from slidekit.transforms.ascii_diagrams import (
    AsciiDiagram,
    MermaidSuggestion,
    find_ascii_diagrams,
    suggest_mermaid,
)

__all__ = [
    "AsciiDiagram",
    "MermaidSuggestion",
    "find_ascii_diagrams",
    "suggest_mermaid",
]
