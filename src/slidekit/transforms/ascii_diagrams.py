"""Suggest Mermaid replacements for ASCII-art diagrams in plain code fences."""

from __future__ import annotations

import re

from pydantic import BaseModel

_BOX_CHARS = "─│┌┐└┘├┤┬┴┼"
_CORNER_CHARS = "┌┐└┘├┤┬┴┼"
_DIAGRAM_CHARS_RE = re.compile(f"[{_BOX_CHARS}→↓]")
_PLAIN_FENCE_RE = re.compile(r"```[ \t]*\r?\n(?P<body>.*?)```", re.DOTALL)
_ARROW_RE = re.compile(r"\s*(?:→|-->|->)\s*")
_SEQUENCE_LINE_RE = re.compile(r"^\s*(\w+)\s*(?:→|-->|->)\s*(\w+)\s*:?\s*(.*?)\s*$")


class AsciiDiagram(BaseModel):
    original: str
    ascii: str
    start: int


class MermaidSuggestion(BaseModel):
    diagram_type: str
    mermaid: str

    def as_fence(self) -> str:
        return f"```mermaid\n{self.mermaid}```"


def find_ascii_diagrams(markdown: str) -> list[AsciiDiagram]:
    """Plain (language-less) fenced blocks that contain box or arrow characters."""
    return [
        AsciiDiagram(original=m.group(0), ascii=m.group("body"), start=m.start())
        for m in _PLAIN_FENCE_RE.finditer(markdown)
        if _DIAGRAM_CHARS_RE.search(m.group("body"))
    ]


def suggest_mermaid(ascii: str) -> MermaidSuggestion | None:
    """Classify an ASCII diagram and convert it, or ``None`` if no heuristic fits."""
    has_corners = any(c in ascii for c in _CORNER_CHARS)
    has_arrow = "→" in ascii or "-->" in ascii

    if has_corners or (has_arrow and re.search(r"\[.*\]", ascii)):
        mermaid = _to_flowchart(ascii)
        if mermaid:
            return MermaidSuggestion(diagram_type="flowchart", mermaid=mermaid)

    if has_arrow and not has_corners:
        mermaid = _to_sequence(ascii)
        if mermaid:
            return MermaidSuggestion(diagram_type="sequence", mermaid=mermaid)

    return None


def _to_flowchart(ascii: str) -> str | None:
    nodes: list[str] = []
    edges: list[tuple[str, str]] = []

    for line in ascii.splitlines():
        cleaned = re.sub(f"[{_BOX_CHARS}\\[\\]]", " ", line)
        if not _ARROW_RE.search(cleaned):
            continue
        parts = [p.strip() for p in _ARROW_RE.split(cleaned)]
        parts = [p for p in parts if p]
        for label in parts:
            if label not in nodes:
                nodes.append(label)
        edges.extend(zip(parts, parts[1:]))

    if not edges:
        return None

    lines = ["graph TD"]
    lines += [f"    {_node_id(label)}[{label}]" for label in nodes]
    lines += [f"    {_node_id(a)} --> {_node_id(b)}" for a, b in edges]
    return "\n".join(lines) + "\n"


def _to_sequence(ascii: str) -> str | None:
    messages = []
    for line in ascii.splitlines():
        match = _SEQUENCE_LINE_RE.match(line)
        if match:
            sender, receiver, message = match.groups()
            messages.append(f"    {sender}->>{receiver}: {message}")

    if not messages:
        return None
    return "\n".join(["sequenceDiagram", *messages]) + "\n"


def _node_id(label: str) -> str:
    return re.sub(r"\s+", "_", label)
