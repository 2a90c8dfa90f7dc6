from pathlib import Path

import pytest

from slidekit.cache.store import ArtifactCache
from slidekit.errors.exceptions import RenderFailure
from slidekit.types import ArtifactKind


class FakeRenderer:
    """Renderer spy: records every call and writes small text files."""

    def __init__(self, kind, formats=("svg", "png"), fail=False):
        self.kind = ArtifactKind(kind)
        self.formats = formats
        self.fail = fail
        self.calls = []

    def render(self, content, outputs, variant=None):
        self.calls.append((content, variant))
        if self.fail:
            # Leave partial output behind to prove the cache cleans it up
            for path in outputs.values():
                Path(path).write_text("partial")
            raise RenderFailure("tool exploded", stderr="exit status 1")
        for fmt, path in outputs.items():
            Path(path).write_text(f"<{fmt} variant={variant}>{content}")


@pytest.fixture
def diagram_renderer():
    return FakeRenderer(ArtifactKind.DIAGRAM)


@pytest.fixture
def qr_renderer():
    return FakeRenderer(ArtifactKind.QR_CODE)


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "images"


@pytest.fixture
def cache(cache_root, diagram_renderer, qr_renderer):
    return ArtifactCache(cache_root, [diagram_renderer, qr_renderer])


@pytest.fixture
def sample_markdown():
    return (
        "---\n"
        "marp: true\n"
        "theme: rose-pine-dawn\n"
        "---\n"
        "\n"
        "# Architecture\n"
        "\n"
        "```mermaid\n"
        "graph TD\n"
        "    A[Client] --> B[Server]\n"
        "    style A fill:#e1f5ff\n"
        "```\n"
        "\n"
        "---\n"
        "\n"
        "# Scan me\n"
        "\n"
        "![QR Code](qr:https://example.com/slides)\n"
    )


@pytest.fixture
def make_renderer():
    """Factory for extra renderer spies (e.g. failing ones)."""
    return FakeRenderer
