"""Tests for the Mermaid CLI renderer (subprocess mocked)."""

import subprocess
from pathlib import Path

import pytest

from slidekit.errors.exceptions import RenderFailure
from slidekit.render.mermaid import MermaidRenderer
from slidekit.types import ArtifactKind

DIAGRAM = "graph TD\n    A --> B\n    style A fill:#e1f5ff"


class FakeRun:
    def __init__(self, returncode=0, stderr=""):
        self.returncode = returncode
        self.stderr = stderr
        self.calls = []
        self.sources = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        self.sources.append(Path(args[args.index("-i") + 1]).read_text(encoding="utf-8"))
        if self.returncode == 0:
            Path(args[args.index("-o") + 1]).write_text("<svg/>")
        return subprocess.CompletedProcess(args, self.returncode, stdout="", stderr=self.stderr)


@pytest.fixture
def outputs(tmp_path):
    return {"svg": tmp_path / "d.svg", "png": tmp_path / "d.png"}


class TestMermaidRenderer:
    def test_kind_and_formats(self):
        renderer = MermaidRenderer()
        assert renderer.kind == ArtifactKind.DIAGRAM
        assert renderer.formats == ("svg", "png")

    def test_one_invocation_per_format(self, monkeypatch, outputs):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)
        MermaidRenderer().render(DIAGRAM, outputs)
        assert len(fake.calls) == 2
        assert all(p.read_text() == "<svg/>" for p in outputs.values())

    def test_arguments(self, monkeypatch, outputs):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)
        MermaidRenderer(command="npx -y mmdc", timeout=5).render(DIAGRAM, outputs)
        args, kwargs = fake.calls[0]
        assert args[:3] == ["npx", "-y", "mmdc"]
        assert args[args.index("-o") + 1] == str(outputs["svg"])
        assert args[args.index("-t") + 1] == "default"
        assert args[args.index("-b") + 1] == "transparent"
        assert args[args.index("-w") + 1] == "1920"
        assert args[args.index("-H") + 1] == "1080"
        assert args[args.index("-s") + 1] == "2"
        assert "-q" in args
        assert kwargs["timeout"] == 5

    def test_dark_variant_uses_dark_theme_and_palette(self, monkeypatch, outputs):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)
        MermaidRenderer().render(DIAGRAM, outputs, variant="rose-pine-moon")
        args, _ = fake.calls[0]
        assert args[args.index("-t") + 1] == "dark"
        assert "fill:#2a4a5c" in fake.sources[0]
        assert "#e1f5ff" not in fake.sources[0]

    def test_default_bucket_keeps_source(self, monkeypatch, outputs):
        fake = FakeRun()
        monkeypatch.setattr(subprocess, "run", fake)
        MermaidRenderer().render(DIAGRAM, outputs)
        assert fake.sources[0] == DIAGRAM

    def test_non_zero_exit(self, monkeypatch, outputs):
        monkeypatch.setattr(subprocess, "run", FakeRun(returncode=1, stderr="Parse error on line 2\n"))
        with pytest.raises(RenderFailure) as exc:
            MermaidRenderer().render(DIAGRAM, outputs, variant="dark")
        assert "Parse error on line 2" in str(exc.value)
        assert exc.value.stderr == "Parse error on line 2"
        assert exc.value.content == DIAGRAM
        assert exc.value.variant == "dark"

    def test_missing_binary(self, monkeypatch, outputs):
        def missing(args, **kwargs):
            raise FileNotFoundError(args[0])

        monkeypatch.setattr(subprocess, "run", missing)
        with pytest.raises(RenderFailure, match="not found"):
            MermaidRenderer(command="mmdc-missing").render(DIAGRAM, outputs)

    def test_timeout(self, monkeypatch, outputs):
        def hang(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs["timeout"])

        monkeypatch.setattr(subprocess, "run", hang)
        with pytest.raises(RenderFailure, match="timed out after 3s"):
            MermaidRenderer(timeout=3).render(DIAGRAM, outputs)
