"""Tests for the filesystem-backed ArtifactCache."""

import pytest

from slidekit.cache.keys import fingerprint
from slidekit.cache.store import ArtifactCache
from slidekit.errors.exceptions import CacheIOFailure, InvalidInputError, RenderFailure
from slidekit.types import ArtifactKind

DIAGRAM = "graph TD\n    A --> B"


class TestResolveHit:
    def test_second_call_does_not_render(self, cache, diagram_renderer):
        p1 = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        p2 = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert p1 == p2
        assert len(diagram_renderer.calls) == 1

    def test_new_instance_same_root_is_a_hit(self, cache_root, cache, make_renderer):
        path = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "dark")

        renderer = make_renderer(ArtifactKind.DIAGRAM)
        other = ArtifactCache(cache_root, [renderer])
        assert other.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "dark") == path
        assert renderer.calls == []

    def test_existing_file_trusted_as_is(self, cache, cache_root, diagram_renderer):
        target = cache_root / "mermaid" / f"mermaid-{fingerprint(DIAGRAM)}.svg"
        target.parent.mkdir(parents=True)
        target.write_text("stale")
        cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert diagram_renderer.calls == []
        assert target.read_text() == "stale"

    def test_hit_marks_entry_cached(self, cache):
        first = cache.resolve_entry(ArtifactKind.QR_CODE, "https://example.com")
        second = cache.resolve_entry(ArtifactKind.QR_CODE, "https://example.com")
        assert first.cached is False
        assert second.cached is True


class TestLayout:
    def test_default_bucket_path(self, cache, cache_root):
        digest = fingerprint(DIAGRAM)
        assert cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM) == f"mermaid/mermaid-{digest}.svg"
        assert (cache_root / "mermaid" / f"mermaid-{digest}.svg").is_file()
        assert (cache_root / "mermaid" / f"mermaid-{digest}.png").is_file()

    def test_variant_subdirectory(self, cache, cache_root):
        digest = fingerprint(DIAGRAM)
        path = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "rose-pine-moon")
        assert path == f"mermaid/rose-pine-moon/mermaid-{digest}.svg"
        assert (cache_root / path).is_file()

    def test_qr_prefix(self, cache):
        url = "https://example.com"
        assert cache.resolve("qr", url) == f"qr/qr-{fingerprint(url)}.svg"

    def test_entry_lists_all_formats(self, cache):
        entry = cache.resolve_entry(ArtifactKind.DIAGRAM, DIAGRAM)
        assert list(entry.paths) == ["svg", "png"]
        assert entry.primary_format == "svg"
        assert entry.relative_path_for("png").endswith(".png")
        assert all(p.is_file() for p in entry.paths.values())
        assert entry.paths["svg"].stem == entry.paths["png"].stem == entry.stem

    def test_renderer_receives_variant(self, cache, diagram_renderer):
        cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "rose-pine-dawn")
        assert diagram_renderer.calls == [(DIAGRAM, "rose-pine-dawn")]


class TestKeySeparation:
    def test_variants_get_distinct_files(self, cache, cache_root, diagram_renderer):
        p1 = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "rose-pine-dawn")
        p2 = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "rose-pine-moon")
        assert p1 != p2
        assert (cache_root / p1).is_file()
        assert (cache_root / p2).is_file()
        assert len(diagram_renderer.calls) == 2

    def test_variant_and_default_bucket_distinct(self, cache):
        assert cache.resolve("mermaid", DIAGRAM) != cache.resolve("mermaid", DIAGRAM, "dark")

    def test_one_byte_content_difference(self, cache):
        assert cache.resolve("mermaid", "graph TD\nA-->B") != cache.resolve("mermaid", "graph TD\nA-->C")

    def test_kinds_do_not_collide(self, cache):
        assert cache.resolve("mermaid", "same") != cache.resolve("qr", "same")


class TestDirectoryCreation:
    def test_creates_missing_root(self, cache, cache_root):
        assert not cache_root.exists()
        cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "dark")
        assert cache_root.is_dir()

    def test_existing_root_is_fine(self, cache, cache_root):
        cache_root.mkdir(parents=True)
        cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM + "\n    B --> C")
        assert len(list((cache_root / "mermaid").glob("*.svg"))) == 2

    def test_root_is_a_file(self, tmp_path, diagram_renderer):
        root = tmp_path / "not-a-dir"
        root.write_text("x")
        cache = ArtifactCache(root, [diagram_renderer])
        with pytest.raises(CacheIOFailure):
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert diagram_renderer.calls == []


class TestInvalidInput:
    def test_empty_content_touches_nothing(self, cache, cache_root, diagram_renderer):
        with pytest.raises(InvalidInputError):
            cache.resolve(ArtifactKind.DIAGRAM, "   ")
        assert not cache_root.exists()
        assert diagram_renderer.calls == []

    def test_path_traversal_variant(self, cache, cache_root):
        with pytest.raises(InvalidInputError):
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM, "../../etc")
        assert not cache_root.exists()

    def test_kind_without_renderer(self, cache_root, diagram_renderer):
        cache = ArtifactCache(cache_root, [diagram_renderer])
        with pytest.raises(InvalidInputError) as exc:
            cache.resolve(ArtifactKind.QR_CODE, "https://example.com")
        assert exc.value.field == "kind"


class TestFailureIsolation:
    def test_failed_render_leaves_no_files(self, cache_root, make_renderer):
        renderer = make_renderer(ArtifactKind.DIAGRAM, fail=True)
        cache = ArtifactCache(cache_root, [renderer])
        with pytest.raises(RenderFailure) as exc:
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)

        assert exc.value.content == DIAGRAM
        assert exc.value.kind == "mermaid"
        assert list((cache_root / "mermaid").iterdir()) == []

    def test_retry_after_failure_is_a_miss(self, cache_root, make_renderer):
        renderer = make_renderer(ArtifactKind.DIAGRAM, fail=True)
        cache = ArtifactCache(cache_root, [renderer])
        with pytest.raises(RenderFailure):
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)

        renderer.fail = False
        path = cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert len(renderer.calls) == 2
        assert (cache_root / path).read_text().startswith("<svg")

    def test_unexpected_renderer_error_wrapped(self, cache_root, make_renderer):
        renderer = make_renderer(ArtifactKind.QR_CODE)

        def explode(content, outputs, variant=None):
            raise ValueError("bad data")

        renderer.render = explode
        cache = ArtifactCache(cache_root, [renderer])
        with pytest.raises(RenderFailure) as exc:
            cache.resolve(ArtifactKind.QR_CODE, "https://example.com")
        assert isinstance(exc.value.original, ValueError)
        assert "bad data" in str(exc.value)

    def test_empty_output_rejected(self, cache_root, make_renderer):
        renderer = make_renderer(ArtifactKind.DIAGRAM)
        renderer.render = lambda content, outputs, variant=None: None
        cache = ArtifactCache(cache_root, [renderer])
        with pytest.raises(RenderFailure, match="no svg output"):
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert list((cache_root / "mermaid").iterdir()) == []

    def test_failure_does_not_block_other_keys(self, cache_root, make_renderer):
        failing = make_renderer(ArtifactKind.DIAGRAM, fail=True)
        qr = make_renderer(ArtifactKind.QR_CODE)
        cache = ArtifactCache(cache_root, [failing, qr])
        with pytest.raises(RenderFailure):
            cache.resolve(ArtifactKind.DIAGRAM, DIAGRAM)
        assert (cache_root / cache.resolve(ArtifactKind.QR_CODE, "https://x.io")).is_file()


class TestStats:
    def test_counts(self, cache_root, make_renderer):
        ok = make_renderer(ArtifactKind.DIAGRAM)
        bad = make_renderer(ArtifactKind.QR_CODE, fail=True)
        cache = ArtifactCache(cache_root, [ok, bad])

        cache.resolve("mermaid", DIAGRAM)
        cache.resolve("mermaid", DIAGRAM)
        with pytest.raises(RenderFailure):
            cache.resolve("qr", "https://x.io")

        stats = cache.stats()
        assert stats.hits == 1
        assert stats.misses == 2
        assert stats.renders == 1
        assert stats.failures == 1
        assert stats.hit_rate == pytest.approx(1 / 3)

    def test_stats_is_a_snapshot(self, cache):
        snapshot = cache.stats()
        cache.resolve("mermaid", DIAGRAM)
        assert snapshot.misses == 0
        assert cache.stats().misses == 1
