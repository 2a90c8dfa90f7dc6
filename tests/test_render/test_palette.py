"""Tests for theme colour remapping."""

from slidekit.render.palette import KNOWN_FILLS, THEMES, get_palette, mermaid_theme_for, remap_colors

SOURCE = (
    "graph TD\n"
    "    A[Start] --> B[End]\n"
    "    style A fill:#e1f5ff,stroke:#333\n"
    "    classDef warm fill:#FFF4E1\n"
    "    %% #e1f5ff in a comment\n"
)


class TestPalettes:
    def test_every_theme_maps_every_known_fill(self):
        for palette in THEMES.values():
            assert set(palette.colors) == set(KNOWN_FILLS)

    def test_get_palette(self):
        assert get_palette("rose-pine-moon").mermaid_theme == "dark"
        assert get_palette("unknown") is None
        assert get_palette(None) is None

    def test_mermaid_theme_defaults(self):
        assert mermaid_theme_for(None) == "default"
        assert mermaid_theme_for("unknown") == "default"
        assert mermaid_theme_for("rose-pine-dawn") == "default"


class TestRemapColors:
    def test_remaps_style_lines(self):
        result = remap_colors(SOURCE, "rose-pine-moon")
        assert "style A fill:#2a4a5c,stroke:#333" in result

    def test_case_insensitive(self):
        result = remap_colors(SOURCE, "rose-pine-moon")
        assert "classDef warm fill:#4a3f2e" in result

    def test_unknown_colour_untouched(self):
        assert "stroke:#333" in remap_colors(SOURCE, "rose-pine-dawn")

    def test_non_style_lines_untouched(self):
        result = remap_colors(SOURCE, "rose-pine-moon")
        assert "%% #e1f5ff in a comment" in result

    def test_no_variant_is_identity(self):
        assert remap_colors(SOURCE, None) == SOURCE

    def test_unknown_variant_is_identity(self):
        assert remap_colors(SOURCE, "solarized") == SOURCE
