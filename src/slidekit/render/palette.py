"""Theme palettes — recolour known diagram fills per visual theme."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

_STYLE_LINE_RE = re.compile(r"^\s*(style|classDef)\s")
_HEX_RE = re.compile(r"#[0-9a-fA-F]{6}\b")

# Fill colours authors use in diagram style directives.
KNOWN_FILLS = ("#e1f5ff", "#fff4e1", "#e8f5e9", "#f3e5f5", "#ffebee")


class ThemePalette(BaseModel):
    name: str
    mermaid_theme: str = "default"
    colors: dict[str, str] = Field(default_factory=dict)


THEMES: dict[str, ThemePalette] = {
    "rose-pine-dawn": ThemePalette(
        name="rose-pine-dawn",
        mermaid_theme="default",
        colors={
            "#e1f5ff": "#e4eff0",
            "#fff4e1": "#faeedd",
            "#e8f5e9": "#e5eee9",
            "#f3e5f5": "#ede6f2",
            "#ffebee": "#f6e2e4",
        },
    ),
    "rose-pine-moon": ThemePalette(
        name="rose-pine-moon",
        mermaid_theme="dark",
        colors={
            "#e1f5ff": "#2a4a5c",
            "#fff4e1": "#4a3f2e",
            "#e8f5e9": "#2d4a44",
            "#f3e5f5": "#3f3656",
            "#ffebee": "#4a2e3a",
        },
    ),
}


def get_palette(variant: str | None) -> ThemePalette | None:
    if variant is None:
        return None
    return THEMES.get(variant)


def mermaid_theme_for(variant: str | None) -> str:
    palette = get_palette(variant)
    return palette.mermaid_theme if palette else "default"


def remap_colors(source: str, variant: str | None) -> str:
    """Swap known fill colours in ``style``/``classDef`` lines for the theme's.

    Unknown variants and unknown colours pass through untouched.
    """
    palette = get_palette(variant)
    if palette is None or not palette.colors:
        return source

    def _swap(match: re.Match[str]) -> str:
        return palette.colors.get(match.group(0).lower(), match.group(0))

    lines = source.split("\n")
    for i, line in enumerate(lines):
        if _STYLE_LINE_RE.match(line):
            lines[i] = _HEX_RE.sub(_swap, line)
    return "\n".join(lines)
