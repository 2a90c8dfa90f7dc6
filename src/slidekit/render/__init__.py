"""Renderers — turn diagram and QR source text into image files."""

from slidekit.render.base import Renderer
from slidekit.render.mermaid import MermaidRenderer
from slidekit.render.palette import THEMES, ThemePalette, get_palette, remap_colors
from slidekit.render.qr import QRCodeRenderer

__all__ = [
    "Renderer",
    "MermaidRenderer",
    "QRCodeRenderer",
    "THEMES",
    "ThemePalette",
    "get_palette",
    "remap_colors",
]
