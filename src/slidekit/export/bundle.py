"""Per-theme export bundles: themed markdown plus the images it references."""

from __future__ import annotations

import logging
import re
import shutil
from collections.abc import Iterable
from pathlib import Path

from slidekit.cache.keys import validate_variant
from slidekit.cache.store import ArtifactCache
from slidekit.errors.exceptions import InvalidInputError, ThemeError
from slidekit.preprocess.markdown import flatten_variant_paths, preprocess_markdown
from slidekit.types import BundleResult, FailurePolicy, ImageFormat

logger = logging.getLogger(__name__)

BUNDLE_DOCUMENT = "presentation.md"

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<body>.*?)^---[ \t]*$", re.DOTALL | re.MULTILINE
)
_THEME_RE = re.compile(r"^theme:.*$", re.MULTILINE)


def replace_theme(markdown: str, theme: str) -> str:
    """Set the ``theme:`` directive in the front matter, adding it if missing."""
    try:
        validate_variant(theme)
    except InvalidInputError as e:
        raise ThemeError(f"Invalid theme name: {theme!r}", theme=str(theme)) from e

    directive = f"theme: {theme}"
    front_matter = _FRONT_MATTER_RE.match(markdown)
    if front_matter is None:
        return f"---\n{directive}\n---\n\n{markdown}"

    body = front_matter.group("body")
    new_body, count = _THEME_RE.subn(directive, body, count=1)
    if count == 0:
        new_body = f"{body}{directive}\n"
    return markdown[: front_matter.start("body")] + new_body + markdown[front_matter.end("body"):]


def build_theme_bundle(
    source: str | Path,
    theme: str,
    output_dir: str | Path,
    cache: ArtifactCache,
    themes_dir: str | Path | None = None,
    image_base: str = "images",
    image_format: ImageFormat | str = ImageFormat.SVG,
) -> BundleResult:
    """Assemble a self-contained directory for one theme.

    Diagrams are rendered under the theme's cache variant, then the document
    is rewritten to a flat ``{image_base}/{kind}/`` layout and only the
    referenced files are copied next to it. Any artifact failure aborts.
    """
    source = Path(source)
    output_dir = Path(output_dir)
    if not source.is_file():
        raise FileNotFoundError(f"Markdown file not found: {source}")

    markdown = replace_theme(source.read_text(encoding="utf-8"), theme)
    result = preprocess_markdown(
        markdown,
        cache,
        variant=theme,
        on_error=FailurePolicy.ABORT,
        image_base=image_base,
        image_format=image_format,
    )

    output_dir.mkdir(parents=True, exist_ok=True)
    presentation = output_dir / BUNDLE_DOCUMENT
    presentation.write_text(
        flatten_variant_paths(result.markdown, theme, image_base), encoding="utf-8"
    )

    copied: list[Path] = []
    seen: set[Path] = set()
    for entry in result.artifacts:
        dest_dir = output_dir / image_base / entry.key.kind.value
        for path in entry.paths.values():
            if path in seen:
                continue
            seen.add(path)
            dest_dir.mkdir(parents=True, exist_ok=True)
            copied.append(Path(shutil.copy2(path, dest_dir / path.name)))

    if themes_dir is not None:
        css = Path(themes_dir) / f"{theme}.css"
        if css.is_file():
            css_dir = output_dir / "themes"
            css_dir.mkdir(parents=True, exist_ok=True)
            copied.append(Path(shutil.copy2(css, css_dir / css.name)))
        else:
            logger.warning("Theme stylesheet not found: %s", css)

    logger.info(
        "Bundle for '%s' written to %s (%d artifacts, %d files)",
        theme,
        output_dir,
        len(result.artifacts),
        len(copied),
    )
    return BundleResult(
        theme=theme,
        output_dir=output_dir,
        presentation=presentation,
        artifacts=len(result.artifacts),
        copied_files=copied,
    )


def export_themes(
    source: str | Path,
    themes: Iterable[str],
    dist_dir: str | Path,
    cache: ArtifactCache,
    **kwargs: object,
) -> list[BundleResult]:
    """Build one bundle per theme under ``dist_dir/{theme}``; stops at the first failure."""
    dist_dir = Path(dist_dir)
    results: list[BundleResult] = []
    for theme in themes:
        logger.info("Exporting theme '%s'", theme)
        results.append(build_theme_bundle(source, theme, dist_dir / theme, cache, **kwargs))
    return results
