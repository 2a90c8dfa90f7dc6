"""Rewrite diagram blocks and QR markers into cached image references."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from slidekit.cache.keys import validate_variant
from slidekit.cache.store import ArtifactCache
from slidekit.errors.exceptions import CacheIOFailure, InvalidInputError, RenderFailure
from slidekit.types import (
    ArtifactFailure,
    ArtifactKind,
    CacheEntry,
    FailurePolicy,
    ImageFormat,
    PreprocessResult,
)

logger = logging.getLogger(__name__)

DIAGRAM_ALT = "Mermaid diagram"
QR_ALT = "QR Code"

# One alternation so every span is visited once, in document order.
_ARTIFACT_RE = re.compile(
    r"```mermaid[ \t]*\r?\n(?P<diagram>.*?)```"  # fenced diagram
    r"|!\[(?P<qr_alt>[^\]]*)\]\(qr:(?P<qr_url>[^)]+)\)"  # ![QR](qr:url)
    r"|<img\s+src=[\"']qr:(?P<img_url>[^\"']+)[\"'][^>]*>",  # <img src="qr:url">
    re.DOTALL,
)


def preprocess_markdown(
    markdown: str,
    cache: ArtifactCache,
    variant: str | None = None,
    on_error: FailurePolicy | str = FailurePolicy.KEEP_SOURCE,
    image_base: str = "images",
    image_format: ImageFormat | str = ImageFormat.SVG,
) -> PreprocessResult:
    """Replace every diagram block and QR marker with a standard image reference.

    Diagrams are resolved under ``variant``; QR codes always use the default
    bucket since their output does not depend on the theme. Text outside the
    matched spans is preserved byte for byte.

    Args:
        markdown: Source document.
        cache: Cache that resolves and renders artifacts.
        variant: Optional partition key (usually a theme name) for diagrams.
        on_error: What to do with a span whose artifact fails.
        image_base: Prefix joined in front of the cache-relative path.
        image_format: Which output format the reference points at.

    Returns:
        The rewritten document plus resolved entries and failures.

    Raises:
        SlidekitError: Only with ``on_error="abort"``, for the first failure.
    """
    policy = FailurePolicy(on_error)
    fmt = ImageFormat(image_format).value
    variant = validate_variant(variant)
    artifacts: list[CacheEntry] = []
    failures: list[ArtifactFailure] = []

    def _replace(match: re.Match[str]) -> str:
        if match.group("diagram") is not None:
            kind = ArtifactKind.DIAGRAM
            content = match.group("diagram").strip()
            alt = DIAGRAM_ALT
            span_variant = variant
        elif match.group("qr_url") is not None:
            kind = ArtifactKind.QR_CODE
            content = match.group("qr_url").strip()
            alt = match.group("qr_alt").strip() or QR_ALT
            span_variant = None
        else:
            kind = ArtifactKind.QR_CODE
            content = match.group("img_url").strip()
            alt = QR_ALT
            span_variant = None

        try:
            entry = cache.resolve_entry(kind, content, span_variant)
        except (InvalidInputError, RenderFailure, CacheIOFailure) as e:
            failure = ArtifactFailure(
                kind=kind,
                content=content,
                variant=span_variant,
                message=e.message or str(e),
            )
            log = logger.error if policy == FailurePolicy.ABORT else logger.warning
            log("Failed to render %s '%s': %s", kind.value, failure.excerpt, failure.message)
            if policy == FailurePolicy.ABORT:
                raise
            failures.append(failure)
            if policy == FailurePolicy.PLACEHOLDER:
                return _placeholder(failure)
            return match.group(0)

        artifacts.append(entry)
        return f"![{alt}]({join_image_path(image_base, entry.relative_path_for(fmt))})"

    rewritten = _ARTIFACT_RE.sub(_replace, markdown)
    return PreprocessResult(markdown=rewritten, artifacts=artifacts, failures=failures)


def preprocess_file(
    input_path: str | Path,
    cache: ArtifactCache,
    output_path: str | Path | None = None,
    **kwargs: object,
) -> PreprocessResult:
    """Preprocess a UTF-8 markdown file, writing the result when ``output_path`` is set."""
    input_path = Path(input_path)
    if not input_path.is_file():
        raise FileNotFoundError(f"Markdown file not found: {input_path}")

    result = preprocess_markdown(input_path.read_text(encoding="utf-8"), cache, **kwargs)
    if output_path is not None:
        result.save(output_path)
        logger.info("Preprocessed markdown saved to %s", output_path)
    return result


def flatten_variant_paths(markdown: str, variant: str, image_base: str = "images") -> str:
    """Rewrite ``{image_base}/{kind}/{variant}/`` references to ``{image_base}/{kind}/``.

    Used when a themed document is moved into a bundle whose image
    directories are flat.
    """
    variant = validate_variant(variant)
    for kind in ArtifactKind:
        nested = join_image_path(image_base, f"{kind.value}/{variant}/")
        flat = join_image_path(image_base, f"{kind.value}/")
        markdown = markdown.replace(nested, flat)
    return markdown


def join_image_path(image_base: str, relative_path: str) -> str:
    base = image_base.rstrip("/")
    return f"{base}/{relative_path}" if base else relative_path


def _placeholder(failure: ArtifactFailure) -> str:
    text = f"slidekit: {failure.kind.value} render failed ({failure.excerpt}): {failure.message}"
    # "--" would terminate the HTML comment early
    return f"<!-- {re.sub(r'-(?=-)', '- ', text)} -->"
