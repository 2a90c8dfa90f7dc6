"""Document preprocessing — scan-and-replace over markdown text."""

from slidekit.preprocess.markdown import (
    flatten_variant_paths,
    join_image_path,
    preprocess_file,
    preprocess_markdown,
)

__all__ = [
    "flatten_variant_paths",
    "join_image_path",
    "preprocess_file",
    "preprocess_markdown",
]
