"""Validation of parsed cards."""

from .media import MissingMedia, extract_media_paths, validate_media_files

__all__ = [
    "MissingMedia",
    "extract_media_paths",
    "validate_media_files",
]
