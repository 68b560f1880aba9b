"""Custom exceptions for hashdeck."""

from pathlib import Path
from typing import Optional, Union


class HashdeckError(Exception):
    """Base exception for all hashdeck errors."""
    pass


class ConfigError(HashdeckError):
    """Error in configuration or deck frontmatter."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        super().__init__(message)


class ParserError(HashdeckError):
    """Structural error in a deck file.

    ``line_number`` is 1-indexed. The file path may be attached after the
    fact by the parser that knows which file is being read.
    """

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        line_number: Optional[int] = None,
    ):
        self.message = message
        self.file_path = file_path
        self.line_number = line_number
        super().__init__(message)

    def __str__(self) -> str:
        if self.file_path is None and self.line_number is None:
            return self.message
        location = str(self.file_path) if self.file_path is not None else "<unknown>"
        if self.line_number is not None:
            location = f"{location}:{self.line_number}"
        return f"{self.message} Location: {location}"


class DeckIOError(HashdeckError):
    """A deck file or directory could not be read."""

    def __init__(self, message: str, file_path: Optional[Union[str, Path]] = None):
        self.file_path = file_path
        super().__init__(message)


class MediaError(HashdeckError):
    """Cards reference media files that do not exist."""

    def __init__(self, message: str, missing: tuple = ()):
        self.missing = tuple(missing)
        super().__init__(message)


class CacheError(HashdeckError):
    """Error with the session cache."""
    pass
