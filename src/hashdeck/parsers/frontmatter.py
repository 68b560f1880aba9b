"""TOML frontmatter at the top of a deck file.

A deck file may start with a header such as::

    ---
    name = "Cell Biology"
    ---

Only ``name`` is recognized; any other keys are ignored.
"""

import logging
import tomllib
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DELIMITER = "---"


@dataclass
class DeckMetadata:
    """Metadata read from a deck file's frontmatter."""
    name: Optional[str] = None

    # Lines taken up by the header, delimiters included
    line_offset: int = 0


def split_lines(text: str) -> list[str]:
    """Split text into lines.

    Splits on ``\\n`` only, drops a trailing ``\\r`` from each line, and
    does not yield an empty line after a final line break.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def extract_frontmatter(text: str) -> tuple[DeckMetadata, str]:
    """Split the optional frontmatter header from a deck file.

    Args:
        text: Full file contents

    Returns:
        Tuple of (metadata, remaining content). The content is the exact
        slice of ``text`` following the closing delimiter's line.

    Raises:
        ConfigError: If the header is unterminated or is not valid TOML
    """
    lines = split_lines(text)
    if not lines or lines[0].strip() != DELIMITER:
        return DeckMetadata(), text

    header_lines = []
    closing_idx = None
    for idx, line in enumerate(lines[1:], start=1):
        if line.strip() == DELIMITER:
            closing_idx = idx
            break
        header_lines.append(line)

    if closing_idx is None:
        raise ConfigError("Frontmatter opening '---' found but no closing '---'")

    try:
        data = tomllib.loads("\n".join(header_lines))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML frontmatter: {e}") from e

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        raise ConfigError(
            f"Frontmatter 'name' must be a string, got {type(name).__name__}",
            config_key="name",
        )

    # Content starts right after the line break that ends the closing line.
    pos = -1
    for _ in range(closing_idx + 1):
        pos = text.find("\n", pos + 1)
        if pos == -1:
            break
    content = text[pos + 1:] if pos != -1 else ""

    logger.debug(f"Frontmatter spans {closing_idx + 1} lines (name={name!r})")
    return DeckMetadata(name=name, line_offset=closing_idx + 1), content
