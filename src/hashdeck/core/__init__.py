"""Core models, configuration, and exceptions."""

from .models import (
    Card,
    CardContent,
    CardHash,
    CardType,
    BasicContent,
    ClozeContent,
)
from .config import Config, load_config, save_config
from .exceptions import (
    HashdeckError,
    ConfigError,
    ParserError,
    DeckIOError,
    MediaError,
    CacheError,
)

__all__ = [
    "Card",
    "CardContent",
    "CardHash",
    "CardType",
    "BasicContent",
    "ClozeContent",
    "Config",
    "load_config",
    "save_config",
    "HashdeckError",
    "ConfigError",
    "ParserError",
    "DeckIOError",
    "MediaError",
    "CacheError",
]
