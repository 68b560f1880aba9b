"""Configuration management for hashdeck."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml

from .exceptions import ConfigError


@dataclass
class DeckConfig:
    """Configuration for reading deck directories."""
    extension: str = "md"           # Deck file extension, without the dot
    validate_media: bool = True     # Check that referenced media exist


@dataclass
class OutputConfig:
    """Configuration for output formats."""
    pretty_json: bool = True


@dataclass
class Config:
    """Main configuration for hashdeck."""
    deck: DeckConfig = field(default_factory=DeckConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # Logging
    log_level: str = "INFO"
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary."""
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        config = cls()

        if "deck" in data:
            deck_data = data["deck"] or {}
            config.deck = DeckConfig(
                extension=str(deck_data.get("extension", "md")).lstrip("."),
                validate_media=deck_data.get("validate_media", True),
            )

        if "output" in data:
            out_data = data["output"] or {}
            config.output = OutputConfig(
                pretty_json=out_data.get("pretty_json", True),
            )

        config.log_level = data.get("log_level", "INFO")
        config.verbose = data.get("verbose", False)

        return config

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "deck": {
                "extension": self.deck.extension,
                "validate_media": self.deck.validate_media,
            },
            "output": {
                "pretty_json": self.output.pretty_json,
            },
            "log_level": self.log_level,
            "verbose": self.verbose,
        }


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from YAML file or use defaults.

    Searches for config in:
    1. Provided path
    2. ./hashdeck.yaml
    3. ~/.config/hashdeck/config.yaml
    4. Falls back to defaults
    """
    search_paths = []

    if config_path:
        search_paths.append(Path(config_path))

    search_paths.extend([
        Path("./hashdeck.yaml"),
        Path.home() / ".config" / "hashdeck" / "config.yaml",
    ])

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in config file: {e}") from e
            except OSError as e:
                raise ConfigError(f"Error loading config from {path}: {e}") from e
            return Config.from_dict(data or {})

    return Config()


def save_config(config: Config, path: str) -> None:
    """Save configuration to YAML file."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False)
