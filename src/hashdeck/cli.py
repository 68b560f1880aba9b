"""Command-line interface for hashdeck."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from . import __version__
from .core.config import Config, load_config, save_config
from .core.exceptions import HashdeckError
from .loader import parse_deck, summarize
from .output import JsonExporter
from .validation import validate_media_files

# Rich console for enhanced output
console = Console()

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


def _setup(config_path: str, verbose: bool) -> Config:
    """Load config and apply its log level."""
    cfg = load_config(config_path)
    level = logging.DEBUG if (verbose or cfg.verbose) else cfg.log_level.upper()
    logging.getLogger().setLevel(level)
    return cfg


@click.group()
@click.version_option(version=__version__)
def cli():
    """hashdeck - content-addressed flashcards from plain-text decks.

    Deck files are markdown files holding basic cards (Q:/A:) and cloze
    cards (C: with ||deletions||), separated by --- lines.

    \b
    QUICK START:
        hashdeck check ./decks
        hashdeck export ./decks -o cards.json
    """
    pass


@cli.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('-c', '--config', type=click.Path(exists=True), help='Config file path')
@click.option('--no-media', is_flag=True, help='Skip checking referenced media files')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
def check(directory: str, config: str, no_media: bool, verbose: bool):
    """Parse a deck directory and report what it contains.

    Exits with status 1 if any file is malformed or, unless --no-media
    is given, if a card references a missing media file.
    """
    try:
        cfg = _setup(config, verbose)
        cards = parse_deck(directory, extension=cfg.deck.extension)

        if cfg.deck.validate_media and not no_media:
            validate_media_files(cards, Path(directory))

        stats = summarize(cards)
        table = Table(title="[bold]Decks[/bold]")
        table.add_column("Deck", style="cyan")
        table.add_column("Basic", justify="right")
        table.add_column("Cloze", justify="right")
        table.add_column("Total", justify="right", style="bold")
        for deck_name, counts in stats.items():
            table.add_row(
                deck_name,
                str(counts["basic"]),
                str(counts["cloze"]),
                str(counts["total"]),
            )

        console.print(table)
        console.print(Panel.fit(
            f"[bold]Directory:[/bold] {directory}\n"
            f"[bold]Decks:[/bold] {len(stats)}, [bold]Cards:[/bold] {len(cards)}",
            title="[bold green]✓ Deck OK[/bold green]",
            border_style="green"
        ))

    except HashdeckError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@cli.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False))
@click.option('-o', '--output', type=click.Path(), required=True, help='Output JSON file path')
@click.option('-c', '--config', type=click.Path(exists=True), help='Config file path')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output')
def export(directory: str, output: str, config: str, verbose: bool):
    """Export every card in a deck directory to JSON."""
    try:
        cfg = _setup(config, verbose)
        cards = parse_deck(directory, extension=cfg.deck.extension)
        JsonExporter(pretty=cfg.output.pretty_json).export_cards(cards, output)
        console.print(f"[green]✓[/green] Wrote {len(cards)} cards to [cyan]{output}[/cyan]")

    except HashdeckError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)


@cli.command()
@click.argument('output_path', type=click.Path())
def init_config(output_path: str):
    """Create a configuration file with the default settings."""
    save_config(Config(), output_path)
    console.print(f"[green]✓[/green] Created config file: [cyan]{output_path}[/cyan]")
    console.print(f"  Edit this file and run: [dim]hashdeck check ./decks -c {output_path}[/dim]")


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
