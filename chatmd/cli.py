"""chatmd CLI - preview code blocks and manage their preferences."""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from .config import PrefsConfig
from .prefs import PrefError, registered
from .text.fence import code_segments
from .text.highlight import guess_language
from .theme import PALETTE

console = Console()

MARKDOWN_SUFFIXES = (".md", ".markdown")


def render_error(message: str) -> None:
    console.print(f"Error: {message}", style=f"bold {PALETTE.error}")


def load_blocks(path: Path, language: Optional[str] = None) -> List[Tuple[str, str]]:
    """Read ``path`` into ``(code, language)`` pairs.

    Markdown files yield one pair per fenced block; anything else is one
    block, with the language guessed from the filename unless given.
    """
    content = path.read_text(encoding="utf-8")
    if path.suffix.lower() in MARKDOWN_SUFFIXES:
        return [
            (segment.content, language or segment.language)
            for segment in code_segments(content)
        ]
    return [(content, language if language is not None else guess_language(path.name))]


# CLI Commands
@click.group()
@click.option("--config", "config_path", default=None, help="Preferences file")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, config_path, verbose):
    """chatmd - markdown code blocks for chat clients.

    Preview files as collapsible code blocks and tune their heights.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = PrefsConfig(config_path)
    ctx.obj.load()


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--language", "-l", default=None, help="Language to highlight as")
def preview(file_path, language):
    """Show FILE as code blocks."""
    from .app import PreviewApp

    blocks = load_blocks(file_path, language)
    if not blocks:
        console.print(f"No code blocks in {file_path}", style=f"dim {PALETTE.text_dim}")
        return

    PreviewApp(blocks).run()


@cli.command(name="prefs")
@click.pass_obj
def show_prefs(config):
    """List preferences."""
    table = Table(title=f"Preferences ({config.config_path})", title_justify="left")
    table.add_column("key", style=PALETTE.cyan, no_wrap=True)
    table.add_column("value", justify="right")
    table.add_column("range", style=PALETTE.text_dim)
    table.add_column("description")

    for pref in registered():
        table.add_row(
            pref.key,
            str(pref.value()),
            f"{pref.meta.min}..{pref.meta.max}",
            pref.meta.description,
        )
    console.print(table)


@cli.command(name="prefs-set")
@click.argument("key")
@click.argument("value", type=int)
@click.pass_obj
def set_pref(config, key, value):
    """Set preference KEY to VALUE and save it."""
    try:
        config.set(key, value)
    except (PrefError, KeyError) as e:
        render_error(str(e.args[0]) if isinstance(e, KeyError) else str(e))
        sys.exit(1)

    config.save()
    console.print(f"{key} = {value}", style=PALETTE.green)
