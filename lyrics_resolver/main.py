"""
Main CLI interface for Lyrics-Resolver

Command-line access to the lyrics resolution engine, mainly for trying out
title/artist pairs, diagnosing why a track does not resolve, and warming
through lists of tracks.

The CLI is built using Click framework and provides:
- resolve: Resolve lyrics for one title/artist pair
- variations: Show the search variations generated for a title/artist pair
- batch: Resolve every track listed in a tab-separated file
- config show: Show the effective configuration
"""

import sys
import time
import click
import functools
from concurrent.futures import as_completed
from typing import List, Optional, Tuple

from tqdm import tqdm

from . import __version__
from .config.settings import get_settings, reload_settings
from .exceptions import LyricsNotFoundError
from .lyrics.resolver import get_lyrics_resolver, reset_lyrics_resolver
from .lyrics.variations import generate_search_variations
from .utils.logger import configure_from_settings, get_logger, get_current_log_file
from .utils.helpers import format_duration, format_lrc_timestamp, truncate_string


logger = get_logger(__name__)


def handle_error(func):
    """
    Decorator to handle common CLI errors gracefully

    Args:
        func: The CLI command function to wrap

    Returns:
        Wrapped function with error handling
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            click.echo(click.style("\n\nOperation cancelled by user", fg='yellow'))
            sys.exit(130)  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Command failed: {e}")
            click.echo(click.style(f"Error: {e}", fg='red'), err=True)
            sys.exit(1)
        finally:
            reset_lyrics_resolver()
    return wrapper


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', type=click.Path(), help='Path to config file')
@click.pass_context
def cli(ctx, version, verbose, config):
    """
    Lyrics-Resolver - Find lyrics for noisy video titles

    Cleans up title and artist, tries a prioritized list of lookups against
    LRCLIB and picks the best matching lyrics, synced when available.
    """
    ctx.ensure_object(dict)

    if version:
        click.echo(f"Lyrics-Resolver v{__version__}")
        return

    if config:
        reload_settings(config)

    configure_from_settings(verbose=verbose)
    ctx.obj['verbose'] = verbose
    if verbose:
        logger.info("Verbose mode enabled")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


def _duration_ms(duration: Optional[float]) -> Optional[int]:
    """Convert a --duration value in seconds to milliseconds"""
    if duration is None or duration <= 0:
        return None
    return int(round(duration * 1000))


@cli.command()
@click.argument('title')
@click.argument('artist')
@click.option('--duration', '-d', type=float, help='Track duration in seconds')
@click.option('--track-id', help='Track identifier used as cache key')
@click.option('--synced', is_flag=True, help='Print time-synchronized lines when available')
@click.option('--preview', type=int, help='Only print the first N lines')
@handle_error
def resolve(title, artist, duration, track_id, synced, preview):
    """
    Resolve lyrics for TITLE by ARTIST

    TITLE and ARTIST can be passed exactly as they appear on a video site,
    e.g. "Tum Hi Ho (Official Video) | Aashiqui 2" and "T-Series".
    """
    resolver = get_lyrics_resolver()

    try:
        result = resolver.resolve(title, artist, duration_ms=_duration_ms(duration), track_id=track_id)
    except LyricsNotFoundError as e:
        click.echo(click.style(str(e), fg='red'), err=True)
        sys.exit(1)

    if synced:
        if result.is_synced:
            for line in result.synced_lines:
                click.echo(f"[{format_lrc_timestamp(line.timestamp_ms)}] {line.text}")
            return
        click.echo(click.style("No synced lyrics available, showing plain lyrics", fg='yellow'), err=True)

    if preview is not None:
        click.echo(result.get_preview(preview))
    else:
        click.echo(result.plain_text)


@cli.command()
@click.argument('title')
@click.argument('artist')
@handle_error
def variations(title, artist):
    """
    Show the search variations for TITLE by ARTIST in priority order
    """
    items = generate_search_variations(title, artist)

    if not items:
        click.echo(click.style("No search variations (title is blank)", fg='yellow'))
        return

    for index, variation in enumerate(items, 1):
        click.echo(f"{index:2d}. {variation}")


def _read_batch_file(path: str) -> Tuple[List[Tuple[str, str, Optional[float]]], int]:
    """
    Parse a batch file

    Each line is "title<TAB>artist[<TAB>seconds]". Blank lines and lines
    starting with '#' are ignored.

    Returns:
        (tracks, malformed line count)
    """
    tracks = []
    malformed = 0

    with open(path, 'r', encoding='utf-8') as f:
        for line_number, line in enumerate(f, 1):
            line = line.rstrip('\r\n')
            if not line.strip() or line.lstrip().startswith('#'):
                continue

            fields = line.split('\t')
            if len(fields) < 2 or not fields[0].strip():
                logger.warning(f"Skipping malformed line {line_number}: {truncate_string(line, 60)}")
                malformed += 1
                continue

            duration = None
            if len(fields) > 2 and fields[2].strip():
                try:
                    duration = float(fields[2])
                except ValueError:
                    logger.warning(f"Ignoring invalid duration on line {line_number}: {fields[2]!r}")

            tracks.append((fields[0].strip(), fields[1].strip(), duration))

    return tracks, malformed


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--show-missing', is_flag=True, help='List tracks without lyrics')
@handle_error
def batch(file, show_missing):
    """
    Resolve lyrics for every track listed in FILE

    FILE contains one track per line: title, artist and optional duration
    in seconds, separated by tabs.
    """
    tracks, malformed = _read_batch_file(file)
    if not tracks:
        click.echo(click.style("No tracks found in file", fg='yellow'))
        return

    resolver = get_lyrics_resolver()
    start_time = time.time()
    futures = {
        resolver.resolve_async(title, artist, duration_ms=_duration_ms(duration)): (title, artist)
        for title, artist, duration in tracks
    }

    found = 0
    synced = 0
    missing = []

    with tqdm(total=len(futures), desc="Resolving", unit="track", colour='cyan') as progress_bar:
        for future in as_completed(futures):
            title, artist = futures[future]
            try:
                result = future.result()
            except LyricsNotFoundError:
                missing.append((title, artist))
            else:
                found += 1
                if result.is_synced:
                    synced += 1
            progress_bar.update(1)

    elapsed = format_duration(time.time() - start_time)
    click.echo(f"\nResolved {found}/{len(tracks)} tracks ({synced} synced) in {elapsed}")
    if malformed:
        click.echo(click.style(f"Skipped {malformed} malformed lines", fg='yellow'))

    if show_missing and missing:
        click.echo("\nNo lyrics found for:")
        for title, artist in missing:
            click.echo(f"   • {artist} - {title}")


@cli.group()
def config():
    """
    Configuration management
    """
    pass


@config.command()
@handle_error
def show():
    """
    Show current configuration
    """
    settings = get_settings()

    click.echo("Current Configuration:\n")

    click.echo("Lyrics:")
    click.echo(f"   Service URL: {settings.lyrics.base_url}")
    click.echo(f"   Source name: {settings.lyrics.source_name}")
    click.echo(f"   Cache capacity: {settings.lyrics.cache_capacity}")
    click.echo(f"   Workers: {settings.lyrics.max_workers}")

    click.echo("\nScoring:")
    for key, value in settings.lyrics.scoring.items():
        click.echo(f"   {key}: {value}")

    click.echo("\nNetwork:")
    click.echo(f"   User agent: {settings.network.user_agent}")
    click.echo(f"   Timeouts: connect {settings.network.connect_timeout}s, read {settings.network.read_timeout}s")

    click.echo("\nLogging:")
    click.echo(f"   Level: {settings.logging.level}")
    current_log = get_current_log_file()
    click.echo(f"   File: {current_log if current_log else 'disabled'}")

    errors = settings.get_validation_errors()
    if errors:
        click.echo(click.style(f"\nFound {len(errors)} configuration issues:", fg='yellow'))
        for error in errors:
            click.echo(f"   • {error}")


# Entry point for module execution
if __name__ == '__main__':
    cli()
