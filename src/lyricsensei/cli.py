"""Command-line interface using Click."""

import asyncio
import json
import sys
from pathlib import Path

import click

from . import __version__
from .config import get_cache_dir
from .core.cache import JsonFileCacheStore
from .core.language import detect_language
from .core.models import UNKNOWN_LANGUAGE
from .core.phonetic_rules import RULE_TABLES, to_phonetic
from .core.pipeline import TranslationPipeline
from .exceptions import LyricSenseiError
from .services import AzureTranslator, OpenAIFreeformTranslator
from .utils.logging import setup_logging


def _build_services():
    """Translation service and generative fallback from the environment."""
    return AzureTranslator(), OpenAIFreeformTranslator()


def _read_lyrics(path: Path) -> list:
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


async def _translate(lines, song_id, target, source, cache_store, logger):
    service, freeform = _build_services()
    pipeline = TranslationPipeline(service, cache=cache_store, freeform=freeform)
    try:
        if not source:
            detected = await detect_language("\n".join(lines), service)
            if detected != UNKNOWN_LANGUAGE:
                logger.info(f"Detected song language: {detected}")
                source = detected
        return await pipeline.translate_song(song_id, lines, target, source)
    finally:
        close = getattr(service, "aclose", None)
        if close is not None:
            await close()


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """LyricSensei - translations and pronunciation guides for song lyrics."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('lyrics_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--to', 'target', required=True, help='Target language code (e.g. en)')
@click.option('--song-id', help='Cache key for the song (default: file name)')
@click.option('--source', help='Source language hint (skips auto-detection)')
@click.option('--cache-dir', type=click.Path(), help='Cache directory')
@click.option('--no-cache', is_flag=True, help='Do not read or write the cache')
@click.option('--json', 'as_json', is_flag=True, help='Print results as JSON')
@click.option('-o', '--output', type=click.Path(dir_okay=False), help='Write results to a file')
@click.pass_context
def translate(ctx, lyrics_file, target, song_id, source, cache_dir, no_cache, as_json, output):
    """Translate a lyrics file (one lyric line per line)."""
    logger = ctx.obj['logger']
    path = Path(lyrics_file)

    try:
        lines = _read_lyrics(path)
        cache_store = None
        if not no_cache:
            cache_store = JsonFileCacheStore(Path(cache_dir) if cache_dir else get_cache_dir())

        results = asyncio.run(
            _translate(lines, song_id or path.stem, target, source, cache_store, logger)
        )
    except (LyricSenseiError, OSError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if as_json:
        rendered = json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)
    else:
        rendered = "\n".join(
            f"{r.original_text}\t{r.translated_text}\t{r.phonetic_guide}" for r in results
        )

    if output:
        Path(output).write_text(rendered + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(results)} lines to {output}")
    else:
        click.echo(rendered)

    language = TranslationPipeline.song_language(results)
    if language:
        logger.info(f"Song language: {language}")


@cli.command()
@click.argument('text')
@click.option('--lang', required=True, help='Source language code (e.g. es, fr)')
@click.pass_context
def phonetic(ctx, text, lang):
    """Offline pronunciation guide for a Latin-script line."""
    logger = ctx.obj['logger']
    base = lang.split('-')[0].lower()
    if base not in RULE_TABLES:
        logger.warning(f"No pronunciation rules for {lang}, text unchanged")
    click.echo(to_phonetic(text, base))


@cli.group()
def cache():
    """Cache management commands."""
    pass


@cache.command()
@click.option('--cache-dir', type=click.Path(), help='Cache directory')
def stats(cache_dir):
    """Show cache statistics."""
    store = JsonFileCacheStore(Path(cache_dir) if cache_dir else get_cache_dir())
    stats = store.stats()
    click.echo(f"Cache Directory: {stats['cache_dir']}")
    click.echo(f"Total Size: {stats['total_size_kb']:.1f} KB")
    click.echo(f"Songs: {stats['song_count']}")
    click.echo(f"Cached translations: {stats['entry_count']}")


@cache.command()
@click.argument('song_id')
@click.option('--cache-dir', type=click.Path(), help='Cache directory')
@click.confirmation_option(prompt='Are you sure you want to clear this song cache?')
def clear(song_id, cache_dir):
    """Clear cached translations for a song."""
    store = JsonFileCacheStore(Path(cache_dir) if cache_dir else get_cache_dir())
    store.clear(song_id)
    click.echo(f"✅ Cleared cache for song {song_id}")


if __name__ == '__main__':
    cli()
