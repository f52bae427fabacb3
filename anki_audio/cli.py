"""Command-line interface for the Anki audio vocabulary builder."""

import asyncio
import logging
from pathlib import Path
from typing import List

import aiohttp
import click
import structlog

from .audio_cache import AudioCache
from .config import AUDIO_DIR, COPY_SCRIPT, OUTPUT_CSV, require_api_keys
from .dictionary_client import DictionaryClient
from .elevenlabs_client import ElevenLabsSynthesizer
from .exceptions import AnkiAudioError
from .models import Emitted, RunSummary, WordEntry, WordOutcome
from .pipeline import WordPipeline
from .utils import DELIMITERS, AnkiCsvWriter, generate_copy_script, load_entries


def configure_logging(verbose: bool = False):
    """JSON logs by default, human-readable console output with ``verbose``."""
    if verbose:
        logging.basicConfig(level=logging.INFO)
    renderer = structlog.dev.ConsoleRenderer() if verbose else structlog.processors.JSONRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


log = structlog.get_logger()


async def run_pipeline(entries: List[WordEntry], keys: dict, cache: AudioCache,
                       writer: AnkiCsvWriter) -> List[WordOutcome]:
    """Run every entry through the pipeline, appending rows as they are produced."""
    outcomes = []
    async with aiohttp.ClientSession() as session:
        translator = DictionaryClient(keys["YANDEX_API_KEY"], session=session)
        synthesizer = ElevenLabsSynthesizer(keys["ELEVENLABS_API_KEY"], cache, session=session)
        pipeline = WordPipeline(translator, cache, synthesizer)

        async for outcome in pipeline.stream(entries):
            if isinstance(outcome, Emitted):
                writer.write_row(outcome.row)
            outcomes.append(outcome)
    return outcomes


@click.command()
@click.argument(
    "input",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=OUTPUT_CSV,
    help="CSV file to write the cards to"
)
@click.option(
    "--audio-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=AUDIO_DIR,
    help="Directory holding the pronunciation clips"
)
@click.option(
    "--delimiter",
    type=click.Choice(sorted(DELIMITERS)),
    default="comma",
    help="Field separator of the output file"
)
@click.option(
    "--skip-rows",
    type=int,
    default=0,
    help="Number of leading input rows to ignore (e.g. a header)"
)
@click.option(
    "--copy-script/--no-copy-script",
    default=True,
    help="Write a script that copies the audio into Anki's media folder"
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be processed without actually doing it"
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
def main(input: Path, output: Path, audio_dir: Path, delimiter: str, skip_rows: int,
         copy_script: bool, dry_run: bool, verbose: bool):
    """Build Anki cards with translations and pronunciation audio from INPUT."""
    configure_logging(verbose)

    log.info("Starting Anki audio vocabulary builder",
             input_file=str(input),
             output_file=str(output),
             audio_dir=str(audio_dir),
             delimiter=delimiter,
             dry_run=dry_run)

    try:
        keys = require_api_keys()

        entries = load_entries(input, skip_rows=skip_rows)
        if not entries:
            log.warning("No entries found in input file")
            return

        if dry_run:
            log.info("Dry run mode - would process words", words=[e.word for e in entries[:10]])
            return

        cache = AudioCache(audio_dir)
        cache.ensure_directory()

        with AnkiCsvWriter(output, delimiter=delimiter) as writer:
            outcomes = asyncio.run(run_pipeline(entries, keys, cache, writer))

        if copy_script:
            generate_copy_script(audio_dir.resolve(), output.parent / COPY_SCRIPT.name)

    except (AnkiAudioError, OSError) as e:
        log.error("Processing failed", error=str(e))
        raise click.ClickException(str(e))

    summary = RunSummary.from_outcomes(outcomes)
    log.info("Processing completed", **summary.model_dump())
    if summary.emitted == 0:
        log.error("No words were processed successfully")

    click.echo(f"Processing complete. Output written to {output}")
    click.echo(f"Audio files saved to the '{audio_dir}' directory")


if __name__ == "__main__":
    main()
