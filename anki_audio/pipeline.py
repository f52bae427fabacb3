"""Per-word pipeline: translate, then synthesize or reuse cached audio."""

from typing import AsyncIterator, Iterable, List, Protocol

import structlog

from .audio_cache import AudioCache
from .exceptions import SynthesisError, TranslationError
from .models import (
    AudioAsset,
    Emitted,
    OutputRow,
    RunSummary,
    SkipReason,
    Skipped,
    TranslationResult,
    WordEntry,
    WordOutcome,
)

log = structlog.get_logger()


class Translator(Protocol):
    async def lookup(self, word: str) -> TranslationResult:
        ...


class Synthesizer(Protocol):
    async def synthesize(self, word: str) -> AudioAsset:
        ...


class WordPipeline:
    """Turns word entries into flashcard rows, one word at a time.

    A failed stage drops only the word it failed on; the run always goes
    on with the next entry. Rows come out in input order.
    """

    def __init__(self, translator: Translator, cache: AudioCache, synthesizer: Synthesizer):
        self.translator = translator
        self.cache = cache
        self.synthesizer = synthesizer

    async def process_entry(self, entry: WordEntry) -> WordOutcome:
        word = entry.word

        try:
            result = await self.translator.lookup(word)
        except TranslationError as e:
            log.error("Translation failed, skipping word", word=word, error=str(e))
            return Skipped(word=word, reason=SkipReason.TRANSLATION_FAILED, error=str(e))

        if self.cache.exists(word):
            log.info("Audio file already exists, skipping generation", word=word)
            audio = AudioAsset(word=word, path=str(self.cache.path_for(word)), was_cached=True)
        else:
            try:
                audio = await self.synthesizer.synthesize(word)
            except SynthesisError as e:
                log.error("Synthesis failed, skipping word", word=word, error=str(e))
                return Skipped(word=word, reason=SkipReason.SYNTHESIS_FAILED, error=str(e))

        row = OutputRow(
            word=word,
            example=entry.gloss,
            sound_reference=self.cache.sound_tag(word),
            translation=result.translation,
        )
        return Emitted(row=row, audio=audio)

    async def stream(self, entries: Iterable[WordEntry]) -> AsyncIterator[WordOutcome]:
        """Yield one outcome per entry as soon as it is known."""
        for entry in entries:
            yield await self.process_entry(entry)

    async def process(self, entries: Iterable[WordEntry]) -> List[WordOutcome]:
        entries = list(entries)
        log.info("Starting pipeline", word_count=len(entries))

        outcomes = [outcome async for outcome in self.stream(entries)]

        summary = RunSummary.from_outcomes(outcomes)
        log.info("Pipeline completed", **summary.model_dump())
        return outcomes


def emitted_rows(outcomes: Iterable[WordOutcome]) -> List[OutputRow]:
    """Rows of the outcomes that made it through both stages, in order."""
    return [outcome.row for outcome in outcomes if isinstance(outcome, Emitted)]
