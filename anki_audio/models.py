"""Data models for the Anki audio vocabulary builder."""

from enum import Enum
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class WordEntry(BaseModel):
    """One (word, gloss) pair read from the input spreadsheet."""

    model_config = ConfigDict(frozen=True)

    word: str
    gloss: str


class TranslationResult(BaseModel):
    """Best-effort translation of a single word."""

    word: str
    translation: str = ""


class AudioAsset(BaseModel):
    """A pronunciation clip on disk."""

    word: str
    path: str
    was_cached: bool = False


class OutputRow(BaseModel):
    """A finished flashcard row."""

    word: str
    example: str
    sound_reference: str
    translation: str

    def as_list(self) -> List[str]:
        return [self.word, self.example, self.sound_reference, self.translation]


class SkipReason(str, Enum):
    """Why a word produced no output row."""

    TRANSLATION_FAILED = "translation_failed"
    SYNTHESIS_FAILED = "synthesis_failed"


class Emitted(BaseModel):
    """A word that cleared both stages."""

    row: OutputRow
    audio: AudioAsset

    @property
    def word(self) -> str:
        return self.row.word


class Skipped(BaseModel):
    """A word dropped because one of its stages failed."""

    word: str
    reason: SkipReason
    error: Optional[str] = None


WordOutcome = Union[Emitted, Skipped]


class RunSummary(BaseModel):
    """Counters for a finished pipeline run."""

    total: int = 0
    emitted: int = 0
    skipped_translation: int = 0
    skipped_synthesis: int = 0
    cache_hits: int = 0
    synthesized: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: List[WordOutcome]) -> "RunSummary":
        summary = cls(total=len(outcomes))
        for outcome in outcomes:
            if isinstance(outcome, Emitted):
                summary.emitted += 1
                if outcome.audio.was_cached:
                    summary.cache_hits += 1
                else:
                    summary.synthesized += 1
            elif outcome.reason == SkipReason.TRANSLATION_FAILED:
                summary.skipped_translation += 1
            else:
                summary.skipped_synthesis += 1
        return summary


# Yandex Dictionary response

class Synonym(BaseModel):
    text: str


class Meaning(BaseModel):
    text: str


class Translation(BaseModel):
    text: str
    pos: Optional[str] = None
    syn: List[Synonym] = Field(default_factory=list)
    mean: List[Meaning] = Field(default_factory=list)
    ex: List["Example"] = Field(default_factory=list)


class Example(BaseModel):
    text: str
    tr: List[Translation] = Field(default_factory=list)


Translation.model_rebuild()


class Definition(BaseModel):
    text: str
    pos: Optional[str] = None
    tr: List[Translation] = Field(default_factory=list)


class DictionaryResponse(BaseModel):
    """Body of a successful ``lookup`` call."""

    head: Any = None
    definitions: List[Definition] = Field(default_factory=list, alias="def")

    def first_translation(self) -> str:
        """Text of the first translation of the first sense, or ``""``."""
        if self.definitions and self.definitions[0].tr:
            return self.definitions[0].tr[0].text
        return ""


# ElevenLabs request

class VoiceSettings(BaseModel):
    stability: float
    similarity_boost: float


class SynthesisRequest(BaseModel):
    text: str
    model_id: str
    voice_id: str
    voice_settings: VoiceSettings
