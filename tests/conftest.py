"""Pytest configuration and fixtures."""

from typing import Dict, List, Set

import pytest
import vcr

from anki_audio.audio_cache import AudioCache
from anki_audio.config import LIVE_TESTING
from anki_audio.exceptions import SynthesisError, TranslationError
from anki_audio.models import AudioAsset, TranslationResult, WordEntry


def cassette(name: str) -> str:
    """Generate cassette filename."""
    return f"{name}.yaml"


@pytest.fixture
def my_vcr():
    """VCR fixture for recording/replaying HTTP interactions."""
    return vcr.VCR(
        cassette_library_dir="tests/fixtures",
        filter_headers=[("xi-api-key", "DUMMY")],
        filter_query_parameters=[("key", "DUMMY")],
        record_mode="once",
    )


def live_guard():
    """Check if live testing is enabled."""
    if not LIVE_TESTING:
        pytest.skip("Live API disabled (set ANKI_AUDIO_LIVE=1)")


class FakeTranslator:
    """Dictionary stand-in that records the words it was asked for."""

    def __init__(self, translations: Dict[str, str] = None, failing: Set[str] = ()):
        self.translations = translations or {}
        self.failing = set(failing)
        self.calls: List[str] = []

    async def lookup(self, word: str) -> TranslationResult:
        self.calls.append(word)
        if word in self.failing:
            raise TranslationError(word, "Dictionary API returned 503: unavailable")
        return TranslationResult(word=word, translation=self.translations.get(word, ""))


class FakeSynthesizer:
    """Synthesizer stand-in that writes a few bytes to the cache path."""

    def __init__(self, cache: AudioCache, failing: Set[str] = ()):
        self.cache = cache
        self.failing = set(failing)
        self.calls: List[str] = []

    async def synthesize(self, word: str) -> AudioAsset:
        self.calls.append(word)
        if word in self.failing:
            raise SynthesisError(word, "ElevenLabs API returned 401: invalid api key")
        path = self.cache.path_for(word)
        path.write_bytes(b"ID3fake-mp3")
        return AudioAsset(word=word, path=str(path), was_cached=False)


@pytest.fixture
def sample_entries():
    """Sample vocabulary entries for testing."""
    return [
        WordEntry(word="hello", gloss="a greeting"),
        WordEntry(word="apple", gloss="An apple a day keeps the doctor away."),
        WordEntry(word="run", gloss="I run every morning."),
    ]


@pytest.fixture
def audio_cache(tmp_path):
    """Audio cache rooted in a temporary directory."""
    cache = AudioCache(tmp_path / "audio")
    cache.ensure_directory()
    return cache
