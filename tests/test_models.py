"""Tests for data models."""

import pytest
from pydantic import ValidationError

from anki_audio.models import (
    AudioAsset,
    DictionaryResponse,
    Emitted,
    OutputRow,
    RunSummary,
    SkipReason,
    Skipped,
    SynthesisRequest,
    VoiceSettings,
    WordEntry,
)


def test_word_entry_is_immutable():
    """Test WordEntry cannot be changed after creation."""
    entry = WordEntry(word="hello", gloss="a greeting")

    assert entry.word == "hello"
    assert entry.gloss == "a greeting"
    with pytest.raises(ValidationError):
        entry.word = "goodbye"


def test_output_row_column_order():
    """Test OutputRow columns come out as word, example, sound, translation."""
    row = OutputRow(
        word="hello",
        example="a greeting",
        sound_reference="[sound:hello.mp3]",
        translation="привет",
    )

    assert row.as_list() == ["hello", "a greeting", "[sound:hello.mp3]", "привет"]


def test_dictionary_response_first_translation():
    """Test only def[0].tr[0].text is used."""
    data = {
        "head": {},
        "def": [
            {
                "text": "hello",
                "pos": "noun",
                "tr": [
                    {
                        "text": "привет",
                        "pos": "noun",
                        "syn": [{"text": "здравствуйте"}],
                        "mean": [{"text": "hi"}],
                        "ex": [{"text": "hello world", "tr": [{"text": "привет мир"}]}],
                    },
                    {"text": "алло", "pos": "noun"},
                ],
            },
            {"text": "hello", "pos": "verb", "tr": [{"text": "здороваться"}]},
        ],
    }

    response = DictionaryResponse.model_validate(data)

    assert response.first_translation() == "привет"
    assert response.definitions[0].tr[0].ex[0].tr[0].text == "привет мир"


@pytest.mark.parametrize("data", [
    {"head": {}, "def": []},
    {"head": {}},
    {"head": {}, "def": [{"text": "hello", "pos": "noun", "tr": []}]},
])
def test_dictionary_response_without_senses(data):
    """Test missing definitions or translations yield an empty string."""
    assert DictionaryResponse.model_validate(data).first_translation() == ""


def test_dictionary_response_rejects_malformed_body():
    """Test a definition list of the wrong shape does not validate."""
    with pytest.raises(ValidationError):
        DictionaryResponse.model_validate({"def": "nope"})


def test_synthesis_request_wire_format():
    """Test the ElevenLabs request body layout."""
    request = SynthesisRequest(
        text="hello",
        model_id="eleven_multilingual_v2",
        voice_id="21m00Tcm4TlvDq8ikWAM",
        voice_settings=VoiceSettings(stability=0.5, similarity_boost=0.5),
    )

    assert request.model_dump() == {
        "text": "hello",
        "model_id": "eleven_multilingual_v2",
        "voice_id": "21m00Tcm4TlvDq8ikWAM",
        "voice_settings": {"stability": 0.5, "similarity_boost": 0.5},
    }


def test_run_summary_from_outcomes():
    """Test RunSummary counts every kind of outcome."""
    def emitted(word, cached):
        return Emitted(
            row=OutputRow(word=word, example="", sound_reference=f"[sound:{word}.mp3]", translation=""),
            audio=AudioAsset(word=word, path=f"audio/{word}.mp3", was_cached=cached),
        )

    outcomes = [
        emitted("a", True),
        emitted("b", False),
        Skipped(word="c", reason=SkipReason.TRANSLATION_FAILED, error="boom"),
        Skipped(word="d", reason=SkipReason.SYNTHESIS_FAILED),
        emitted("e", False),
    ]

    summary = RunSummary.from_outcomes(outcomes)

    assert summary.total == 5
    assert summary.emitted == 3
    assert summary.cache_hits == 1
    assert summary.synthesized == 2
    assert summary.skipped_translation == 1
    assert summary.skipped_synthesis == 1
