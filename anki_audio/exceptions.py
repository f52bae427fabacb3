"""Exception hierarchy for the Anki audio vocabulary builder."""


class AnkiAudioError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(AnkiAudioError):
    """A required setting (usually an API key) is missing."""


class InputError(AnkiAudioError):
    """The input word list could not be read."""


class StageError(AnkiAudioError):
    """A per-word stage failed; the word is skipped."""

    def __init__(self, word: str, message: str):
        super().__init__(f"{message} (word={word!r})")
        self.word = word
        self.message = message


class TranslationError(StageError):
    """The dictionary lookup failed for one word."""


class SynthesisError(StageError):
    """Speech synthesis failed for one word."""
