"""On-disk store of synthesized pronunciation clips."""

import hashlib
import re
from pathlib import Path
from typing import Union

import structlog

log = structlog.get_logger()

AUDIO_EXTENSION = ".mp3"

# Leaves room for the extension and the temporary ".<name>.<hex>.part" name
MAX_STEM_BYTES = 200

_UNSAFE_RE = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')


def _digest(word: str) -> str:
    return hashlib.sha1(word.encode("utf-8")).hexdigest()[:8]


def audio_stem(word: str) -> str:
    """Filename stem for ``word``.

    Words that are already safe filenames are used verbatim. Anything else
    gets its unsafe characters replaced, is cut to ``MAX_STEM_BYTES`` and
    has a digest of the original word appended, so two different words
    never share a file.
    """
    cleaned = _UNSAFE_RE.sub("_", word).strip(" .")
    encoded = cleaned.encode("utf-8")
    if len(encoded) > MAX_STEM_BYTES:
        cleaned = encoded[:MAX_STEM_BYTES].decode("utf-8", errors="ignore").rstrip(" .")
    elif cleaned == word and cleaned:
        return word
    if not cleaned:
        cleaned = "audio"
    return f"{cleaned}-{_digest(word)}"


def format_sound_tag(filename: str) -> str:
    """Anki sound field: ``[sound:<filename>]``."""
    return f"[sound:{filename}]"


class AudioCache:
    """Answers whether a clip for a word already exists.

    Existence of the file is the only cache signal; the content is never
    inspected, so an empty file still counts as a hit.
    """

    def __init__(self, audio_dir: Union[str, Path]):
        self.audio_dir = Path(audio_dir)

    def ensure_directory(self) -> Path:
        self.audio_dir.mkdir(parents=True, exist_ok=True)
        log.info("Audio directory ready", audio_dir=str(self.audio_dir))
        return self.audio_dir

    def filename_for(self, word: str) -> str:
        return audio_stem(word) + AUDIO_EXTENSION

    def path_for(self, word: str) -> Path:
        return self.audio_dir / self.filename_for(word)

    def exists(self, word: str) -> bool:
        return self.path_for(word).is_file()

    def sound_tag(self, word: str) -> str:
        return format_sound_tag(self.filename_for(word))
