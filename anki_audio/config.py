"""Configuration and runtime constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

from .exceptions import ConfigurationError

load_dotenv()

# API Keys
REQUIRED_KEYS = ("YANDEX_API_KEY", "ELEVENLABS_API_KEY")

# Dictionary Configuration
DICTIONARY_URL = os.getenv(
    "DICTIONARY_URL", "https://dictionary.yandex.net/api/v1/dicservice.json/lookup"
)
LANGUAGE_PAIR = "en-ru"

# Speech Synthesis Configuration
TTS_BASE_URL = os.getenv("TTS_BASE_URL", "https://api.elevenlabs.io/v1/text-to-speech")
VOICE_ID = os.getenv("VOICE_ID", "21m00Tcm4TlvDq8ikWAM")  # Rachel
TTS_MODEL_ID = os.getenv("TTS_MODEL_ID", "eleven_multilingual_v2")
VOICE_STABILITY = float(os.getenv("VOICE_STABILITY", "0.5"))
VOICE_SIMILARITY_BOOST = float(os.getenv("VOICE_SIMILARITY_BOOST", "0.5"))

# Directory Configuration
BASE_DIR = Path.cwd()
AUDIO_DIR = BASE_DIR / "audio"
OUTPUT_DIR = BASE_DIR

# File paths
OUTPUT_CSV = OUTPUT_DIR / "output.csv"
COPY_SCRIPT = OUTPUT_DIR / "COPY_ME_TO_COLLECTION_MEDIA.sh"

# Testing Configuration
LIVE_TESTING = os.getenv("ANKI_AUDIO_LIVE", "0") == "1"


def require_api_keys() -> dict:
    """Return the required API keys, failing if any is missing."""
    keys = {name: os.getenv(name) for name in REQUIRED_KEYS}
    missing = [name for name, value in keys.items() if not value]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )
    return keys
