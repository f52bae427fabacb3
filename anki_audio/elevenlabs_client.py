"""ElevenLabs text-to-speech client."""

import asyncio
import os
import time
import uuid
from typing import Optional

import aiohttp
import structlog

from .audio_cache import AudioCache
from .config import (
    TTS_BASE_URL, TTS_MODEL_ID, VOICE_ID, VOICE_SIMILARITY_BOOST, VOICE_STABILITY
)
from .exceptions import SynthesisError
from .models import AudioAsset, SynthesisRequest, VoiceSettings
from .utils import session_scope

log = structlog.get_logger()

CHUNK_SIZE = 64 * 1024


class ElevenLabsSynthesizer:
    """Synthesizes a pronunciation clip for a word and stores it in the cache.

    The clip is streamed into a hidden temporary file next to its final
    location and renamed into place only once the whole body has arrived,
    so an interrupted download never shows up as a cache hit.
    """

    def __init__(
        self,
        api_key: str,
        cache: AudioCache,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = TTS_BASE_URL,
        voice_id: str = VOICE_ID,
        model_id: str = TTS_MODEL_ID,
        stability: float = VOICE_STABILITY,
        similarity_boost: float = VOICE_SIMILARITY_BOOST,
    ):
        self.api_key = api_key
        self.cache = cache
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.voice_id = voice_id
        self.model_id = model_id
        self.voice_settings = VoiceSettings(
            stability=stability, similarity_boost=similarity_boost
        )

    def build_request(self, word: str) -> SynthesisRequest:
        return SynthesisRequest(
            text=word,
            model_id=self.model_id,
            voice_id=self.voice_id,
            voice_settings=self.voice_settings,
        )

    async def synthesize(self, word: str) -> AudioAsset:
        """Request speech for ``word`` and write it to the cache path."""
        url = f"{self.base_url}/{self.voice_id}"
        headers = {
            "xi-api-key": self.api_key,
            "Accept": "audio/mpeg",
        }
        payload = self.build_request(word).model_dump()

        target = self.cache.path_for(word)
        partial = target.with_name(f".{target.name}.{uuid.uuid4().hex[:8]}.part")

        t0 = time.perf_counter()
        try:
            async with session_scope(self.session) as session:
                async with session.post(url, json=payload, headers=headers) as response:
                    if response.status != 200:
                        body = await response.text(errors="replace")
                        raise SynthesisError(
                            word, f"ElevenLabs API returned {response.status}: {body}"
                        )
                    size = 0
                    with open(partial, "wb") as f:
                        async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                            f.write(chunk)
                            size += len(chunk)
            if size == 0:
                raise SynthesisError(word, "ElevenLabs API returned an empty audio body")
            os.replace(partial, target)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise SynthesisError(word, f"Synthesis request failed: {e!r}") from e
        except OSError as e:
            raise SynthesisError(word, f"Failed to save audio file: {e}") from e
        finally:
            if partial.exists():
                partial.unlink()

        elapsed = 1000 * (time.perf_counter() - t0)
        log.info("Created audio file", word=word, path=str(target), bytes=size, elapsed_ms=elapsed)
        return AudioAsset(word=word, path=str(target), was_cached=False)
