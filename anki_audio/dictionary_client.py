"""Yandex Dictionary API client."""

import asyncio
import time
from typing import Optional

import aiohttp
import structlog
from pydantic import ValidationError

from .config import DICTIONARY_URL, LANGUAGE_PAIR
from .exceptions import TranslationError
from .models import DictionaryResponse, TranslationResult
from .utils import session_scope

log = structlog.get_logger()


class DictionaryClient:
    """Looks up the translation of a single word.

    Stateless between calls. Pass ``session`` to reuse one connection pool
    for a whole run; without it every lookup opens its own session.
    """

    def __init__(
        self,
        api_key: str,
        session: Optional[aiohttp.ClientSession] = None,
        url: str = DICTIONARY_URL,
        lang: str = LANGUAGE_PAIR,
    ):
        self.api_key = api_key
        self.session = session
        self.url = url
        self.lang = lang

    async def lookup(self, word: str) -> TranslationResult:
        """Return the first translation of the first sense of ``word``.

        Raises ``TranslationError`` on transport failure, a non-200 status
        or a body that is not a dictionary response. A response without
        any definitions is not an error: the translation is ``""``.
        """
        params = {"key": self.api_key, "lang": self.lang, "text": word}

        t0 = time.perf_counter()
        try:
            async with session_scope(self.session) as session:
                async with session.get(self.url, params=params) as response:
                    if response.status != 200:
                        body = await response.text(errors="replace")
                        raise TranslationError(
                            word, f"Dictionary API returned {response.status}: {body}"
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TranslationError(word, f"Dictionary request failed: {e!r}") from e
        except ValueError as e:
            raise TranslationError(word, f"Dictionary returned invalid JSON: {e}") from e

        try:
            parsed = DictionaryResponse.model_validate(data)
        except ValidationError as e:
            raise TranslationError(word, f"Unexpected dictionary response: {e}") from e

        translation = parsed.first_translation()
        elapsed = 1000 * (time.perf_counter() - t0)
        if translation:
            log.info("Translation found", word=word, translation=translation, elapsed_ms=elapsed)
        else:
            log.warning("No translation returned", word=word, elapsed_ms=elapsed)
        return TranslationResult(word=word, translation=translation)
