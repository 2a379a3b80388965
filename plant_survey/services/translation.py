"""Translation service for normalizing answer text.

Provides the ``Translator`` contract used by the language normalizer, an
httpx-backed client for the public Google Translate endpoint, and
``translate_value`` which translates every string leaf of a nested
structure while leaving identifiers untouched.
"""

import re
from typing import Any, Dict, Optional, Protocol

import httpx

from plant_survey.errors import TranslationError
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)

# Keys whose values are identifiers or codes and must never be translated
SKIP_KEY_FRAGMENTS = (
    "id",
    "type",
    "token",
    "key",
    "email",
    "phone",
    "mobile",
    "url",
    "uri",
    "code",
)

# Translated terms mapped onto the vocabulary used by survey options
WORD_MAPPINGS: Dict[str, str] = {
    "wide": "Ample",
}

_ID_PATTERNS = (
    re.compile(r"^[a-f0-9]{24}$", re.IGNORECASE),  # ObjectId
    re.compile(r"^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$", re.IGNORECASE),
    re.compile(r"^\d+$"),
    re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$"),  # e-mail
    re.compile(r"^(https?://|www\.)", re.IGNORECASE),
)


class Translator(Protocol):
    """Contract for language detection and translation."""

    async def detect_language(self, text: str) -> Optional[str]:
        """Return the detected language code, or None if undetectable."""
        ...

    async def translate(self, text: str, target_language: str) -> str:
        """Translate text into the target language."""
        ...


class GoogleTranslateClient:
    """Translator backed by the public ``translate_a/single`` endpoint.

    Every failure (transport, HTTP status, malformed payload) is raised as
    TranslationError; nothing is silently passed through untranslated.
    """

    def __init__(
        self,
        api_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize translation client.

        Args:
            api_url: Translation endpoint URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    async def _request(self, text: str, target_language: str) -> list:
        params = {
            "client": "gtx",
            "sl": "auto",
            "tl": target_language,
            "dt": "t",
            "q": text,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.api_url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Translation request failed: {e}")
            raise TranslationError("Translation service request failed")
        except ValueError as e:
            logger.error(f"Translation response was not JSON: {e}")
            raise TranslationError("Translation service returned an invalid response")

        if not isinstance(payload, list) or not payload:
            raise TranslationError("Translation service returned an invalid response")
        return payload

    async def detect_language(self, text: str) -> Optional[str]:
        """Detect the language of ``text``.

        Args:
            text: Sample text

        Returns:
            Language code such as "pt" or "en", or None when undetectable

        Raises:
            TranslationError: If the translation service call fails
        """
        payload = await self._request(text, "en")
        source = payload[2] if len(payload) > 2 else None
        if not isinstance(source, str) or not source:
            logger.debug(f"No language detected for sample '{text[:30]}'")
            return None
        return source.lower()

    async def translate(self, text: str, target_language: str) -> str:
        """Translate ``text`` into ``target_language``.

        Raises:
            TranslationError: If the call fails or returns no segments
        """
        payload = await self._request(text, target_language)
        segments = payload[0]
        if not isinstance(segments, list):
            raise TranslationError("Translation service returned no translation")
        try:
            translated = "".join(segment[0] for segment in segments if segment and segment[0])
        except (TypeError, IndexError):
            raise TranslationError("Translation service returned malformed segments")
        if not translated:
            raise TranslationError("Translation service returned an empty translation")
        return translated


def should_skip_key(key: str) -> bool:
    """Check whether a mapping key holds an identifier-like value."""
    lower_key = key.lower()
    return any(fragment in lower_key for fragment in SKIP_KEY_FRAGMENTS)


def looks_like_identifier(value: str) -> bool:
    """Check whether a string is an ID, e-mail, URL or number rather than prose."""
    return any(pattern.search(value) for pattern in _ID_PATTERNS)


def canonicalize_translation(value: str) -> str:
    """Map a translated string onto the survey vocabulary and Title Case it.

    Example:
        >>> canonicalize_translation("home garden")
        'Home Garden'
        >>> canonicalize_translation("wide")
        'Ample'
    """
    mapped = WORD_MAPPINGS.get(value.strip().lower(), value)
    return " ".join(word[:1].upper() + word[1:] for word in mapped.lower().split())


async def translate_value(
    value: Any,
    target_language: str,
    translator: Translator,
    memo: Optional[Dict[str, str]] = None
) -> Any:
    """Translate every string leaf of a nested value.

    Dicts and lists are rebuilt with the same shape; values under
    identifier keys, identifier-looking strings, blank strings and
    non-strings are returned unchanged. ``memo`` de-duplicates identical
    strings within a single call tree.

    Args:
        value: Value to translate (str, dict, list or any other leaf)
        target_language: Target language code
        translator: Translator used for string leaves
        memo: Per-call cache of already translated strings

    Returns:
        Translated copy of ``value``

    Raises:
        TranslationError: Propagated from the translator
    """
    if memo is None:
        memo = {}

    if isinstance(value, dict):
        translated: Dict[str, Any] = {}
        for key, item in value.items():
            if should_skip_key(key):
                translated[key] = item
            else:
                translated[key] = await translate_value(item, target_language, translator, memo)
        return translated

    if isinstance(value, list):
        return [await translate_value(item, target_language, translator, memo) for item in value]

    if isinstance(value, str) and value.strip() and not looks_like_identifier(value):
        if value not in memo:
            raw = await translator.translate(value, target_language)
            memo[value] = canonicalize_translation(raw)
        return memo[value]

    return value
