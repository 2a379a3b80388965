"""Language normalization for submitted survey answers.

Rule matching compares answer text by exact string equality against
English rule values, so answers written in a configured foreign language
are translated to the canonical language before they are persisted.
"""

from typing import Optional, Sequence

from plant_survey.errors import TranslationError
from plant_survey.schemas.answer import SurveyAnswer
from plant_survey.services.translation import Translator, translate_value
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


class LanguageNormalizer:
    """Translates answer text into the canonical language when needed."""

    def __init__(
        self,
        translator: Translator,
        canonical_language: str = "en",
        source_languages: Sequence[str] = ("pt",)
    ):
        """Initialize normalizer.

        Args:
            translator: Language detection/translation backend
            canonical_language: Language all answer text is normalized to
            source_languages: Language code prefixes that trigger translation
                (e.g., "pt" covers "pt", "pt-br", "pt-pt")
        """
        self.translator = translator
        self.canonical_language = canonical_language
        self.source_languages = tuple(code.lower() for code in source_languages)

    @staticmethod
    def detection_sample(answers: Sequence[SurveyAnswer]) -> Optional[str]:
        """Pick the text used to detect the language of the whole response.

        The first selected option is preferred; otherwise the first
        address city. Returns None when the answers carry no text.
        """
        for answer in answers:
            if answer.selected_option:
                return answer.selected_option
        for answer in answers:
            if answer.selected_address is not None and answer.selected_address.city:
                return answer.selected_address.city
        return None

    def needs_translation(self, language: Optional[str]) -> bool:
        """Check whether a detected language must be translated."""
        if not language:
            return False
        language = language.lower()
        if language.startswith(self.canonical_language):
            return False
        return any(language.startswith(code) for code in self.source_languages)

    async def normalize(self, answers: Sequence[SurveyAnswer]) -> list[SurveyAnswer]:
        """Return answers with their text in the canonical language.

        Args:
            answers: Submitted answers (not modified)

        Returns:
            New list of answers; identical to the input when no translation
            is required

        Raises:
            TranslationError: If detection or translation fails
        """
        sample = self.detection_sample(answers)
        if sample is None:
            logger.debug("No text sample in answers, skipping language detection")
            return list(answers)

        language = await self.translator.detect_language(sample)
        if not self.needs_translation(language):
            logger.debug(f"Detected language '{language}', no translation needed")
            return list(answers)

        logger.info(
            f"Translating {len(answers)} answers from '{language}' "
            f"to '{self.canonical_language}'"
        )
        payload = [answer.to_wire() for answer in answers]
        translated = await translate_value(payload, self.canonical_language, self.translator)

        try:
            return [SurveyAnswer.model_validate(item) for item in translated]
        except ValueError as e:
            # Blank translations violate answer invariants
            logger.error(f"Translated answers failed validation: {e}")
            raise TranslationError("Translated answers are invalid")
