"""Survey submission and recommendation orchestration.

Coordinates the language normalizer, persistence contracts, rule matcher
and recommendation selector for the HTTP handlers.
"""

import asyncio
from typing import Optional, Sequence

from plant_survey.schemas.answer import SurveyAnswer
from plant_survey.schemas.catalog import PartnerFilter, PlantFilter
from plant_survey.schemas.recommendation import PartnerRecommendationResult, PlantRecommendation
from plant_survey.services.answer_store import AnswerStore
from plant_survey.services.catalog_repository import CatalogRepository
from plant_survey.services.language_normalizer import LanguageNormalizer
from plant_survey.services.recommendation import RecommendationSelector
from plant_survey.services.rule_matcher import RuleMatcher
from plant_survey.services.rule_repository import RuleRepository
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


async def gather_or_cancel(*coros):
    """Run ``coros`` concurrently and return their results in order.

    When one fails, the others are cancelled and awaited before the
    error propagates, so no read outlives the request.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class SubmissionService:
    """Normalizes and stores survey submissions."""

    def __init__(self, normalizer: LanguageNormalizer, answer_store: AnswerStore):
        self.normalizer = normalizer
        self.answer_store = answer_store

    async def submit(
        self,
        answers: Sequence[SurveyAnswer],
        user_id: Optional[str] = None
    ) -> str:
        """Normalize answer language, then persist the response.

        Nothing is stored when normalization fails.

        Returns:
            The new response id

        Raises:
            TranslationError: If language normalization fails
        """
        normalized = await self.normalizer.normalize(answers)
        return await self.answer_store.create_survey_response(normalized, user_id)


class RecommendationService:
    """Produces plant and partner recommendations for stored responses."""

    def __init__(
        self,
        answer_store: AnswerStore,
        rule_repository: RuleRepository,
        catalog: CatalogRepository,
        selector: RecommendationSelector,
        matcher: Optional[RuleMatcher] = None
    ):
        """Initialize recommendation service.

        Args:
            answer_store: Source of stored answers
            rule_repository: Source of the active rule set
            catalog: Source of plant and partner candidates
            selector: Ranks candidates against answers
            matcher: Rule evaluator
        """
        self.answer_store = answer_store
        self.rule_repository = rule_repository
        self.catalog = catalog
        self.selector = selector
        self.matcher = matcher or RuleMatcher()

    async def recommend_plants(self, response_id: str) -> list[PlantRecommendation]:
        """Rank catalog plants for a stored response.

        Raises:
            ResponseNotFoundError: If the response has no answers
        """
        answers = await self.answer_store.get_answers_by_response_id(response_id)
        plants = await self.catalog.list_candidate_plants(PlantFilter())
        recommendations = self.selector.select_plant_recommendations(answers, plants)

        logger.info(
            f"Recommended {len(recommendations)} of {len(plants)} plants",
            extra={"response_id": response_id}
        )
        return recommendations

    async def recommend_partners(self, response_id: str) -> PartnerRecommendationResult:
        """Select partners for a stored response.

        The eligibility gate is checked before any rule or partner read.
        Rules and partners are then fetched concurrently; a failure of
        either read cancels the other and fails the whole request.

        Raises:
            ResponseNotFoundError: If the response has no answers
        """
        answers = await self.answer_store.get_answers_by_response_id(response_id)
        if not self.selector.is_partner_eligible(answers):
            logger.info("Partner recommendations not applicable", extra={"response_id": response_id})
            return self.selector.select_partner_recommendations(answers, [], [])

        rules, partners = await gather_or_cancel(
            self.rule_repository.list_active_rules(),
            self.catalog.list_candidate_partners(PartnerFilter()),
        )
        matched_rules = self.matcher.match_all(rules, answers)
        result = self.selector.select_partner_recommendations(answers, matched_rules, partners)

        logger.info(
            f"Partner recommendation status '{result.status.value}': "
            f"{len(matched_rules)} rules matched (tags: {self.matcher.affiliate_tags(matched_rules)}), "
            f"{len(result.partners)} partners selected",
            extra={"response_id": response_id}
        )
        return result
