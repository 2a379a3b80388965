"""Recommendation selection service.

Turns survey answers, matched rules and candidate pools into ranked plant
and partner recommendations. Selection is read-only: answers, rules and
candidate pools are never modified.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from plant_survey.schemas.answer import AnswerType, SelectedAddress, SurveyAnswer
from plant_survey.schemas.catalog import FieldIndex, PartnerCandidate, PlantCandidate
from plant_survey.schemas.recommendation import (
    PartnerRecommendation,
    PartnerRecommendationResult,
    PartnerRecommendationStatus,
    PlantRecommendation,
)
from plant_survey.schemas.rule import Rule
from plant_survey.services.location import loosely_equal, normalize_text, same_location
from plant_survey.services.template_renderer import (
    PARTNER_EXPLANATION_TEMPLATE,
    PLANT_EXPLANATION_TEMPLATE,
    TemplateRenderer,
    get_template_renderer,
)
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)

# Plant attribute compared against the answer at each FieldIndex position
_PLANT_ATTRIBUTES = {
    FieldIndex.SPACE_TYPES: ("space_types", "space type"),
    FieldIndex.AREA_SIZES: ("area_sizes", "area size"),
    FieldIndex.CHALLENGES: ("challenges", "challenge"),
    FieldIndex.TECH_PREFERENCES: ("tech_preferences", "tech preference"),
}


@dataclass(frozen=True)
class GateConfig:
    """Eligibility gate for partner recommendations.

    Attributes:
        signal: Case-insensitive substring that unlocks partner recommendations
        question_id: Question whose answer is inspected; takes precedence
        position: Answer position inspected when no question_id is set
    """
    signal: str = "aesthetic"
    question_id: Optional[str] = None
    position: int = 2


@dataclass(frozen=True)
class PlantCriterion:
    """One plant attribute requirement derived from an answer."""
    index: FieldIndex
    label: str
    value: str
    address: Optional[SelectedAddress] = None


class RecommendationSelector:
    """Service for selecting and ranking recommendations."""

    def __init__(
        self,
        gate: Optional[GateConfig] = None,
        plant_limit: int = 20,
        location_filter: bool = True,
        renderer: Optional[TemplateRenderer] = None
    ):
        """Initialize selector.

        Args:
            gate: Partner eligibility gate configuration
            plant_limit: Maximum number of plants returned
            location_filter: Only keep partners serving the answered state/city
            renderer: Template renderer for explanations
        """
        self.gate = gate or GateConfig()
        self.plant_limit = plant_limit
        self.location_filter = location_filter
        self.renderer = renderer or get_template_renderer()

    # ------------------------------------------------------------------
    # Partner eligibility gate
    # ------------------------------------------------------------------

    def gate_answer(self, answers: Sequence[SurveyAnswer]) -> Optional[SurveyAnswer]:
        """Locate the answer inspected by the eligibility gate."""
        if self.gate.question_id is not None:
            for answer in answers:
                if answer.question_id == self.gate.question_id:
                    return answer
            return None
        if self.gate.position < len(answers):
            return answers[self.gate.position]
        return None

    def is_partner_eligible(self, answers: Sequence[SurveyAnswer]) -> bool:
        """Check whether partner recommendations apply to these answers.

        The gate is satisfied when the gate answer is an option whose text
        contains the configured signal (case-insensitive). A missing gate
        answer or an address answer does not satisfy it.
        """
        answer = self.gate_answer(answers)
        if answer is None or answer.selected_option is None:
            return False
        return self.gate.signal.lower() in answer.selected_option.lower()

    # ------------------------------------------------------------------
    # Plants
    # ------------------------------------------------------------------

    @staticmethod
    def plant_criteria(answers: Sequence[SurveyAnswer]) -> list[PlantCriterion]:
        """Derive plant attribute requirements from answer positions."""
        criteria: list[PlantCriterion] = []
        for position, answer in enumerate(answers):
            try:
                index = FieldIndex(position)
            except ValueError:
                break

            if index == FieldIndex.LOCATIONS:
                if answer.type == AnswerType.ADDRESS:
                    address = answer.selected_address
                    criteria.append(PlantCriterion(
                        index=index,
                        label="location",
                        value=f"{address.city}, {address.state}",
                        address=address,
                    ))
            elif answer.type == AnswerType.OPTION:
                criteria.append(PlantCriterion(
                    index=index,
                    label=_PLANT_ATTRIBUTES[index][1],
                    value=answer.selected_option,
                ))
        return criteria

    @staticmethod
    def plant_satisfies(plant: PlantCandidate, criterion: PlantCriterion) -> bool:
        """Check a single criterion against a plant."""
        if criterion.index == FieldIndex.LOCATIONS:
            return any(
                same_location(location.type, criterion.address.state)
                and same_location(location.value, criterion.address.city)
                for location in plant.locations
            )
        attribute = _PLANT_ATTRIBUTES[criterion.index][0]
        return any(loosely_equal(value, criterion.value) for value in getattr(plant, attribute))

    def select_plant_recommendations(
        self,
        answers: Sequence[SurveyAnswer],
        plants: Sequence[PlantCandidate]
    ) -> list[PlantRecommendation]:
        """Rank catalog plants against the answers.

        Each plant scores one point per satisfied criterion. Plants that
        satisfy nothing are dropped; the rest are ordered by score
        (descending) with catalog order breaking ties, then capped at
        ``plant_limit``.

        Args:
            answers: Answers of one survey response
            plants: Candidate plants in catalog insertion order

        Returns:
            Ranked plant recommendations (possibly empty)
        """
        criteria = self.plant_criteria(answers)
        if not criteria:
            logger.info("No plant criteria derivable from answers")
            return []

        scored = []
        for plant in plants:
            satisfied = [c for c in criteria if self.plant_satisfies(plant, c)]
            if satisfied:
                scored.append((plant, satisfied))

        # sorted() is stable, so equal scores keep catalog order
        ranked = sorted(scored, key=lambda item: len(item[1]), reverse=True)[:self.plant_limit]

        return [
            PlantRecommendation(
                id=plant.id,
                name=plant.common_name,
                scientific=plant.scientific_name,
                image=plant.image_search_url,
                description=plant.description,
                score=len(satisfied),
                why_recommended=self.renderer.render(
                    PLANT_EXPLANATION_TEMPLATE,
                    {"criteria": [{"label": c.label, "value": c.value} for c in satisfied]},
                ),
            )
            for plant, satisfied in ranked
        ]

    # ------------------------------------------------------------------
    # Partners
    # ------------------------------------------------------------------

    @staticmethod
    def address_answer(answers: Sequence[SurveyAnswer]) -> Optional[SelectedAddress]:
        """Return the first address answered, if any."""
        for answer in answers:
            if answer.selected_address is not None:
                return answer.selected_address
        return None

    @staticmethod
    def matching_speciality(partner: PartnerCandidate, tag: str) -> Optional[str]:
        """Return the partner speciality that loosely matches ``tag``.

        Specialities match when one normalized form contains the other,
        so "Landscaping" matches the tag "landscaping design". A blank tag
        matches nothing.
        """
        normalized_tag = normalize_text(tag)
        if not normalized_tag:
            return None
        for speciality in partner.speciality:
            normalized = normalize_text(speciality)
            if normalized and (normalized in normalized_tag or normalized_tag in normalized):
                return speciality
        return None

    @staticmethod
    def serves_address(partner: PartnerCandidate, address: SelectedAddress) -> bool:
        """Check whether a partner is located in the answered state and city."""
        if partner.address is None:
            return False
        return (
            same_location(address.state, partner.address.state)
            and same_location(address.city, partner.address.city)
        )

    def select_partner_recommendations(
        self,
        answers: Sequence[SurveyAnswer],
        matched_rules: Sequence[Rule],
        partners: Sequence[PartnerCandidate]
    ) -> PartnerRecommendationResult:
        """Select and rank partners for a survey response.

        Args:
            answers: Answers of one survey response
            matched_rules: Rules satisfied by the answers, in storage order
            partners: Active partner candidates in creation order

        Returns:
            Result whose status distinguishes NOT_APPLICABLE (gate not
            satisfied) from NO_MATCHES (nothing qualified)
        """
        if not self.is_partner_eligible(answers):
            return PartnerRecommendationResult(status=PartnerRecommendationStatus.NOT_APPLICABLE)

        if not matched_rules:
            logger.info("No rules matched, no partner recommendations")
            return PartnerRecommendationResult(status=PartnerRecommendationStatus.NO_MATCHES)

        address = self.address_answer(answers) if self.location_filter else None
        tagged_rules = [rule for rule in matched_rules if rule.affiliate_for]

        selected = []
        for partner in partners:
            if address is not None and not self.serves_address(partner, address):
                continue

            rule, speciality = self._triggering_rule(partner, matched_rules, tagged_rules)
            if rule is None:
                continue

            location = f"{partner.address.city}, {partner.address.state}" if address is not None else None
            selected.append(PartnerRecommendation(
                partner_id=partner.id,
                email=partner.email,
                mobile_number=partner.mobile_number,
                company_name=partner.company_name,
                speciality=partner.speciality,
                address=partner.address,
                website=partner.website,
                contact_person=partner.contact_person,
                project_image_url=partner.project_image_url,
                rating=partner.rating,
                why_recommended=self.renderer.render(
                    PARTNER_EXPLANATION_TEMPLATE,
                    {"rule_name": rule.name, "speciality": speciality, "location": location},
                ),
            ))

        if not selected:
            return PartnerRecommendationResult(status=PartnerRecommendationStatus.NO_MATCHES)

        # Stable: equal ratings keep creation order
        selected.sort(key=lambda rec: rec.rating, reverse=True)
        return PartnerRecommendationResult(
            status=PartnerRecommendationStatus.MATCHED,
            partners=tuple(selected),
        )

    def _triggering_rule(
        self,
        partner: PartnerCandidate,
        matched_rules: Sequence[Rule],
        tagged_rules: Sequence[Rule]
    ) -> tuple[Optional[Rule], Optional[str]]:
        """Find the first matched rule that qualifies ``partner``.

        Without any affiliate tags every partner qualifies through the
        first matched rule. With tags, the partner needs a speciality
        overlapping one of them.
        """
        if not tagged_rules:
            return matched_rules[0], None
        for rule in tagged_rules:
            speciality = self.matching_speciality(partner, rule.affiliate_for)
            if speciality is not None:
                return rule, speciality
        return None, None
