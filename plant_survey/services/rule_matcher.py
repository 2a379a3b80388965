"""Rule matching service.

This module decides which administrator-authored rules are satisfied by a
set of survey answers. Matching is a pure function of (rules, answers).
"""

from typing import Optional, Sequence

from plant_survey.schemas.answer import SurveyAnswer
from plant_survey.schemas.rule import Condition, ConditionOperator, Rule
from plant_survey.logging_config import get_logger

logger = get_logger(__name__)


class RuleMatcher:
    """Service for evaluating rules against survey answers."""

    @staticmethod
    def find_answer(question_id: str, answers: Sequence[SurveyAnswer]) -> Optional[SurveyAnswer]:
        """Return the first answer to ``question_id``, or None."""
        for answer in answers:
            if answer.question_id == question_id:
                return answer
        return None

    @staticmethod
    def evaluate_condition(condition: Condition, answers: Sequence[SurveyAnswer]) -> bool:
        """Evaluate a single condition.

        Comparison is case-sensitive exact string equality against the
        answer's textual value:

        - EQUALS: value equals any entry in ``values``
        - AND: value equals every entry in ``values``
        - OR: value equals at least one entry in ``values``

        An answer holds a single value, so AND with two different entries
        can never be satisfied.

        Args:
            condition: Condition to evaluate
            answers: Answers of one survey response

        Returns:
            True if satisfied; False when the question was not answered

        Example:
            >>> cond = Condition(questionId="q2", operator="equals", values=("red", "blue"))
            >>> RuleMatcher.evaluate_condition(cond, [blue_answer_for_q2])
            True
        """
        answer = RuleMatcher.find_answer(condition.question_id, answers)
        if answer is None:
            return False

        value = answer.text_value
        if condition.operator == ConditionOperator.AND:
            return all(value == expected for expected in condition.values)
        # EQUALS and OR
        return any(value == expected for expected in condition.values)

    @staticmethod
    def matches(rule: Rule, answers: Sequence[SurveyAnswer]) -> bool:
        """Check whether every condition of ``rule`` is satisfied.

        A rule without conditions never matches.
        """
        if not rule.conditions:
            logger.warning(f"Rule '{rule.name}' has no conditions, skipping", extra={"rule_id": rule.id})
            return False
        return all(RuleMatcher.evaluate_condition(condition, answers) for condition in rule.conditions)

    @staticmethod
    def match_all(rules: Sequence[Rule], answers: Sequence[SurveyAnswer]) -> list[Rule]:
        """Return the satisfied rules, preserving the order of ``rules``.

        Args:
            rules: Active rules in storage order
            answers: Answers of one survey response

        Returns:
            Matched subset of ``rules`` (possibly empty)
        """
        matched = [rule for rule in rules if RuleMatcher.matches(rule, answers)]
        logger.debug(f"Matched {len(matched)} of {len(rules)} rules")
        return matched

    @staticmethod
    def affiliate_tags(matched_rules: Sequence[Rule]) -> list[str]:
        """Collect distinct ``affiliate_for`` tags in first-matched order."""
        tags: list[str] = []
        for rule in matched_rules:
            if rule.affiliate_for and rule.affiliate_for not in tags:
                tags.append(rule.affiliate_for)
        return tags
