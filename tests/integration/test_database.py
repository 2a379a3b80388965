"""Integration tests for the SQLAlchemy repositories.

These tests run the repositories against a real SQLite database
(aiosqlite) and verify:
- Response persistence and read-back order
- Soft-delete exclusion for responses, rules and questions
- Rule condition loading and question text joining
- Candidate pool filtering and mapping
"""

import pytest
from sqlalchemy import select, update

from plant_survey.errors import ResponseNotFoundError
from plant_survey.models.partner import PartnerProfileRecord
from plant_survey.models.plant import PlantRecord
from plant_survey.models.question import QuestionRecord
from plant_survey.models.response import SurveyAnswerRecord, SurveyResponse
from plant_survey.models.rule import RuleConditionRecord, RuleRecord
from plant_survey.schemas.catalog import PartnerFilter, PlantFilter
from plant_survey.schemas.rule import ConditionOperator
from plant_survey.services.answer_store import SqlAnswerStore
from plant_survey.services.catalog_repository import SqlCatalogRepository
from plant_survey.services.question_repository import SqlQuestionRepository
from plant_survey.services.rule_repository import SqlRuleRepository


async def add_all(session_factory, *records):
    async with session_factory() as session:
        async with session.begin():
            session.add_all(records)


class TestSqlAnswerStore:
    """Integration tests for SqlAnswerStore."""

    @pytest.mark.asyncio
    async def test_round_trip_preserves_order(self, session_factory, sample_answers):
        """Test stored answers come back in submission order."""
        store = SqlAnswerStore(session_factory)

        response_id = await store.create_survey_response(sample_answers, "user-1")
        answers = await store.get_answers_by_response_id(response_id)

        assert answers == sample_answers

    @pytest.mark.asyncio
    async def test_response_row_created(self, session_factory, sample_answers):
        """Test the response and its answer rows are persisted together."""
        store = SqlAnswerStore(session_factory)

        response_id = await store.create_survey_response(sample_answers, "user-1")

        async with session_factory() as session:
            response = await session.get(SurveyResponse, response_id)
            count = len((await session.scalars(
                select(SurveyAnswerRecord).where(SurveyAnswerRecord.response_id == response_id)
            )).all())

        assert response.user_id == "user-1"
        assert response.is_deleted is False
        assert count == len(sample_answers)

    @pytest.mark.asyncio
    async def test_response_ids_are_unique(self, session_factory, sample_answers):
        store = SqlAnswerStore(session_factory)

        first = await store.create_survey_response(sample_answers)
        second = await store.create_survey_response(sample_answers)

        assert first != second

    @pytest.mark.asyncio
    async def test_unknown_response(self, session_factory):
        store = SqlAnswerStore(session_factory)

        with pytest.raises(ResponseNotFoundError) as exc_info:
            await store.get_answers_by_response_id("does-not-exist")

        assert exc_info.value.errors == {"responseId": "does-not-exist"}

    @pytest.mark.asyncio
    async def test_soft_deleted_response_not_found(self, session_factory, sample_answers):
        store = SqlAnswerStore(session_factory)
        response_id = await store.create_survey_response(sample_answers)

        async with session_factory() as session:
            async with session.begin():
                await session.execute(
                    update(SurveyResponse).where(SurveyResponse.id == response_id).values(is_deleted=True)
                )

        with pytest.raises(ResponseNotFoundError):
            await store.get_answers_by_response_id(response_id)


class TestSqlRuleRepository:
    """Integration tests for SqlRuleRepository."""

    @pytest.mark.asyncio
    async def test_active_rules_in_storage_order(self, session_factory):
        """Test soft-deleted rules are excluded and conditions are ordered."""
        await add_all(
            session_factory,
            QuestionRecord(id="q_space", question_text="Where will the plants live?", options=["Balcony"]),
            RuleRecord(
                name="Balcony lovers",
                affiliate_for="landscaping",
                conditions=[
                    RuleConditionRecord(position=1, question_id="q_goal", operator="OR",
                                        values=["Aesthetic improvement", "Privacy"]),
                    RuleConditionRecord(position=0, question_id="q_space", operator="equals",
                                        values=["Balcony"]),
                ],
            ),
            RuleRecord(name="Retired rule", is_deleted=True, conditions=[
                RuleConditionRecord(position=0, question_id="q_space", operator="equals", values=["Garden"]),
            ]),
            RuleRecord(name="Empty rule"),
        )

        rules = await SqlRuleRepository(session_factory).list_active_rules()

        assert [rule.name for rule in rules] == ["Balcony lovers", "Empty rule"]
        first = rules[0]
        assert first.id.isdigit()
        assert first.affiliate_for == "landscaping"
        assert [c.question_id for c in first.conditions] == ["q_space", "q_goal"]
        assert first.conditions[0].question_text == "Where will the plants live?"
        assert first.conditions[1].question_text is None
        assert first.conditions[1].operator == ConditionOperator.OR
        assert first.conditions[1].values == ("Aesthetic improvement", "Privacy")
        assert rules[1].conditions == ()

    @pytest.mark.asyncio
    async def test_rule_with_invalid_condition_skipped(self, session_factory):
        """Test rules with unknown operators, empty or non-list values are not returned."""
        await add_all(
            session_factory,
            RuleRecord(name="Unknown operator", conditions=[
                RuleConditionRecord(position=0, question_id="q1", operator="contains", values=["x"]),
            ]),
            RuleRecord(name="Scalar values", conditions=[
                RuleConditionRecord(position=0, question_id="q1", operator="equals", values="red"),
            ]),
            RuleRecord(name="No values", conditions=[
                RuleConditionRecord(position=0, question_id="q1", operator="equals", values=[]),
            ]),
            RuleRecord(name="Valid", conditions=[
                RuleConditionRecord(position=0, question_id="q1", operator="equals", values=["x"]),
            ]),
        )

        rules = await SqlRuleRepository(session_factory).list_active_rules()

        assert [rule.name for rule in rules] == ["Valid"]

    @pytest.mark.asyncio
    async def test_deleted_question_text_not_joined(self, session_factory):
        await add_all(
            session_factory,
            QuestionRecord(id="q1", question_text="Old question", is_deleted=True),
            RuleRecord(name="Rule", conditions=[
                RuleConditionRecord(position=0, question_id="q1", operator="equals", values=["x"]),
            ]),
        )

        rules = await SqlRuleRepository(session_factory).list_active_rules()

        assert rules[0].conditions[0].question_text is None


class TestSqlCatalogRepository:
    """Integration tests for SqlCatalogRepository."""

    @pytest.mark.asyncio
    async def test_plants_exclude_soft_deleted(self, session_factory):
        await add_all(
            session_factory,
            PlantRecord(scientific_name="Monstera deliciosa", common_name="Monstera",
                        space_types=["Balcony"], locations=[{"type": "SP", "value": "Campinas"}]),
            PlantRecord(scientific_name="Ficus elastica", common_name="Rubber plant", is_deleted=True),
        )
        repository = SqlCatalogRepository(session_factory)

        plants = await repository.list_candidate_plants(PlantFilter())
        everything = await repository.list_candidate_plants(PlantFilter(include_deleted=True))

        assert [p.common_name for p in plants] == ["Monstera"]
        assert plants[0].space_types == ("Balcony",)
        assert plants[0].locations[0].type == "SP"
        assert plants[0].locations[0].value == "Campinas"
        assert len(everything) == 2

    @pytest.mark.asyncio
    async def test_partners_filtered_by_status(self, session_factory):
        await add_all(
            session_factory,
            PartnerProfileRecord(email="a@example.com", mobile_number="1", company_name="Active",
                                 status="active", speciality=["Landscaping"], city="Curitiba",
                                 state="PR", rating=4.0),
            PartnerProfileRecord(email="p@example.com", mobile_number="2", company_name="Pending"),
            PartnerProfileRecord(email="n@example.com", mobile_number="3", company_name="No address",
                                 status="active"),
        )

        partners = await SqlCatalogRepository(session_factory).list_candidate_partners(PartnerFilter())

        assert [p.company_name for p in partners] == ["Active", "No address"]
        assert partners[0].speciality == ("Landscaping",)
        assert partners[0].address.city == "Curitiba"
        assert partners[0].rating == 4.0
        assert partners[1].address is None
        assert partners[1].rating == 0.0


class TestSqlQuestionRepository:
    """Integration tests for SqlQuestionRepository."""

    @pytest.mark.asyncio
    async def test_active_questions_in_display_order(self, session_factory):
        await add_all(
            session_factory,
            QuestionRecord(id="q_unordered", question_text="Anything else?"),
            QuestionRecord(id="q_second", question_text="How big is the area?", order=1,
                           options=["Small", "Large"]),
            QuestionRecord(id="q_first", question_text="Where will the plants live?", order=0),
            QuestionRecord(id="q_deleted", question_text="Retired", order=2, is_deleted=True),
        )

        questions = await SqlQuestionRepository(session_factory).list_active_questions()

        assert [q.id for q in questions] == ["q_first", "q_second", "q_unordered"]
        assert questions[1].options == ("Small", "Large")
        assert questions[1].text == "How big is the area?"
