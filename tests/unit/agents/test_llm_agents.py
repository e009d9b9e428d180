"""Tests for the concrete LLM agents."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from jobprep_agents.agents.follow_up_writer import FollowUpWriterAgent
from jobprep_agents.agents.mock_interview_generator import MockInterviewGeneratorAgent
from jobprep_agents.agents.referral_writer import ReferralRequestAgent
from jobprep_agents.agents.success_narrator import SuccessNarrativeAgent
from jobprep_agents.scoring.success_score import compute_success_scores
from jobprep_core.interfaces.polisher import MessagePolisher
from jobprep_core.models.follow_up import FollowUpContext
from tests.mocks.mock_factories import make_prediction_inputs
from tests.mocks.mock_llm import FakeInstructorClient
from tests.mocks.mock_settings import make_settings


def _prompt(client: FakeInstructorClient) -> str:
    content: str = client.messages.calls[-1]["messages"][0]["content"]
    return content


@pytest.mark.unit
class TestSuccessNarrativeAgent:
    """Test SuccessNarrativeAgent."""

    @pytest.mark.asyncio
    async def test_prompt_carries_fixed_scores(self) -> None:
        """Scores and the checklist are rendered into the prompt."""
        settings = make_settings()
        agent = SuccessNarrativeAgent(settings)
        client = FakeInstructorClient()
        agent._instructor = client

        inputs = make_prediction_inputs()
        scores = compute_success_scores(inputs)
        narrative = await agent.run(inputs, scores, datetime(2026, 3, 2, 15, 0, tzinfo=UTC))

        assert narrative.predicted_outcome == "possible"
        assert client.messages.calls[0]["model"] == settings.sonnet_model
        prompt = _prompt(client)
        assert "Overall Probability: 69%" in prompt
        assert "- [x] Task 0" in prompt
        assert "- [ ] Task 3" in prompt
        assert "2026-03-02" in prompt

    @pytest.mark.asyncio
    async def test_no_tasks(self) -> None:
        """An empty checklist renders a placeholder line."""
        agent = SuccessNarrativeAgent(make_settings())
        client = FakeInstructorClient()
        agent._instructor = client

        inputs = make_prediction_inputs(preparation_tasks=[])
        await agent.run(inputs, compute_success_scores(inputs))
        prompt = _prompt(client)
        assert "(none)" in prompt
        assert "Date: unknown" in prompt


@pytest.mark.unit
class TestFollowUpWriterAgent:
    """Test FollowUpWriterAgent."""

    @pytest.mark.asyncio
    async def test_run_uses_type_guidance(self) -> None:
        """The prompt includes interview details and per-type guidance."""
        settings = make_settings()
        agent = FollowUpWriterAgent(settings)
        client = FakeInstructorClient()
        agent._instructor = client

        context = FollowUpContext(
            company_name="Acme Corp",
            job_title="Backend Engineer",
            interviewer_name="Dana",
        )
        template = await agent.run("feedback_request", context)

        assert "[INTERVIEWER_NAME]" in template.subject
        assert client.messages.calls[0]["model"] == settings.haiku_model
        prompt = _prompt(client)
        assert "Generate a feedback request email template." in prompt
        assert "Company: Acme Corp" in prompt
        assert "Interviewer: Dana" in prompt
        assert "Requests constructive feedback" in prompt

    @pytest.mark.asyncio
    async def test_polish_lists_only_filled_details(self) -> None:
        """Blank placeholder values are not sent to the model."""
        agent = FollowUpWriterAgent(make_settings())
        client = FakeInstructorClient()
        agent._instructor = client

        polished = await agent.polish(
            "Thank you, Dana",
            "Body",
            "thank_you",
            {"[INTERVIEWER_NAME]": "Dana", "[YOUR_NAME]": "  "},
        )

        assert polished.content == "Polished body"
        prompt = _prompt(client)
        assert "[INTERVIEWER_NAME]: Dana" in prompt
        assert "[YOUR_NAME]" not in prompt

    def test_implements_polisher(self) -> None:
        """The writer satisfies the MessagePolisher protocol."""
        assert isinstance(FollowUpWriterAgent(make_settings()), MessagePolisher)


@pytest.mark.unit
class TestMockInterviewGeneratorAgent:
    """Test MockInterviewGeneratorAgent."""

    @pytest.mark.asyncio
    async def test_questions_numbered_and_categorized(self) -> None:
        """Order starts at 1 and missing categories fall back to the type."""
        agent = MockInterviewGeneratorAgent(make_settings())
        client = FakeInstructorClient()
        agent._instructor = client

        plan = await agent.run("Backend Engineer", "Acme Corp", "technical", question_count=2)

        assert [q.order for q in plan.questions] == [1, 2]
        assert [q.category for q in plan.questions] == ["behavioral", "system_design"]
        assert all(q.response == "" for q in plan.questions)
        assert plan.session_guidance.introduction == "Welcome"
        prompt = _prompt(client)
        assert "Generate exactly 2 interview questions" in prompt
        assert "Industry: Not specified" in prompt

    @pytest.mark.asyncio
    async def test_count_mismatch_is_tolerated(self) -> None:
        """Fewer questions than requested are returned as-is."""
        agent = MockInterviewGeneratorAgent(make_settings())
        agent._instructor = FakeInstructorClient()

        plan = await agent.run("Backend Engineer", "Acme Corp", question_count=8)
        assert len(plan.questions) == 2


@pytest.mark.unit
class TestReferralRequestAgent:
    """Test ReferralRequestAgent."""

    @pytest.mark.asyncio
    async def test_full_message_assembled(self) -> None:
        """A blank full_message is rebuilt from its parts."""
        agent = ReferralRequestAgent(make_settings())
        client = FakeInstructorClient()
        agent._instructor = client

        template = await agent.run("Sam Lee", "Backend Engineer", "Acme Corp")

        assert template.full_message == (
            "Hi Sam,\n\nWould you be open to referring me?\n\nThanks, Alex"
        )
        prompt = _prompt(client)
        assert "Company: Acme Corp" in prompt
        assert "Relationship: professional contact" in prompt
