"""Mock interview generator agent."""

from __future__ import annotations

import time

import structlog

from jobprep_agents.agents.base import BaseAgent
from jobprep_agents.prompts.mock_interview import (
    FORMAT_DESCRIPTIONS,
    MOCK_INTERVIEW_SYSTEM,
    MOCK_INTERVIEW_USER,
)
from jobprep_core.constants import MOCK_INTERVIEW_PROMPT_VERSION
from jobprep_core.models.mock_interview import InterviewFormat, MockInterviewPlan

logger = structlog.get_logger()


class MockInterviewGeneratorAgent(BaseAgent):
    """Generate an ordered question set for a mock interview session."""

    agent_name = "mock_interview_generator"

    async def run(
        self,
        job_title: str,
        company_name: str,
        interview_format: InterviewFormat = "mixed",
        question_count: int = 8,
        industry: str | None = None,
    ) -> MockInterviewPlan:
        """Return questions numbered from 1 with a category on each."""
        self._log_start(
            {
                "format": interview_format,
                "question_count": question_count,
                "prompt_version": MOCK_INTERVIEW_PROMPT_VERSION,
            }
        )
        start = time.monotonic()

        prompt = MOCK_INTERVIEW_USER.format(
            job_title=job_title,
            company_name=company_name,
            industry=industry or "Not specified",
            interview_format=interview_format,
            format_description=FORMAT_DESCRIPTIONS[interview_format],
            question_count=question_count,
        )

        plan = await self._call_llm(
            messages=[{"role": "user", "content": prompt}],
            model=self.settings.sonnet_model,
            response_model=MockInterviewPlan,
            system=MOCK_INTERVIEW_SYSTEM,
        )

        for index, question in enumerate(plan.questions, start=1):
            question.order = index
            question.category = question.category or question.question_type
            question.response = ""

        if len(plan.questions) != question_count:
            logger.warning(
                "question_count_mismatch",
                requested=question_count,
                received=len(plan.questions),
            )

        self._log_end(time.monotonic() - start, {"questions": len(plan.questions)})
        return plan
