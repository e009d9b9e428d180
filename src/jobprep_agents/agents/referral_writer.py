"""Referral request writer agent."""

from __future__ import annotations

import time

from jobprep_agents.agents.base import BaseAgent
from jobprep_agents.prompts.referral_request import (
    REFERRAL_REQUEST_SYSTEM,
    REFERRAL_REQUEST_USER,
)
from jobprep_core.constants import REFERRAL_REQUEST_PROMPT_VERSION
from jobprep_core.models.follow_up import ReferralRequestTemplate


class ReferralRequestAgent(BaseAgent):
    """Draft a referral request to a networking contact."""

    agent_name = "referral_writer"

    async def run(
        self,
        contact_name: str,
        job_title: str,
        company_name: str,
        contact_company: str | None = None,
        relationship: str | None = None,
        tone: str = "professional",
        notes: str | None = None,
    ) -> ReferralRequestTemplate:
        """Return subject, greeting, body, closing and the assembled message."""
        self._log_start(
            {"company": company_name, "prompt_version": REFERRAL_REQUEST_PROMPT_VERSION}
        )
        start = time.monotonic()

        prompt = REFERRAL_REQUEST_USER.format(
            contact_name=contact_name,
            contact_company=contact_company or company_name,
            relationship=relationship or "professional contact",
            job_title=job_title,
            company_name=company_name,
            tone=tone,
            notes=notes or "None",
        )
        template = await self._call_llm(
            messages=[{"role": "user", "content": prompt}],
            model=self.settings.haiku_model,
            response_model=ReferralRequestTemplate,
            system=REFERRAL_REQUEST_SYSTEM,
        )
        if not template.full_message.strip():
            template.full_message = "\n\n".join(
                part for part in (template.greeting, template.body, template.closing) if part
            )

        self._log_end(time.monotonic() - start)
        return template
