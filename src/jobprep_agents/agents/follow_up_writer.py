"""Follow-up writer agent: drafts templates and polishes filled-in messages."""

from __future__ import annotations

import time

from jobprep_agents.agents.base import BaseAgent
from jobprep_agents.prompts.follow_up import (
    FOLLOW_UP_SYSTEM,
    FOLLOW_UP_TYPE_DESCRIPTIONS,
    FOLLOW_UP_TYPE_GUIDANCE,
    FOLLOW_UP_USER,
    POLISH_SYSTEM,
    POLISH_USER,
)
from jobprep_core.constants import FOLLOW_UP_PROMPT_VERSION
from jobprep_core.models.follow_up import (
    FollowUpContext,
    FollowUpTemplate,
    FollowUpType,
    PolishedMessage,
)


class FollowUpWriterAgent(BaseAgent):
    """Generate follow-up email templates with bracket placeholders.

    Also implements the MessagePolisher interface used by finalize_message.
    """

    agent_name = "follow_up_writer"

    async def run(
        self, follow_up_type: FollowUpType, context: FollowUpContext
    ) -> FollowUpTemplate:
        """Draft a template for one follow-up type."""
        self._log_start(
            {"follow_up_type": follow_up_type, "prompt_version": FOLLOW_UP_PROMPT_VERSION}
        )
        start = time.monotonic()

        prompt = FOLLOW_UP_USER.format(
            follow_up_label=follow_up_type.replace("_", " "),
            interview_type=context.interview_type,
            interview_date=context.interview_date or "recent",
            company_name=context.company_name,
            job_title=context.job_title,
            interviewer_name=context.interviewer_name or "the interviewer",
            outcome=context.outcome,
            notes=context.notes or "None",
            purpose=FOLLOW_UP_TYPE_DESCRIPTIONS[follow_up_type],
            custom_context=context.custom_context or "None",
            guidance=FOLLOW_UP_TYPE_GUIDANCE[follow_up_type],
        )

        template = await self._call_llm(
            messages=[{"role": "user", "content": prompt}],
            model=self.settings.haiku_model,
            response_model=FollowUpTemplate,
            system=FOLLOW_UP_SYSTEM,
        )

        self._log_end(time.monotonic() - start, {"tips": len(template.tips)})
        return template

    async def polish(
        self,
        subject: str,
        content: str,
        follow_up_type: str,
        placeholder_values: dict[str, str],
    ) -> PolishedMessage:
        """Rewrite a merged message so the filled-in details read naturally."""
        details = "\n".join(
            f"{key}: {value}" for key, value in placeholder_values.items() if value.strip()
        )
        prompt = POLISH_USER.format(
            follow_up_type=follow_up_type,
            subject=subject,
            content=content,
            details=details or "(none)",
        )
        return await self._call_llm(
            messages=[{"role": "user", "content": prompt}],
            model=self.settings.haiku_model,
            response_model=PolishedMessage,
            system=POLISH_SYSTEM,
        )
