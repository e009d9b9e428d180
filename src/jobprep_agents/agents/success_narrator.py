"""Success narrative agent: explains locally computed interview scores."""

from __future__ import annotations

import time
from datetime import datetime

from jobprep_agents.agents.base import BaseAgent
from jobprep_agents.prompts.success_prediction import (
    SUCCESS_PREDICTION_SYSTEM,
    SUCCESS_PREDICTION_USER,
)
from jobprep_core.constants import SUCCESS_PREDICTION_PROMPT_VERSION
from jobprep_core.models.prediction import PredictionInputs, SuccessNarrative, SuccessScores


class SuccessNarrativeAgent(BaseAgent):
    """Ask the model for recommendations and strengths given fixed scores."""

    agent_name = "success_narrator"

    async def run(
        self,
        inputs: PredictionInputs,
        scores: SuccessScores,
        interview_date: datetime | None = None,
    ) -> SuccessNarrative:
        """Return narrative arrays and a predicted outcome for the scores."""
        self._log_start(
            {
                "overall_probability": scores.overall_probability,
                "prompt_version": SUCCESS_PREDICTION_PROMPT_VERSION,
            }
        )
        start = time.monotonic()

        task_lines = "\n".join(
            f"- [{'x' if t.completed else ' '}] {t.task}" for t in inputs.preparation_tasks
        ) or "(none)"
        prompt = SUCCESS_PREDICTION_USER.format(
            interview_type=inputs.interview_type,
            interview_date=interview_date.isoformat() if interview_date else "unknown",
            task_lines=task_lines,
            **scores.model_dump(),
        )

        narrative = await self._call_llm(
            messages=[{"role": "user", "content": prompt}],
            model=self.settings.sonnet_model,
            response_model=SuccessNarrative,
            system=SUCCESS_PREDICTION_SYSTEM,
        )

        self._log_end(
            time.monotonic() - start,
            {
                "predicted_outcome": narrative.predicted_outcome,
                "recommendations": len(narrative.improvement_recommendations),
            },
        )
        return narrative
