"""Base agent with structured LLM calling, retries and cost tracking."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, TypeVar

import instructor
import structlog
from anthropic import AsyncAnthropic
from pydantic import BaseModel
from tenacity import retry, stop_after_attempt, wait_exponential

from jobprep_agents.observability.cost_tracker import (
    CostTracker,
    LLMCallMetrics,
    extract_token_usage,
)
from jobprep_core.exceptions import AIServiceError, CostLimitExceededError

if TYPE_CHECKING:
    from jobprep_core.config.settings import Settings

T = TypeVar("T", bound=BaseModel)

logger = structlog.get_logger()


class BaseAgent:
    """Relay to the generative-AI backend with a typed response contract."""

    agent_name: str = "base"

    def __init__(self, settings: Settings, cost_tracker: CostTracker | None = None) -> None:
        """Initialize with settings and the run's shared cost tracker.

        A private tracker is created only when the agent is used on its own.
        """
        self.settings = settings
        self.cost_tracker = cost_tracker or CostTracker.from_settings(settings)
        self._instructor: Any = None

    def _get_instructor(self) -> Any:
        """Build the instructor-wrapped Anthropic client on first use."""
        if self._instructor is None:
            api_key = self.settings.anthropic_api_key
            client = AsyncAnthropic(
                api_key=api_key.get_secret_value() if api_key else None
            )
            self._instructor = instructor.from_anthropic(client)
        return self._instructor

    def _log_start(self, context: dict[str, object] | None = None) -> None:
        """Log agent execution start."""
        logger.info(
            "agent_start",
            agent=self.agent_name,
            **(context or {}),
        )

    def _log_end(
        self, duration: float, context: dict[str, object] | None = None
    ) -> None:
        """Log agent execution end with duration."""
        logger.info(
            "agent_end",
            agent=self.agent_name,
            duration_seconds=round(duration, 2),
            **(context or {}),
        )

    async def _call_llm(
        self,
        messages: list[dict[str, str]],
        model: str,
        response_model: type[T],
        system: str | None = None,
        max_retries: int | None = None,
    ) -> T:
        """Call LLM with structured output via instructor.

        Retries with exponential backoff, records token usage, and wraps any
        final provider failure in AIServiceError.
        """
        attempts = max_retries or self.settings.llm_max_retries
        client = self._get_instructor()

        @retry(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=1, min=1, max=10),
            reraise=True,
        )
        async def _do_call() -> T:
            kwargs: dict[str, Any] = {
                "model": model,
                "max_tokens": 4096,
                "messages": messages,
                "response_model": response_model,
            }
            if system:
                kwargs["system"] = system
            response: T = await client.messages.create(**kwargs)
            return response

        start = time.monotonic()
        try:
            result = await _do_call()
        except Exception as e:
            logger.error(
                "llm_call_failed",
                agent=self.agent_name,
                model=model,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise AIServiceError(str(e)) from e
        elapsed = time.monotonic() - start

        input_tokens, output_tokens = extract_token_usage(result)
        self._track_cost(model, input_tokens, output_tokens, elapsed)

        logger.debug(
            "llm_call_complete",
            agent=self.agent_name,
            model=model,
            duration=round(elapsed, 2),
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )
        return result

    def _track_cost(
        self,
        model: str,
        input_tokens: int,
        output_tokens: int,
        duration: float,
    ) -> None:
        """Record usage; CostLimitExceededError propagates to the caller."""
        try:
            self.cost_tracker.record_call(
                LLMCallMetrics(
                    model=model,
                    input_tokens=input_tokens,
                    output_tokens=output_tokens,
                    duration_seconds=duration,
                    agent_name=self.agent_name,
                )
            )
        except CostLimitExceededError:
            logger.error("cost_limit_exceeded", agent=self.agent_name)
            raise
