"""LLM cost tracking and token usage extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog

from jobprep_core.constants import TOKEN_PRICES
from jobprep_core.exceptions import CostLimitExceededError

if TYPE_CHECKING:
    from jobprep_core.config.settings import Settings

logger = structlog.get_logger()


@dataclass
class LLMCallMetrics:
    """Metrics for a single LLM call."""

    model: str
    input_tokens: int
    output_tokens: int
    duration_seconds: float
    agent_name: str

    @property
    def cost_usd(self) -> float:
        """Estimated cost of this call, 0 for unpriced models."""
        prices = TOKEN_PRICES.get(self.model)
        if not prices:
            return 0.0
        return (
            self.input_tokens * prices["input"] / 1_000_000
            + self.output_tokens * prices["output"] / 1_000_000
        )


@dataclass
class CostTracker:
    """Accumulates LLM call metrics and enforces cost guardrails.

    Services and the CLI build one tracker and hand it to every agent they
    create, so the limit applies to the whole run rather than to one agent.
    """

    max_cost_usd: float
    warn_threshold_usd: float
    calls: list[LLMCallMetrics] = field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: Settings) -> CostTracker:
        """Tracker with the configured warn threshold and hard limit."""
        return cls(
            max_cost_usd=settings.max_cost_usd,
            warn_threshold_usd=settings.warn_cost_threshold_usd,
        )

    @property
    def total_tokens(self) -> int:
        """Input plus output tokens across all calls."""
        return sum(c.input_tokens + c.output_tokens for c in self.calls)

    @property
    def total_cost_usd(self) -> float:
        """Estimated spend across all calls."""
        return sum(c.cost_usd for c in self.calls)

    def record_call(self, metrics: LLMCallMetrics) -> None:
        """Record a call and enforce cost limits.

        Raises CostLimitExceededError if accumulated cost exceeds the limit.
        Logs a warning when cost exceeds the warn threshold.
        """
        self.calls.append(metrics)
        total = self.total_cost_usd

        if total > self.max_cost_usd:
            raise CostLimitExceededError(
                f"LLM cost ${total:.4f} exceeds limit ${self.max_cost_usd:.2f}"
            )

        if total > self.warn_threshold_usd:
            logger.warning(
                "cost_warning",
                current_cost=round(total, 4),
                threshold=self.warn_threshold_usd,
                limit=self.max_cost_usd,
            )

    def summary(self) -> dict[str, object]:
        """Return aggregated cost summary for structured logging."""
        cost_by_model: dict[str, float] = {}
        for call in self.calls:
            cost_by_model[call.model] = cost_by_model.get(call.model, 0.0) + call.cost_usd

        return {
            "total_calls": len(self.calls),
            "total_tokens": self.total_tokens,
            "cost_by_model": cost_by_model,
            "total_cost_usd": round(self.total_cost_usd, 6),
        }


def extract_token_usage(response: object) -> tuple[int, int]:
    """Extract input/output token counts from an instructor response.

    Instructor wraps the raw Anthropic response in `_raw_response`.
    Falls back to (0, 0) if the attribute chain is missing.
    """
    raw = getattr(response, "_raw_response", None)
    if raw is None:
        return (0, 0)

    usage = getattr(raw, "usage", None)
    if usage is None:
        return (0, 0)

    input_tokens = getattr(usage, "input_tokens", 0)
    output_tokens = getattr(usage, "output_tokens", 0)
    return (int(input_tokens), int(output_tokens))
