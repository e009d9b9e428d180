"""Observability: structured logging and LLM cost tracking."""

from jobprep_agents.observability.cost_tracker import (
    CostTracker,
    LLMCallMetrics,
    extract_token_usage,
)
from jobprep_agents.observability.logging import (
    bind_user_context,
    clear_user_context,
    configure_logging,
)

__all__ = [
    "CostTracker",
    "LLMCallMetrics",
    "bind_user_context",
    "clear_user_context",
    "configure_logging",
    "extract_token_usage",
]
