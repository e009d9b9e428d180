"""Networking campaign models."""

from __future__ import annotations

import math
import re

from pydantic import BaseModel, Field, field_validator

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class CampaignGoals(BaseModel):
    """Numeric targets for a campaign. Unparsable input becomes 0."""

    outreach_target: int = Field(default=0, ge=0)
    response_target: int = Field(default=0, ge=0)
    connection_target: int = Field(default=0, ge=0)

    @field_validator("outreach_target", "response_target", "connection_target", mode="before")
    @classmethod
    def coerce_target(cls, value: object) -> int:
        """Read the leading integer of form input ("12.5" -> 12, "20 contacts" -> 20).

        Anything without one becomes 0, and negatives are clamped to 0.
        """
        if isinstance(value, bool) or value is None:
            return 0
        if isinstance(value, int):
            return max(value, 0)
        if isinstance(value, float):
            return max(int(value), 0) if math.isfinite(value) else 0
        match = LEADING_INT.match(str(value))
        return max(int(match.group(1)), 0) if match else 0


class VariantStats(BaseModel):
    """Response stats for one message variant."""

    sent: int
    responded: int
    response_rate: int


class CampaignMetrics(BaseModel):
    """Aggregates derived from a campaign's outreach rows."""

    outreach_sent: int = 0
    responses: int = 0
    pending: int = 0
    connections: int = 0
    response_rate: float = 0.0
    outreach_progress: float = Field(default=0.0, description="Percent of outreach target")
    response_progress: float = Field(default=0.0, description="Percent of response target")
    connection_progress: float = Field(default=0.0, description="Percent of connection target")
    by_variant: dict[str, VariantStats] = Field(default_factory=dict)
    by_type: dict[str, int] = Field(default_factory=dict)
