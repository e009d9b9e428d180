"""Interview success prediction inputs, scores and the AI narrative contract."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from jobprep_core.models.interview import PreparationTask

ConfidenceLevel = Literal["low", "medium", "high"]
PerformanceTrend = Literal["improving", "declining", "stable"]
PredictedOutcome = Literal["likely", "possible", "uncertain"]


class JobMatchSnapshot(BaseModel):
    """Scores from the latest job-match analysis."""

    overall_score: float = Field(default=0.0, ge=0, le=100)
    skills_score: float = Field(default=0.0, ge=0, le=100)
    experience_score: float = Field(default=0.0, ge=0, le=100)


class CompanyResearchSnapshot(BaseModel):
    """Which company research sections have been filled in."""

    company_profile: bool = False
    recent_news: bool = False
    leadership_info: bool = False
    talking_points: bool = False


class PredictionInputs(BaseModel):
    """Everything the success scorer reads, already fetched from the store."""

    interview_type: str = Field(default="unknown")
    preparation_tasks: list[PreparationTask] = Field(default_factory=list)
    job_match: JobMatchSnapshot | None = Field(default=None)
    company_research: CompanyResearchSnapshot | None = Field(default=None)
    mock_session_minutes: list[int] = Field(
        default_factory=list, description="duration_minutes of each mock session"
    )
    question_response_count: int = Field(default=0, ge=0)
    has_insights: bool = Field(default=False)
    historical_outcomes: list[str] = Field(
        default_factory=list,
        description="Outcomes of the user's past interviews, oldest first",
    )


class SuccessScores(BaseModel):
    """Deterministic scores computed locally for one interview."""

    overall_probability: int = Field(ge=0, le=100)
    preparation_score: int = Field(ge=0, le=100)
    role_match_score: int = Field(ge=0, le=100)
    company_research_score: int = Field(ge=0, le=100)
    practice_hours_score: int = Field(ge=0, le=100)
    confidence_level: ConfidenceLevel
    historical_success_rate: float = Field(ge=0, le=100)
    recent_success_rate: float = Field(ge=0, le=100)
    performance_trend: PerformanceTrend
    task_completion_rate: float = Field(ge=0, le=100)
    completed_tasks: int = Field(ge=0)
    total_tasks: int = Field(ge=0)
    practice_hours: float = Field(ge=0)
    mock_interview_count: int = Field(ge=0)
    question_count: int = Field(ge=0)
    history_count: int = Field(ge=0)


class SuccessNarrative(BaseModel):
    """Narrative fields requested from the AI; scores are never taken from it."""

    improvement_recommendations: list[str] = Field(
        default_factory=list, description="3-5 specific, actionable recommendations"
    )
    prioritized_actions: list[str] = Field(
        default_factory=list, description="Top 3-5 immediate actions"
    )
    strength_areas: list[str] = Field(
        default_factory=list, description="2-4 things going well"
    )
    weakness_areas: list[str] = Field(
        default_factory=list, description="2-4 areas needing work"
    )
    predicted_outcome: PredictedOutcome = Field(
        default="uncertain", description="likely, possible or uncertain"
    )
