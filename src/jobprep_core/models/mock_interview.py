"""Mock interview session models and the AI question-set contract."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

InterviewFormat = Literal["behavioral", "technical", "case_study", "mixed"]


class MockQuestion(BaseModel):
    """One generated question plus the candidate's accumulated response."""

    order: int = Field(default=0, description="Position in the session")
    question_text: str = Field(description="The interview question")
    question_type: str = Field(
        default="behavioral",
        description="behavioral, technical, situational or case_study",
    )
    difficulty: str = Field(default="intermediate", description="entry, intermediate, senior")
    context: str | None = Field(default=None, description="Scenario details")
    follow_up_prompts: list[str] = Field(default_factory=list)
    evaluation_criteria: list[str] = Field(default_factory=list)
    time_recommendation_seconds: int | None = Field(default=None)
    category: str | None = Field(default=None, description="Grouping for feedback")
    response: str = Field(default="", description="Candidate's answer so far")


class SessionGuidance(BaseModel):
    """Interviewer framing returned alongside generated questions."""

    introduction: str = Field(default="")
    pacing_notes: str = Field(default="")
    confidence_tips: list[str] = Field(default_factory=list)


class MockInterviewPlan(BaseModel):
    """Structured output of the mock interview generator."""

    questions: list[MockQuestion] = Field(description="Generated questions in order")
    session_guidance: SessionGuidance = Field(default_factory=SessionGuidance)


class StarAnalysis(BaseModel):
    """Percentage of responses showing each STAR element."""

    s: int = Field(default=0, ge=0, le=100, description="Situation")
    t: int = Field(default=0, ge=0, le=100, description="Task")
    a: int = Field(default=0, ge=0, le=100, description="Action")
    r: int = Field(default=0, ge=0, le=100, description="Result")

    @property
    def mean(self) -> float:
        """Average across the four elements."""
        return (self.s + self.t + self.a + self.r) / 4


class CategoryStats(BaseModel):
    """Per-category response statistics."""

    count: int = Field(description="Questions in this category")
    avg_length: int = Field(description="Mean word count")
    quality: int = Field(description="Percent meeting the quality bar")


class PerformanceSummary(BaseModel):
    """Client-side analysis stored on a completed session."""

    completion_rate: int = Field(description="Answered / total, percent")
    avg_response_length: int = Field(description="Mean words per response")
    quality_rate: int = Field(description="Quality responses / total, percent")
    total_time_minutes: int = Field(default=0, description="Session wall time")
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    specific_feedback: list[str] = Field(default_factory=list)
    star_analysis: StarAnalysis = Field(default_factory=StarAnalysis)
    category_breakdown: dict[str, CategoryStats] = Field(default_factory=dict)


class GradeResult(BaseModel):
    """Grader output: summary plus the weighted overall score."""

    summary: PerformanceSummary
    overall_score: int = Field(ge=0, le=100)
