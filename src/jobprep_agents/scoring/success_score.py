"""Interview success scoring: deterministic sub-scores and weighted probability."""

from __future__ import annotations

from jobprep_agents.scoring.rounding import round_half_up, safe_percent
from jobprep_core.constants import (
    DEFAULT_HISTORICAL_SUCCESS_RATE,
    HISTORICAL_WEIGHT,
    INSIGHTS_BONUS,
    PREPARATION_WEIGHTS,
    PROBABILITY_WEIGHTS,
    RECENT_INTERVIEW_WINDOW,
    RESEARCH_FIELD_POINTS,
    ROLE_MATCH_WEIGHTS,
    SUCCESSFUL_OUTCOMES,
    TARGET_MOCK_SESSIONS,
    TARGET_PRACTICE_HOURS,
    TARGET_QUESTION_RESPONSES,
    TREND_WEIGHT,
)
from jobprep_core.models.prediction import (
    CompanyResearchSnapshot,
    ConfidenceLevel,
    JobMatchSnapshot,
    PerformanceTrend,
    PredictionInputs,
    SuccessScores,
)


def _capped_ratio(value: float, target: float) -> float:
    """value / target as a percentage, capped at 100."""
    return min(100.0, value / target * 100)


def company_research_score(research: CompanyResearchSnapshot | None) -> int:
    """25 points for each research section that has content."""
    if research is None:
        return 0
    sections = (
        research.company_profile,
        research.recent_news,
        research.leadership_info,
        research.talking_points,
    )
    return sum(RESEARCH_FIELD_POINTS for present in sections if present)


def role_match_score(job_match: JobMatchSnapshot | None) -> int:
    """Blend of the job-match analysis scores, 0 when no analysis exists."""
    if job_match is None:
        return 0
    return round_half_up(
        job_match.overall_score * ROLE_MATCH_WEIGHTS["overall"]
        + job_match.skills_score * ROLE_MATCH_WEIGHTS["skills"]
        + job_match.experience_score * ROLE_MATCH_WEIGHTS["experience"]
    )


def historical_rates(outcomes: list[str]) -> tuple[float, float]:
    """Return (historical, recent) success rates over past interview outcomes.

    With no history the historical rate defaults to 50 and the recent rate
    mirrors it, so the trend is flat.
    """
    if not outcomes:
        return DEFAULT_HISTORICAL_SUCCESS_RATE, DEFAULT_HISTORICAL_SUCCESS_RATE

    successes = sum(1 for o in outcomes if o in SUCCESSFUL_OUTCOMES)
    historical = successes / len(outcomes) * 100

    recent = outcomes[-RECENT_INTERVIEW_WINDOW:]
    recent_successes = sum(1 for o in recent if o in SUCCESSFUL_OUTCOMES)
    return historical, recent_successes / len(recent) * 100


def confidence_level(inputs: PredictionInputs) -> ConfidenceLevel:
    """Confidence grows with the number of data sources present."""
    data_points = sum(
        (
            inputs.job_match is not None,
            inputs.company_research is not None,
            len(inputs.mock_session_minutes) > 0,
            inputs.question_response_count > 0,
            len(inputs.preparation_tasks) > 0,
        )
    )
    if data_points >= 4:
        return "high"
    if data_points >= 2:
        return "medium"
    return "low"


def _trend_label(trend: float) -> PerformanceTrend:
    if trend > 0:
        return "improving"
    if trend < 0:
        return "declining"
    return "stable"


def compute_success_scores(inputs: PredictionInputs) -> SuccessScores:
    """Compute every score the prediction snapshot stores."""
    total_tasks = len(inputs.preparation_tasks)
    completed_tasks = sum(1 for t in inputs.preparation_tasks if t.completed)
    task_rate = safe_percent(completed_tasks, total_tasks)

    practice_hours = sum(inputs.mock_session_minutes) / 60
    practice_hours_score = _capped_ratio(practice_hours, TARGET_PRACTICE_HOURS)
    mock_count = len(inputs.mock_session_minutes)
    mock_score = _capped_ratio(mock_count, TARGET_MOCK_SESSIONS)
    question_score = _capped_ratio(inputs.question_response_count, TARGET_QUESTION_RESPONSES)

    preparation = round_half_up(
        task_rate * PREPARATION_WEIGHTS["tasks"]
        + mock_score * PREPARATION_WEIGHTS["mock_interviews"]
        + question_score * PREPARATION_WEIGHTS["question_practice"]
        + practice_hours_score * PREPARATION_WEIGHTS["practice_hours"]
        + (INSIGHTS_BONUS if inputs.has_insights else 0)
    )
    role_match = role_match_score(inputs.job_match)
    research = company_research_score(inputs.company_research)

    base = round_half_up(
        preparation * PROBABILITY_WEIGHTS["preparation"]
        + role_match * PROBABILITY_WEIGHTS["role_match"]
        + research * PROBABILITY_WEIGHTS["company_research"]
        + practice_hours_score * PROBABILITY_WEIGHTS["practice_hours"]
    )

    historical, recent = historical_rates(inputs.historical_outcomes)
    trend = recent - historical
    adjusted = (
        base
        + (historical - DEFAULT_HISTORICAL_SUCCESS_RATE) * HISTORICAL_WEIGHT
        + trend * TREND_WEIGHT
    )
    overall = min(100, max(0, round_half_up(adjusted)))

    return SuccessScores(
        overall_probability=overall,
        preparation_score=min(preparation, 100),
        role_match_score=role_match,
        company_research_score=research,
        practice_hours_score=round_half_up(practice_hours_score),
        confidence_level=confidence_level(inputs),
        historical_success_rate=round(historical, 1),
        recent_success_rate=round(recent, 1),
        performance_trend=_trend_label(trend),
        task_completion_rate=task_rate,
        completed_tasks=completed_tasks,
        total_tasks=total_tasks,
        practice_hours=practice_hours,
        mock_interview_count=mock_count,
        question_count=inputs.question_response_count,
        history_count=len(inputs.historical_outcomes),
    )
