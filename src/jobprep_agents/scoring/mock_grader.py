"""Mock interview grader: heuristic scoring of free-text responses.

Everything here is a pure function of the response text: word counts, a
low-effort stoplist, STAR keyword presence and a fixed-weight blend. The
same input always yields the same GradeResult.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from jobprep_agents.scoring.rounding import round_half_up, safe_percent
from jobprep_core.constants import (
    GRADER_WEIGHTS,
    IDEAL_LENGTH_WORDS,
    LOW_QUALITY_PHRASES,
    QUALITY_MIN_WORDS,
    STAR_KEYWORDS,
)
from jobprep_core.models.mock_interview import (
    CategoryStats,
    GradeResult,
    MockQuestion,
    PerformanceSummary,
    StarAnalysis,
)

DEFAULT_CATEGORY = "general"


def word_count(text: str | None) -> int:
    """Count whitespace-separated tokens."""
    return len((text or "").split())


def is_answered(text: str | None) -> bool:
    """A response counts as answered when it has non-blank text."""
    return bool((text or "").strip())


def is_quality_response(text: str | None) -> bool:
    """At least QUALITY_MIN_WORDS words and no low-effort phrase (case-insensitive)."""
    normalized = (text or "").lower().strip()
    if word_count(normalized) < QUALITY_MIN_WORDS:
        return False
    return not any(
        normalized == phrase or phrase in normalized for phrase in LOW_QUALITY_PHRASES
    )


def star_presence(text: str | None) -> dict[str, int]:
    """Return 1/0 per STAR element depending on keyword substring presence."""
    lowered = (text or "").lower()
    return {
        element: int(any(keyword in lowered for keyword in keywords))
        for element, keywords in STAR_KEYWORDS.items()
    }


def analyze_star(responses: Sequence[str]) -> StarAnalysis:
    """Average STAR presence across responses as rounded percentages."""
    totals = {element: 0 for element in STAR_KEYWORDS}
    for response in responses:
        for element, present in star_presence(response).items():
            totals[element] += present

    total = len(responses)
    return StarAnalysis(
        s=round_half_up(safe_percent(totals["situation"], total)),
        t=round_half_up(safe_percent(totals["task"], total)),
        a=round_half_up(safe_percent(totals["action"], total)),
        r=round_half_up(safe_percent(totals["result"], total)),
    )


def analyze_categories(questions: Sequence[MockQuestion]) -> dict[str, CategoryStats]:
    """Group questions by category and compute length and quality per group."""
    buckets: dict[str, list[str]] = {}
    for question in questions:
        buckets.setdefault(question.category or DEFAULT_CATEGORY, []).append(question.response)

    breakdown: dict[str, CategoryStats] = {}
    for category, responses in buckets.items():
        lengths = [word_count(r) for r in responses]
        quality = sum(1 for r in responses if is_quality_response(r))
        breakdown[category] = CategoryStats(
            count=len(responses),
            avg_length=round_half_up(sum(lengths) / len(responses)),
            quality=round_half_up(safe_percent(quality, len(responses))),
        )
    return breakdown


def compute_overall_score(
    quality_rate: float,
    completion_rate: float,
    avg_response_length: float,
    star: StarAnalysis,
) -> int:
    """Blend the metrics with the fixed grader weights."""
    length_score = min(avg_response_length / IDEAL_LENGTH_WORDS, 1.0) * 100
    return round_half_up(
        quality_rate * GRADER_WEIGHTS["quality"]
        + completion_rate * GRADER_WEIGHTS["completion"]
        + length_score * GRADER_WEIGHTS["length"]
        + star.mean * GRADER_WEIGHTS["star"]
    )


def _plural(count: int, one: str, many: str) -> str:
    return one if count == 1 else many


def _length_feedback(lengths: Sequence[int]) -> list[str]:
    """Call out ideal, short and overly long responses by count."""
    feedback: list[str] = []
    ideal = sum(1 for n in lengths if 60 <= n <= 120)
    short = sum(1 for n in lengths if 0 < n < 30)
    long_ = sum(1 for n in lengths if n > 150)

    if ideal:
        feedback.append(
            f"{ideal} {_plural(ideal, 'response', 'responses')} hit the ideal "
            "word count range (60-120 words)"
        )
    if short:
        feedback.append(
            f"{short} {_plural(short, 'response was', 'responses were')} too brief "
            "- expand with specific examples and context"
        )
    if long_:
        feedback.append(
            f"{long_} {_plural(long_, 'response was', 'responses were')} overly "
            "detailed - practice conciseness while keeping impact"
        )
    return feedback


def _narrative(
    completion_rate: float,
    avg_response_length: float,
    quality_rate: float,
    star: StarAnalysis,
    categories: dict[str, CategoryStats],
) -> tuple[list[str], list[str]]:
    """Apply the threshold rule table to produce strengths and improvements."""
    strengths: list[str] = []
    improvements: list[str] = []

    if completion_rate == 100:
        strengths.append("Completed all questions - shows commitment and preparation")
    elif completion_rate >= 75:
        strengths.append("Strong completion rate demonstrates engagement")
    else:
        improvements.append("Complete all interview questions to maximize your opportunities")

    if avg_response_length >= 80:
        strengths.append("Responses are comprehensive with good detail and context")
    elif avg_response_length >= 50:
        strengths.append("Providing solid depth in your responses")
    elif avg_response_length >= 20:
        improvements.append("Add more specific examples and context to strengthen responses")
    else:
        improvements.append(
            "Expand responses significantly - aim for 60-100 words with concrete examples"
        )

    if quality_rate >= 80:
        strengths.append("Consistently providing substantive, well-thought-out answers")
    elif quality_rate >= 50:
        improvements.append("Replace generic statements with specific, measurable achievements")
    else:
        improvements.append(
            "Focus on quality over brevity - showcase your actual experience with details"
        )

    if min(star.s, star.t, star.a, star.r) >= 70:
        strengths.append("Excellent use of the STAR method structure in responses")
    else:
        missing = [
            label
            for value, label in (
                (star.s, "Situation context"),
                (star.t, "Task/challenge clarity"),
                (star.a, "Action details"),
                (star.r, "Result/impact"),
            )
            if value < 50
        ]
        if missing:
            improvements.append(f"Strengthen STAR structure by adding: {', '.join(missing)}")

    for category, stats in categories.items():
        if stats.quality >= 75:
            strengths.append(f"Strong performance on {category} questions")
        elif stats.quality < 40:
            improvements.append(
                f"Focus practice on {category}-type questions - only "
                f"{stats.quality}% met quality threshold"
            )

    return strengths, improvements


def grade_session(
    questions: Sequence[MockQuestion],
    started_at: datetime | None = None,
    completed_at: datetime | None = None,
) -> GradeResult:
    """Grade a mock interview session from its questions and responses.

    With no questions every rate is 0 and the overall score is 0.
    """
    total = len(questions)
    responses = [q.response for q in questions]
    lengths = [word_count(r) for r in responses]

    avg_length = sum(lengths) / total if total else 0.0
    completion_rate = safe_percent(sum(1 for r in responses if is_answered(r)), total)
    quality_rate = safe_percent(sum(1 for r in responses if is_quality_response(r)), total)

    star = analyze_star(responses)
    categories = analyze_categories(questions)
    strengths, improvements = _narrative(
        completion_rate, avg_length, quality_rate, star, categories
    )

    total_minutes = 0
    if started_at is not None and completed_at is not None:
        total_minutes = max(
            round_half_up((completed_at - started_at).total_seconds() / 60), 0
        )

    summary = PerformanceSummary(
        completion_rate=round_half_up(completion_rate),
        avg_response_length=round_half_up(avg_length),
        quality_rate=round_half_up(quality_rate),
        total_time_minutes=total_minutes,
        strengths=strengths or ["Participated in the session"],
        areas_for_improvement=improvements or ["Continue practicing for improvement"],
        specific_feedback=_length_feedback(lengths),
        star_analysis=star,
        category_breakdown=categories,
    )
    return GradeResult(
        summary=summary,
        overall_score=compute_overall_score(quality_rate, completion_rate, avg_length, star),
    )
