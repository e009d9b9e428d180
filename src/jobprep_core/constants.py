"""Shared constants for job-prep."""

from __future__ import annotations

# Prompt versions; increment when prompt templates change
SUCCESS_PREDICTION_PROMPT_VERSION = "v1"
FOLLOW_UP_PROMPT_VERSION = "v1"
MOCK_INTERVIEW_PROMPT_VERSION = "v1"
REFERRAL_REQUEST_PROMPT_VERSION = "v1"

# LLM token pricing (USD per 1M tokens)
TOKEN_PRICES: dict[str, dict[str, float]] = {
    "claude-haiku-4-5-20251001": {"input": 0.80, "output": 4.00},
    "claude-sonnet-4-5-20250514": {"input": 3.00, "output": 15.00},
}

# --- Mock interview grading ---
QUALITY_MIN_WORDS = 20
IDEAL_LENGTH_WORDS = 80

LOW_QUALITY_PHRASES: tuple[str, ...] = (
    "idk",
    "i don't know",
    "dont know",
    "no idea",
    "unsure",
    "?",
)

STAR_KEYWORDS: dict[str, tuple[str, ...]] = {
    "situation": ("when", "during", "time", "situation", "faced", "encountered"),
    "task": ("responsible", "needed to", "had to", "goal", "objective", "task"),
    "action": ("i", "decided", "implemented", "created", "led", "developed", "analyzed"),
    "result": ("resulted", "achieved", "improved", "increased", "reduced", "success"),
}

GRADER_WEIGHTS: dict[str, float] = {
    "quality": 0.50,
    "completion": 0.15,
    "length": 0.15,
    "star": 0.20,
}

# --- Interview success scoring ---
PREPARATION_WEIGHTS: dict[str, float] = {
    "tasks": 0.40,
    "mock_interviews": 0.25,
    "question_practice": 0.20,
    "practice_hours": 0.10,
}
INSIGHTS_BONUS = 5

ROLE_MATCH_WEIGHTS: dict[str, float] = {
    "overall": 0.50,
    "skills": 0.30,
    "experience": 0.20,
}

PROBABILITY_WEIGHTS: dict[str, float] = {
    "preparation": 0.35,
    "role_match": 0.30,
    "company_research": 0.20,
    "practice_hours": 0.15,
}

HISTORICAL_WEIGHT = 0.3
TREND_WEIGHT = 0.1
DEFAULT_HISTORICAL_SUCCESS_RATE = 50.0
RECENT_INTERVIEW_WINDOW = 5
SUCCESSFUL_OUTCOMES = frozenset({"offer", "accepted"})

TARGET_PRACTICE_HOURS = 5
TARGET_MOCK_SESSIONS = 3
TARGET_QUESTION_RESPONSES = 10
RESEARCH_FIELD_POINTS = 25

# --- Interviews ---
DEFAULT_PREPARATION_TASKS: tuple[str, ...] = (
    "Review company background",
    "Prepare questions for interviewer",
    "Research interviewer on LinkedIn",
    "Prepare STAR examples",
)

# --- Placeholders ---
TEXTAREA_LABEL_HINTS: tuple[str, ...] = (
    "topic",
    "detail",
    "discussion",
    "example",
    "point",
    "insight",
)

# Tables watched by the prediction auto-refresh
WATCHED_PREDICTION_TABLES: tuple[str, ...] = (
    "job_match_analyses",
    "company_research",
    "mock_interview_sessions",
    "interview_question_responses",
    "interviews",
)
