"""Domain models for job-prep."""

from jobprep_core.models.follow_up import (
    FollowUpContext,
    FollowUpTemplate,
    Placeholder,
    PolishedMessage,
    ReferralRequestTemplate,
)
from jobprep_core.models.interview import InterviewRequest, PreparationTask
from jobprep_core.models.mock_interview import (
    CategoryStats,
    GradeResult,
    MockInterviewPlan,
    MockQuestion,
    PerformanceSummary,
    SessionGuidance,
    StarAnalysis,
)
from jobprep_core.models.networking import CampaignGoals, CampaignMetrics, VariantStats
from jobprep_core.models.prediction import (
    CompanyResearchSnapshot,
    JobMatchSnapshot,
    PredictionInputs,
    SuccessNarrative,
    SuccessScores,
)

__all__ = [
    "CampaignGoals",
    "CampaignMetrics",
    "CategoryStats",
    "CompanyResearchSnapshot",
    "FollowUpContext",
    "FollowUpTemplate",
    "GradeResult",
    "InterviewRequest",
    "JobMatchSnapshot",
    "MockInterviewPlan",
    "MockQuestion",
    "PerformanceSummary",
    "Placeholder",
    "PolishedMessage",
    "PredictionInputs",
    "PreparationTask",
    "ReferralRequestTemplate",
    "SessionGuidance",
    "StarAnalysis",
    "SuccessNarrative",
    "SuccessScores",
    "VariantStats",
]
