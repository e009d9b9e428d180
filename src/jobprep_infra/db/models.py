"""SQLAlchemy ORM table models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import JSON


def _uuid() -> str:
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    def to_record(self) -> dict[str, Any]:
        """Column values as a plain dict, used for change events."""
        return {c.key: getattr(self, c.key) for c in self.__table__.columns}


class JobModel(Base):
    """Saved job posting."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class InterviewModel(Base):
    """Scheduled interview with its preparation checklist."""

    __tablename__ = "interviews"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=False, index=True
    )
    interview_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    interview_type: Mapped[str] = mapped_column(String(50), nullable=False, default="video")
    location: Mapped[str | None] = mapped_column(String(512), nullable=True)
    meeting_link: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    interviewer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    interviewer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    interviewer_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    preparation_tasks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="scheduled")
    outcome: Mapped[str] = mapped_column(String(50), nullable=False, default="pending")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class InterviewSuccessPredictionModel(Base):
    """Insert-only snapshot of a success calculation."""

    __tablename__ = "interview_success_predictions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    interview_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("interviews.id"), nullable=False, index=True
    )
    job_id: Mapped[str] = mapped_column(String(36), ForeignKey("jobs.id"), nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    overall_probability: Mapped[int] = mapped_column(Integer, nullable=False)
    preparation_score: Mapped[int] = mapped_column(Integer, nullable=False)
    role_match_score: Mapped[int] = mapped_column(Integer, nullable=False)
    company_research_score: Mapped[int] = mapped_column(Integer, nullable=False)
    practice_hours_score: Mapped[int] = mapped_column(Integer, nullable=False)
    confidence_level: Mapped[str] = mapped_column(String(10), nullable=False)
    strength_areas: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    weakness_areas: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    prioritized_actions: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    improvement_recommendations: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list
    )
    predicted_outcome: Mapped[str] = mapped_column(
        String(20), nullable=False, default="uncertain"
    )
    historical_success_rate: Mapped[float] = mapped_column(Float, nullable=False)
    performance_trend: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, index=True
    )


class JobMatchAnalysisModel(Base):
    """Job-to-profile match scores."""

    __tablename__ = "job_match_analyses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=False, index=True
    )
    overall_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    skills_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    experience_score: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class CompanyResearchModel(Base):
    """Company research notes for a job."""

    __tablename__ = "company_research"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=False, index=True
    )
    company_profile: Mapped[str | None] = mapped_column(Text, nullable=True)
    recent_news: Mapped[str | None] = mapped_column(Text, nullable=True)
    leadership_info: Mapped[str | None] = mapped_column(Text, nullable=True)
    talking_points: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class InterviewInsightModel(Base):
    """Interview insights gathered for a job."""

    __tablename__ = "interview_insights"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class MockInterviewSessionModel(Base):
    """Mock interview session with questions and grading results."""

    __tablename__ = "mock_interview_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    job_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=True
    )
    interview_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("interviews.id"), nullable=True, index=True
    )
    session_name: Mapped[str] = mapped_column(String(255), nullable=False)
    interview_format: Mapped[str] = mapped_column(String(20), nullable=False, default="mixed")
    questions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="in_progress")
    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    performance_summary: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    overall_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class InterviewQuestionResponseModel(Base):
    """A practiced answer to an interview question."""

    __tablename__ = "interview_question_responses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    interview_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("interviews.id"), nullable=False, index=True
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class InterviewFollowUpModel(Base):
    """Saved follow-up message; sending happens outside the system."""

    __tablename__ = "interview_follow_ups"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    interview_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("interviews.id"), nullable=False, index=True
    )
    follow_up_type: Mapped[str] = mapped_column(String(30), nullable=False)
    subject: Mapped[str] = mapped_column(String(512), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sent_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    response_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    response_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class NetworkingCampaignModel(Base):
    """Networking campaign with numeric goals."""

    __tablename__ = "networking_campaigns"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    campaign_name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    target_companies: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    target_industries: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    target_roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    goals: Mapped[dict[str, int]] = mapped_column(JSON, nullable=False, default=dict)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class CampaignOutreachModel(Base):
    """One outreach attempt within a campaign."""

    __tablename__ = "campaign_outreach"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    campaign_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("networking_campaigns.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    outreach_type: Mapped[str] = mapped_column(String(30), nullable=False, default="email")
    message_variant: Mapped[str | None] = mapped_column(String(50), nullable=True)
    message_content: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    response_received: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    response_date: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    outcome: Mapped[str | None] = mapped_column(String(30), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class PeerDiscussionModel(Base):
    """Community discussion post."""

    __tablename__ = "peer_discussions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    likes_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class PeerChallengeModel(Base):
    """Community challenge."""

    __tablename__ = "peer_challenges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    participants_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class PeerChallengeParticipantModel(Base):
    """Membership of a user in a challenge."""

    __tablename__ = "peer_challenge_participants"
    __table_args__ = (UniqueConstraint("challenge_id", "user_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    challenge_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("peer_challenges.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class PeerGroupSessionModel(Base):
    """Scheduled group coaching session or webinar."""

    __tablename__ = "peer_group_sessions"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    group_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    session_title: Mapped[str] = mapped_column(String(255), nullable=False)
    session_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    session_type: Mapped[str] = mapped_column(String(30), nullable=False, default="workshop")
    facilitator_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=60)
    meeting_link: Mapped[str | None] = mapped_column(String(512), nullable=True)
    recording_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    max_participants: Mapped[int | None] = mapped_column(Integer, nullable=True)
    registered_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="scheduled")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class PeerSessionRegistrationModel(Base):
    """Registration of a user for a group session."""

    __tablename__ = "peer_session_registrations"
    __table_args__ = (UniqueConstraint("session_id", "user_id"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    session_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("peer_group_sessions.id"), nullable=False, index=True
    )
    user_id: Mapped[str] = mapped_column(String(36), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)


class ReferralRequestModel(Base):
    """Referral request to a contact; the message is sent outside the system."""

    __tablename__ = "referral_requests"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    job_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("jobs.id"), nullable=False, index=True
    )
    contact_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    request_message: Mapped[str] = mapped_column(Text, nullable=False)
    request_template_type: Mapped[str] = mapped_column(
        String(30), nullable=False, default="professional"
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    requested_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    response_received_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )
