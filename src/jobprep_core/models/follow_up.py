"""Follow-up, placeholder and referral-request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

FollowUpType = Literal["thank_you", "status_inquiry", "feedback_request", "networking"]
PlaceholderKind = Literal["text", "textarea"]
ReferralStatus = Literal["draft", "sent", "accepted", "declined", "successful", "no_response"]

# Statuses reachable from each status; terminal statuses map to nothing.
REFERRAL_TRANSITIONS: dict[str, frozenset[str]] = {
    "draft": frozenset({"sent"}),
    "sent": frozenset({"accepted", "declined", "no_response"}),
    "no_response": frozenset({"accepted", "declined"}),
    "accepted": frozenset({"successful"}),
    "declined": frozenset(),
    "successful": frozenset(),
}


class Placeholder(BaseModel):
    """A bracket token found in a generated template."""

    key: str = Field(description="Token including brackets, e.g. [CONTACT_NAME]")
    label: str = Field(description="Human label, e.g. Contact Name")
    kind: PlaceholderKind = Field(default="text", description="Suggested input widget")


class FollowUpTemplate(BaseModel):
    """Structured output of the follow-up template generator."""

    subject: str = Field(description="Professional, specific subject line")
    content: str = Field(description="Full email body with greeting and closing")
    timing_recommendation: str = Field(default="", description="When to send")
    tips: list[str] = Field(default_factory=list, description="Personalization tips")


class PolishedMessage(BaseModel):
    """Structured output of the polish pass."""

    subject: str = Field(description="Final subject line")
    content: str = Field(description="Final email body")


class ReferralRequestTemplate(BaseModel):
    """Structured output of the referral request generator."""

    subject: str = Field(description="Subject line")
    greeting: str = Field(description="Opening salutation")
    body: str = Field(description="Main request paragraphs")
    closing: str = Field(description="Sign-off")
    full_message: str = Field(description="greeting + body + closing assembled")


class FollowUpContext(BaseModel):
    """Interview details handed to the follow-up template generator."""

    interview_type: str = Field(default="interview")
    interview_date: str = Field(default="", description="Human-readable date")
    company_name: str = Field(default="the company")
    job_title: str = Field(default="the role")
    interviewer_name: str | None = Field(default=None)
    outcome: str = Field(default="pending")
    notes: str | None = Field(default=None)
    custom_context: str | None = Field(default=None, description="Extra user guidance")
