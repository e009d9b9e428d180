"""Interview scheduling models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from jobprep_core.constants import DEFAULT_PREPARATION_TASKS

InterviewStatus = Literal["scheduled", "completed", "cancelled"]


class PreparationTask(BaseModel):
    """A single checklist item on an interview."""

    task: str = Field(description="Task description")
    completed: bool = Field(default=False, description="Whether the task is done")


def default_preparation_tasks() -> list[PreparationTask]:
    """Return the checklist every new interview starts with."""
    return [PreparationTask(task=t) for t in DEFAULT_PREPARATION_TASKS]


class InterviewRequest(BaseModel):
    """Fields captured by the interview scheduler form."""

    job_id: str = Field(description="Job this interview belongs to")
    interview_date: datetime = Field(description="Scheduled start")
    duration_minutes: int = Field(default=60, ge=0, description="Planned duration")
    interview_type: str = Field(default="video", description="phone, video, onsite, ...")
    location: str | None = Field(default=None, description="Physical location")
    meeting_link: str | None = Field(default=None, description="Video call link")
    interviewer_name: str | None = Field(default=None, description="Interviewer name")
    interviewer_email: str | None = Field(default=None, description="Interviewer email")
    interviewer_phone: str | None = Field(default=None, description="Interviewer phone")
    notes: str | None = Field(default=None, description="Free-form notes")
    preparation_tasks: list[PreparationTask] = Field(
        default_factory=default_preparation_tasks,
        description="Preparation checklist",
    )
