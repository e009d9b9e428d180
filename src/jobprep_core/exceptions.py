"""Custom exception hierarchy for job-prep."""

from __future__ import annotations


class JobPrepError(Exception):
    """Base exception for all job-prep errors."""


class NotAuthenticatedError(JobPrepError):
    """Raised before a write when no user is bound to the service."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)


class RecordNotFoundError(JobPrepError):
    """Raised when a referenced row does not exist."""


class AIServiceError(JobPrepError):
    """Raised when a generative-AI call fails after all retries."""


class PredictionError(JobPrepError):
    """Raised when an interview success calculation fails."""


class CostLimitExceededError(JobPrepError):
    """Raised when estimated LLM spend exceeds the configured limit."""


class ChallengeAlreadyJoinedError(JobPrepError):
    """Raised when a user joins a peer challenge twice."""


class SessionAlreadyRegisteredError(JobPrepError):
    """Raised when a user registers for a group session twice."""


class SessionFullError(JobPrepError):
    """Raised when a group session has no free places left."""


class InvalidStatusTransitionError(JobPrepError):
    """Raised when a status change is not allowed from the current status."""
