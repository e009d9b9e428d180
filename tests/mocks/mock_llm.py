"""Fake instructor client and polishers for AI-free tests."""

from __future__ import annotations

import types
from typing import Any, TypeVar

from pydantic import BaseModel

from jobprep_core.models.follow_up import PolishedMessage

T = TypeVar("T", bound=BaseModel)

# Canned payloads keyed by response_model class name
CANNED_RESPONSES: dict[str, dict[str, object]] = {
    "SuccessNarrative": {
        "improvement_recommendations": ["Run one more mock interview"],
        "prioritized_actions": ["Finish the STAR examples"],
        "strength_areas": ["Company research"],
        "weakness_areas": ["Practice hours"],
        "predicted_outcome": "possible",
    },
    "FollowUpTemplate": {
        "subject": "Thank you, [INTERVIEWER_NAME]",
        "content": (
            "Dear [INTERVIEWER_NAME],\n\nThank you for discussing "
            "[SPECIFIC_TOPIC_DISCUSSED] with me.\n\nBest regards,\n[YOUR_NAME]"
        ),
        "timing_recommendation": "Within 24 hours",
        "tips": ["Mention one concrete detail"],
    },
    "PolishedMessage": {
        "subject": "Thank you",
        "content": "Polished body",
    },
    "MockInterviewPlan": {
        "questions": [
            {"question_text": "Tell me about yourself", "question_type": "behavioral"},
            {
                "question_text": "Design a rate limiter",
                "question_type": "technical",
                "category": "system_design",
            },
        ],
        "session_guidance": {"introduction": "Welcome", "pacing_notes": "Take your time"},
    },
    "ReferralRequestTemplate": {
        "subject": "Referral for Backend Engineer",
        "greeting": "Hi Sam,",
        "body": "Would you be open to referring me?",
        "closing": "Thanks, Alex",
        "full_message": "",
    },
}


def build_fake_response(
    response_model: type[T], input_tokens: int = 100, output_tokens: int = 50
) -> T:
    """Construct a response_model instance with a fake _raw_response attached."""
    instance = response_model(**CANNED_RESPONSES[response_model.__name__])
    usage = types.SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens)
    object.__setattr__(instance, "_raw_response", types.SimpleNamespace(usage=usage))
    return instance


class _FakeMessages:
    def __init__(self, fail_times: int = 0) -> None:
        self.calls: list[dict[str, Any]] = []
        self._fail_times = fail_times

    async def create(self, **kwargs: Any) -> BaseModel:
        self.calls.append(kwargs)
        if self._fail_times > 0:
            self._fail_times -= 1
            msg = "upstream overloaded"
            raise RuntimeError(msg)
        response_model: type[BaseModel] = kwargs["response_model"]
        return build_fake_response(response_model)


class FakeInstructorClient:
    """Stands in for instructor.from_anthropic(); records every call.

    The call chain is: agent._instructor.messages.create(response_model=...) -> T
    """

    def __init__(self, fail_times: int = 0) -> None:
        """Optionally fail the first ``fail_times`` calls."""
        self.messages = _FakeMessages(fail_times)


class RecordingPolisher:
    """MessagePolisher that uppercases the subject and records its input."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, dict[str, str]]] = []

    async def polish(
        self,
        subject: str,
        content: str,
        follow_up_type: str,
        placeholder_values: dict[str, str],
    ) -> PolishedMessage:
        self.calls.append((subject, content, follow_up_type, placeholder_values))
        return PolishedMessage(subject=subject.upper(), content=f"{content}\n-- polished")


class FailingPolisher:
    """MessagePolisher whose backend is always down."""

    def __init__(self) -> None:
        self.calls = 0

    async def polish(
        self,
        subject: str,
        content: str,
        follow_up_type: str,
        placeholder_values: dict[str, str],
    ) -> PolishedMessage:
        self.calls += 1
        msg = "AI service unavailable"
        raise RuntimeError(msg)
