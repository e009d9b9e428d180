"""Interview success prediction: local scoring, AI narrative, snapshot storage.

Scores are computed from stored preparation data; the AI supplies only the
narrative fields. Every calculation inserts a new snapshot and the newest
one is the current prediction.

PredictionWatcher keeps the snapshot fresh by recalculating whenever one of
the watched tables changes for the interview or its job.
"""

from __future__ import annotations

import time
from types import TracebackType
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.success_narrator import SuccessNarrativeAgent
from jobprep_agents.scoring.success_score import compute_success_scores
from jobprep_agents.services.base import BaseService
from jobprep_core.constants import WATCHED_PREDICTION_TABLES
from jobprep_core.exceptions import PredictionError, RecordNotFoundError
from jobprep_core.models.interview import PreparationTask
from jobprep_core.models.prediction import (
    CompanyResearchSnapshot,
    JobMatchSnapshot,
    PredictionInputs,
)
from jobprep_infra.db.models import InterviewModel, InterviewSuccessPredictionModel
from jobprep_infra.db.repositories.interview_repo import InterviewRepository
from jobprep_infra.db.repositories.mock_session_repo import MockSessionRepository
from jobprep_infra.db.repositories.prediction_repo import PredictionRepository
from jobprep_infra.db.repositories.question_response_repo import QuestionResponseRepository
from jobprep_infra.db.repositories.research_repo import ResearchRepository

if TYPE_CHECKING:
    from jobprep_agents.observability.cost_tracker import CostTracker
    from jobprep_core.config.settings import Settings
    from jobprep_core.interfaces.change_feed import ChangeEvent, ChangeFeed, Subscription

logger = structlog.get_logger()


class PredictionService(BaseService):
    """Compute and store interview success predictions."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
        narrator: SuccessNarrativeAgent | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        """Initialize with an optional narrative agent (built lazily otherwise)."""
        super().__init__(settings, session_factory, feed, cost_tracker)
        self._narrator = narrator

    @property
    def narrator(self) -> SuccessNarrativeAgent:
        """Narrative agent, created on first use."""
        if self._narrator is None:
            self._narrator = SuccessNarrativeAgent(self.settings, self.cost_tracker)
        return self._narrator

    async def gather_inputs(
        self, session: AsyncSession, interview: InterviewModel, job_id: str
    ) -> PredictionInputs:
        """Read everything the scorer needs from the store."""
        research_repo = ResearchRepository(session)
        job_match = await research_repo.latest_job_match(job_id)
        research = await research_repo.latest_company_research(job_id)
        sessions = await MockSessionRepository(session).list_for_interview(interview.id)

        return PredictionInputs(
            interview_type=interview.interview_type,
            preparation_tasks=[
                PreparationTask.model_validate(t) for t in interview.preparation_tasks
            ],
            job_match=(
                JobMatchSnapshot(
                    overall_score=job_match.overall_score,
                    skills_score=job_match.skills_score,
                    experience_score=job_match.experience_score,
                )
                if job_match
                else None
            ),
            company_research=(
                CompanyResearchSnapshot(
                    company_profile=bool(research.company_profile),
                    recent_news=bool(research.recent_news),
                    leadership_info=bool(research.leadership_info),
                    talking_points=bool(research.talking_points),
                )
                if research
                else None
            ),
            mock_session_minutes=[s.duration_minutes or 0 for s in sessions],
            question_response_count=await QuestionResponseRepository(
                session
            ).count_for_interview(interview.id),
            has_insights=await research_repo.has_insights(job_id),
            historical_outcomes=await InterviewRepository(session).list_outcomes(
                interview.user_id
            ),
        )

    async def calculate(self, interview_id: str, job_id: str) -> InterviewSuccessPredictionModel:
        """Compute scores, fetch the narrative and insert a new snapshot.

        Any failure is raised as PredictionError carrying the underlying message.
        """
        user_id = self._require_user()
        start = time.monotonic()
        logger.info("prediction_started", interview_id=interview_id, job_id=job_id)

        try:
            async with self._session_factory() as session:
                interview = await InterviewRepository(session).get_by_id(interview_id)
                if interview is None:
                    raise RecordNotFoundError(f"Interview {interview_id} not found")
                inputs = await self.gather_inputs(session, interview, job_id)
                interview_date = interview.interview_date

            scores = compute_success_scores(inputs)
            narrative = await self.narrator.run(inputs, scores, interview_date)

            snapshot = InterviewSuccessPredictionModel(
                interview_id=interview_id,
                job_id=job_id,
                user_id=user_id,
                overall_probability=scores.overall_probability,
                preparation_score=scores.preparation_score,
                role_match_score=scores.role_match_score,
                company_research_score=scores.company_research_score,
                practice_hours_score=scores.practice_hours_score,
                confidence_level=scores.confidence_level,
                historical_success_rate=scores.historical_success_rate,
                performance_trend=scores.performance_trend,
                strength_areas=narrative.strength_areas,
                weakness_areas=narrative.weakness_areas,
                prioritized_actions=narrative.prioritized_actions,
                improvement_recommendations=narrative.improvement_recommendations,
                predicted_outcome=narrative.predicted_outcome,
            )
            async with self._scope() as session:
                await PredictionRepository(session).create(snapshot)
        except Exception as e:
            logger.error(
                "prediction_failed",
                interview_id=interview_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise PredictionError(str(e)) from e

        logger.info(
            "prediction_stored",
            interview_id=interview_id,
            overall_probability=scores.overall_probability,
            confidence=scores.confidence_level,
            duration_seconds=round(time.monotonic() - start, 2),
        )
        return snapshot

    async def latest(self, interview_id: str) -> InterviewSuccessPredictionModel | None:
        """Current prediction for an interview, if one was ever calculated."""
        async with self._session_factory() as session:
            return await PredictionRepository(session).latest_for_interview(interview_id)


class PredictionWatcher:
    """Recalculate a prediction whenever a watched record changes.

    Use as an async context manager; leaving the block removes every
    subscription. A change arriving while a recalculation is running is
    dropped. Failures are logged and never reach the writer.
    """

    def __init__(
        self,
        service: PredictionService,
        feed: ChangeFeed,
        interview_id: str,
        job_id: str,
    ) -> None:
        """Bind the watcher to one interview and its job."""
        self._service = service
        self._feed = feed
        self.interview_id = interview_id
        self.job_id = job_id
        self._subscriptions: list[Subscription] = []
        self._in_flight = False

    @property
    def is_calculating(self) -> bool:
        """Whether an automatic recalculation is running."""
        return self._in_flight

    def _filters_for(self, table: str) -> dict[str, object]:
        if table in ("job_match_analyses", "company_research"):
            return {"job_id": self.job_id}
        if table == "interviews":
            return {"id": self.interview_id}
        return {"interview_id": self.interview_id}

    def start(self) -> None:
        """Subscribe to every watched table."""
        if self._subscriptions:
            return
        for table in WATCHED_PREDICTION_TABLES:
            self._subscriptions.append(
                self._feed.subscribe(table, self._on_change, self._filters_for(table))
            )
        logger.info(
            "prediction_watch_started",
            interview_id=self.interview_id,
            tables=len(self._subscriptions),
        )

    def close(self) -> None:
        """Remove all subscriptions."""
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()
        logger.info("prediction_watch_stopped", interview_id=self.interview_id)

    async def __aenter__(self) -> PredictionWatcher:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    async def _on_change(self, event: ChangeEvent) -> None:
        if self._in_flight:
            logger.debug(
                "auto_recalculation_skipped",
                interview_id=self.interview_id,
                table=event.table,
            )
            return

        self._in_flight = True
        try:
            await self._service.calculate(self.interview_id, self.job_id)
        except Exception as e:
            logger.warning(
                "auto_recalculation_failed",
                interview_id=self.interview_id,
                table=event.table,
                error=str(e),
            )
        finally:
            self._in_flight = False
