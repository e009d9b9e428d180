"""Interview scheduling and preparation checklist."""

from __future__ import annotations

import structlog

from jobprep_agents.services.base import BaseService
from jobprep_core.exceptions import RecordNotFoundError
from jobprep_core.models.interview import InterviewRequest, InterviewStatus, PreparationTask
from jobprep_infra.db.models import InterviewModel, InterviewQuestionResponseModel
from jobprep_infra.db.repositories.interview_repo import InterviewRepository
from jobprep_infra.db.repositories.job_repo import JobRepository
from jobprep_infra.db.repositories.question_response_repo import QuestionResponseRepository

logger = structlog.get_logger()


class InterviewService(BaseService):
    """Create interviews and keep their checklist, status and outcome current."""

    async def schedule(self, request: InterviewRequest) -> InterviewModel:
        """Create an interview; new interviews start with the default checklist."""
        user_id = self._require_user()
        async with self._scope() as session:
            if await JobRepository(session).get_by_id(request.job_id) is None:
                raise RecordNotFoundError(f"Job {request.job_id} not found")

            data = request.model_dump(exclude={"preparation_tasks"})
            model = InterviewModel(
                user_id=user_id,
                preparation_tasks=[t.model_dump() for t in request.preparation_tasks],
                status="scheduled",
                outcome="pending",
                **data,
            )
            await InterviewRepository(session).create(model)

        logger.info(
            "interview_scheduled",
            interview_id=model.id,
            job_id=model.job_id,
            tasks=len(model.preparation_tasks),
        )
        return model

    async def get(self, interview_id: str) -> InterviewModel:
        """Load an interview or raise RecordNotFoundError."""
        async with self._session_factory() as session:
            model = await InterviewRepository(session).get_by_id(interview_id)
        if model is None:
            raise RecordNotFoundError(f"Interview {interview_id} not found")
        return model

    async def toggle_task(self, interview_id: str, index: int) -> InterviewModel:
        """Flip the completed flag of one checklist item."""
        self._require_user()
        async with self._scope() as session:
            repo = InterviewRepository(session)
            model = await self._load(repo, interview_id)
            tasks = [PreparationTask.model_validate(t) for t in model.preparation_tasks]
            if not 0 <= index < len(tasks):
                raise RecordNotFoundError(f"Task {index} not found on interview {interview_id}")
            tasks[index].completed = not tasks[index].completed
            await repo.set_preparation_tasks(model, [t.model_dump() for t in tasks])

        logger.info(
            "preparation_task_toggled",
            interview_id=interview_id,
            index=index,
            completed=tasks[index].completed,
        )
        return model

    async def add_task(self, interview_id: str, task: str) -> InterviewModel:
        """Append a custom checklist item."""
        self._require_user()
        async with self._scope() as session:
            repo = InterviewRepository(session)
            model = await self._load(repo, interview_id)
            tasks = [*model.preparation_tasks, PreparationTask(task=task).model_dump()]
            await repo.set_preparation_tasks(model, tasks)
        return model

    async def update_status(self, interview_id: str, status: InterviewStatus) -> InterviewModel:
        """Set scheduled, completed or cancelled."""
        self._require_user()
        async with self._scope() as session:
            repo = InterviewRepository(session)
            model = await repo.update_fields(await self._load(repo, interview_id), status=status)
        logger.info("interview_status_updated", interview_id=interview_id, status=status)
        return model

    async def record_outcome(self, interview_id: str, outcome: str) -> InterviewModel:
        """Store the outcome; past outcomes feed the historical success rate."""
        self._require_user()
        async with self._scope() as session:
            repo = InterviewRepository(session)
            model = await repo.update_fields(
                await self._load(repo, interview_id), outcome=outcome
            )
        logger.info("interview_outcome_recorded", interview_id=interview_id, outcome=outcome)
        return model

    async def record_question_response(
        self, interview_id: str, question: str, response: str
    ) -> InterviewQuestionResponseModel:
        """Store a practiced answer; the count feeds the preparation score."""
        self._require_user()
        async with self._scope() as session:
            await self._load(InterviewRepository(session), interview_id)
            model = InterviewQuestionResponseModel(
                interview_id=interview_id, question=question, response=response
            )
            await QuestionResponseRepository(session).create(model)

        logger.info("question_response_recorded", interview_id=interview_id, response_id=model.id)
        return model

    @staticmethod
    async def _load(repo: InterviewRepository, interview_id: str) -> InterviewModel:
        model = await repo.get_by_id(interview_id)
        if model is None:
            raise RecordNotFoundError(f"Interview {interview_id} not found")
        return model
