"""Job repository for database operations."""

from __future__ import annotations

from jobprep_infra.db.models import JobModel
from jobprep_infra.db.repositories.base import BaseRepository


class JobRepository(BaseRepository):
    """CRUD operations for saved jobs."""

    async def get_by_id(self, job_id: str) -> JobModel | None:
        """Retrieve a job by ID."""
        return await self._session.get(JobModel, job_id)

    async def create(self, model: JobModel) -> JobModel:
        """Create a new job."""
        await self._add(model)
        return model
