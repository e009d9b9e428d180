"""Repository for job-match analyses, company research and interview insights."""

from __future__ import annotations

from sqlalchemy import func, select

from jobprep_infra.db.models import (
    CompanyResearchModel,
    InterviewInsightModel,
    JobMatchAnalysisModel,
)
from jobprep_infra.db.repositories.base import BaseRepository


class ResearchRepository(BaseRepository):
    """Per-job preparation material that feeds the success score."""

    async def create_job_match(self, model: JobMatchAnalysisModel) -> JobMatchAnalysisModel:
        """Store a job-match analysis."""
        await self._add(model)
        return model

    async def latest_job_match(self, job_id: str) -> JobMatchAnalysisModel | None:
        """Newest job-match analysis for a job."""
        stmt = (
            select(JobMatchAnalysisModel)
            .where(JobMatchAnalysisModel.job_id == job_id)
            .order_by(JobMatchAnalysisModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_company_research(
        self, model: CompanyResearchModel
    ) -> CompanyResearchModel:
        """Store company research notes."""
        await self._add(model)
        return model

    async def latest_company_research(self, job_id: str) -> CompanyResearchModel | None:
        """Newest company research for a job."""
        stmt = (
            select(CompanyResearchModel)
            .where(CompanyResearchModel.job_id == job_id)
            .order_by(CompanyResearchModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_insight(self, model: InterviewInsightModel) -> InterviewInsightModel:
        """Store interview insights for a job."""
        await self._add(model)
        return model

    async def has_insights(self, job_id: str) -> bool:
        """Whether any interview insights exist for a job."""
        stmt = select(func.count()).where(InterviewInsightModel.job_id == job_id)
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0
