"""Creates and lists mock interviews for the HTTP layer."""
from __future__ import annotations

import asyncio
import json
import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from app.core.config import settings
from app.core.exceptions import InterviewNotFoundError
from app.models.interview import MockInterview
from app.schemas.interview import (
    InterviewDetail,
    InterviewListResponse,
    InterviewRecord,
    InterviewRequest,
    InterviewStats,
    InterviewType,
)
from app.services.pipeline.interview_generator import InterviewGenerator
from app.services.repository import InterviewRepository

logger = logging.getLogger(__name__)

# Fallback job positions when no role is given
RESUME_JOB_POSITION = "Resume Interview"
HR_JOB_POSITION = "HR Interview"


def job_position_for(request: InterviewRequest) -> str:
    role = (request.role or "").strip()
    if role:
        return role
    if request.interview_type == InterviewType.RESUME:
        return RESUME_JOB_POSITION
    return HR_JOB_POSITION


def format_average_score(average: Optional[float]) -> str:
    """One decimal place; "0.0" when there are no ratings."""
    if average is None:
        return "0.0"
    return f"{average:.1f}"


class InterviewService:
    """
    Generation and storage are not transactional: if the insert fails the
    generated questions are discarded and the error propagates.
    """

    def __init__(self, repository: InterviewRepository, generator: Optional[InterviewGenerator] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.generator = generator
        self.clock = clock

    async def create_interview(self, owner_email: str, request: InterviewRequest) -> str:
        """Generate a question set, store it, and return the new mock_id."""
        questions = await self.generator.generate(request)

        record = MockInterview(
            mock_id=str(uuid.uuid4()),
            json_mock_resp=json.dumps(questions),
            job_position=job_position_for(request),
            job_type=request.interview_type.value,
            job_experience=request.experience,
            created_by=owner_email,
            created_at=self.clock().strftime(settings.CREATED_AT_FORMAT),
        )
        # The commit blocks; keep it off the event loop
        return await asyncio.to_thread(self.repository.create, record)

    def list_interviews(self, owner_email: str) -> InterviewListResponse:
        interviews = self.repository.list_by_owner(owner_email)
        average = self.repository.average_rating(owner_email)

        return InterviewListResponse(
            interviews=[InterviewRecord.model_validate(interview) for interview in interviews],
            stats=InterviewStats(
                completed_interviews=len(interviews),
                average_score=format_average_score(average),
                total_hours=settings.STATS_TOTAL_HOURS,
                upcoming_sessions=settings.STATS_UPCOMING_SESSIONS,
            ),
        )

    def get_interview(self, owner_email: str, mock_id: str) -> InterviewDetail:
        interview = self.repository.get_by_mock_id(mock_id, owner_email)
        if interview is None:
            raise InterviewNotFoundError("Interview not found")

        record = InterviewRecord.model_validate(interview)
        return InterviewDetail(**record.model_dump(), questions=json.loads(interview.json_mock_resp))
