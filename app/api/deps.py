from dataclasses import dataclass

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import UnauthorizedError
from app.core.llm import get_chat_model
from app.services.interview_service import InterviewService
from app.services.pipeline.interview_generator import InterviewGenerator
from app.services.pipeline.llm_service import LLMService
from app.services.repository import InterviewRepository


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: str


def get_current_user(request: Request) -> CurrentUser:
    """
    Caller identity as forwarded by the upstream auth provider.
    Both the user id and the email must be present.
    """
    user_id = request.headers.get(settings.AUTH_USER_ID_HEADER, "").strip()
    email = request.headers.get(settings.AUTH_USER_EMAIL_HEADER, "").strip()
    if not user_id or not email:
        raise UnauthorizedError()
    return CurrentUser(user_id=user_id, email=email)


def get_llm_service() -> LLMService:
    return LLMService(get_chat_model())


def get_interview_generator(llm_service: LLMService = Depends(get_llm_service)) -> InterviewGenerator:
    return InterviewGenerator(llm_service)


def get_interview_repository(db: Session = Depends(get_db)) -> InterviewRepository:
    return InterviewRepository(db)


def get_interview_service(
    repository: InterviewRepository = Depends(get_interview_repository),
) -> InterviewService:
    """Read-side service; no model client is built for listing."""
    return InterviewService(repository)


def get_interview_creation_service(
    repository: InterviewRepository = Depends(get_interview_repository),
    generator: InterviewGenerator = Depends(get_interview_generator),
) -> InterviewService:
    return InterviewService(repository, generator)
