import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from app.api.deps import (
    CurrentUser,
    get_current_user,
    get_interview_creation_service,
    get_interview_service,
)
from app.core.exceptions import AppError
from app.schemas.interview import (
    CreateInterviewResponse,
    ErrorResponse,
    InterviewDetail,
    InterviewListResponse,
    InterviewRequest,
    InterviewType,
)
from app.services.interview_service import InterviewService

logger = logging.getLogger(__name__)

interview_router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@interview_router.post(
    "/interviews",
    response_model=CreateInterviewResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_interview(
    user: CurrentUser = Depends(get_current_user),
    interview_type: InterviewType = Form(..., alias="interviewType"),
    role: Optional[str] = Form(default=None),
    experience: Optional[str] = Form(default=None),
    resume: Optional[UploadFile] = File(default=None),
    service: InterviewService = Depends(get_interview_creation_service),
):
    """
    Generates a mock interview and stores it for the caller.

    Flow:
    1. Resolve caller identity (401 before anything else)
    2. Read the resume upload, if any
    3. Generate questions with one model call
    4. Store the interview and return its mockId
    """
    resume_bytes = None
    resume_filename = None
    if resume is not None and resume.filename:
        resume_bytes = await resume.read()
        resume_filename = resume.filename

    request = InterviewRequest(
        interview_type=interview_type,
        role=role,
        experience=experience,
        resume_bytes=resume_bytes,
        resume_filename=resume_filename,
    )

    try:
        mock_id = await service.create_interview(user.email, request)
    except AppError as e:
        if e.status_code < 500:
            raise
        logger.error(f"Error creating interview ({type(e).__name__}): {e.message}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create interview. Please try again.")

    logger.info(f"Created {interview_type.value} interview {mock_id} for {user.email}")
    return CreateInterviewResponse(mock_id=mock_id)


@interview_router.get(
    "/interviews",
    response_model=InterviewListResponse,
    responses=ERROR_RESPONSES,
)
def list_interviews(
    user: CurrentUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    """Lists the caller's interviews, newest first, with dashboard stats."""
    return service.list_interviews(user.email)


@interview_router.get(
    "/interviews/{mock_id}",
    response_model=InterviewDetail,
    responses={**ERROR_RESPONSES, 404: {"model": ErrorResponse}},
)
def get_interview(
    mock_id: str,
    user: CurrentUser = Depends(get_current_user),
    service: InterviewService = Depends(get_interview_service),
):
    """One of the caller's interviews with its questions decoded."""
    return service.get_interview(user.email, mock_id)
