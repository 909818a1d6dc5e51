"""
Interview question generation.

Turns an InterviewRequest into a conversation, makes exactly one model call,
and sanitizes the reply into a question set:

1. Request validation (resume file or role present as required)
2. Prompt construction (resume / technical / hr)
3. One model call through LLMService
4. Sanitizing and schema checks through llm_parser
"""
from __future__ import annotations
import base64
import logging
from typing import List, Optional

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage

from app.core.config import settings
from app.core.exceptions import InvalidInterviewRequestError
from app.core.prompts import generate_resume_system_prompt, generate_typed_interview_prompt
from app.schemas.interview import InterviewRequest, InterviewType
from app.services.pipeline.file_validator import FileValidator
from app.services.pipeline.llm_parser import parse_question_set
from app.services.pipeline.llm_service import LLMService

logger = logging.getLogger(__name__)


class InterviewGenerator:
    """Generates the question set for one interview request."""

    def __init__(self, llm_service: LLMService, file_validator: Optional[FileValidator] = None,
                 strict_schema: Optional[bool] = None):
        self.llm_service = llm_service
        self.file_validator = file_validator or FileValidator(logger=logger)
        self.strict_schema = settings.STRICT_QUESTION_SCHEMA if strict_schema is None else strict_schema

    def validate(self, request: InterviewRequest) -> None:
        """Fail before any model call if the request cannot produce a prompt."""
        if request.interview_type == InterviewType.RESUME:
            if not request.resume_bytes:
                raise InvalidInterviewRequestError("A resume file is required for resume interviews")
            self.file_validator.validate(request.resume_filename, request.resume_bytes)
        elif request.interview_type == InterviewType.TECHNICAL and not (request.role or "").strip():
            raise InvalidInterviewRequestError("A role is required for technical interviews")

    def build_messages(self, request: InterviewRequest) -> List[BaseMessage]:
        """Conversation to submit for the request."""
        if request.interview_type == InterviewType.RESUME:
            encoded_resume = base64.b64encode(request.resume_bytes).decode("ascii")
            return [
                SystemMessage(content=generate_resume_system_prompt(settings.RESUME_QUESTION_COUNT)),
                HumanMessage(content=encoded_resume),
            ]

        prompt = generate_typed_interview_prompt(
            request.interview_type,
            role=(request.role or "").strip(),
            experience=(request.experience or "").strip() or "Not specified",
            question_count=settings.TYPED_QUESTION_COUNT,
        )
        return [HumanMessage(content=prompt)]

    async def generate(self, request: InterviewRequest) -> List[dict]:
        """
        Generate and parse the question set.

        Returns:
            List of {"question": ..., "answer": ...} dicts.

        Raises:
            InvalidInterviewRequestError: Request cannot be turned into a prompt
            GenerationError: The model call failed
            MalformedResponseError: The reply could not be parsed into a question set
        """
        self.validate(request)
        messages = self.build_messages(request)

        label = f"{request.interview_type.value} interview"
        raw_reply = await self.llm_service.complete(messages, label=label)
        questions = parse_question_set(raw_reply, strict=self.strict_schema)

        logger.info(f"[{label}] Parsed {len(questions)} question(s) from LLM response")
        return questions
