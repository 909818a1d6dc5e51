from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel

# --- Request Models ---

class InterviewType(str, Enum):
    """Selects the prompt template."""
    TECHNICAL = "technical"
    HR = "hr"
    RESUME = "resume"


class InterviewRequest(BaseModel):
    """Transient input for one generation request."""
    interview_type: InterviewType
    role: Optional[str] = None
    experience: Optional[str] = None
    resume_bytes: Optional[bytes] = Field(default=None, repr=False)
    resume_filename: Optional[str] = None


# --- LLM Output Models ---

class QuestionAnswer(BaseModel):
    """One generated interview question with its model answer."""
    model_config = ConfigDict(extra='forbid')

    question: StrictStr = Field(..., description="The interview question.")
    answer: StrictStr = Field(..., description="A reference answer for the question.")


# --- API Response Models ---

class CamelModel(BaseModel):
    """Serializes with camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class CreateInterviewResponse(CamelModel):
    mock_id: str


class InterviewRecord(CamelModel):
    """A stored interview as returned to its owner."""
    id: int
    mock_id: str
    json_mock_resp: str
    job_position: str
    job_type: str
    job_experience: Optional[str] = None
    created_by: str
    created_at: str


class InterviewDetail(InterviewRecord):
    """A stored interview with its question set already decoded."""
    # Elements are stored as parsed; lenient mode may keep extra keys
    questions: list[dict[str, Any]] = Field(default_factory=list)


class InterviewStats(CamelModel):
    completed_interviews: int
    average_score: str
    total_hours: str
    upcoming_sessions: str


class InterviewListResponse(BaseModel):
    interviews: list[InterviewRecord]
    stats: InterviewStats


class ErrorResponse(BaseModel):
    error: str
