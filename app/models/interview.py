from typing import Optional

from sqlalchemy import Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class MockInterview(Base):
    """One generated interview. Written once, never updated."""
    __tablename__ = "mock_interviews"

    # Insertion order; created_at is a display string and does not sort
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mock_id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)
    json_mock_resp: Mapped[str] = mapped_column(Text, nullable=False)
    job_position: Mapped[str] = mapped_column(String(255), nullable=False)
    job_type: Mapped[str] = mapped_column(String(16), nullable=False)
    job_experience: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_by: Mapped[str] = mapped_column(String(320), index=True, nullable=False)
    created_at: Mapped[str] = mapped_column(String(10), nullable=False)  # DD-MM-YYYY

    def __repr__(self):
        return f"<MockInterview {self.mock_id} {self.job_type} by {self.created_by}>"


class UserAnswer(Base):
    """A rated answer to one question of a mock interview, recorded by the interview session flow."""
    __tablename__ = "user_answers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mock_id_ref: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    correct_ans: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    user_ans: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    feedback: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    user_email: Mapped[str] = mapped_column(String(320), index=True, nullable=False)
    created_at: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
