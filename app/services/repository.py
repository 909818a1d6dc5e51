"""SQLAlchemy-backed storage for mock interviews and answer ratings."""

import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import PersistenceError
from app.core.logger import log_execution_time
from app.models.interview import MockInterview, UserAnswer


class InterviewRepository:
    """
    Reads and writes MockInterview rows; averages UserAnswer ratings.

    Every database error is re-raised as PersistenceError, after rolling back
    any pending write.
    """

    def __init__(self, db: Session, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or logging.getLogger(__name__)

    @log_execution_time
    def create(self, record: MockInterview) -> str:
        """
        Insert a record.

        Returns:
            The record's mock_id
        """
        try:
            self.db.add(record)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(f"Failed to store interview: {e}") from e

        self.logger.info(f"Stored interview {record.mock_id} for {record.created_by}")
        return record.mock_id

    def list_by_owner(self, owner_email: str) -> List[MockInterview]:
        """All interviews of one owner, newest first."""
        stmt = (
            select(MockInterview)
            .where(MockInterview.created_by == owner_email)
            .order_by(MockInterview.id.desc())
        )
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list interviews: {e}") from e

    def get_by_mock_id(self, mock_id: str, owner_email: str) -> Optional[MockInterview]:
        """One interview, only if it belongs to owner_email."""
        stmt = select(MockInterview).where(
            MockInterview.mock_id == mock_id,
            MockInterview.created_by == owner_email,
        )
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to load interview {mock_id}: {e}") from e

    def average_rating(self, owner_email: str) -> Optional[float]:
        """Average answer rating of one user; None when nothing is rated."""
        stmt = select(func.avg(UserAnswer.rating)).where(UserAnswer.user_email == owner_email)
        try:
            average = self.db.scalar(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to average ratings: {e}") from e
        return float(average) if average is not None else None
