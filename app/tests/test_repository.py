import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import PersistenceError
from app.models.interview import MockInterview, UserAnswer
from app.services.repository import InterviewRepository


def make_record(mock_id, owner="candidate@example.com", created_at="01-02-2026"):
    return MockInterview(
        mock_id=mock_id,
        json_mock_resp='[{"question": "Q", "answer": "A"}]',
        job_position="Backend Engineer",
        job_type="technical",
        job_experience="3 years",
        created_by=owner,
        created_at=created_at,
    )


def test_create_returns_mock_id(db_session):
    repository = InterviewRepository(db_session)
    assert repository.create(make_record("mock-1")) == "mock-1"


def test_list_by_owner_is_newest_first_and_scoped(db_session):
    repository = InterviewRepository(db_session)
    # Display dates would sort wrongly as strings; insertion order wins
    repository.create(make_record("oldest", created_at="31-01-2026"))
    repository.create(make_record("other-owner", owner="someone@example.com"))
    repository.create(make_record("newest", created_at="01-02-2026"))

    interviews = repository.list_by_owner("candidate@example.com")

    assert [interview.mock_id for interview in interviews] == ["newest", "oldest"]


def test_get_by_mock_id_checks_owner(db_session):
    repository = InterviewRepository(db_session)
    repository.create(make_record("mock-1"))

    assert repository.get_by_mock_id("mock-1", "candidate@example.com").job_type == "technical"
    assert repository.get_by_mock_id("mock-1", "someone@example.com") is None


def test_average_rating_is_none_without_answers(db_session):
    assert InterviewRepository(db_session).average_rating("candidate@example.com") is None


def test_average_rating_only_counts_owner(db_session):
    db_session.add_all([
        UserAnswer(mock_id_ref="m", question="Q1", rating=4, user_email="candidate@example.com"),
        UserAnswer(mock_id_ref="m", question="Q2", rating=3, user_email="candidate@example.com"),
        UserAnswer(mock_id_ref="m", question="Q3", rating=10, user_email="someone@example.com"),
    ])
    db_session.commit()

    assert InterviewRepository(db_session).average_rating("candidate@example.com") == pytest.approx(3.5)


def test_insert_failure_is_rolled_back_and_wrapped(db_session, monkeypatch):
    repository = InterviewRepository(db_session)

    def broken_commit():
        raise OperationalError("INSERT", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(PersistenceError):
        repository.create(make_record("mock-1"))
    monkeypatch.undo()
    assert repository.list_by_owner("candidate@example.com") == []
