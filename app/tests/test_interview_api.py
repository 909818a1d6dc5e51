import json

from app.api.deps import get_interview_generator, get_interview_repository
from app.core.exceptions import PersistenceError
from app.main import app
from app.models.interview import MockInterview, UserAnswer
from app.services.pipeline.interview_generator import InterviewGenerator
from app.services.pipeline.llm_service import LLMService

PDF_BYTES = b"%PDF-1.4\n%mock resume\n"


def stored_interviews(session_factory):
    with session_factory() as session:
        return session.query(MockInterview).all()


def test_technical_interview_is_generated_and_stored(client, chat_model, session_factory, auth_headers):
    response = client.post(
        "/api/v1/interviews",
        data={"interviewType": "technical", "role": "Backend Engineer", "experience": "3 years"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    mock_id = response.json()["mockId"]

    [record] = stored_interviews(session_factory)
    assert record.mock_id == mock_id
    assert record.job_type == "technical"
    assert record.job_position == "Backend Engineer"
    assert record.job_experience == "3 years"
    assert record.created_by == "candidate@example.com"
    assert json.loads(record.json_mock_resp) == [{"question": "Explain REST", "answer": "An architectural style."}]
    assert len(chat_model.calls) == 1


def test_created_at_is_day_month_year(client, session_factory, auth_headers):
    client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "Junior"}, headers=auth_headers)

    [record] = stored_interviews(session_factory)
    day, month, year = record.created_at.split("-")
    assert (len(day), len(month), len(year)) == (2, 2, 4)


def test_resume_interview_strips_fences(client, chat_model, session_factory, auth_headers):
    chat_model.reply = (
        "```json\n"
        '[{"question": "Tell me about your last project", "answer": "..."},'
        ' {"question": "Why this stack?", "answer": "..."}]\n'
        "```"
    )

    response = client.post(
        "/api/v1/interviews",
        data={"interviewType": "resume"},
        files={"resume": ("resume.pdf", PDF_BYTES, "application/pdf")},
        headers=auth_headers,
    )

    assert response.status_code == 201
    [record] = stored_interviews(session_factory)
    assert record.job_position == "Resume Interview"
    assert record.job_type == "resume"
    assert len(json.loads(record.json_mock_resp)) == 2


def test_hr_interview_without_role_uses_default_position(client, session_factory, auth_headers):
    response = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "5 years"},
                           headers=auth_headers)

    assert response.status_code == 201
    [record] = stored_interviews(session_factory)
    assert record.job_position == "HR Interview"


def test_unauthorized_request_does_no_work(client, chat_model, session_factory):
    response = client.post(
        "/api/v1/interviews",
        data={"interviewType": "technical", "role": "Backend Engineer", "experience": "3 years"},
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert chat_model.calls == []
    assert stored_interviews(session_factory) == []


def test_missing_email_is_unauthorized(client, chat_model):
    response = client.get("/api/v1/interviews", headers={"X-User-Id": "user_123"})

    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_malformed_model_reply_stores_nothing(client, chat_model, session_factory, auth_headers):
    chat_model.reply = "sorry, I cannot help with that"

    response = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "2 years"},
                           headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create interview. Please try again."}
    assert stored_interviews(session_factory) == []


def test_model_failure_is_a_server_error(client, chat_model, session_factory, auth_headers):
    chat_model.error = TimeoutError("read timed out")

    response = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "2 years"},
                           headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create interview. Please try again."}
    assert len(chat_model.calls) == 1
    assert stored_interviews(session_factory) == []


def test_storage_failure_discards_generated_questions(client, chat_model, auth_headers):
    class FailingRepository:
        def create(self, record):
            raise PersistenceError("disk full")

    app.dependency_overrides[get_interview_repository] = lambda: FailingRepository()

    response = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "2 years"},
                           headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to create interview. Please try again."}
    assert len(chat_model.calls) == 1


def test_resume_interview_requires_file(client, chat_model, auth_headers):
    response = client.post("/api/v1/interviews", data={"interviewType": "resume"}, headers=auth_headers)

    assert response.status_code == 400
    assert "resume file is required" in response.json()["error"]
    assert chat_model.calls == []


def test_unknown_interview_type_is_rejected(client, chat_model, auth_headers):
    response = client.post("/api/v1/interviews", data={"interviewType": "panel"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid request")
    assert chat_model.calls == []


def test_list_without_answers_reports_zero_score(client, auth_headers):
    client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "2 years"}, headers=auth_headers)

    response = client.get("/api/v1/interviews", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["stats"] == {
        "completedInterviews": 1,
        "averageScore": "0.0",
        "totalHours": "12.5",
        "upcomingSessions": "3",
    }
    [interview] = body["interviews"]
    assert interview["jobType"] == "hr"
    assert interview["createdBy"] == "candidate@example.com"


def test_list_averages_owner_ratings(client, session_factory, auth_headers):
    with session_factory() as session:
        session.add_all([
            UserAnswer(mock_id_ref="m", question="Q1", rating=4, user_email="candidate@example.com"),
            UserAnswer(mock_id_ref="m", question="Q2", rating=5, user_email="candidate@example.com"),
            UserAnswer(mock_id_ref="m", question="Q3", rating=1, user_email="someone@example.com"),
        ])
        session.commit()

    response = client.get("/api/v1/interviews", headers=auth_headers)

    assert response.json()["stats"]["averageScore"] == "4.5"
    assert response.json()["stats"]["completedInterviews"] == 0


def test_list_only_returns_callers_interviews_newest_first(client, auth_headers):
    first = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "1 year"},
                        headers=auth_headers).json()["mockId"]
    second = client.post("/api/v1/interviews",
                         data={"interviewType": "technical", "role": "SRE", "experience": "4 years"},
                         headers=auth_headers).json()["mockId"]
    client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "1 year"},
                headers={"X-User-Id": "user_456", "X-User-Email": "someone@example.com"})

    interviews = client.get("/api/v1/interviews", headers=auth_headers).json()["interviews"]

    assert [interview["mockId"] for interview in interviews] == [second, first]


def test_get_interview_decodes_questions(client, auth_headers):
    mock_id = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "1 year"},
                          headers=auth_headers).json()["mockId"]

    response = client.get(f"/api/v1/interviews/{mock_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["questions"] == [{"question": "Explain REST", "answer": "An architectural style."}]


def test_get_interview_of_another_owner_is_not_found(client, auth_headers):
    mock_id = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "1 year"},
                          headers=auth_headers).json()["mockId"]

    response = client.get(f"/api/v1/interviews/{mock_id}",
                          headers={"X-User-Id": "user_456", "X-User-Email": "someone@example.com"})

    assert response.status_code == 404
    assert response.json() == {"error": "Interview not found"}


def test_lenient_schema_records_can_be_read_back(client, chat_model, auth_headers):
    chat_model.reply = '[{"question": "Q", "answer": "A", "score": 5}]'
    app.dependency_overrides[get_interview_generator] = (
        lambda: InterviewGenerator(LLMService(chat_model), strict_schema=False)
    )

    mock_id = client.post("/api/v1/interviews", data={"interviewType": "hr", "experience": "1 year"},
                          headers=auth_headers).json()["mockId"]
    response = client.get(f"/api/v1/interviews/{mock_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["questions"] == [{"question": "Q", "answer": "A", "score": 5}]


def test_blank_role_falls_back_to_default_position(client, session_factory, auth_headers):
    response = client.post("/api/v1/interviews", data={"interviewType": "hr", "role": "  ", "experience": "1 year"},
                           headers=auth_headers)

    assert response.status_code == 201
    [record] = stored_interviews(session_factory)
    assert record.job_position == "HR Interview"
