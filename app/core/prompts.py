from app.schemas.interview import InterviewType

QUESTION_FORMAT_TEMPLATE = (
    "\n"
    "System: For the following context: {system_content}\n"
    "Generate interview questions and answers in the following JSON format ONLY:\n"
    "[\n"
    "  {{\n"
    "    \"question\": \"your question here\",\n"
    "    \"answer\": \"your answer here\"\n"
    "  }}\n"
    "]\n"
    "Ensure the response is valid JSON with no special characters or line breaks in strings.\n"
    "\n"
    "User: {user_content}\n"
)

TYPED_USER_CONTENT = "Generate the interview question now."


def generate_resume_system_prompt(question_count: int) -> str:
    """
    System instruction sent ahead of the base64-encoded resume.

    The example keys are single-quoted; the sanitizer copes with the model
    echoing proper JSON back.
    """
    return (
        f"Analyze the following resume and generate {question_count} relevant interview questions "
        "with answers in valid JSON format: [{'question': '...', 'answer': '...'}]"
    )


def generate_system_content(interview_type: InterviewType, role: str, experience: str, question_count: int) -> str:
    """Context line for technical and HR interviews. HR questions never mention the role."""
    if interview_type == InterviewType.TECHNICAL:
        return (
            f"Role: {role}, Experience Level: {experience}. "
            f"Generate {question_count} technical interview question."
        )
    return f"Experience Level: {experience}. Generate {question_count} HR interview question."


def generate_typed_interview_prompt(interview_type: InterviewType, role: str, experience: str,
                                    question_count: int) -> str:
    """
    Generate the single-message prompt for technical and HR interviews.

    Args:
        interview_type: technical or hr.
        role: Job role; only used for technical interviews.
        experience: Candidate experience level.
        question_count: Number of questions to request.

    Returns:
        The formatted prompt string.
    """
    system_content = generate_system_content(interview_type, role, experience, question_count)
    return QUESTION_FORMAT_TEMPLATE.format(system_content=system_content, user_content=TYPED_USER_CONTENT)
