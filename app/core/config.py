from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from dotenv import load_dotenv


CONFIG_DIR = Path(__file__).resolve().parent
# .env lives in the project root (two levels up from app/core)
PROJECT_ROOT = CONFIG_DIR.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / '.env'

load_dotenv(ENV_FILE_PATH)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding='utf-8',
        extra='ignore'
    )

    DEBUG_MODE: bool = False

    # LLM provider
    GROQ_API_KEY: str = ""
    GROQ_MODEL: str = "llama-3.3-70b-versatile"
    LLM_TEMPERATURE: float = 0.0

    # Persistence
    DATABASE_URL: str = f"sqlite:///{PROJECT_ROOT / 'mock_interviews.db'}"

    # Identity headers set by the upstream auth provider
    AUTH_USER_ID_HEADER: str = "X-User-Id"
    AUTH_USER_EMAIL_HEADER: str = "X-User-Email"

    # Question generation
    RESUME_QUESTION_COUNT: int = 2
    TYPED_QUESTION_COUNT: int = 1
    STRICT_QUESTION_SCHEMA: bool = True  # Reject elements that are not {question, answer} strings

    # Stored as a display string, e.g. 17-10-2026
    CREATED_AT_FORMAT: str = "%d-%m-%Y"

    # Dashboard placeholders (not computed)
    STATS_TOTAL_HOURS: str = "12.5"
    STATS_UPCOMING_SESSIONS: str = "3"

    # File Upload Limits
    MAX_FILE_SIZE_MB: int = 10  # Maximum resume file size in MB


settings = Settings()
