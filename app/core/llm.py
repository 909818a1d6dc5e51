"""
Language Model (LLM) client configuration.

One ChatGroq instance per process, created on first use so the app can start
(and tests can run) without a Groq key configured.
"""
from functools import lru_cache

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_groq import ChatGroq

from app.core.config import settings


@lru_cache(maxsize=1)
def get_chat_model() -> BaseChatModel:
    """ChatGroq for question generation; temperature 0 for deterministic sampling."""
    return ChatGroq(
        model=settings.GROQ_MODEL,
        temperature=settings.LLM_TEMPERATURE,
        api_key=settings.GROQ_API_KEY,
    )
