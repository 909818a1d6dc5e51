import logging
import time
import uuid
from typing import List

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import BaseMessage

from app.core.exceptions import GenerationError
from app.core.logger import log_execution_time, reset_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


class LLMService:
    """
    Submits one conversation to the chat model and returns the reply text.

    Every call gets a fresh correlation ID. It tags the log lines of the call
    and is passed to LangChain as the conversation thread id, so nothing is
    shared between requests. No retries: a failed call fails the request.
    """

    def __init__(self, chat_model: BaseChatModel):
        self.chat_model = chat_model

    @staticmethod
    def _reply_text(response) -> str:
        content = response.content if hasattr(response, 'content') else response
        if isinstance(content, list):
            # Content blocks; keep the text parts only
            return "".join(
                block if isinstance(block, str) else block.get("text", "")
                for block in content
            )
        return str(content)

    @log_execution_time
    async def complete(self, messages: List[BaseMessage], label: str = "Generation") -> str:
        """
        Call the model once.

        Args:
            messages: Conversation to submit, system message first if any.
            label: Label for log lines.

        Returns:
            Text content of the model reply.

        Raises:
            GenerationError: If the client raises for any reason.
        """
        correlation_id = str(uuid.uuid4())
        token = set_correlation_id(correlation_id)
        config = {
            "run_name": "mock_interview_generation",
            "metadata": {"thread_id": correlation_id},
        }

        try:
            logger.info(f"[{label}] Model call started ({len(messages)} message(s))")
            start_time = time.perf_counter()
            try:
                response = await self.chat_model.ainvoke(messages, config=config)
            except Exception as e:
                logger.error(f"[{label}] Model call failed: {e}")
                raise GenerationError(f"LLM call failed: {e}", {"correlation_id": correlation_id}) from e

            reply = self._reply_text(response)
            elapsed = time.perf_counter() - start_time
            logger.info(f"[{label}] Model call completed in {elapsed:.2f}s ({len(reply)} chars)")
            logger.debug(f"[{label}] Response preview: {reply[:200]}...")
            return reply
        finally:
            reset_correlation_id(token)
