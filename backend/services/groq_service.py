# services/groq_service.py
from typing import List, Dict, Optional
from groq import AsyncGroq
from config import get_settings
from services.llm_service import LLMServiceError
from utils.logger import get_logger

logger = get_logger("GroqService")


class GroqService:
    """Groq chat completions via the official async SDK."""

    def __init__(self):
        settings = get_settings()
        self.model = settings.groq_model
        self.fast_model = settings.groq_fast_model or settings.groq_model
        if not settings.groq_api_key:
            logger.error("Groq API key not configured")
            self.client = None
        else:
            self.client = AsyncGroq(api_key=settings.groq_api_key)
            logger.info(f"Groq service initialized ({self.model} / {self.fast_model})")

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        fast: bool = False,
    ) -> str:
        if not self.client:
            raise LLMServiceError("LLM service not configured")
        model = self.fast_model if fast else self.model
        try:
            chat_completion = await self.client.chat.completions.create(
                messages=messages,
                model=model,
                temperature=0.7 if temperature is None else temperature,
                max_tokens=max_tokens,
                stream=False,
            )
        except Exception as e:
            logger.error(f"Groq chat error: {e}", exc_info=True)
            raise LLMServiceError("Failed to generate AI response") from e

        choice = (chat_completion.choices or [None])[0]
        content = choice.message.content if choice and choice.message else None
        if not content or not content.strip():
            logger.warning(f"Groq returned no text. finish_reason={getattr(choice, 'finish_reason', None)}")
            raise LLMServiceError("No response generated")
        return content.strip()
