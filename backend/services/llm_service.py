# services/llm_service.py
from functools import lru_cache
from typing import Dict, List, Optional, Protocol

from config import get_settings
from utils.logger import get_logger

logger = get_logger("LLMService")


class LLMServiceError(Exception):
    """The model provider failed or returned nothing usable."""


class ChatModel(Protocol):
    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        fast: bool = False,
    ) -> str: ...


@lru_cache
def get_llm_service() -> ChatModel:
    """Provider chosen by LLM_PROVIDER (groq | gemini)."""
    provider = get_settings().llm_provider.strip().lower()
    if provider == "gemini":
        from services.gemini_service import GeminiService
        return GeminiService()
    if provider != "groq":
        logger.warning(f"Unknown LLM provider '{provider}', falling back to groq")
    from services.groq_service import GroqService
    return GroqService()
