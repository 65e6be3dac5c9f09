# ========================================
# services/gemini_service.py - Gemini chat adapter
# ========================================

import google.generativeai as genai
from config import get_settings
from services.llm_service import LLMServiceError
from utils.logger import get_logger
from typing import List, Dict, Optional

logger = get_logger("GeminiService")

_ROLE_LABELS = {"assistant": "Interviewer", "user": "Candidate"}


class GeminiService:
    def __init__(self):
        settings = get_settings()
        self.model_name = settings.llm_model
        self.fast_model_name = settings.llm_fast_model or settings.llm_model
        self.configured = bool(settings.llm_api_key)
        if self.configured:
            genai.configure(api_key=settings.llm_api_key)
            logger.info("Gemini service initialized")
        else:
            logger.error("Gemini API key not configured")

    async def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        fast: bool = False,
    ) -> str:
        """System messages become the system instruction; the rest is flattened into one prompt."""
        if not self.configured:
            raise LLMServiceError("LLM service not configured")

        system = "\n".join(m["content"] for m in messages if m["role"] == "system") or None
        prompt = "\n".join(
            f"{_ROLE_LABELS.get(m['role'], m['role'])}: {m['content']}"
            for m in messages if m["role"] != "system"
        )

        generation_config = {"temperature": 0.7 if temperature is None else temperature}
        if max_tokens:
            generation_config["max_output_tokens"] = max_tokens

        model = genai.GenerativeModel(
            self.fast_model_name if fast else self.model_name,
            system_instruction=system,
        )
        try:
            response = await model.generate_content_async(prompt, generation_config=generation_config)
        except Exception as e:
            logger.error(f"Gemini generation error: {e}", exc_info=True)
            raise LLMServiceError("Failed to generate AI response") from e

        try:
            text = response.text
        except ValueError:
            # blocked or empty candidate
            finish = None
            if getattr(response, "candidates", None):
                finish = getattr(response.candidates[0], "finish_reason", None)
            logger.warning(f"Gemini returned no text. finish_reason={finish}")
            raise LLMServiceError("No response generated")
        if not text or not text.strip():
            raise LLMServiceError("No response generated")
        return text.strip()
