# ========================================
# config.py - Environment-driven settings
# ========================================

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ---------- LLM Configuration -------------------------------------- #
    llm_provider: str = "groq"                      # groq | gemini

    # Groq
    groq_api_key: str = ""
    groq_model: str = "llama-3.3-70b-versatile"
    groq_fast_model: str = "llama-3.1-8b-instant"

    # Gemini
    llm_api_key: str = ""
    llm_model: str = "gemini-1.5-pro"
    llm_fast_model: str = "gemini-1.5-flash"

    # ---------- Database ----------------------------------------------- #
    redis_url: str = "redis://localhost:6379/0"

    # ---------- Security ----------------------------------------------- #
    jwt_secret_key: str = "change-this-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 30
    bcrypt_rounds: int = 10

    # ---------- CORS --------------------------------------------------- #
    allowed_origins: str = "http://localhost:5173"

    # ---------- Interview Settings ------------------------------------- #
    llm_rate_limit: int = 20
    llm_rate_window_seconds: int = 60
    history_limit: int = 20
    profile_session_limit: int = 10
    session_lock_timeout_seconds: int = 120
    session_lock_wait_seconds: float = 30

    # ---------- Runtime ------------------------------------------------ #
    environment: str = "development"
    port: int = 5000

    # ---------- Logging ------------------------------------------------ #
    log_level: str = "INFO"
    log_format: str = "console"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
