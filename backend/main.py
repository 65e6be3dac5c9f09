# backend/main.py
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from routes import auth, session, topics
from config import get_settings
from db import test_connection
from utils.logger import setup_logging, get_logger

setup_logging()
log = get_logger(__name__)
settings = get_settings()

app = FastAPI(
    title="AI Mock Interview API",
    version="1.0.0",
    description="Mock technical, HR and viva interviews with an AI interviewer and scored feedback"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(session.router)
app.include_router(topics.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    """Startup tasks"""
    log.info(f"🚀 Starting AI Mock Interview API v1.0.0 ({settings.environment})")

    redis_ok = await test_connection()
    if redis_ok:
        log.info("✅ Redis connected")
    else:
        log.warning("⚠️ Redis connection failed")

    provider = settings.llm_provider.lower()
    key = settings.llm_api_key if provider == "gemini" else settings.groq_api_key
    if key:
        log.info(f"✅ LLM provider: {provider}")
    else:
        log.warning(f"⚠️ LLM provider '{provider}' has no API key configured")


@app.on_event("shutdown")
async def shutdown_event():
    log.info("🛑 Shutting down...")


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "message": "AI Mock Interview API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
        log_level="info"
    )
