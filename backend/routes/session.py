# ========================================
# routes/session.py - Interview session endpoints
# ========================================

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis
from redis.exceptions import LockError

from config import get_settings
from db import get_redis
from models.request import StartSessionRequest, RespondRequest
from models.session import (
    InterviewSession, SessionSummary, MessageRole, SessionNotActiveError
)
from models.user import User
from services.interview_service import InterviewService, get_interview_service
from services.session_store import SessionStore
from utils.auth import get_current_user
from utils.rate_limit import check_rate_limit
from utils.logger import get_logger

router = APIRouter(prefix="/api/session", tags=["Session"])
logger = get_logger("SessionRoutes")


async def _load_owned(store: SessionStore, session_id: str, user: User) -> InterviewSession:
    session = await store.get(session_id)
    if not session:
        raise HTTPException(status.HTTP_404_NOT_FOUND, "Session not found")
    if session.user_id != user.id:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "Not authorized")
    return session


def _not_active() -> HTTPException:
    return HTTPException(status.HTTP_400_BAD_REQUEST, "Session is not active")


def _busy() -> HTTPException:
    return HTTPException(status.HTTP_409_CONFLICT, "Session is busy, try again")


@router.post("/start", response_model=InterviewSession, status_code=status.HTTP_201_CREATED)
async def start_session(
    payload: StartSessionRequest,
    user: User = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
    interview: InterviewService = Depends(get_interview_service),
):
    """Start new interview session"""
    topic = (payload.topic or "").strip()
    if not payload.interview_type or not topic or not payload.difficulty:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Please provide all required fields")

    await check_rate_limit(redis, user.id, "start")

    try:
        opening = await interview.generate_opening_question(
            payload.interview_type, topic, payload.difficulty
        )

        session = InterviewSession(
            user_id=user.id,
            interview_type=payload.interview_type,
            topic=topic,
            difficulty=payload.difficulty,
        )
        session.add_message(
            MessageRole.AI,
            f"Welcome! Let's begin your {payload.interview_type.value} interview for {topic}. {opening}",
        )
        await SessionStore(redis).create(session)

        logger.info(f"Started interview: {session.id}, type: {session.interview_type.value}")
        return session

    except Exception as e:
        logger.error(f"Start session error: {e}", exc_info=True)
        raise HTTPException(500, "Failed to start interview session")


@router.post("/respond")
async def respond_to_interview(
    payload: RespondRequest,
    user: User = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
    interview: InterviewService = Depends(get_interview_service),
):
    """Record the candidate's answer and return the interviewer's next turn"""
    answer = (payload.user_response or "").strip()
    if not payload.session_id or not answer:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Session ID and response are required")

    store = SessionStore(redis)
    try:
        # Overlapping answers queue here so each one lands in the transcript
        async with store.lock(payload.session_id):
            session = await _load_owned(store, payload.session_id, user)
            if not session.is_active:
                raise _not_active()

            await check_rate_limit(redis, user.id, "respond")

            session.add_message(MessageRole.USER, answer)
            ai_response = await interview.generate_response(
                session.interview_type,
                session.topic,
                session.difficulty,
                session.chat_history(),
            )
            session.add_message(MessageRole.AI, ai_response)
            await store.save(session)

        return {
            "session_id": session.id,
            "ai_response": ai_response,
            "message_count": len(session.messages),
        }

    except HTTPException:
        raise
    except SessionNotActiveError:
        raise _not_active()
    except LockError:
        logger.warning(f"Session {payload.session_id} busy, respond rejected")
        raise _busy()
    except Exception as e:
        logger.error(f"Respond to interview error: {e}", exc_info=True)
        raise HTTPException(500, "Failed to process response")


@router.post("/end/{session_id}")
async def end_session(
    session_id: str,
    user: User = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
    interview: InterviewService = Depends(get_interview_service),
):
    """Complete interview and generate final feedback"""
    store = SessionStore(redis)
    try:
        # A second caller waits, then finds the session completed
        async with store.lock(session_id):
            session = await _load_owned(store, session_id, user)
            if not session.is_active:
                raise _not_active()

            await check_rate_limit(redis, user.id, "end")

            feedback = await interview.generate_feedback(
                session.interview_type,
                session.topic,
                session.difficulty,
                session.transcript(),
            )
            session.complete(feedback)
            await store.save(session)

        logger.info(f"Completed interview {session.id} after {session.duration} min")
        return {
            "message": "Session completed successfully",
            "session_id": session.id,
            "feedback": session.feedback,
        }

    except HTTPException:
        raise
    except SessionNotActiveError:
        raise _not_active()
    except LockError:
        logger.warning(f"Session {session_id} busy, end rejected")
        raise _busy()
    except Exception as e:
        logger.error(f"End session error: {e}", exc_info=True)
        raise HTTPException(500, "Failed to end session")


@router.get("/result/{session_id}", response_model=InterviewSession)
async def get_session_result(
    session_id: str,
    user: User = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
):
    """Full session including transcript and feedback"""
    try:
        return await _load_owned(SessionStore(redis), session_id, user)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Get session result error: {e}", exc_info=True)
        raise HTTPException(500, "Failed to fetch session result")


@router.get("/history", response_model=List[SessionSummary])
async def get_user_sessions(
    user: User = Depends(get_current_user),
    redis: Redis = Depends(get_redis),
):
    try:
        return await SessionStore(redis).history(user.id, get_settings().history_limit)
    except Exception as e:
        logger.error(f"Get user sessions error: {e}", exc_info=True)
        raise HTTPException(500, "Failed to fetch session history")
