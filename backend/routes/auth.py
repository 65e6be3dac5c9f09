from fastapi import APIRouter, Depends, HTTPException, status
from redis.asyncio import Redis

from config import get_settings
from db import get_redis
from models.request import RegisterRequest, LoginRequest
from models.user import User, AuthResponse, UserProfile
from services.session_store import SessionStore
from services.user_store import UserStore, DuplicateEmailError, normalize_email
from utils.auth import hash_password, verify_password, create_access_token, get_current_user
from utils.logger import get_logger

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = get_logger("AuthRoutes")

MIN_PASSWORD_LENGTH = 6


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        token=create_access_token(user.id),
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, redis: Redis = Depends(get_redis)):
    """Register new user"""
    name = (payload.name or "").strip()
    email = normalize_email(payload.email or "")
    password = payload.password or ""

    if not name or not email or not password:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Please provide all fields")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    try:
        user = await UserStore(redis).create(
            User(name=name, email=email, password_hash=hash_password(password))
        )
        return _auth_response(user)
    except DuplicateEmailError:
        raise HTTPException(status.HTTP_409_CONFLICT, "User already exists")
    except Exception as e:
        logger.error(f"Register error: {e}", exc_info=True)
        raise HTTPException(500, "Something went wrong")


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, redis: Redis = Depends(get_redis)):
    """Login user"""
    if not payload.email or not payload.password:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Please provide email and password")

    try:
        user = await UserStore(redis).find_by_email(payload.email)
    except Exception as e:
        logger.error(f"Login error: {e}", exc_info=True)
        raise HTTPException(500, "Server error during login")

    # Same answer for unknown email and wrong password
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "Invalid credentials")

    return _auth_response(user)


@router.get("/me", response_model=UserProfile)
async def get_me(user: User = Depends(get_current_user), redis: Redis = Depends(get_redis)):
    """Current user with their most recent sessions"""
    try:
        sessions = await SessionStore(redis).list_for_user(
            user.id, get_settings().profile_session_limit
        )
        return UserProfile(**user.model_dump(exclude={"password_hash"}), sessions=sessions)
    except Exception as e:
        logger.error(f"Get me error: {e}", exc_info=True)
        raise HTTPException(500, "Server error")
