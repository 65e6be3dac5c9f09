from pydantic import BaseModel, Field
from typing import List
from datetime import datetime, timezone
import uuid

from models.session import InterviewSession


class User(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    email: str
    password_hash: str
    role: str = "interviewee"
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AuthResponse(BaseModel):
    id: str
    name: str
    email: str
    role: str
    token: str


class UserProfile(BaseModel):
    id: str
    name: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime
    sessions: List[InterviewSession] = []
