from pydantic import BaseModel, Field
from typing import Optional

from models.session import InterviewType, DifficultyLevel

# Fields are optional so handlers can answer missing input with a 400.


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(None, examples=["Ada Lovelace"])
    email: Optional[str] = Field(None, examples=["ada@example.com"])
    password: Optional[str] = Field(None, examples=["secret123"])


class LoginRequest(BaseModel):
    email: Optional[str] = Field(None, examples=["ada@example.com"])
    password: Optional[str] = Field(None, examples=["secret123"])


class StartSessionRequest(BaseModel):
    interview_type: Optional[InterviewType] = Field(None, examples=["technical"])
    topic: Optional[str] = Field(None, examples=["React Developer"])
    difficulty: Optional[DifficultyLevel] = Field(None, examples=["intermediate"])


class RespondRequest(BaseModel):
    session_id: Optional[str] = None
    user_response: Optional[str] = Field(None, examples=["I would start by profiling the render path."])
