# ========================================
# models/session.py - Interview session documents
# ========================================

from pydantic import AliasChoices, BaseModel, Field
from typing import Optional, Dict, List
from datetime import datetime, timezone
from enum import Enum
import uuid


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InterviewType(str, Enum):
    TECHNICAL = "technical"
    HR = "hr"
    VIVA = "viva"


class DifficultyLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class SessionStatus(str, Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    PAUSED = "paused"


class MessageRole(str, Enum):
    AI = "ai"
    USER = "user"


class SessionNotActiveError(Exception):
    """Raised when a session that is not ongoing is asked to change."""


class Message(BaseModel):
    role: MessageRole
    content: str = Field(..., min_length=1)
    timestamp: datetime = Field(default_factory=_now)


def _alias(snake: str, camel: str) -> AliasChoices:
    # The model is prompted with camelCase keys; stored documents use snake_case.
    return AliasChoices(snake, camel)


class SkillLevelAssessment(BaseModel):
    clarity: Optional[float] = Field(None, ge=1, le=10)
    confidence: Optional[float] = Field(None, ge=1, le=10)
    technical_accuracy: Optional[float] = Field(
        None, ge=1, le=10, validation_alias=_alias("technical_accuracy", "technicalAccuracy")
    )
    communication: Optional[float] = Field(None, ge=1, le=10)


class Feedback(BaseModel):
    overall_score: float = Field(..., ge=1, le=10, validation_alias=_alias("overall_score", "overallScore"))
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    areas_of_improvement: List[str] = Field(
        default_factory=list, validation_alias=_alias("areas_of_improvement", "areasOfImprovement")
    )
    suggested_topics: List[str] = Field(
        default_factory=list, validation_alias=_alias("suggested_topics", "suggestedTopics")
    )
    detailed_analysis: str = Field("", validation_alias=_alias("detailed_analysis", "detailedAnalysis"))
    skill_level_assessment: SkillLevelAssessment = Field(
        default_factory=SkillLevelAssessment,
        validation_alias=_alias("skill_level_assessment", "skillLevelAssessment"),
    )


class SessionSummary(BaseModel):
    """Session document without its transcript (history listings)."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    interview_type: InterviewType
    topic: str
    difficulty: DifficultyLevel
    status: SessionStatus = SessionStatus.ONGOING
    feedback: Optional[Feedback] = None
    started_at: datetime = Field(default_factory=_now)
    completed_at: Optional[datetime] = None
    duration: Optional[int] = None  # minutes
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class InterviewSession(SessionSummary):
    messages: List[Message] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ONGOING

    def add_message(self, role: MessageRole, content: str) -> Message:
        """Append to the transcript; only ongoing sessions accept messages."""
        if not self.is_active:
            raise SessionNotActiveError(f"Session {self.id} is {self.status.value}")
        message = Message(role=role, content=content)
        self.messages.append(message)
        self.updated_at = message.timestamp
        return message

    def chat_history(self) -> List[Dict[str, str]]:
        """Transcript in chat-completion roles (ai → assistant)."""
        return [
            {
                "role": "assistant" if m.role == MessageRole.AI else "user",
                "content": m.content,
            }
            for m in self.messages
        ]

    def transcript(self) -> List[Dict[str, str]]:
        return [{"role": m.role.value, "content": m.content} for m in self.messages]

    def complete(self, feedback: Feedback, now: Optional[datetime] = None) -> None:
        """Close the session: ongoing → completed, feedback set once."""
        if not self.is_active:
            raise SessionNotActiveError(f"Session {self.id} is {self.status.value}")
        now = now or _now()
        started = self.started_at
        if started.tzinfo is None:
            started = started.replace(tzinfo=timezone.utc)
        self.duration = max(0, round((now - started).total_seconds() / 60))
        self.status = SessionStatus.COMPLETED
        self.completed_at = now
        self.feedback = feedback
        self.updated_at = now

    def summary(self) -> SessionSummary:
        return SessionSummary(**self.model_dump(exclude={"messages"}))
