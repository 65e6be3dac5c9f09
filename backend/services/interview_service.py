# services/interview_service.py
import json
import re
from typing import Dict, List

from fastapi import Depends
from pydantic import ValidationError

from models.session import Feedback, InterviewType, DifficultyLevel
from services.llm_service import ChatModel, LLMServiceError, get_llm_service
from utils.logger import get_logger

logger = get_logger("InterviewService")

# Greedy: first "{" through last "}", across newlines.
_JSON_BLOCK = re.compile(r"\{[\s\S]*\}")

OPENING_PROMPT = "Start the interview with an appropriate opening question."

FEEDBACK_TEMPLATE = """Based on the following {interview_type} interview conversation for {topic} at {difficulty} level,
provide a comprehensive evaluation in JSON format with the following structure:
{{
  "overallScore": (1-10),
  "strengths": [list of strengths],
  "weaknesses": [list of weaknesses],
  "areasOfImprovement": [specific areas to improve],
  "suggestedTopics": [topics to study further],
  "detailedAnalysis": "detailed paragraph analysis",
  "skillLevelAssessment": {{
    "clarity": (1-10),
    "confidence": (1-10),
    "technicalAccuracy": (1-10),
    "communication": (1-10)
  }}
}}

Conversation:
{conversation}"""


class FeedbackParseError(LLMServiceError):
    """The model's evaluation could not be turned into a Feedback object."""


def _value(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def build_system_prompt(interview_type, topic: str, difficulty) -> str:
    """Interviewer persona for the session; unknown types get the technical persona."""
    difficulty = _value(difficulty)
    prompts = {
        InterviewType.TECHNICAL.value: (
            f"You are an expert technical interviewer conducting a {difficulty} level interview for {topic}.\n"
            "Ask relevant technical questions, dive deeper based on responses, and maintain a professional yet friendly tone.\n"
            "Ask one question at a time and build upon the candidate's answers."
        ),
        InterviewType.HR.value: (
            f"You are an experienced HR interviewer conducting a {difficulty} level behavioral interview.\n"
            "Ask questions about work experience, teamwork, conflict resolution, and career goals.\n"
            "Be empathetic and professional. Ask one question at a time."
        ),
        InterviewType.VIVA.value: (
            f"You are an academic examiner conducting a {difficulty} level viva on {topic}.\n"
            "Ask conceptual and theoretical questions, probe understanding, and test depth of knowledge.\n"
            "Maintain an academic yet supportive tone. Ask one question at a time."
        ),
    }
    return prompts.get(_value(interview_type), prompts[InterviewType.TECHNICAL.value])


def build_feedback_prompt(interview_type, topic: str, difficulty, transcript: List[Dict[str, str]]) -> str:
    return FEEDBACK_TEMPLATE.format(
        interview_type=_value(interview_type),
        topic=topic,
        difficulty=_value(difficulty),
        conversation=json.dumps(transcript),
    )


def extract_feedback(text: str) -> Feedback:
    """Pull the JSON evaluation out of free text and validate it."""
    match = _JSON_BLOCK.search(text or "")
    if not match:
        raise FeedbackParseError("Failed to parse feedback JSON")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise FeedbackParseError(f"Feedback is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FeedbackParseError("Feedback JSON is not an object")
    try:
        return Feedback.model_validate(data)
    except ValidationError as e:
        raise FeedbackParseError(f"Feedback does not match schema: {e.error_count()} errors") from e


class InterviewService:
    def __init__(self, llm: ChatModel):
        self.llm = llm

    async def generate_opening_question(
        self,
        interview_type: InterviewType,
        topic: str,
        difficulty: DifficultyLevel,
    ) -> str:
        messages = [
            {"role": "system", "content": build_system_prompt(interview_type, topic, difficulty)},
            {"role": "user", "content": OPENING_PROMPT},
        ]
        return await self.llm.chat(messages, temperature=0.7, max_tokens=200, fast=True)

    async def generate_response(
        self,
        interview_type: InterviewType,
        topic: str,
        difficulty: DifficultyLevel,
        history: List[Dict[str, str]],
    ) -> str:
        """Next interviewer turn; history is already in assistant/user roles."""
        messages = [
            {"role": "system", "content": build_system_prompt(interview_type, topic, difficulty)},
            *history,
        ]
        return await self.llm.chat(messages, temperature=0.7, max_tokens=300)

    async def generate_feedback(
        self,
        interview_type: InterviewType,
        topic: str,
        difficulty: DifficultyLevel,
        transcript: List[Dict[str, str]],
    ) -> Feedback:
        prompt = build_feedback_prompt(interview_type, topic, difficulty, transcript)
        text = await self.llm.chat(
            [{"role": "user", "content": prompt}],
            temperature=0.5,
            max_tokens=1000,
        )
        try:
            feedback = extract_feedback(text)
        except FeedbackParseError as e:
            logger.error(f"❌ Feedback generation error: {e}")
            raise
        logger.info(f"✅ Feedback generated (overall score {feedback.overall_score})")
        return feedback


def get_interview_service(llm: ChatModel = Depends(get_llm_service)) -> InterviewService:
    return InterviewService(llm)
