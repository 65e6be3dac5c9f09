from pydantic import BaseModel
from typing import List

from models.session import DifficultyLevel


class Topic(BaseModel):
    id: str
    name: str
    description: str
    difficulty: List[DifficultyLevel]
