from typing import Dict, List
from fastapi import APIRouter

from models.topic import Topic

router = APIRouter(prefix="/api/topics", tags=["Topics"])

_ALL = ["beginner", "intermediate", "advanced"]
_UPPER = ["intermediate", "advanced"]

TOPICS: Dict[str, List[Topic]] = {
    "technical": [
        Topic(id="react", name="React Developer",
              description="Frontend development with React, hooks, state management", difficulty=_ALL),
        Topic(id="nodejs", name="Node.js Developer",
              description="Backend development with Node.js, Express, APIs", difficulty=_ALL),
        Topic(id="python", name="Python Developer",
              description="Python programming, Django, Flask, data structures", difficulty=_ALL),
        Topic(id="javascript", name="JavaScript Developer",
              description="Core JavaScript, ES6+, async programming", difficulty=_ALL),
        Topic(id="fullstack", name="Full Stack Developer",
              description="Frontend and backend development, databases, deployment", difficulty=_UPPER),
        Topic(id="devops", name="DevOps Engineer",
              description="CI/CD, Docker, Kubernetes, cloud platforms", difficulty=_UPPER),
        Topic(id="data-science", name="Data Science",
              description="Machine learning, statistics, data analysis", difficulty=_ALL),
    ],
    "hr": [
        Topic(id="behavioral", name="Behavioral Interview",
              description="Work experience, teamwork, conflict resolution", difficulty=_ALL),
        Topic(id="leadership", name="Leadership & Management",
              description="Team leadership, decision making, project management", difficulty=_UPPER),
        Topic(id="entry-level", name="Entry Level Position",
              description="Career goals, motivation, cultural fit", difficulty=["beginner"]),
    ],
    "viva": [
        Topic(id="computer-science", name="Computer Science",
              description="Algorithms, data structures, operating systems", difficulty=_ALL),
        Topic(id="dbms", name="Database Management",
              description="SQL, normalization, transactions, indexing", difficulty=_ALL),
        Topic(id="networks", name="Computer Networks",
              description="TCP/IP, protocols, network security", difficulty=_ALL),
        Topic(id="software-engineering", name="Software Engineering",
              description="SDLC, design patterns, testing, architecture", difficulty=_UPPER),
    ],
}


@router.get("", response_model=Dict[str, List[Topic]])
async def get_topics():
    """All interview topics, grouped by interview type"""
    return TOPICS
