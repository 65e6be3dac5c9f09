import asyncio
import os

os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fakeredis import FakeAsyncRedis, FakeServer
from httpx import ASGITransport, AsyncClient

from db import get_redis
from main import app
from services.llm_service import get_llm_service

FEEDBACK_REPLY = """Here is my evaluation of the candidate:

```json
{
  "overallScore": 7,
  "strengths": ["Clear explanations"],
  "weaknesses": ["Shallow on performance"],
  "areasOfImprovement": ["Memoization"],
  "suggestedTopics": ["React profiler"],
  "detailedAnalysis": "Solid fundamentals with room to grow.",
  "skillLevelAssessment": {"clarity": 8, "confidence": 7, "technicalAccuracy": 6, "communication": 8}
}
```
Good luck!"""


class FakeLLM:
    """Scripted chat model: replies are consumed in order, then the default is used."""

    def __init__(self):
        self.calls = []
        self.replies = []
        self.default = "Can you walk me through a recent project?"
        self.error = None
        self.delay = 0

    def queue(self, *replies):
        self.replies.extend(replies)

    async def chat(self, messages, temperature=None, max_tokens=None, fast=False):
        self.calls.append({
            "messages": [dict(m) for m in messages],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "fast": fast,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.replies.pop(0) if self.replies else self.default


@pytest.fixture
async def redis():
    r = FakeAsyncRedis(server=FakeServer(), decode_responses=True)
    yield r
    await r.flushall()
    await r.aclose()


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
async def client(redis, llm):
    app.dependency_overrides[get_redis] = lambda: redis
    app.dependency_overrides[get_llm_service] = lambda: llm
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def register(client, name="Ada", email="ada@example.com", password="secret123"):
    res = await client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert res.status_code == 201, res.text
    body = res.json()
    return body, {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
async def auth_headers(client):
    _, headers = await register(client)
    return headers
