import os

# Settings validate the key format at import time.
os.environ["GEMINI_API_KEY"] = "AIzaTestKey0000000000000000000000"
os.environ["VALIDATE_GEMINI_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient

from aceinterview.core import dependencies
from aceinterview.main import app
from aceinterview.services.answer_evaluator import AnswerEvaluator
from aceinterview.services.overall_evaluator import OverallEvaluator
from aceinterview.services.question_generator import QuestionGenerator
from aceinterview.services.session_store import SessionStore

from helpers import FakeLLMClient


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def advance(self, seconds: float):
        self.now += seconds

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def question_llm():
    return FakeLLMClient()


@pytest.fixture
def feedback_llm():
    return FakeLLMClient()


@pytest.fixture
def overall_llm():
    return FakeLLMClient()


@pytest.fixture
def store():
    return SessionStore(session_timeout_seconds=60)


@pytest.fixture
def client(store, question_llm, feedback_llm, overall_llm):
    app.dependency_overrides[dependencies.get_session_store] = lambda: store
    app.dependency_overrides[dependencies.get_question_generator] = lambda: QuestionGenerator(llm_client=question_llm)
    app.dependency_overrides[dependencies.get_answer_evaluator] = lambda: AnswerEvaluator(llm_client=feedback_llm)
    app.dependency_overrides[dependencies.get_overall_evaluator] = lambda: OverallEvaluator(llm_client=overall_llm)
    yield TestClient(app)
    app.dependency_overrides.clear()
