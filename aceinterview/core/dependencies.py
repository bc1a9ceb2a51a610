from functools import lru_cache

from aceinterview.services.answer_evaluator import AnswerEvaluator
from aceinterview.services.overall_evaluator import OverallEvaluator
from aceinterview.services.question_generator import QuestionGenerator
from aceinterview.services.session_store import SessionStore


@lru_cache
def get_session_store() -> SessionStore:
    return SessionStore()


@lru_cache
def get_question_generator() -> QuestionGenerator:
    return QuestionGenerator()


@lru_cache
def get_answer_evaluator() -> AnswerEvaluator:
    return AnswerEvaluator()


@lru_cache
def get_overall_evaluator() -> OverallEvaluator:
    return OverallEvaluator()
