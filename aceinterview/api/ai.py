from fastapi import APIRouter, Depends

from aceinterview.core.dependencies import get_answer_evaluator, get_overall_evaluator, get_question_generator
from aceinterview.models.interview import (
    GenerateAnswerFeedbackInput,
    GenerateAnswerFeedbackOutput,
    GenerateOverallFeedbackInput,
    GenerateOverallFeedbackOutput,
    GenerateQuestionInput,
    GenerateQuestionOutput,
)
from aceinterview.services.answer_evaluator import AnswerEvaluator
from aceinterview.services.overall_evaluator import OverallEvaluator
from aceinterview.services.question_generator import QuestionGenerator

router = APIRouter()


@router.post("/question", response_model=GenerateQuestionOutput)
def generate_question(data: GenerateQuestionInput, generator: QuestionGenerator = Depends(get_question_generator)):
    """Generate an interview question for a role and industry"""
    return generator.generate(data)


@router.post("/answer-feedback", response_model=GenerateAnswerFeedbackOutput)
def answer_feedback(data: GenerateAnswerFeedbackInput, evaluator: AnswerEvaluator = Depends(get_answer_evaluator)):
    """Score a single answer on overall quality, clarity, completeness and relevance"""
    return evaluator.evaluate(data)


@router.post("/overall-feedback", response_model=GenerateOverallFeedbackOutput)
def overall_feedback(data: GenerateOverallFeedbackInput, evaluator: OverallEvaluator = Depends(get_overall_evaluator)):
    """Feedback for each question-answer pair plus an overall summary"""
    return evaluator.evaluate(data)
