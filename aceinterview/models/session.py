from enum import Enum
from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime

from aceinterview.models.interview import (
    GenerateAnswerFeedbackOutput,
    GenerateOverallFeedbackOutput,
    RoleIndustryForm,
)


class CurrentStep(str, Enum):
    INITIAL = "initial"
    QUESTION_GENERATED = "question_generated"
    FEEDBACK_GENERATED = "feedback_generated"
    COMPLETED = "completed"


class InterviewRound(BaseModel):
    question: str
    answer: str
    elapsed_seconds: int
    feedback: GenerateAnswerFeedbackOutput


class SessionState(BaseModel):
    session_id: str
    step: CurrentStep
    role: Optional[str] = None
    industry: Optional[str] = None
    focus: Optional[str] = None
    question: Optional[str] = None
    answer: str = ""
    feedback: Optional[GenerateAnswerFeedbackOutput] = None
    overall_feedback: Optional[GenerateOverallFeedbackOutput] = None
    rounds: List[InterviewRound] = []
    elapsed_seconds: int = 0
    elapsed_display: str = "00:00"
    is_stopwatch_running: bool = False
    is_recording: bool = False
    is_loading_question: bool = False
    is_loading_feedback: bool = False
    can_submit: bool = False
    created_at: datetime
    last_accessed: datetime


class QuestionRequest(BaseModel):
    form: Optional[RoleIndustryForm] = None


class AnswerUpdate(BaseModel):
    answer: str


class SpeechResult(BaseModel):
    transcript: str
    is_final: bool = False


class SpeechResultsRequest(BaseModel):
    results: List[SpeechResult]


class SpeechErrorRequest(BaseModel):
    error: str


class SessionMessage(BaseModel):
    type: str  # "start", "result", "stop", "end", "error" in; "answer", "toast" out
    results: Optional[List[SpeechResult]] = None
    error: Optional[str] = None
    text: Optional[str] = None
    is_recording: Optional[bool] = None
    title: Optional[str] = None
    description: Optional[str] = None


class SessionCleanupResponse(BaseModel):
    success: bool
    message: str
