from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

ROLE_MIN_LENGTH = 2
ROLE_MAX_LENGTH = 50


def _check_length(label: str, value: str) -> str:
    if len(value) < ROLE_MIN_LENGTH:
        raise ValueError(f"{label} must be at least {ROLE_MIN_LENGTH} characters.")
    if len(value) > ROLE_MAX_LENGTH:
        raise ValueError(f"{label} must be at most {ROLE_MAX_LENGTH} characters.")
    return value


class RoleIndustryForm(BaseModel):
    role: str
    industry: str
    focus: Optional[str] = None  # e.g. "behavioral", "system design"

    @field_validator("role")
    @classmethod
    def validate_role(cls, value: str) -> str:
        return _check_length("Role", value)

    @field_validator("industry")
    @classmethod
    def validate_industry(cls, value: str) -> str:
        return _check_length("Industry", value)

    @field_validator("focus")
    @classmethod
    def validate_focus(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        if len(value) > ROLE_MAX_LENGTH:
            raise ValueError(f"Focus must be at most {ROLE_MAX_LENGTH} characters.")
        return value


# --- Question generation ---

class GenerateQuestionInput(RoleIndustryForm):
    previous_questions: List[str] = Field(default_factory=list, description="Questions already asked in this session.")


class GenerateQuestionOutput(BaseModel):
    question: str = Field(..., min_length=1, description="The generated interview question.")


# --- Answer feedback ---

class FeedbackItem(BaseModel):
    text: str = Field(..., description="The textual feedback for this category.")
    score: int = Field(..., ge=1, le=5, description="A score from 1 (poor) to 5 (excellent).")


class GenerateAnswerFeedbackInput(BaseModel):
    question: str = Field(..., description="The interview question that was asked.")
    answer: str = Field(..., description="The recorded answer to the interview question.")
    role: str = Field(..., description="The role the candidate is interviewing for.")
    industry: str = Field(..., description="The industry the candidate is interviewing in.")


class GenerateAnswerFeedbackOutput(BaseModel):
    overall_feedback: FeedbackItem
    clarity: FeedbackItem
    completeness: FeedbackItem
    relevance: FeedbackItem


# --- Overall interview feedback ---

class InterviewRoundInput(BaseModel):
    question_text: str = Field(..., description="The interview question that was asked.")
    answer_text: str = Field(..., description="The recorded answer to the interview question.")


class GenerateOverallFeedbackInput(BaseModel):
    role: str
    industry: str
    interview_rounds: List[InterviewRoundInput] = Field(default_factory=list)


class GenerateOverallFeedbackOutput(BaseModel):
    individual_feedbacks: List[GenerateAnswerFeedbackOutput] = Field(default_factory=list)
    overall_summary: str

    @field_validator("individual_feedbacks", mode="before")
    @classmethod
    def default_missing_feedbacks(cls, value):
        return value or []
