import os
from typing import List, Optional
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from aceinterview.services.base.prompt_builder import PromptBuilder
from aceinterview.models.interview import InterviewRoundInput

PROMPT_DIR = os.path.join(os.path.dirname(__file__), "..", "prompts")

env = Environment(
    loader=FileSystemLoader(PROMPT_DIR),
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)


def render_prompt(template_name: str, **kwargs) -> str:
    template = env.get_template(template_name)
    return template.render(**kwargs)


class QuestionPromptBuilder(PromptBuilder):
    def build(self, role: str, industry: str, focus: Optional[str] = None,
              previous_questions: Optional[List[str]] = None) -> str:
        return render_prompt(
            "interview_question.j2",
            role=role,
            industry=industry,
            focus=focus,
            previous_questions=previous_questions or [],
        )


class AnswerFeedbackPromptBuilder(PromptBuilder):
    def build(self, question: str, answer: str, role: str, industry: str) -> str:
        return render_prompt(
            "answer_feedback.j2",
            question=question,
            answer=answer,
            role=role,
            industry=industry,
        )


class OverallFeedbackPromptBuilder(PromptBuilder):
    def build(self, role: str, industry: str, interview_rounds: List[InterviewRoundInput]) -> str:
        return render_prompt(
            "overall_feedback.j2",
            role=role,
            industry=industry,
            interview_rounds=interview_rounds,
        )
