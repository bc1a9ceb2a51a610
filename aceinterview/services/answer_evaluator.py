import logging

from aceinterview.core.config import settings
from aceinterview.models.interview import GenerateAnswerFeedbackInput, GenerateAnswerFeedbackOutput
from aceinterview.services.base.llm_client import BaseLLMClient
from aceinterview.services.clients.gemini_client import GeminiClient
from aceinterview.services.builders.prompt_builder import AnswerFeedbackPromptBuilder
from aceinterview.services.utils.output_parser import parse_model_output

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert interview coach. You evaluate a candidate's answer honestly and constructively, "
    "scoring each category as an integer from 1 (poor) to 5 (excellent)."
)


class AnswerEvaluator:
    def __init__(self, llm_client: BaseLLMClient = None, prompt_builder: AnswerFeedbackPromptBuilder = None):
        self.llm_client = llm_client or GeminiClient(temperature=settings.FEEDBACK_TEMPERATURE)
        self.prompt_builder = prompt_builder or AnswerFeedbackPromptBuilder()

    def evaluate(self, data: GenerateAnswerFeedbackInput) -> GenerateAnswerFeedbackOutput:
        """Score and critique a single answer"""
        prompt = self.prompt_builder.build(
            question=data.question,
            answer=data.answer,
            role=data.role,
            industry=data.industry,
        )
        raw = self.llm_client.generate(prompt, system_instruction=SYSTEM_INSTRUCTION, json_output=True)
        feedback = parse_model_output(raw, GenerateAnswerFeedbackOutput)
        logger.info(f"📝 [FEEDBACK] Overall score {feedback.overall_feedback.score}/5")
        return feedback
