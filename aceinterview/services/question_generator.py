import logging

from aceinterview.core.config import settings
from aceinterview.models.interview import GenerateQuestionInput, GenerateQuestionOutput
from aceinterview.services.base.llm_client import BaseLLMClient
from aceinterview.services.clients.gemini_client import GeminiClient
from aceinterview.services.builders.prompt_builder import QuestionPromptBuilder
from aceinterview.services.utils.output_parser import parse_model_output

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are a seasoned hiring manager who writes realistic, role-specific interview questions. "
    "You only ever produce the question itself, never an answer."
)


class QuestionGenerator:
    def __init__(self, llm_client: BaseLLMClient = None, prompt_builder: QuestionPromptBuilder = None):
        self.llm_client = llm_client or GeminiClient(temperature=settings.QUESTION_TEMPERATURE)
        self.prompt_builder = prompt_builder or QuestionPromptBuilder()

    def generate(self, data: GenerateQuestionInput) -> GenerateQuestionOutput:
        """Generate one interview question for the role and industry"""
        prompt = self.prompt_builder.build(
            role=data.role,
            industry=data.industry,
            focus=data.focus,
            previous_questions=data.previous_questions,
        )
        raw = self.llm_client.generate(prompt, system_instruction=SYSTEM_INSTRUCTION, json_output=True)
        output = parse_model_output(raw, GenerateQuestionOutput)
        output.question = output.question.strip()
        logger.info(f"💡 [QUESTION] {data.role} / {data.industry}: {output.question[:60]}...")
        return output
