import logging

from aceinterview.core.config import settings
from aceinterview.core.exceptions import GenerationError
from aceinterview.models.interview import GenerateOverallFeedbackInput, GenerateOverallFeedbackOutput
from aceinterview.services.base.llm_client import BaseLLMClient
from aceinterview.services.clients.gemini_client import GeminiClient
from aceinterview.services.builders.prompt_builder import OverallFeedbackPromptBuilder
from aceinterview.services.utils.output_parser import parse_model_output

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert interview coach summarising a full mock interview. "
    "You give one feedback entry per question, in order, and an honest overall summary."
)

FORMAT_FAILED_MESSAGE = "AI failed to generate overall feedback in the expected format."


class OverallEvaluator:
    def __init__(self, llm_client: BaseLLMClient = None, prompt_builder: OverallFeedbackPromptBuilder = None):
        self.llm_client = llm_client or GeminiClient(temperature=settings.FEEDBACK_TEMPERATURE)
        self.prompt_builder = prompt_builder or OverallFeedbackPromptBuilder()

    def evaluate(self, data: GenerateOverallFeedbackInput) -> GenerateOverallFeedbackOutput:
        """Feedback for every round plus a summary of the whole interview"""
        prompt = self.prompt_builder.build(
            role=data.role,
            industry=data.industry,
            interview_rounds=data.interview_rounds,
        )
        try:
            raw = self.llm_client.generate(prompt, system_instruction=SYSTEM_INSTRUCTION, json_output=True)
            output = parse_model_output(raw, GenerateOverallFeedbackOutput)
        except GenerationError as e:
            logger.error(f"❌ [OVERALL] {e.description}")
            raise GenerationError(FORMAT_FAILED_MESSAGE) from e

        if len(output.individual_feedbacks) != len(data.interview_rounds):
            logger.warning(
                f"⚠️ [OVERALL] Expected {len(data.interview_rounds)} feedback entries, "
                f"got {len(output.individual_feedbacks)}"
            )
        logger.info(f"📊 [OVERALL] Summary generated for {len(data.interview_rounds)} round(s)")
        return output
