import logging
import threading
import uuid
from datetime import datetime
from typing import Iterable, List, Optional

from aceinterview.core.config import settings
from aceinterview.core.exceptions import (
    GenerationError,
    InterviewError,
    InvalidStepError,
    OperationInProgressError,
    SpeechRecognitionError,
)
from aceinterview.models.interview import (
    GenerateAnswerFeedbackInput,
    GenerateAnswerFeedbackOutput,
    GenerateOverallFeedbackInput,
    GenerateOverallFeedbackOutput,
    GenerateQuestionInput,
    InterviewRoundInput,
    RoleIndustryForm,
)
from aceinterview.models.session import CurrentStep, InterviewRound, SessionState, SpeechResult
from aceinterview.services.answer_evaluator import AnswerEvaluator
from aceinterview.services.overall_evaluator import FORMAT_FAILED_MESSAGE, OverallEvaluator
from aceinterview.services.question_generator import QuestionGenerator
from aceinterview.services.stopwatch import Stopwatch
from aceinterview.services.transcript import SpeechRecorder
from aceinterview.services.utils.formatting import format_time

logger = logging.getLogger(__name__)

QUESTION_FAILED_MESSAGE = "Failed to generate interview question. Please try again."
FEEDBACK_FAILED_MESSAGE = (
    "Failed to generate feedback. The AI might be having trouble, or your answer is too short. Please try again."
)
OVERALL_FAILED_MESSAGE = "Failed to generate overall feedback. Please try again."


class InteractionLogger:
    """Turn-by-turn log of an interview session"""
    def __init__(self, session_id: str):
        self.session_id = session_id

    def log_interaction(self, speaker: str, action: str, content: str):
        logger.info(f"[{self.session_id[:8]}] {speaker.upper()} {action}: {content}")


class InterviewSession:
    """One candidate's practice interview: form, question, answer, feedback, repeated per round."""

    def __init__(self, session_id: Optional[str] = None, speech_supported: Optional[bool] = None,
                 max_rounds: Optional[int] = None, stopwatch: Optional[Stopwatch] = None):
        self.session_id = session_id or str(uuid.uuid4())
        self.step = CurrentStep.INITIAL
        self.form: Optional[RoleIndustryForm] = None
        self.question: Optional[str] = None
        self.feedback: Optional[GenerateAnswerFeedbackOutput] = None
        self.overall_feedback: Optional[GenerateOverallFeedbackOutput] = None
        self.rounds: List[InterviewRound] = []
        self.max_rounds = max_rounds or settings.MAX_INTERVIEW_ROUNDS

        if speech_supported is None:
            speech_supported = settings.SPEECH_RECOGNITION_ENABLED
        self.recorder = SpeechRecorder(supported=speech_supported)
        self.stopwatch = stopwatch or Stopwatch()

        self.is_loading_question = False
        self.is_loading_feedback = False

        self.created_at = datetime.now()
        self.last_accessed = self.created_at
        self.interactions = InteractionLogger(self.session_id)
        self._lock = threading.RLock()
        self._epoch = 0

    # --- bookkeeping ---

    def touch(self):
        self.last_accessed = datetime.now()

    @property
    def answer(self) -> str:
        return self.recorder.answer

    @property
    def is_busy(self) -> bool:
        return self.is_loading_question or self.is_loading_feedback

    def _begin_loading(self, flag: str) -> int:
        if self.is_busy:
            raise OperationInProgressError("An AI request is already in progress for this session. Please wait.")
        setattr(self, flag, True)
        return self._epoch

    def _stop_recording(self):
        if self.recorder.is_recording:
            self.recorder.stop()

    def _require_step(self, *steps: CurrentStep, message: str):
        if self.step not in steps:
            raise InvalidStepError(message)

    # --- questions ---

    def generate_question(self, generator: QuestionGenerator, form: Optional[RoleIndustryForm] = None) -> SessionState:
        """Ask the AI for a question; starts the answer stopwatch on success"""
        with self._lock:
            self.touch()
            self._require_step(
                CurrentStep.INITIAL, CurrentStep.QUESTION_GENERATED, CurrentStep.FEEDBACK_GENERATED,
                message="This interview is complete. Start over to practice again.",
            )
            if form is not None:
                if self.step != CurrentStep.INITIAL and self.form is not None and form != self.form:
                    raise InvalidStepError("Start over to change the role or industry.")
                self.form = form
            if self.form is None:
                raise InvalidStepError("Enter your desired role and target industry first.")
            if self.step == CurrentStep.FEEDBACK_GENERATED and len(self.rounds) >= self.max_rounds:
                raise InvalidStepError(
                    f"You have answered {self.max_rounds} questions. Finish the interview to see your summary."
                )

            epoch = self._begin_loading("is_loading_question")
            self.question = None
            self.feedback = None
            self._stop_recording()
            self.recorder.reset()
            request = GenerateQuestionInput(
                role=self.form.role,
                industry=self.form.industry,
                focus=self.form.focus,
                previous_questions=[r.question for r in self.rounds],
            )

        try:
            output = generator.generate(request)
        except Exception as e:
            with self._lock:
                self.is_loading_question = False
            logger.error(f"❌ [SESSION] Error generating question: {e}")
            raise GenerationError(QUESTION_FAILED_MESSAGE) from e

        with self._lock:
            self.is_loading_question = False
            if epoch != self._epoch:
                logger.info(f"🔄 [SESSION] {self.session_id} was reset while generating; question discarded")
                return self.state()
            self.question = output.question
            self.step = CurrentStep.QUESTION_GENERATED
            self.stopwatch.start()
            self.interactions.log_interaction("interviewer", "asked", output.question)
            return self.state()

    def next_question(self, generator: QuestionGenerator) -> SessionState:
        with self._lock:
            self._require_step(
                CurrentStep.FEEDBACK_GENERATED,
                message="Get feedback on the current answer before moving to the next question.",
            )
        return self.generate_question(generator)

    # --- answering ---

    def type_answer(self, text: str) -> SessionState:
        with self._lock:
            self.touch()
            self._require_step(CurrentStep.QUESTION_GENERATED, message="There is no open question to answer.")
            self.recorder.type_answer(text)
            return self.state()

    def start_recording(self) -> SessionState:
        with self._lock:
            self.touch()
            self._require_step(
                CurrentStep.QUESTION_GENERATED,
                message="Recording is only available while answering a question.",
            )
            self.recorder.start()
            if not self.stopwatch.is_running and self.step == CurrentStep.QUESTION_GENERATED:
                self.stopwatch.start()
            return self.state()

    def speech_results(self, results: Iterable[SpeechResult]) -> SessionState:
        with self._lock:
            self.touch()
            self.recorder.on_result(results)
            return self.state()

    def stop_recording(self) -> SessionState:
        with self._lock:
            self.touch()
            self.recorder.stop()
            return self.state()

    def recording_error(self, error: str) -> SpeechRecognitionError:
        with self._lock:
            self.touch()
            return self.recorder.on_error(error)

    # --- feedback ---

    def submit_answer(self, evaluator: AnswerEvaluator) -> SessionState:
        """Stop the clock and have the current answer scored"""
        with self._lock:
            self.touch()
            if not self.question or self.form is None:
                raise InvalidStepError("Generate a question before asking for feedback.")
            self._require_step(CurrentStep.QUESTION_GENERATED, message="This answer already has feedback.")
            if not self.answer.strip():
                raise InterviewError("Type or record an answer before requesting feedback.", title="Empty Answer")

            epoch = self._begin_loading("is_loading_feedback")
            self.feedback = None
            self.stopwatch.stop()
            self._stop_recording()
            question, answer = self.question, self.answer
            elapsed = self.stopwatch.elapsed_seconds
            request = GenerateAnswerFeedbackInput(
                question=question,
                answer=answer,
                role=self.form.role,
                industry=self.form.industry,
            )
            self.interactions.log_interaction("candidate", "answered", answer)

        try:
            feedback = evaluator.evaluate(request)
        except Exception as e:
            with self._lock:
                self.is_loading_feedback = False
            logger.error(f"❌ [SESSION] Error generating feedback: {e}")
            raise GenerationError(FEEDBACK_FAILED_MESSAGE) from e

        with self._lock:
            self.is_loading_feedback = False
            if epoch != self._epoch:
                logger.info(f"🔄 [SESSION] {self.session_id} was reset while scoring; feedback discarded")
                return self.state()
            self.feedback = feedback
            self.rounds.append(InterviewRound(
                question=question,
                answer=answer,
                elapsed_seconds=elapsed,
                feedback=feedback,
            ))
            self.step = CurrentStep.FEEDBACK_GENERATED
            self.interactions.log_interaction(
                "coach", "scored", f"{feedback.overall_feedback.score}/5 after {format_time(elapsed)}"
            )
            return self.state()

    def finish(self, evaluator: OverallEvaluator) -> SessionState:
        """Summarise every answered round"""
        with self._lock:
            self.touch()
            self._require_step(
                CurrentStep.QUESTION_GENERATED, CurrentStep.FEEDBACK_GENERATED,
                message="There is no interview in progress to finish.",
            )
            if self.step == CurrentStep.QUESTION_GENERATED and not self.rounds:
                raise InvalidStepError("Answer at least one question before finishing the interview.")
            epoch = self._begin_loading("is_loading_feedback")
            self.stopwatch.stop()
            self._stop_recording()
            request = GenerateOverallFeedbackInput(
                role=self.form.role,
                industry=self.form.industry,
                interview_rounds=[
                    InterviewRoundInput(question_text=r.question, answer_text=r.answer) for r in self.rounds
                ],
            )

        try:
            overall = evaluator.evaluate(request)
        except Exception as e:
            with self._lock:
                self.is_loading_feedback = False
            logger.error(f"❌ [SESSION] Error generating overall feedback: {e}")
            if isinstance(e, GenerationError) and e.description == FORMAT_FAILED_MESSAGE:
                raise
            raise GenerationError(OVERALL_FAILED_MESSAGE) from e

        with self._lock:
            self.is_loading_feedback = False
            if epoch != self._epoch:
                return self.state()
            self.overall_feedback = overall
            self.step = CurrentStep.COMPLETED
            self.interactions.log_interaction("coach", "summarised", overall.overall_summary[:80])
            return self.state()

    def start_over(self) -> SessionState:
        with self._lock:
            self.touch()
            self._epoch += 1
            self.form = None
            self.question = None
            self.feedback = None
            self.overall_feedback = None
            self.rounds = []
            self.stopwatch.reset()
            self._stop_recording()
            self.recorder.reset()
            self.step = CurrentStep.INITIAL
            logger.info(f"🔄 [SESSION] {self.session_id} started over")
            return self.state()

    # --- read model ---

    def state(self) -> SessionState:
        with self._lock:
            elapsed = self.stopwatch.elapsed_seconds
            return SessionState(
                session_id=self.session_id,
                step=self.step,
                role=self.form.role if self.form else None,
                industry=self.form.industry if self.form else None,
                focus=self.form.focus if self.form else None,
                question=self.question,
                answer=self.answer,
                feedback=self.feedback,
                overall_feedback=self.overall_feedback,
                rounds=list(self.rounds),
                elapsed_seconds=elapsed,
                elapsed_display=format_time(elapsed),
                is_stopwatch_running=self.stopwatch.is_running,
                is_recording=self.recorder.is_recording,
                is_loading_question=self.is_loading_question,
                is_loading_feedback=self.is_loading_feedback,
                can_submit=(
                    self.step == CurrentStep.QUESTION_GENERATED
                    and not self.is_loading_feedback
                    and bool(self.answer.strip())
                ),
                created_at=self.created_at,
                last_accessed=self.last_accessed,
            )
