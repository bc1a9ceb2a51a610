"""
Speech-to-text reconciliation.

The browser's continuous recognizer reports the full, ordered result list of
the current recognition session on every update: final segments that will no
longer change and interim segments that may still be revised. The answer shown
to the user is whatever was in the answer box when recording started, followed
by the finalized speech and then the newest interim words.

A recognition session ends (stop, silence, error) and may be started again;
the text reconciled so far becomes the new base for the next session, so
typing, speaking, typing again and speaking again all accumulate.
"""
import logging
from typing import Iterable, Optional

from aceinterview.core.exceptions import SpeechRecognitionError, UnsupportedFeatureError
from aceinterview.models.session import SpeechResult

logger = logging.getLogger(__name__)

NO_SPEECH_MESSAGE = "No speech detected. Please try again."
GENERIC_SPEECH_MESSAGE = "An error occurred during speech recognition."
ALREADY_ACTIVE_MESSAGE = "Speech recognition is already active or in an invalid state. Please wait or refresh."
UNSUPPORTED_MESSAGE = "Speech recognition is not supported in your browser."


def merge_transcript(text_before_recording: str, results: Iterable[SpeechResult]) -> str:
    """Combine the pre-recording text with the final and interim segments of one recognition session."""
    final_transcript = ""
    interim_transcript = ""
    for result in results:
        if result.is_final:
            final_transcript += result.transcript + " "
        else:
            interim_transcript += result.transcript

    final_transcript = final_transcript.strip()
    interim_transcript = interim_transcript.strip()

    merged = text_before_recording
    if final_transcript:
        if merged and not merged.endswith(" "):
            merged += " "
        merged += final_transcript

    if interim_transcript and (not final_transcript or not interim_transcript.startswith(final_transcript)):
        unique_interim = interim_transcript
        if final_transcript and final_transcript in interim_transcript:
            unique_interim = interim_transcript.split(final_transcript)[-1].strip()

        if unique_interim:
            if merged and not merged.endswith(" ") and not unique_interim.startswith(" "):
                merged += " "
            elif not merged and unique_interim.startswith(" "):
                unique_interim = unique_interim.lstrip()
            merged += unique_interim

    return merged


class SpeechRecorder:
    """Recording state for one answer box."""

    def __init__(self, supported: bool = True):
        self.supported = supported
        self.is_recording = False
        self.answer = ""
        self.text_before_recording = ""

    def start(self, answer: Optional[str] = None) -> None:
        if not self.supported:
            raise UnsupportedFeatureError(UNSUPPORTED_MESSAGE)
        if self.is_recording:
            raise SpeechRecognitionError(ALREADY_ACTIVE_MESSAGE)
        if answer is not None:
            self.answer = answer
        self.text_before_recording = self.answer
        self.is_recording = True
        logger.info("🎙️ [SPEECH] Recording started")

    def on_result(self, results: Iterable[SpeechResult]) -> str:
        if not self.is_recording:
            logger.debug("[SPEECH] Ignoring result outside a recording")
            return self.answer
        self.answer = merge_transcript(self.text_before_recording, results)
        return self.answer

    def on_end(self) -> None:
        self.text_before_recording = self.answer
        if self.is_recording:
            self.is_recording = False
            logger.info("🛑 [SPEECH] Recording ended")

    def stop(self) -> None:
        self.on_end()

    def on_error(self, error: str) -> SpeechRecognitionError:
        """Reset the recording flag and return the toast for the recognizer error code."""
        logger.error(f"❌ [SPEECH] Speech recognition error: {error}")
        self.is_recording = False
        self.text_before_recording = self.answer
        description = NO_SPEECH_MESSAGE if error == "no-speech" else GENERIC_SPEECH_MESSAGE
        return SpeechRecognitionError(description)

    def type_answer(self, text: str) -> None:
        if self.is_recording:
            raise SpeechRecognitionError(
                "The answer is read-only while recording. Stop recording to edit it.",
                title="Recording In Progress",
                status_code=409,
            )
        self.answer = text
        self.text_before_recording = text

    def reset(self) -> None:
        self.is_recording = False
        self.answer = ""
        self.text_before_recording = ""
