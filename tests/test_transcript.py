import pytest

from aceinterview.core.exceptions import SpeechRecognitionError, UnsupportedFeatureError
from aceinterview.models.session import SpeechResult
from aceinterview.services.transcript import (
    ALREADY_ACTIVE_MESSAGE,
    GENERIC_SPEECH_MESSAGE,
    NO_SPEECH_MESSAGE,
    SpeechRecorder,
    merge_transcript,
)


def final(text):
    return SpeechResult(transcript=text, is_final=True)


def interim(text):
    return SpeechResult(transcript=text, is_final=False)


class TestMergeTranscript:
    def test_final_only_on_empty_answer(self):
        assert merge_transcript("", [final("hello world")]) == "hello world"

    def test_final_appended_with_single_space(self):
        assert merge_transcript("I think", [final("hello")]) == "I think hello"
        assert merge_transcript("I think ", [final("hello")]) == "I think hello"

    def test_multiple_finals_are_space_joined(self):
        assert merge_transcript("", [final("first"), final("second")]) == "first second"

    def test_interim_only(self):
        assert merge_transcript("", [interim("hel")]) == "hel"
        assert merge_transcript("Typed", [interim("spoken")]) == "Typed spoken"

    def test_final_then_new_interim(self):
        results = [final("one"), interim(" two")]
        assert merge_transcript("Intro", results) == "Intro one two"

    def test_interim_repeating_final_is_dropped(self):
        results = [final("hello"), interim("hello there")]
        assert merge_transcript("", results) == "hello"

    def test_interim_keeps_text_after_last_final_occurrence(self):
        results = [final("world"), interim("big world again")]
        assert merge_transcript("", results) == "world again"

    def test_no_results_keeps_base_text(self):
        assert merge_transcript("typed answer", []) == "typed answer"

    def test_blank_interim_is_ignored(self):
        assert merge_transcript("typed", [interim("   ")]) == "typed"


class TestSpeechRecorder:
    def test_speech_accumulates_across_recording_sessions(self):
        recorder = SpeechRecorder()
        recorder.type_answer("My answer.")

        recorder.start()
        recorder.on_result([interim("first")])
        assert recorder.answer == "My answer. first"
        recorder.on_result([final("first part")])
        recorder.on_end()
        assert recorder.answer == "My answer. first part"
        assert not recorder.is_recording

        recorder.start()
        recorder.on_result([interim("second")])
        assert recorder.answer == "My answer. first part second"
        recorder.on_result([final("second part")])
        recorder.stop()
        assert recorder.answer == "My answer. first part second part"
        assert recorder.text_before_recording == recorder.answer

    def test_typing_between_recordings_becomes_new_base(self):
        recorder = SpeechRecorder()
        recorder.start()
        recorder.on_result([final("spoken")])
        recorder.stop()
        recorder.type_answer("spoken, then edited")

        recorder.start()
        recorder.on_result([final("more")])
        assert recorder.answer == "spoken, then edited more"

    def test_start_while_recording_is_rejected(self):
        recorder = SpeechRecorder()
        recorder.start()
        with pytest.raises(SpeechRecognitionError) as exc:
            recorder.start()
        assert exc.value.description == ALREADY_ACTIVE_MESSAGE

    def test_unsupported_recognizer(self):
        recorder = SpeechRecorder(supported=False)
        with pytest.raises(UnsupportedFeatureError) as exc:
            recorder.start()
        assert exc.value.title == "Unsupported Feature"
        assert not recorder.is_recording

    def test_typing_is_read_only_while_recording(self):
        recorder = SpeechRecorder()
        recorder.start()
        with pytest.raises(SpeechRecognitionError) as exc:
            recorder.type_answer("typed")
        assert exc.value.status_code == 409

    def test_results_outside_recording_are_ignored(self):
        recorder = SpeechRecorder()
        recorder.type_answer("kept")
        assert recorder.on_result([final("stray")]) == "kept"

    @pytest.mark.parametrize("code, message", [
        ("no-speech", NO_SPEECH_MESSAGE),
        ("network", GENERIC_SPEECH_MESSAGE),
        ("not-allowed", GENERIC_SPEECH_MESSAGE),
    ])
    def test_error_resets_recording(self, code, message):
        recorder = SpeechRecorder()
        recorder.start()
        recorder.on_result([interim("half a sent")])
        error = recorder.on_error(code)
        assert error.description == message
        assert error.title == "Speech Recognition Error"
        assert not recorder.is_recording
        assert recorder.text_before_recording == "half a sent"

    def test_reset(self):
        recorder = SpeechRecorder()
        recorder.type_answer("text")
        recorder.start()
        recorder.reset()
        assert recorder.answer == ""
        assert recorder.text_before_recording == ""
        assert not recorder.is_recording
