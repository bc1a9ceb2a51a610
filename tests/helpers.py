import json

from aceinterview.services.base.llm_client import BaseLLMClient


class FakeLLMClient(BaseLLMClient):
    """Returns queued responses in order; queued exceptions are raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def generate(self, prompt, system_instruction=None, json_output=False, temperature=None):
        self.prompts.append(prompt)
        self.calls.append({"system_instruction": system_instruction, "json_output": json_output})
        if not self.responses:
            raise AssertionError("FakeLLMClient has no queued response")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def question_json(question="Tell me about a time you resolved a production incident."):
    return json.dumps({"question": question})


def feedback_dict(score=4, text="Solid answer."):
    return {
        "overall_feedback": {"text": text, "score": score},
        "clarity": {"text": "Easy to follow.", "score": score},
        "completeness": {"text": "Covered the key points.", "score": score},
        "relevance": {"text": "On topic.", "score": score},
    }


def feedback_json(score=4, text="Solid answer."):
    return json.dumps(feedback_dict(score, text))


def overall_json(scores=(4,), summary="Strong communicator; quantify impact more."):
    return json.dumps({
        "individual_feedbacks": [feedback_dict(score) for score in scores],
        "overall_summary": summary,
    })
