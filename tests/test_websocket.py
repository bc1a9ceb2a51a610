from helpers import question_json

FORM = {"role": "Software Engineer", "industry": "Tech"}


def open_question(client, question_llm):
    session_id = client.post("/session").json()["session_id"]
    question_llm.queue(question_json("Q1?"))
    client.post(f"/session/{session_id}/question", json={"form": FORM})
    return session_id


def test_speech_relay(client, question_llm):
    session_id = open_question(client, question_llm)
    with client.websocket_connect(f"/session/ws/{session_id}") as ws:
        ws.send_json({"type": "start"})
        assert ws.receive_json() == {"type": "answer", "text": "", "is_recording": True}

        ws.send_json({"type": "result", "results": [{"transcript": "hello", "is_final": False}]})
        assert ws.receive_json()["text"] == "hello"

        ws.send_json({"type": "result", "results": [
            {"transcript": "hello world", "is_final": True},
            {"transcript": "and more", "is_final": False},
        ]})
        assert ws.receive_json()["text"] == "hello world and more"

        ws.send_json({"type": "end"})
        message = ws.receive_json()
        assert message["is_recording"] is False

    assert client.get(f"/session/{session_id}").json()["answer"] == "hello world and more"


def test_speech_error_sends_toast(client, question_llm):
    session_id = open_question(client, question_llm)
    with client.websocket_connect(f"/session/ws/{session_id}") as ws:
        ws.send_json({"type": "start"})
        ws.receive_json()
        ws.send_json({"type": "error", "error": "no-speech"})
        toast = ws.receive_json()
        assert toast == {
            "type": "toast",
            "title": "Speech Recognition Error",
            "description": "No speech detected. Please try again.",
        }
        assert ws.receive_json()["is_recording"] is False


def test_invalid_step_is_toast(client):
    session_id = client.post("/session").json()["session_id"]
    with client.websocket_connect(f"/session/ws/{session_id}") as ws:
        ws.send_json({"type": "start"})
        message = ws.receive_json()
        assert message["type"] == "toast"
        assert message["title"] == "Invalid Step"


def test_unknown_session_closes(client):
    with client.websocket_connect("/session/ws/missing") as ws:
        message = ws.receive_json()
        assert message["title"] == "Session Not Found"


def test_malformed_frame_is_toast(client, question_llm):
    session_id = open_question(client, question_llm)
    with client.websocket_connect(f"/session/ws/{session_id}") as ws:
        ws.send_text("not json")
        assert ws.receive_json() == {"type": "toast", "title": "Error", "description": "Malformed message."}

        ws.send_json(["not", "an", "object"])
        assert ws.receive_json()["description"] == "Malformed message."

        ws.send_json({"type": "start"})
        assert ws.receive_json()["is_recording"] is True
