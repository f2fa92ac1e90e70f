"""
HTTP tests for the chat API.

Run with: pytest tests/test_chat_api.py -v
"""

import httpx
from fastapi.testclient import TestClient
from openai import APIConnectionError

from conftest import FakeLLMClient, build_app, completion, generator_with
from support_chat.config.settings import Config, ProductionConfig, TestingConfig
from support_chat.domain.exceptions import AppError
from support_chat.prompts.chat import FALLBACK_REPLY


def send(client, message, session_id=None):
    body = {"message": message}
    if session_id is not None:
        body["sessionId"] = session_id
    return client.post("/api/chat/message", json=body)


class TestSendMessage:
    def test_new_conversation_without_session_id(self, client):
        """'Hi' without a session gives a fresh id and a non-empty reply."""
        res = send(client, "Hi")

        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "success"
        assert body["data"]["reply"]
        assert body["data"]["sessionId"]

    def test_each_call_without_session_id_gets_distinct_id(self, client):
        first = send(client, "Hi").json()["data"]["sessionId"]
        second = send(client, "Hi").json()["data"]["sessionId"]
        assert first != second

    def test_transcript_has_user_then_assistant(self, client):
        session_id = send(client, "Where is my order?").json()["data"]["sessionId"]

        messages = client.get(f"/api/chat/conversation/{session_id}").json()["data"]["messages"]

        assert [m["sender"] for m in messages] == ["user", "assistant"]
        assert messages[0]["text"] == "Where is my order?"

    def test_echo_reply_without_credential(self, client):
        reply = send(client, "Hello there").json()["data"]["reply"]
        assert reply == "DEV-MOCK: I received your message: Hello there"

    def test_existing_session_id_is_reused(self, client):
        session_id = send(client, "First").json()["data"]["sessionId"]

        res = send(client, "Second", session_id)

        assert res.status_code == 200
        assert res.json()["data"]["sessionId"] == session_id
        messages = client.get(f"/api/chat/conversation/{session_id}").json()["data"]["messages"]
        assert len(messages) == 4
        assert [m["text"] for m in messages[::2]] == ["First", "Second"]

    def test_unknown_session_id_starts_new_conversation(self, client):
        unknown = "3f2c8a1e-9b7d-4c6e-8f5a-2d1b0c9e8a7f"

        res = send(client, "Hi", unknown)

        assert res.status_code == 200
        assert res.json()["data"]["sessionId"] != unknown

    def test_non_uuid_session_id_starts_new_conversation(self, client):
        res = send(client, "Hi", "not-a-uuid")

        assert res.status_code == 200
        assert res.json()["data"]["sessionId"] != "not-a-uuid"

    def test_empty_session_id_is_treated_as_absent(self, client):
        res = send(client, "Hi", "")
        assert res.status_code == 200

    def test_message_is_stored_trimmed(self, client):
        session_id = send(client, "   padded text  ").json()["data"]["sessionId"]

        messages = client.get(f"/api/chat/conversation/{session_id}").json()["data"]["messages"]

        assert messages[0]["text"] == "padded text"


class TestValidation:
    def test_empty_message(self, client, store):
        res = send(client, "")

        assert res.status_code == 400
        body = res.json()
        assert body["status"] == "error"
        assert body["statusCode"] == 400
        assert "cannot be empty" in body["message"]
        assert store.stats() == {"conversations": 0, "messages": 0}

    def test_whitespace_only_message(self, client):
        res = send(client, "   ")
        assert res.status_code == 400
        assert "cannot be empty" in res.json()["message"]

    def test_missing_message(self, client):
        res = client.post("/api/chat/message", json={})
        assert res.status_code == 400
        assert res.json()["message"] == "Message cannot be empty"

    def test_message_too_long(self, client, store):
        res = send(client, "a" * (Config.MAX_MESSAGE_LENGTH + 1))

        assert res.status_code == 400
        assert res.json()["message"] == (
            f"Message cannot exceed {Config.MAX_MESSAGE_LENGTH} characters"
        )
        assert store.stats() == {"conversations": 0, "messages": 0}

    def test_message_at_max_length_is_accepted(self, client):
        res = send(client, "a" * Config.MAX_MESSAGE_LENGTH)
        assert res.status_code == 200

    def test_message_must_be_string(self, client):
        res = client.post("/api/chat/message", json={"message": 42})
        assert res.status_code == 400
        assert res.json()["message"] == "Message must be a string"

    def test_all_messages_are_joined(self, client):
        res = client.post("/api/chat/message", json={"message": 42, "sessionId": 7})

        assert res.status_code == 400
        assert res.json()["message"] == (
            "Message must be a string, Session ID must be a string"
        )


class TestGetConversation:
    def test_unknown_conversation_is_404(self, client):
        res = client.get("/api/chat/conversation/3f2c8a1e-9b7d-4c6e-8f5a-2d1b0c9e8a7f")

        assert res.status_code == 404
        body = res.json()
        assert body == {
            "status": "error",
            "message": "Conversation not found",
            "statusCode": 404,
        }
        assert "data" not in body

    def test_non_uuid_conversation_is_404(self, client):
        res = client.get("/api/chat/conversation/whatever")
        assert res.status_code == 404

    def test_messages_are_in_order_with_iso_timestamps(self, client):
        session_id = send(client, "one").json()["data"]["sessionId"]
        send(client, "two", session_id)

        data = client.get(f"/api/chat/conversation/{session_id}").json()["data"]

        assert data["sessionId"] == session_id
        texts = [m["text"] for m in data["messages"]]
        assert texts[0] == "one" and texts[2] == "two"
        timestamps = [m["timestamp"] for m in data["messages"]]
        assert "T" in timestamps[0]


class TestProviderFailures:
    def test_unreachable_provider_returns_502(self, store):
        request = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")
        fake = FakeLLMClient(error=APIConnectionError(request=request))
        app = build_app(store=store, generator=generator_with(fake))

        with TestClient(app) as client:
            res = send(client, "Hi")

        assert res.status_code == 502
        body = res.json()
        assert body["status"] == "error"
        assert "data" not in body
        # user message persists, no assistant message
        assert store.stats() == {"conversations": 1, "messages": 1}

    def test_unrecognizable_completion_uses_fallback(self, store):
        fake = FakeLLMClient(result={"choices": [{"message": {"content": ""}}]})
        app = build_app(store=store, generator=generator_with(fake))

        with TestClient(app) as client:
            res = send(client, "Hi")

        assert res.status_code == 200
        assert res.json()["data"]["reply"] == FALLBACK_REPLY

    def test_provider_sees_system_prompt_and_history(self, store):
        fake = FakeLLMClient(result=completion("Happy to help!"))
        app = build_app(store=store, generator=generator_with(fake))

        with TestClient(app) as client:
            session_id = send(client, "First").json()["data"]["sessionId"]
            send(client, "Second", session_id)

        messages = fake.completions.calls[-1]["messages"]
        assert messages[0]["role"] == "system"
        assert [m["content"] for m in messages[1:4]] == ["First", "Happy to help!", "Second"]
        assert messages[-1] == {"role": "user", "content": "Second"}

    def test_missing_key_in_production_returns_503(self, store):
        class KeylessProduction(ProductionConfig):
            LLM_API_KEY = ""
            STORAGE_BACKEND = "memory"
            RATE_LIMIT_ENABLED = False
            LOG_PATH = None

        app = build_app(config=KeylessProduction, store=store)

        with TestClient(app) as client:
            res = send(client, "Hi")

        assert res.status_code == 503
        assert "GROQ_API_KEY" in res.json()["message"]


class TestAppSurface:
    def test_health(self, client):
        res = client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "success", "message": "Server is running"}

    def test_unknown_route(self, client):
        res = client.get("/api/nope")
        assert res.status_code == 404
        assert res.json() == {
            "status": "error",
            "message": "Route not found",
            "statusCode": 404,
        }

    def test_correlation_id_is_echoed(self, client):
        res = client.get("/health", headers={"X-Correlation-ID": "abc-123"})
        assert res.headers["X-Correlation-ID"] == "abc-123"

    def test_correlation_id_is_generated(self, client):
        res = client.get("/health")
        assert res.headers["X-Correlation-ID"]

    def test_metrics_endpoint(self, client):
        send(client, "Hi")
        res = client.get("/metrics")
        assert res.status_code == 200
        assert "http_server_request_duration_seconds" in res.text


class ShortMessagesConfig(TestingConfig):
    MAX_MESSAGE_LENGTH = 10


class TestConfiguredMessageLength:
    def test_app_config_limit_is_enforced(self, store):
        with TestClient(build_app(config=ShortMessagesConfig, store=store)) as client:
            res = send(client, "a" * 50)

        assert res.status_code == 400
        assert res.json()["message"] == "Message cannot exceed 10 characters"
        assert store.stats() == {"conversations": 0, "messages": 0}

    def test_message_at_configured_limit_is_accepted(self):
        with TestClient(build_app(config=ShortMessagesConfig)) as client:
            res = send(client, "a" * 10)

        assert res.status_code == 200


class TestErrorEnvelope:
    def test_app_error_status_field_is_used(self):
        class TeapotError(AppError):
            status_code = 418
            default_message = "I'm a teapot"

            @property
            def status(self) -> str:
                return "fail"

        app = build_app()

        @app.get("/teapot")
        async def teapot():
            raise TeapotError()

        with TestClient(app) as client:
            res = client.get("/teapot")

        assert res.status_code == 418
        assert res.json() == {"status": "fail", "message": "I'm a teapot", "statusCode": 418}
