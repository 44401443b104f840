"""Tests for the chat client: request shape, reply extraction, error surfacing."""

from unittest.mock import MagicMock

import pytest
import requests

from src.chat.agent import FALLBACK_REPLY, ChatClient, ChatRelayError
from src.chat.prompts import DISABLED, PromptOptions

HISTORY = [{"role": "user", "content": "How many R1 institutions are there?"}]


def _response(status=200, json_data=None, text=""):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session, make_institution):
    return ChatClient(
        relay_url="http://relay.test/api/chat",
        records=[make_institution("a"), make_institution("b")],
        session=session,
    )


class TestBuildRequest:
    def test_contains_required_fields(self, client):
        body = client.build_request(HISTORY, PromptOptions())
        assert set(body) == {"model", "max_tokens", "system", "messages"}
        assert body["messages"] == HISTORY
        assert body["model"] == client.settings.CHAT_MODEL

    def test_token_budget_follows_options(self, client):
        assert client.build_request(HISTORY, PromptOptions(include_research=True))["max_tokens"] == 2000
        assert client.build_request(HISTORY, PromptOptions(mode=DISABLED))["max_tokens"] == 1000

    def test_strips_extra_message_keys(self, client):
        history = [{"role": "user", "content": "hi", "sources": ["x"]}]
        assert client.build_request(history, PromptOptions())["messages"] == [{"role": "user", "content": "hi"}]


class TestSend:
    def test_returns_first_text_block(self, client, session):
        session.post.return_value = _response(json_data={"content": [{"type": "text", "text": "There are 9."}]})

        assert client.send(HISTORY, PromptOptions()) == "There are 9."
        url = session.post.call_args.args[0]
        assert url == "http://relay.test/api/chat"
        assert session.post.call_args.kwargs["json"]["messages"] == HISTORY

    def test_empty_content_falls_back(self, client, session):
        session.post.return_value = _response(json_data={"content": []})
        assert client.send(HISTORY, PromptOptions()) == FALLBACK_REPLY

    def test_error_status_raises_with_detail(self, client, session):
        session.post.return_value = _response(
            status=500, json_data={"error": "Server configuration error: ANTHROPIC_API_KEY not set"}
        )

        with pytest.raises(ChatRelayError) as exc_info:
            client.send(HISTORY, PromptOptions())

        assert exc_info.value.status == 500
        assert "ANTHROPIC_API_KEY not set" in exc_info.value.detail
        assert "status 500" in str(exc_info.value)

    def test_non_json_error_body(self, client, session):
        session.post.return_value = _response(status=502, json_data=ValueError("no json"), text="Bad Gateway")

        with pytest.raises(ChatRelayError) as exc_info:
            client.send(HISTORY, PromptOptions())

        assert exc_info.value.detail == "Bad Gateway"

    def test_non_json_success_body(self, client, session):
        session.post.return_value = _response(status=200, json_data=ValueError("no json"), text="<html>ok</html>")

        with pytest.raises(ChatRelayError) as exc_info:
            client.send(HISTORY, PromptOptions())

        assert exc_info.value.status == 200
        assert "<html>ok</html>" in exc_info.value.detail

    def test_unreachable_relay(self, client, session):
        session.post.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(ChatRelayError) as exc_info:
            client.send(HISTORY, PromptOptions())

        assert exc_info.value.status is None
        assert "connection refused" in str(exc_info.value)
