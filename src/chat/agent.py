"""Chat client that talks to the completion relay."""

import json
import logging
from typing import Optional

import requests

from config.settings import get_settings
from src.data.institutions import get_institutions
from .prompts import PromptOptions, build_system_prompt, max_tokens_for

logger = logging.getLogger(__name__)

FALLBACK_REPLY = "Sorry, I could not generate a response."


class ChatRelayError(RuntimeError):
    """The relay request failed or came back without a usable reply."""

    def __init__(self, status: Optional[int], detail: str):
        self.status = status
        self.detail = detail
        if status is None:
            super().__init__(f"Chat relay unreachable: {detail}")
        else:
            super().__init__(f"API request failed with status {status}: {detail}")


class ChatClient:
    """Sends conversations to the relay with a freshly built system prompt."""

    def __init__(self, relay_url: Optional[str] = None, records=None, session=None):
        settings = get_settings()
        self.settings = settings
        self.relay_url = relay_url or settings.CHAT_RELAY_URL
        self.model = settings.CHAT_MODEL
        self.records = records if records is not None else get_institutions()
        self.session = session or requests

    def build_request(self, history: list[dict], options: PromptOptions) -> dict:
        """
        Assemble the relay request body.

        Args:
            history: Prior turns as {"role", "content"} dicts, latest user turn last
            options: Chat mode and research settings for this request
        """
        return {
            "model": self.model,
            "max_tokens": max_tokens_for(options, self.settings),
            "system": build_system_prompt(self.records, options),
            "messages": [{"role": msg["role"], "content": msg["content"]} for msg in history],
        }

    def send(self, history: list[dict], options: PromptOptions) -> str:
        """
        Send the conversation and return the assistant's reply text.

        Raises:
            ChatRelayError: The relay was unreachable or returned a non-2xx status
        """
        body = self.build_request(history, options)
        logger.info(
            "Sending chat request: %d messages, max_tokens=%d, mode=%s",
            len(body["messages"]),
            body["max_tokens"],
            options.mode,
        )

        try:
            response = self.session.post(self.relay_url, json=body, timeout=self.settings.CHAT_RELAY_TIMEOUT)
        except requests.RequestException as e:
            raise ChatRelayError(None, str(e)) from e

        if not response.ok:
            try:
                detail = json.dumps(response.json())
            except ValueError:
                detail = response.text
            raise ChatRelayError(response.status_code, detail)

        try:
            data = response.json()
        except ValueError as e:
            raise ChatRelayError(response.status_code, f"unreadable reply: {response.text}") from e
        if not isinstance(data, dict):
            raise ChatRelayError(response.status_code, f"unreadable reply: {response.text}")
        content = data.get("content") or []
        if content and content[0].get("text"):
            return content[0]["text"]
        return FALLBACK_REPLY
