import json
import logging
from typing import Any, Dict, Optional

import httpx

LOGGER = logging.getLogger(__name__)

DEFAULT_GATEWAY_URL = "http://127.0.0.1:18789/v1"


class OpenClawClient:
    def __init__(self, config, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        openclaw = self._get_section(config, "openclaw")
        self._gateway_url = openclaw.get("gateway_url") or DEFAULT_GATEWAY_URL
        self._token = openclaw.get("token", "")
        self._agent_id = openclaw.get("agent_id", "main")
        self._system_prompt = openclaw.get("system_prompt")
        self._timeout = openclaw.get("timeout_seconds", 120)
        self._transport = transport

    async def think(self, context: str, user_text: str) -> str:
        """Ask the agent for a reply; returns the raw text or "" on failure."""
        url = f"{self._gateway_url.rstrip('/')}/chat/completions"
        messages = []
        if self._system_prompt:
            messages.append({"role": "system", "content": self._system_prompt})
        user_content = f"[Context]\n{context}\n\n[User]\n{user_text}" if context else user_text
        messages.append({"role": "user", "content": user_content})
        body = {"model": "openclaw", "messages": messages}

        try:
            async with self._client() as client:
                response = await client.post(url, headers=self._headers(), json=body)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            LOGGER.error("OpenClaw request failed: %s", exc)
            return ""
        except json.JSONDecodeError:
            LOGGER.error("OpenClaw response is not valid JSON: %s", response.text)
            return ""

        return self._extract_content(data)

    async def check_health(self) -> bool:
        url = f"{self._gateway_url.rstrip('/')}/models"
        try:
            async with self._client() as client:
                response = await client.get(url, headers=self._headers())
            response.raise_for_status()
        except httpx.HTTPError as exc:
            LOGGER.warning("OpenClaw Gateway not reachable: %s", exc)
            return False
        return True

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
            "x-openclaw-agent-id": self._agent_id,
        }

    def _extract_content(self, data: Any) -> str:
        if not isinstance(data, dict):
            LOGGER.error("OpenClaw response has unexpected shape: %r", data)
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            LOGGER.warning("OpenClaw response missing choices")
            return ""
        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        if isinstance(content, list):
            # OpenAI-style content parts
            content = "".join(
                part["text"]
                for part in content
                if isinstance(part, dict)
                and part.get("type") == "text"
                and isinstance(part.get("text"), str)
            )
        if content is not None and not isinstance(content, str):
            LOGGER.error("OpenClaw response content is not text: %r", content)
            return ""
        if not content:
            LOGGER.warning("OpenClaw response missing content")
            return ""
        return content

    def _get_section(self, config, name: str) -> Dict:
        if isinstance(config, dict):
            return config.get(name, {}) or {}
        return getattr(config, name, {}) or {}
