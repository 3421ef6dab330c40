from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, List, Optional

import anyio
import httpx


logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
WEB_FETCH_BETA = "web-fetch-2025-09-10"


class UpstreamError(Exception):
    """The provider answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"API error: {status_code}")
        self.status_code = status_code
        self.body = body


class AnthropicClient:
    _instance: Optional["AnthropicClient"] = None
    _lock = threading.Lock()

    def __init__(
        self,
        base_url: str,
        model_id: str,
        max_tokens: int = 5000,
        timeout: float = 180,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model_id = model_id
        self.max_tokens = max_tokens
        # Web fetch + search turns can take minutes
        # Configurable via ANTHROPIC_TIMEOUT env var
        self.timeout = float(os.getenv("ANTHROPIC_TIMEOUT", str(timeout)))
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    @classmethod
    def get(cls, model_id: Optional[str] = None, base_url: Optional[str] = None) -> "AnthropicClient":
        with cls._lock:
            if cls._instance is None:
                mid = model_id or os.getenv("MODEL_ID", "claude-sonnet-4-20250514")
                burl = base_url or os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com")
                max_tokens = int(os.getenv("MAX_TOKENS", "5000"))
                cls._instance = AnthropicClient(burl, mid, max_tokens=max_tokens)
            return cls._instance

    def build_payload(
        self, prompt: str, tools: List[Dict[str, Any]], prefill: Optional[str] = None
    ) -> Dict[str, Any]:
        messages: List[Dict[str, Any]] = [{"role": "user", "content": prompt}]
        if prefill:
            # The model continues from here instead of opening its own reply
            messages.append({"role": "assistant", "content": prefill})
        return {
            "model": self.model_id,
            "max_tokens": self.max_tokens,
            "messages": messages,
            "tools": tools,
        }

    async def create_message(
        self, prompt: str, tools: List[Dict[str, Any]], prefill: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send one messages request and return the decoded reply.

        The whole exchange, body download included, must finish within
        `self.timeout` seconds or TimeoutError is raised.
        """
        url = f"{self.base_url}/v1/messages"
        # Read on every call; a missing key fails the request here
        api_key = os.environ["ANTHROPIC_API_KEY"]
        headers = {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "anthropic-beta": WEB_FETCH_BETA,
            "content-type": "application/json",
        }
        payload = self.build_payload(prompt, tools, prefill)
        with anyio.fail_after(self.timeout):
            resp = await self._client.post(url, json=payload, headers=headers)
        logger.info("Provider response: %s", resp.status_code)
        if not resp.is_success:
            raise UpstreamError(resp.status_code, resp.text)
        return resp.json()
