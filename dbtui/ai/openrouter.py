"""Provider that generates SQL through the OpenRouter chat completions API."""

from __future__ import annotations

import json
from typing import Any

import requests

from .claudecode import extract_sql
from .prompt import build_system_prompt
from .provider import Provider, ProviderError, SQLRequest, SQLResponse, TokenUsage

DEFAULT_OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class OpenRouterProvider(Provider):
    """Sends a system and a user message to a chat completions endpoint."""

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str = DEFAULT_OPENROUTER_URL,
        session: requests.Session | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self._session = session or requests.Session()

    def name(self) -> str:
        return "openrouter"

    def generate_sql(self, request: SQLRequest) -> SQLResponse:
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(request.schema)},
                {"role": "user", "content": request.prompt},
            ],
        }

        try:
            response = self._session.post(
                self.base_url,
                data=json.dumps(body),
                headers={
                    "Authorization": "Bearer " + self.api_key,
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ProviderError(f"sending request: {exc}") from exc

        if response.status_code != 200:
            raise ProviderError(
                f"API error (status {response.status_code}): {response.text}"
            )

        try:
            data = json.loads(response.content)
        except ValueError as exc:
            raise ProviderError(f"parsing response: {exc}") from exc
        data = _as_object(data)

        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise ProviderError("parsing response: 'choices' is not a list")
        if not choices:
            return SQLResponse(error="no response from model")

        message = _as_object(_as_object(choices[0]).get("message") or {})
        sql = extract_sql(str(message.get("content") or ""))
        if not sql:
            return SQLResponse(error="no SQL found in response")

        usage = _as_object(data.get("usage") or {})
        return SQLResponse(
            sql=sql,
            usage=TokenUsage(
                prompt_tokens=int(usage.get("prompt_tokens") or 0),
                completion_tokens=int(usage.get("completion_tokens") or 0),
                total_tokens=int(usage.get("total_tokens") or 0),
            ),
        )


def _as_object(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ProviderError("parsing response: expected a JSON object")
    return value


def validate_openrouter(api_key: str) -> None:
    """Raise ProviderError if no API key is configured."""
    if not api_key:
        raise ProviderError("OpenRouter API key is required")