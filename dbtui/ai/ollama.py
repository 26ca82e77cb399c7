"""Provider that generates SQL through an Ollama server."""

from __future__ import annotations

import json

import requests

from .claudecode import extract_sql
from .prompt import build_system_prompt
from .provider import Provider, ProviderError, SQLRequest, SQLResponse, TokenUsage


class OllamaProvider(Provider):
    """Calls the ``/api/generate`` endpoint without streaming."""

    def __init__(
        self,
        url: str,
        model: str,
        session: requests.Session | None = None,
        timeout: float = 60.0,
    ) -> None:
        self.url = url
        self.model = model
        self.timeout = timeout
        self._session = session or requests.Session()

    def name(self) -> str:
        return "ollama"

    def generate_sql(self, request: SQLRequest) -> SQLResponse:
        body = {
            "model": self.model,
            "prompt": request.prompt,
            "system": build_system_prompt(request.schema),
            "stream": False,
        }

        try:
            response = self._session.post(
                self.url + "/api/generate",
                data=json.dumps(body),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise ProviderError(f"sending request to Ollama: {exc}") from exc

        if response.status_code != 200:
            raise ProviderError(
                f"Ollama error (status {response.status_code}): {response.text}"
            )

        try:
            data = json.loads(response.content)
        except ValueError as exc:
            raise ProviderError(f"parsing response: {exc}") from exc
        if not isinstance(data, dict):
            raise ProviderError("parsing response: expected a JSON object")

        sql = extract_sql(str(data.get("response") or ""))
        if not sql:
            return SQLResponse(error="no SQL found in response")

        prompt_tokens = int(data.get("prompt_eval_count") or 0)
        completion_tokens = int(data.get("eval_count") or 0)
        return SQLResponse(
            sql=sql,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
            ),
        )


def validate_ollama(url: str) -> None:
    """Raise ProviderError unless an Ollama server answers at ``url``."""
    if not url:
        raise ProviderError("Ollama URL is required")
    try:
        requests.get(url + "/api/tags", timeout=5).close()
    except requests.RequestException as exc:
        raise ProviderError(f"cannot connect to Ollama at {url}: {exc}") from exc