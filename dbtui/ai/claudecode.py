"""Provider that generates SQL through the local ``claude`` command line tool."""

from __future__ import annotations

import re
import shutil
import subprocess

from .prompt import build_system_prompt
from .provider import Provider, ProviderError, SQLRequest, SQLResponse, TokenUsage

_EXECUTABLE = "claude"

_SQL_START = re.compile(
    r"^(SELECT|INSERT|UPDATE|DELETE|WITH|CREATE|ALTER|DROP|EXPLAIN)\b",
    re.IGNORECASE | re.ASCII,
)
_CODE_FENCE = re.compile(r"```(?:sql)?\s*\n?(.*?)\n?```", re.DOTALL)


class ClaudeCodeProvider(Provider):
    """Runs the CLI with the prompt on standard input."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def name(self) -> str:
        return "claude-code"

    def build_args(self) -> list[str]:
        """Arguments passed to the CLI after the executable name."""
        return ["-p", "-", "--output-format", "text"]

    def generate_sql(self, request: SQLRequest) -> SQLResponse:
        full_prompt = build_system_prompt(request.schema) + "\nUser request: " + request.prompt

        try:
            completed = subprocess.run(
                [_EXECUTABLE, *self.build_args()],
                input=full_prompt,
                capture_output=True,
                text=True,
                encoding="utf-8",
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            if exc.stderr:
                raise ProviderError(
                    f"claude CLI failed (exit {exc.returncode}): {exc.stderr.strip()}"
                ) from exc
            raise ProviderError(f"claude CLI execution failed: {exc}") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ProviderError(f"claude CLI execution failed: {exc}") from exc

        raw = (completed.stdout or "").strip()
        sql = extract_sql(raw)
        if not sql:
            return SQLResponse(error="no SQL found in response")

        prompt_tokens = estimate_tokens(full_prompt)
        completion_tokens = estimate_tokens(raw)
        return SQLResponse(
            sql=sql,
            usage=TokenUsage(
                prompt_tokens=prompt_tokens,
                completion_tokens=completion_tokens,
                total_tokens=prompt_tokens + completion_tokens,
                estimated=True,
            ),
        )


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four bytes, at least one for any text."""
    size = len(text.encode("utf-8"))
    count = size // 4
    if count == 0 and size > 0:
        return 1
    return count


def extract_sql(raw: str) -> str:
    """Pull the SQL statement out of a model reply.

    A fenced code block wins; otherwise the text from the first line that
    starts with a SQL keyword up to the first line ending in ``;``. Text with
    no recognisable statement is returned unchanged (trimmed).
    """
    raw = raw.strip()

    fence = _CODE_FENCE.search(raw)
    if fence:
        return fence.group(1).strip()

    lines = raw.split("\n")
    start = next((i for i, line in enumerate(lines) if _SQL_START.match(line)), None)
    if start is None:
        return raw

    statement = []
    for line in lines[start:]:
        statement.append(line)
        if line.strip().endswith(";"):
            break

    sql = "\n".join(statement).strip()
    return sql.removesuffix(";").strip()


def validate_claude_code() -> None:
    """Raise ProviderError unless the CLI can be found on PATH."""
    if shutil.which(_EXECUTABLE) is None:
        raise ProviderError("'claude' CLI not found in PATH")