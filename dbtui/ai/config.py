"""Loading and saving the AI provider configuration file."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .claudecode import ClaudeCodeProvider
from .ollama import OllamaProvider
from .openrouter import OpenRouterProvider
from .provider import Provider


@dataclass
class OpenRouterConfig:
    api_key: str = ""
    model: str = ""

    def _to_dict(self) -> dict[str, str]:
        return {"api_key": self.api_key, "model": self.model}


@dataclass
class OllamaConfig:
    url: str = ""
    model: str = ""

    def _to_dict(self) -> dict[str, str]:
        return {"url": self.url, "model": self.model}


@dataclass
class AIConfig:
    """Which provider to use and the settings of each one."""

    provider: str = ""
    openrouter: OpenRouterConfig = field(default_factory=OpenRouterConfig)
    ollama: OllamaConfig = field(default_factory=OllamaConfig)


def default_config_path() -> Path | None:
    """``~/.config/dbtui/ai.yml``, or None when the home directory is unknown."""
    try:
        home = Path.home()
    except RuntimeError:
        return None
    return home / ".config" / "dbtui" / "ai.yml"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise ValueError(f"AI config: '{key}' must be a mapping")
    return value


def load_config(path: str | os.PathLike[str]) -> AIConfig:
    """Read the config file; a missing file yields an empty configuration."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return AIConfig()

    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("AI config must be a mapping")

    openrouter = _section(data, "openrouter")
    ollama = _section(data, "ollama")
    return AIConfig(
        provider=_text(data.get("provider")),
        openrouter=OpenRouterConfig(
            api_key=_text(openrouter.get("api_key")),
            model=_text(openrouter.get("model")),
        ),
        ollama=OllamaConfig(
            url=_text(ollama.get("url")),
            model=_text(ollama.get("model")),
        ),
    )


def save_config(path: str | os.PathLike[str], config: AIConfig) -> None:
    """Write the config as YAML, readable only by the owner."""
    target = Path(path)
    target.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

    data: dict[str, Any] = {"provider": config.provider}
    if config.openrouter != OpenRouterConfig():
        data["openrouter"] = config.openrouter._to_dict()
    if config.ollama != OllamaConfig():
        data["ollama"] = config.ollama._to_dict()

    text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)


def new_provider(config: AIConfig) -> Provider | None:
    """Build the configured provider, or None for an unknown name."""
    if config.provider == "openrouter":
        return OpenRouterProvider(config.openrouter.api_key, config.openrouter.model)
    if config.provider == "ollama":
        return OllamaProvider(config.ollama.url, config.ollama.model)
    if config.provider == "claude-code":
        return ClaudeCodeProvider()
    return None