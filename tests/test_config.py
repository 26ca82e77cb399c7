from pathlib import Path

import pytest
import yaml

from dbtui.ai.claudecode import ClaudeCodeProvider
from dbtui.ai.config import (
    AIConfig,
    OllamaConfig,
    OpenRouterConfig,
    default_config_path,
    load_config,
    new_provider,
    save_config,
)
from dbtui.ai.ollama import OllamaProvider
from dbtui.ai.openrouter import OpenRouterProvider


def test_load_config_file_not_found(tmp_path):
    cfg = load_config(tmp_path / "missing" / "ai.yml")
    assert cfg.provider == ""
    assert cfg == AIConfig()


def test_save_and_load_config(tmp_path):
    path = tmp_path / "nested" / "ai.yml"
    cfg = AIConfig(
        provider="openrouter",
        openrouter=OpenRouterConfig(api_key="placeholder", model="anthropic/claude-sonnet-4"),
        ollama=OllamaConfig(url="http://localhost:11434", model="llama3"),
    )
    save_config(path, cfg)
    loaded = load_config(path)

    assert loaded.provider == "openrouter"
    assert loaded.openrouter.api_key == "placeholder"
    assert loaded.openrouter.model == "anthropic/claude-sonnet-4"
    assert loaded.ollama.url == "http://localhost:11434"
    assert loaded == cfg
    assert path.stat().st_mode & 0o777 == 0o600


def test_save_omits_empty_sections(tmp_path):
    path = tmp_path / "ai.yml"
    save_config(path, AIConfig(provider="claude-code"))
    assert yaml.safe_load(path.read_text()) == {"provider": "claude-code"}


def test_config_path():
    assert default_config_path() == Path.home() / ".config" / "dbtui" / "ai.yml"


def test_load_malformed_yaml(tmp_path):
    path = tmp_path / "ai.yml"
    path.write_text("provider: [\n")
    with pytest.raises(yaml.YAMLError):
        load_config(path)


def test_load_non_mapping(tmp_path):
    path = tmp_path / "ai.yml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_empty_file(tmp_path):
    path = tmp_path / "ai.yml"
    path.write_text("")
    assert load_config(path) == AIConfig()


def test_new_provider_openrouter():
    provider = new_provider(
        AIConfig(provider="openrouter", openrouter=OpenRouterConfig(api_key="placeholder", model="m"))
    )
    assert isinstance(provider, OpenRouterProvider)
    assert provider.model == "m"
    assert provider.api_key == "placeholder"


def test_new_provider_ollama():
    provider = new_provider(
        AIConfig(provider="ollama", ollama=OllamaConfig(url="http://localhost:11434", model="llama3"))
    )
    assert isinstance(provider, OllamaProvider)
    assert provider.url == "http://localhost:11434"


def test_new_provider_claude_code():
    provider = new_provider(AIConfig(provider="claude-code"))
    assert isinstance(provider, ClaudeCodeProvider)
    assert provider.name() == "claude-code"
    assert provider.build_args() == ["-p", "-", "--output-format", "text"]


def test_new_provider_unknown():
    assert new_provider(AIConfig(provider="other")) is None
    assert new_provider(AIConfig()) is None