import json
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class ClientSettings:
    """
    Connection settings for the prompt management service.

    - base_url: root of the REST API (e.g. "https://hub.example.com/api/v1")
    - environment: deployment environment whose version is executed
    - timeout: per-request timeout in seconds
    """
    base_url: str
    api_key: str = ""
    project_id: str = ""
    environment: str = "Production"
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "ClientSettings":
        base_url = os.environ.get("PROMPT_HUB_URL", "")
        if not base_url:
            raise ValueError("PROMPT_HUB_URL is not set")
        return cls(
            base_url=base_url.rstrip("/"),
            api_key=os.environ.get("PROMPT_HUB_API_KEY", ""),
            project_id=os.environ.get("PROMPT_HUB_PROJECT_ID", ""),
            environment=os.environ.get("PROMPT_HUB_ENVIRONMENT", "Production"),
            timeout=float(os.environ.get("PROMPT_HUB_TIMEOUT", "30")),
        )


# ---------------------------------------------------------------------------
# Model / provider configuration
# ---------------------------------------------------------------------------


@dataclass
class ModelVersionConfig:
    """
    - id: exact API model identifier (e.g. "gpt-4o")
    - label: human-friendly name for logs
    """
    id: str
    label: str


@dataclass
class ProviderModelConfig:
    """
    - provider_key: short key used to select a backend (e.g. "gpt")
    - versions: known model versions; the first one is the default
    - api_key_envs: environment variables checked for the provider key, in order
    """
    provider_key: str
    versions: List[ModelVersionConfig] = field(default_factory=list)
    api_key_envs: List[str] = field(default_factory=list)

    @property
    def default_model(self) -> str:
        return self.versions[0].id if self.versions else ""

    def api_key(self) -> str:
        for name in self.api_key_envs:
            value = os.environ.get(name)
            if value:
                return value
        return ""


# Used when a deployed prompt version does not name a model.
PROVIDER_MODELS: Dict[str, ProviderModelConfig] = {
    "gpt": ProviderModelConfig(
        provider_key="gpt",
        versions=[
            ModelVersionConfig("gpt-4o", "GPT-4o"),
            ModelVersionConfig("gpt-4o-mini", "GPT-4o mini"),
        ],
        api_key_envs=["OPENAI_API_KEY"],
    ),
    "claude": ProviderModelConfig(
        provider_key="claude",
        versions=[
            ModelVersionConfig("claude-sonnet-4-5-20250929", "Claude Sonnet 4.5"),
            ModelVersionConfig("claude-sonnet-4-20250514", "Claude Sonnet 4 (2025-05-14)"),
        ],
        api_key_envs=["ANTHROPIC_API_KEY"],
    ),
    "gemini": ProviderModelConfig(
        provider_key="gemini",
        versions=[
            ModelVersionConfig("gemini-2.5-pro", "Gemini 2.5 Pro"),
        ],
        api_key_envs=["GEMINI_API_KEY", "GOOGLE_API_KEY", "GOOGLE_GEMINI_API_KEY"],
    ),
    "deepseek": ProviderModelConfig(
        provider_key="deepseek",
        versions=[
            ModelVersionConfig("deepseek-chat", "DeepSeek Chat"),
        ],
        api_key_envs=["DEEPSEEK_API_KEY", "DEEPSEEK_KEY", "DEEPSEEK_TOKEN", "API_KEY_DEEPSEEK"],
    ),
}

_KEYS_FILE_ENVS = {
    "DEEPSEEK_API_KEY": "deepseek_api_key",
    "OPENAI_API_KEY": "openai_api_key",
    "ANTHROPIC_API_KEY": "anthropic_api_key",
    "GEMINI_API_KEY": "gemini_api_key",
    "GOOGLE_API_KEY": "google_api_key",
    "PROMPT_HUB_API_KEY": "prompt_hub_api_key",
}


def load_keys_file(path: str, environ: Optional[Dict[str, str]] = None) -> List[str]:
    """
    Copy API keys from a JSON file into the environment.

    Both lower-case ("openai_api_key") and env-style ("OPENAI_API_KEY")
    names are accepted. Returns the names of the variables that were set.
    """
    environ = os.environ if environ is None else environ
    with open(path, "r", encoding="utf-8") as f:
        keys = json.load(f)
    if not isinstance(keys, dict):
        raise ValueError(f"Keys file {path} must hold a JSON object")
    loaded = []
    for env_name, file_name in _KEYS_FILE_ENVS.items():
        value = keys.get(file_name) or keys.get(env_name)
        if value:
            environ[env_name] = value
            loaded.append(env_name)
            logger.info(f"loaded_key {env_name}=")
    return loaded
