"""Model provider backends and the factory resolving provider keys to them."""

from typing import Callable, Dict

from ..interfaces import BackendExecutor
from .anthropic_backend import AnthropicBackend
from .deepseek_backend import DeepSeekBackend
from .gemini_backend import GeminiBackend
from .openai_backend import OpenAIBackend

BACKENDS: Dict[str, Callable[..., BackendExecutor]] = {
    "gpt": OpenAIBackend,
    "claude": AnthropicBackend,
    "gemini": GeminiBackend,
    "deepseek": DeepSeekBackend,
}


def get_backend(provider_key: str, **kwargs) -> BackendExecutor:
    """
    Build the backend registered under `provider_key`.

    Raises:
        ValueError: If the key is not registered
    """
    try:
        factory = BACKENDS[provider_key]
    except KeyError:
        raise ValueError(
            f"Unknown backend: '{provider_key}'. Expected one of: {', '.join(sorted(BACKENDS))}."
        ) from None
    return factory(**kwargs)


__all__ = [
    "BACKENDS",
    "AnthropicBackend",
    "DeepSeekBackend",
    "GeminiBackend",
    "OpenAIBackend",
    "get_backend",
]
