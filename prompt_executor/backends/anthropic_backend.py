import logging

from ..config import PROVIDER_MODELS
from ..domain import ExecutionRequest, ExecutionResult
from ..interfaces import BackendExecutor
from .base import error_result, success_result

DEFAULT_MAX_TOKENS = 1024


class AnthropicBackend(BackendExecutor):
    """
    Anthropic Claude backend.
    """

    def __init__(self, client=None) -> None:
        self._client = client
        self.logger = logging.getLogger(__name__)

    def name(self) -> str:
        return "claude"

    def _get_client(self):
        if self._client is None:
            import anthropic

            self._client = anthropic.Anthropic(api_key=PROVIDER_MODELS["claude"].api_key())
        return self._client

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        model = request.settings.model or PROVIDER_MODELS["claude"].default_model
        kwargs = dict(request.settings.model_settings)
        max_tokens = kwargs.pop("max_tokens", DEFAULT_MAX_TOKENS)
        self.logger.info(f"claude_request model={model} len={len(request.content)}")
        try:
            msg = self._get_client().messages.create(
                model=model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": request.content}],
                **kwargs,
            )
        except Exception as e:
            self.logger.warning(f"claude_error model={model} error={e}")
            return error_result(e)
        text = "".join([c.text for c in msg.content if getattr(c, "type", "") == "text"])
        self.logger.debug(f"claude_ok model={model} len={len(text)}")
        return success_result(
            text,
            getattr(msg.usage, "input_tokens", 0),
            getattr(msg.usage, "output_tokens", 0),
        )
