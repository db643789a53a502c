import logging

from ..config import PROVIDER_MODELS
from ..domain import ExecutionRequest, ExecutionResult
from ..interfaces import BackendExecutor
from .base import error_result, success_result


class OpenAIBackend(BackendExecutor):
    """
    OpenAI chat completions backend.

    model_settings are passed through as request parameters
    (temperature, max_completion_tokens, ...).
    """

    def __init__(self, client=None) -> None:
        self._client = client
        self.logger = logging.getLogger(__name__)

    def name(self) -> str:
        return "gpt"

    def _get_client(self):
        if self._client is None:
            from openai import OpenAI

            self._client = OpenAI(api_key=PROVIDER_MODELS["gpt"].api_key() or None)
        return self._client

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        model = request.settings.model or PROVIDER_MODELS["gpt"].default_model
        kwargs = dict(request.settings.model_settings)
        if request.options.auto_parse_json:
            kwargs.setdefault("response_format", {"type": "json_object"})
        self.logger.info("gpt_request model=%s len=%s", model, len(request.content))
        try:
            r = self._get_client().chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": request.content}],
                **kwargs,
            )
        except Exception as e:
            self.logger.warning("gpt_error model=%s error=%s", model, e)
            return error_result(e)
        content = r.choices[0].message.content if r.choices else ""
        usage = getattr(r, "usage", None)
        self.logger.debug("gpt_ok model=%s len=%s", model, len(content or ""))
        return success_result(
            content,
            getattr(usage, "prompt_tokens", 0),
            getattr(usage, "completion_tokens", 0),
        )
