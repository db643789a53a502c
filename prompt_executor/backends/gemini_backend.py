import logging

from ..config import PROVIDER_MODELS
from ..domain import ExecutionRequest, ExecutionResult
from ..interfaces import BackendExecutor
from .base import error_result, success_result


class GeminiBackend(BackendExecutor):
    def __init__(self, model_factory=None) -> None:
        # model_factory(model_id, generation_config) -> object with generate_content()
        self._model_factory = model_factory
        self.logger = logging.getLogger(__name__)

    def name(self) -> str:
        return "gemini"

    def _get_model(self, model: str, generation_config):
        if self._model_factory is not None:
            return self._model_factory(model, generation_config)
        import google.generativeai as genai

        genai.configure(api_key=PROVIDER_MODELS["gemini"].api_key())
        return genai.GenerativeModel(model, generation_config=generation_config)

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        model = request.settings.model or PROVIDER_MODELS["gemini"].default_model
        generation_config = dict(request.settings.model_settings)
        if request.options.auto_parse_json:
            generation_config.setdefault("response_mime_type", "application/json")
        self.logger.info(f"gemini_request model={model} len={len(request.content)}")
        try:
            r = self._get_model(model, generation_config or None).generate_content(request.content)
            text = getattr(r, "text", "")
        except Exception as e:
            self.logger.warning(f"gemini_error model={model} error={e}")
            return error_result(e)
        um = getattr(r, "usage_metadata", None)
        prompt_tokens = getattr(um, "prompt_token_count", 0) if um is not None else 0
        completion_tokens = getattr(um, "candidates_token_count", 0) if um is not None else 0
        self.logger.info(f"gemini_ok model={model} tokens={completion_tokens} len={len(text)}")
        return success_result(text, prompt_tokens, completion_tokens)
