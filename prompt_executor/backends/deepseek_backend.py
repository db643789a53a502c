import logging

import requests

from ..config import PROVIDER_MODELS
from ..domain import ExecutionRequest, ExecutionResult
from ..interfaces import BackendExecutor
from .base import error_result, success_result

DEEPSEEK_URL = "https://api.deepseek.com/chat/completions"


class DeepSeekBackend(BackendExecutor):
    def __init__(self, session=None, url: str = DEEPSEEK_URL, timeout: float = 60) -> None:
        self.session = session or requests.Session()
        self.url = url
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def name(self) -> str:
        return "deepseek"

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        model = request.settings.model or PROVIDER_MODELS["deepseek"].default_model
        headers = {
            "Authorization": f"Bearer {PROVIDER_MODELS['deepseek'].api_key()}",
            "Content-Type": "application/json",
        }
        # model_settings cannot override the request itself
        payload = dict(request.settings.model_settings)
        payload.update(
            {
                "model": model,
                "messages": [{"role": "user", "content": request.content}],
                "stream": False,
            }
        )
        if request.options.auto_parse_json:
            payload.setdefault("response_format", {"type": "json_object"})
        self.logger.info(f"deepseek_request model={model} len={len(request.content)}")
        try:
            resp = self.session.post(self.url, headers=headers, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
            content = _message_content(body)
        except (requests.RequestException, ValueError) as e:
            self.logger.warning(f"deepseek_error model={model} error={e}")
            return error_result(e)
        usage = body.get("usage")
        if not isinstance(usage, dict):
            usage = {}
        self.logger.info(f"deepseek_ok model={model} tokens={usage.get('completion_tokens', 0)}")
        return success_result(content, usage.get("prompt_tokens", 0), usage.get("completion_tokens", 0))


def _message_content(body) -> str:
    if not isinstance(body, dict):
        raise ValueError(f"DeepSeek returned an unexpected body: {type(body).__name__}")
    choices = body.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        raise ValueError("DeepSeek returned no choices")
    message = choices[0].get("message") or {}
    return message.get("content") or ""
