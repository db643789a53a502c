from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional


class ExecutionStatus(str, Enum):
    SUCCESS = "Success"
    ERROR = "Error"


@dataclass(frozen=True)
class PromptReference:
    id: str
    name: str = ""


@dataclass(frozen=True)
class PromptVersion:
    """
    A deployed revision of a prompt.

    - settings: raw settings mapping as stored by the management service;
      carries "model" and "modelSettings" and possibly other keys.
    """
    sha: str
    content: str
    settings: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ExecuteOptions:
    auto_parse_json: bool = False


@dataclass(frozen=True)
class ExecutionSettings:
    model: str
    model_settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_version_settings(cls, settings: Dict[str, Any]) -> "ExecutionSettings":
        # Only the model and its settings reach the backend.
        return cls(
            model=settings.get("model", ""),
            model_settings=dict(settings.get("modelSettings") or {}),
        )


@dataclass(frozen=True)
class ExecutionRequest:
    content: str
    settings: ExecutionSettings
    options: ExecuteOptions = field(default_factory=ExecuteOptions)


@dataclass(frozen=True)
class ExecutionErrorInfo:
    error: Any
    printable_error: str
    status: int
    message: Optional[str] = None


@dataclass
class ExecutionResult:
    """
    Raw outcome of one backend call.

    Provider failures are carried in `error`; `result` is only set on success.
    """
    status: ExecutionStatus
    prompt_tokens: int = 0
    completion_tokens: int = 0
    prompt_cost: float = 0.0
    completion_cost: float = 0.0
    error: Optional[ExecutionErrorInfo] = None
    result: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class ExecutionReport:
    prompt_id: str
    prompt_version_sha: str
    status: ExecutionStatus
    content: str
    interpolated_content: str
    variables: Dict[str, str]
    settings: Dict[str, Any]
    result: Optional[str]
    error: Optional[str]
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int
    prompt_cost: float
    completion_cost: float
    total_cost: float
    duration: int

    @classmethod
    def from_execution(
        cls,
        prompt: PromptReference,
        version: PromptVersion,
        variables: Dict[str, str],
        interpolated_content: str,
        execution: ExecutionResult,
        duration: int,
    ) -> "ExecutionReport":
        status = ExecutionStatus.ERROR if execution.failed else ExecutionStatus(execution.status)
        return cls(
            prompt_id=prompt.id,
            prompt_version_sha=version.sha,
            status=status,
            content=version.content,
            interpolated_content=interpolated_content,
            variables=dict(variables),
            settings=dict(version.settings),
            result=execution.result,
            error=execution.error.printable_error if execution.error else None,
            prompt_tokens=execution.prompt_tokens,
            completion_tokens=execution.completion_tokens,
            total_tokens=execution.prompt_tokens + execution.completion_tokens,
            prompt_cost=execution.prompt_cost,
            completion_cost=execution.completion_cost,
            total_cost=execution.prompt_cost + execution.completion_cost,
            duration=duration,
        )

    def degraded(self) -> "ExecutionReport":
        """Fallback copy submitted when the first report is rejected."""
        return replace(self, status=ExecutionStatus.ERROR, result=None)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "prompt": {"connect": {"id": self.prompt_id}},
            "promptVersionSha": self.prompt_version_sha,
            "status": self.status.value,
            "content": self.content,
            "interpolatedContent": self.interpolated_content,
            "variables": dict(self.variables),
            "settings": dict(self.settings),
            "promptTokens": self.prompt_tokens,
            "completionTokens": self.completion_tokens,
            "totalTokens": self.total_tokens,
            "promptCost": self.prompt_cost,
            "completionCost": self.completion_cost,
            "totalCost": self.total_cost,
            "duration": self.duration,
        }
        if self.result is not None:
            payload["result"] = self.result
        if self.error is not None:
            payload["error"] = self.error
        return payload
