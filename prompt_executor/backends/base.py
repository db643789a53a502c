from typing import Any, Optional

from ..domain import ExecutionErrorInfo, ExecutionResult, ExecutionStatus

DEFAULT_ERROR_STATUS = 500


def status_from_exception(e: BaseException) -> int:
    """Best-effort HTTP-like status code for a provider SDK exception."""
    for attr in ("status_code", "code", "status"):
        v = getattr(e, attr, None)
        if isinstance(v, int) and not isinstance(v, bool):
            return int(v)
    resp = getattr(e, "response", None)
    v = getattr(resp, "status_code", None)
    if isinstance(v, int):
        return v
    return DEFAULT_ERROR_STATUS


def error_result(e: BaseException, prompt_tokens: int = 0, completion_tokens: int = 0) -> ExecutionResult:
    return ExecutionResult(
        status=ExecutionStatus.ERROR,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
        error=ExecutionErrorInfo(
            error=e,
            printable_error=str(e) or e.__class__.__name__,
            status=status_from_exception(e),
            message=getattr(e, "message", None),
        ),
    )


def success_result(result: Optional[str], prompt_tokens: Any, completion_tokens: Any) -> ExecutionResult:
    # Costs are left to the management service.
    return ExecutionResult(
        status=ExecutionStatus.SUCCESS,
        prompt_tokens=_as_int(prompt_tokens),
        completion_tokens=_as_int(completion_tokens),
        result=result,
    )


def _as_int(v: Any) -> int:
    if isinstance(v, (int, float)):
        return max(int(v), 0)
    if isinstance(v, str):
        try:
            return max(int(float(v)), 0)
        except ValueError:
            return 0
    return 0
