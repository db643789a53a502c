from typing import Any, Optional


class ClientError(Exception):
    """
    Raised by the orchestrator when a prompt cannot be resolved or its
    execution failed.

    - error: the original cause (lookup exception or backend error payload)
    - status: numeric status code reported by the backend, if any
    """

    def __init__(self, message: str, error: Any = None, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.error = error
        self.status = status

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.message} (status={self.status})"
        return self.message


class ManagementServiceError(Exception):
    """Raised by management clients on transport or service failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PromptNotFoundError(ManagementServiceError):
    pass
