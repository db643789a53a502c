"""Run managed prompts on pluggable model backends and report every execution."""

from .domain import (
    ExecuteOptions,
    ExecutionErrorInfo,
    ExecutionReport,
    ExecutionRequest,
    ExecutionResult,
    ExecutionSettings,
    ExecutionStatus,
    PromptReference,
    PromptVersion,
)
from .errors import ClientError, ManagementServiceError, PromptNotFoundError
from .interfaces import BackendExecutor, PromptManagementClient
from .interpolation import interpolate_variables
from .orchestrator import ExecutionOrchestrator

__all__ = [
    "BackendExecutor",
    "ClientError",
    "ExecuteOptions",
    "ExecutionErrorInfo",
    "ExecutionOrchestrator",
    "ExecutionReport",
    "ExecutionRequest",
    "ExecutionResult",
    "ExecutionSettings",
    "ExecutionStatus",
    "ManagementServiceError",
    "PromptManagementClient",
    "PromptNotFoundError",
    "PromptReference",
    "PromptVersion",
    "interpolate_variables",
]
