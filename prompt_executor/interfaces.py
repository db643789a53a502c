from abc import ABC, abstractmethod
from typing import Any

from .domain import ExecutionReport, ExecutionRequest, ExecutionResult, PromptReference, PromptVersion


class BackendExecutor(ABC):
    """
    One model provider integration.

    Implementations encode ordinary provider failures in
    ExecutionResult.error; raising is reserved for programmer errors.
    """

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        ...


class PromptManagementClient(ABC):
    @abstractmethod
    def find_prompt(self, name: str) -> PromptReference:
        ...

    @abstractmethod
    def get_deployed_prompt_version(self, prompt_id: str) -> PromptVersion:
        ...

    @abstractmethod
    def report_prompt_execution(self, report: ExecutionReport, auto_parse_json: bool = False) -> Any:
        """
        Persist one execution report and return the stored result.

        auto_parse_json asks the service to decode the result as JSON first.
        """
        ...
