import json
from typing import Any, List, Optional

import pytest

from prompt_executor.domain import (
    ExecutionReport,
    ExecutionRequest,
    ExecutionResult,
    PromptReference,
    PromptVersion,
)
from prompt_executor.interfaces import BackendExecutor, PromptManagementClient


class FakeClient(PromptManagementClient):
    def __init__(self, version: PromptVersion, prompt_id: str = "prompt-1") -> None:
        self.prompt_id = prompt_id
        self.version = version
        self.find_error: Optional[Exception] = None
        self.version_error: Optional[Exception] = None
        # one entry per report call: an exception to raise or a value to return
        self.report_outcomes: List[Any] = []
        self.reports: List[ExecutionReport] = []
        self.report_hints: List[bool] = []
        self.version_lookups: List[str] = []

    def find_prompt(self, name: str) -> PromptReference:
        if self.find_error is not None:
            raise self.find_error
        return PromptReference(id=self.prompt_id, name=name)

    def get_deployed_prompt_version(self, prompt_id: str) -> PromptVersion:
        self.version_lookups.append(prompt_id)
        if self.version_error is not None:
            raise self.version_error
        return self.version

    def report_prompt_execution(self, report: ExecutionReport, auto_parse_json: bool = False) -> Any:
        self.reports.append(report)
        self.report_hints.append(auto_parse_json)
        outcome = self.report_outcomes.pop(0) if self.report_outcomes else {"stored": report.result}
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeBackend(BackendExecutor):
    def __init__(self, result: Optional[ExecutionResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.requests: List[ExecutionRequest] = []

    def name(self) -> str:
        return "fake"

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def greeting_version() -> PromptVersion:
    return PromptVersion(
        sha="abc123",
        content="Hello, {{name}}!",
        settings={"model": "gpt-4o", "modelSettings": {"temperature": 0.2}, "provider": "OpenAI"},
    )


@pytest.fixture
def fake_client(greeting_version) -> FakeClient:
    return FakeClient(greeting_version)


@pytest.fixture
def make_backend():
    return FakeBackend


@pytest.fixture
def registry_dir(tmp_path):
    prompts = [
        {
            "id": "p-1",
            "name": "greeting",
            "deployed": {
                "sha": "sha-1",
                "content": "Hello, {{name}}!",
                "settings": {"model": "gpt-4o", "modelSettings": {"temperature": 0}},
            },
        },
        {"id": "p-2", "name": "draft-only"},
        {"id": "p-3", "name": "no-sha", "deployed": {"content": "Plain", "settings": {}}},
    ]
    (tmp_path / "prompts.json").write_text(json.dumps(prompts), encoding="utf-8")
    return tmp_path
