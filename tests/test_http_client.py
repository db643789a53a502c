import json

import pytest
import requests

from prompt_executor.clients.http_client import HttpPromptManagementClient
from prompt_executor.config import ClientSettings
from prompt_executor.domain import ExecutionReport, ExecutionResult, ExecutionStatus, PromptReference, PromptVersion
from prompt_executor.errors import ManagementServiceError, PromptNotFoundError


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None) -> None:
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)


class FakeSession:
    def __init__(self, responses) -> None:
        self.headers = {}
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        outcome = self.responses.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _client(*responses) -> HttpPromptManagementClient:
    settings = ClientSettings(base_url="https://hub.test/api", api_key="k", project_id="proj", environment="Staging")
    return HttpPromptManagementClient(settings, session=FakeSession(responses))


def test_sets_auth_headers() -> None:
    client = _client()
    assert client.session.headers["X-Api-Key"] == "k"
    assert client.session.headers["X-Project-Id"] == "proj"


def test_find_prompt_and_deployment() -> None:
    client = _client(
        FakeResponse(body={"id": "p-1", "name": "greeting"}),
        FakeResponse(body={"sha": "s", "content": "Hi {{x}}", "settings": {"model": "m"}}),
    )

    prompt = client.find_prompt("greeting")
    version = client.get_deployed_prompt_version(prompt.id)

    assert prompt == PromptReference(id="p-1", name="greeting")
    assert version == PromptVersion(sha="s", content="Hi {{x}}", settings={"model": "m"})
    calls = client.session.calls
    assert calls[0][:2] == ("GET", "https://hub.test/api/prompts")
    assert calls[0][2]["params"] == {"name": "greeting"}
    assert calls[1][1] == "https://hub.test/api/prompts/p-1/deployment"
    assert calls[1][2]["params"] == {"environmentName": "Staging"}


def test_report_posts_payload_and_returns_result() -> None:
    client = _client(FakeResponse(body={"id": "r-1", "result": {"a": 1}}))
    report = ExecutionReport.from_execution(
        prompt=PromptReference(id="p-1"),
        version=PromptVersion(sha="s", content="c"),
        variables={},
        interpolated_content="c",
        execution=ExecutionResult(status=ExecutionStatus.SUCCESS, result='{"a": 1}'),
        duration=3,
    )

    assert client.report_prompt_execution(report, auto_parse_json=True) == {"a": 1}
    method, url, kwargs = client.session.calls[0]
    assert (method, url) == ("POST", "https://hub.test/api/reports")
    assert kwargs["params"] == {"autoParseJSON": "true"}
    assert kwargs["json"]["promptVersionSha"] == "s"


def test_not_found_maps_to_prompt_not_found() -> None:
    client = _client(FakeResponse(status_code=404, body={"message": "Prompt not found"}))

    with pytest.raises(PromptNotFoundError, match="Prompt not found"):
        client.find_prompt("missing")


def test_server_error_and_transport_error_map_to_service_error() -> None:
    client = _client(
        FakeResponse(status_code=503, text="unavailable"),
        requests.ConnectionError("refused"),
    )

    with pytest.raises(ManagementServiceError) as excinfo:
        client.find_prompt("greeting")
    assert excinfo.value.status_code == 503

    with pytest.raises(ManagementServiceError, match="refused"):
        client.find_prompt("greeting")


def test_response_without_id_is_not_found() -> None:
    client = _client(FakeResponse(body={}))

    with pytest.raises(PromptNotFoundError):
        client.find_prompt("greeting")


def test_empty_report_reply_counts_as_stored() -> None:
    client = _client(FakeResponse(status_code=204, body=None, text=""))
    report = ExecutionReport.from_execution(
        prompt=PromptReference(id="p-1"),
        version=PromptVersion(sha="s", content="c"),
        variables={},
        interpolated_content="c",
        execution=ExecutionResult(status=ExecutionStatus.SUCCESS, result="Hi"),
        duration=1,
    )

    assert client.report_prompt_execution(report) is None
    assert len(client.session.calls) == 1
