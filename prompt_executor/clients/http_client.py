"""
REST client for the prompt management service.

Prompts are looked up by name, the deployed version is resolved for the
configured environment, and execution reports are posted back. Every
failure (transport, non-2xx, malformed body) surfaces as
ManagementServiceError.
"""
import logging
from typing import Any, Dict, Optional

import requests

from ..config import ClientSettings
from ..domain import ExecutionReport, PromptReference, PromptVersion
from ..errors import ManagementServiceError, PromptNotFoundError
from ..interfaces import PromptManagementClient

logger = logging.getLogger(__name__)


class HttpPromptManagementClient(PromptManagementClient):
    def __init__(self, settings: ClientSettings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Content-Type": "application/json",
                "X-Api-Key": settings.api_key,
                "X-Project-Id": settings.project_id,
            }
        )

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.settings.base_url}{path}"
        logger.debug("hub_request method=%s url=%s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.settings.timeout, **kwargs)
        except requests.RequestException as e:
            raise ManagementServiceError(f"{method} {url} failed: {e}") from e
        if resp.status_code == 404:
            raise PromptNotFoundError(_error_message(resp), status_code=404)
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise ManagementServiceError(_error_message(resp), status_code=resp.status_code) from e
        if resp.status_code == 204 or not (resp.text or "").strip():
            return {}
        try:
            return resp.json()
        except ValueError as e:
            raise ManagementServiceError(
                f"{method} {url} returned a non-JSON body", status_code=resp.status_code
            ) from e

    def find_prompt(self, name: str) -> PromptReference:
        body = self._request("GET", "/prompts", params={"name": name})
        if not body.get("id"):
            raise PromptNotFoundError(f"Prompt '{name}' not found", status_code=404)
        return PromptReference(id=str(body["id"]), name=body.get("name", name))

    def get_deployed_prompt_version(self, prompt_id: str) -> PromptVersion:
        body = self._request(
            "GET",
            f"/prompts/{prompt_id}/deployment",
            params={"environmentName": self.settings.environment},
        )
        return PromptVersion(
            sha=body.get("sha", ""),
            content=body.get("content", ""),
            settings=dict(body.get("settings") or {}),
        )

    def report_prompt_execution(self, report: ExecutionReport, auto_parse_json: bool = False) -> Any:
        body = self._request(
            "POST",
            "/reports",
            params={"autoParseJSON": "true" if auto_parse_json else "false"},
            json=report.to_payload(),
        )
        logger.info(
            "hub_report_saved prompt_id=%s sha=%s status=%s",
            report.prompt_id,
            report.prompt_version_sha,
            report.status.value,
        )
        return body.get("result")


def _error_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}: {resp.text[:200]}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}"
