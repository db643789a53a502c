import hashlib
import json
import logging
import os
from typing import Any, Dict, List

from ..domain import ExecutionReport, PromptReference, PromptVersion
from ..errors import PromptNotFoundError
from ..interfaces import PromptManagementClient


class JsonlPromptRegistry(PromptManagementClient):
    """
    File-backed prompt management client.

    Layout under root_dir:
    - prompts.json: [{"id", "name", "deployed": {"sha", "content", "settings"}}]
    - reports/<prompt_id>.jsonl: one submitted report payload per line
    """

    def __init__(self, root_dir: str) -> None:
        self.root_dir = root_dir
        self.logger = logging.getLogger(__name__)

    def _prompts_path(self) -> str:
        return os.path.join(self.root_dir, "prompts.json")

    def _reports_path(self, prompt_id: str) -> str:
        return os.path.join(self.root_dir, "reports", prompt_id + ".jsonl")

    def _load_prompts(self) -> List[Dict[str, Any]]:
        path = self._prompts_path()
        if not os.path.exists(path):
            self.logger.info(f"load_prompts_missing path={path}")
            return []
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def find_prompt(self, name: str) -> PromptReference:
        for row in self._load_prompts():
            if row.get("name") == name:
                return PromptReference(id=str(row["id"]), name=name)
        raise PromptNotFoundError(f"Prompt '{name}' not found", status_code=404)

    def get_deployed_prompt_version(self, prompt_id: str) -> PromptVersion:
        for row in self._load_prompts():
            if str(row.get("id")) != prompt_id:
                continue
            deployed = row.get("deployed")
            if not deployed:
                break
            content = deployed.get("content", "")
            sha = deployed.get("sha") or hashlib.sha256(content.encode("utf-8")).hexdigest()
            return PromptVersion(sha=sha, content=content, settings=dict(deployed.get("settings") or {}))
        raise PromptNotFoundError(f"No deployed version for prompt '{prompt_id}'", status_code=404)

    def report_prompt_execution(self, report: ExecutionReport, auto_parse_json: bool = False) -> Any:
        path = self._reports_path(report.prompt_id)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        self.logger.info(f"save_report prompt_id={report.prompt_id} status={report.status.value} path={path}")
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(report.to_payload(), ensure_ascii=False) + "\n")
        if auto_parse_json and isinstance(report.result, str):
            try:
                return json.loads(report.result)
            except ValueError:
                self.logger.debug(f"auto_parse_json_skipped prompt_id={report.prompt_id}")
        return report.result

    def load_reports(self, prompt_id: str) -> List[Dict[str, Any]]:
        path = self._reports_path(prompt_id)
        if not os.path.exists(path):
            return []
        out: List[Dict[str, Any]] = []
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                out.append(json.loads(line))
        return out
