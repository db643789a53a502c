import logging
import math
import time
from typing import Any, Dict, Optional

from .domain import (
    ExecuteOptions,
    ExecutionReport,
    ExecutionRequest,
    ExecutionResult,
    ExecutionSettings,
    PromptReference,
    PromptVersion,
)
from .errors import ClientError
from .interfaces import BackendExecutor, PromptManagementClient
from .interpolation import interpolate_variables

EXECUTION_FAILED_MESSAGE = "Prompt execution failed. Check the history to see what went wrong."


class ExecutionOrchestrator:
    """
    Runs a managed prompt end to end:
    - resolve the prompt and its deployed version
    - interpolate variables and execute on the backend
    - report the execution back to the management service

    Every execution that reaches the backend is reported, including failed
    ones. Resolution failures are raised before anything is reported.
    """

    def __init__(self, client: PromptManagementClient, backend: BackendExecutor) -> None:
        self.client = client
        self.backend = backend
        self.logger = logging.getLogger(__name__)

    def _get_prompt(self, prompt_name: str) -> PromptReference:
        try:
            return self.client.find_prompt(prompt_name)
        except Exception as e:
            self.logger.error("prompt_resolution_failed prompt=%s error=%s", prompt_name, e)
            raise ClientError(str(e), error=e) from e

    def _get_prompt_version(self, prompt_id: str) -> PromptVersion:
        try:
            return self.client.get_deployed_prompt_version(prompt_id)
        except Exception as e:
            self.logger.error("version_resolution_failed prompt_id=%s error=%s", prompt_id, e)
            raise ClientError(str(e), error=e) from e

    def _classify(self, execution: ExecutionResult) -> Optional[ClientError]:
        if execution.error is None:
            return None
        err = ClientError(
            EXECUTION_FAILED_MESSAGE,
            error=execution.error.error,
            status=execution.error.status,
        )
        if isinstance(execution.error.error, BaseException):
            err.__cause__ = execution.error.error
        return err

    def _report(self, report: ExecutionReport, auto_parse_json: bool) -> Any:
        try:
            return self.client.report_prompt_execution(report, auto_parse_json)
        except Exception as e:
            self.logger.warning(
                "report_failed prompt_id=%s sha=%s error=%s; submitting fallback report",
                report.prompt_id,
                report.prompt_version_sha,
                e,
            )
            # A failing fallback raises its own error in place of `e`.
            self.client.report_prompt_execution(report.degraded())
            raise

    def run(
        self,
        prompt_name: str,
        variables: Optional[Dict[str, str]] = None,
        options: Optional[ExecuteOptions] = None,
    ) -> Any:
        """
        Execute the deployed version of `prompt_name` and return the result
        stored by the management service.

        Raises ClientError when the prompt cannot be resolved or the backend
        reports a failure. A backend failure is raised only after its report
        was submitted. If the report submission itself fails, a fallback
        report is sent and the submission error is raised instead.
        """
        variables = dict(variables or {})
        options = options or ExecuteOptions()
        self.logger.info("run_start prompt=%s backend=%s variables=%s", prompt_name, self.backend.name(), len(variables))

        prompt = self._get_prompt(prompt_name)
        version = self._get_prompt_version(prompt.id)
        interpolated_content = interpolate_variables(version.content, variables)

        start = time.perf_counter()
        execution = self.backend.execute(
            ExecutionRequest(
                content=interpolated_content,
                settings=ExecutionSettings.from_version_settings(version.settings),
                options=options,
            )
        )
        execution_error = self._classify(execution)
        duration = math.ceil((time.perf_counter() - start) * 1000)

        if execution_error is not None:
            self.logger.warning(
                "execution_failed prompt=%s sha=%s status=%s error=%s",
                prompt_name,
                version.sha,
                execution.error.status,
                execution.error.printable_error,
            )

        report = ExecutionReport.from_execution(
            prompt=prompt,
            version=version,
            variables=variables,
            interpolated_content=interpolated_content,
            execution=execution,
            duration=duration,
        )
        reported = self._report(report, options.auto_parse_json)
        self.logger.info(
            "run_reported prompt=%s sha=%s status=%s duration_ms=%s total_tokens=%s",
            prompt_name,
            version.sha,
            report.status.value,
            duration,
            report.total_tokens,
        )
        # Reporting does not suppress a backend failure.
        if execution_error is not None:
            raise execution_error
        return reported
