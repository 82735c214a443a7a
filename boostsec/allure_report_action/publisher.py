"""Publish an Allure report generation to a GitHub Pages checkout."""

import logging
import time
from pathlib import Path

from boostsec.allure_report_action.allure import spawn_allure
from boostsec.allure_report_action.cleanup import cleanup_outdated_reports
from boostsec.allure_report_action.github_context import get_branch_name
from boostsec.allure_report_action.history import (
    find_previous_report_generation_id,
    seed_history,
)
from boostsec.allure_report_action.metadata import (
    get_test_result_icon,
    write_environment_file,
    write_executor_json,
    write_record_json,
)
from boostsec.allure_report_action.models.action_config import (
    ActionConfig,
    PipelineContext,
)
from boostsec.allure_report_action.models.publish_result import (
    CleanupResult,
    PublishResult,
)
from boostsec.allure_report_action.models.report_generation import (
    encode_report_generation_id,
)
from boostsec.allure_report_action.models.summary import RecordBase
from boostsec.allure_report_action.results_checker import is_results_dir_ok

logger = logging.getLogger(__name__)


class PreconditionError(RuntimeError):
    """Raised when the inputs don't allow a report to be published."""


def build_pages_url(*parts: str) -> str:
    """Join URL parts and encode spaces."""
    return "/".join(part.strip("/") for part in parts).replace(" ", "%20")


class ReportPublisher:
    """Renders, records and publishes one report generation."""

    def __init__(self, config: ActionConfig, context: PipelineContext) -> None:
        """Initialize publisher with action inputs and the run context."""
        self.config = config
        self.context = context

    async def publish(self, run_timestamp: int | None = None) -> PublishResult:
        """Publish the report of the current run.

        Args:
            run_timestamp: Milliseconds since epoch identifying this execution,
                defaults to now

        Returns:
            Values to publish as step outputs

        Raises:
            PreconditionError: If the pages checkout or results are unusable
            AllureGenerationError: If allure fails
            RecordError: If record.json cannot be written

        """
        if run_timestamp is None:
            run_timestamp = time.time_ns() // 1_000_000

        config = self.config
        context = self.context
        branch_name = get_branch_name(context.ref, context.head_ref)
        report_generation_id = encode_report_generation_id(
            context.sha, context.run_id, run_timestamp
        )
        report_type_dir = config.gh_pages_path / context.repo / config.report_type
        report_output_dir = report_type_dir / report_generation_id

        run_url = (
            f"{context.server_url.rstrip('/')}/{context.owner}/{context.repo}"
            f"/actions/runs/{context.run_id}"
        )
        report_history_url = build_pages_url(
            config.gh_pages_url, context.repo, config.report_type
        )
        report_url = build_pages_url(report_history_url, report_generation_id)

        logger.info(f"Report generation id: {report_generation_id}")
        logger.info(f"Branch name: {branch_name}")
        logger.info(f"Report output directory: {report_output_dir}")
        logger.info(f"Report URL: {report_url}")

        await self._check_preconditions()
        report_type_dir.mkdir(parents=True, exist_ok=True)

        previous_id = await self._link_history(report_type_dir)

        await write_executor_json(
            config.results_dir,
            report_name=config.report_type,
            report_generation_id=report_generation_id,
            build_order=int(context.run_id),
            build_url=run_url,
            report_url=report_url,
        )
        await write_environment_file(
            config.results_dir,
            {
                "GitRepo": context.repo,
                "BranchName": branch_name,
                "CommitHash": context.sha,
                "RunId": context.run_id,
                "ReportId": report_generation_id,
                **config.environment_extras,
            },
        )

        await spawn_allure(
            config.allure_path,
            config.results_dir,
            report_output_dir,
            single_file=config.single_file,
        )

        results = await write_record_json(
            report_output_dir,
            RecordBase(
                repo_name=context.repo,
                git_hash=context.sha,
                branch_name=branch_name,
                report_generation_id=report_generation_id,
            ),
        )

        cleanup_result = await self._cleanup(report_type_dir)

        return PublishResult(
            report_url=report_url,
            report_history_url=report_history_url,
            test_result=results.test_result,
            test_result_icon=get_test_result_icon(results.test_result),
            test_result_passed=results.passed,
            test_result_failed=results.failed,
            test_result_total=results.total,
            report_generation_id=report_generation_id,
            report_path=report_output_dir,
            previous_report_generation_id=previous_id,
            cleanup=cleanup_result,
        )

    async def _check_preconditions(self) -> None:
        """Fail before any change if the destination or results are unusable."""
        if not self.config.gh_pages_path.is_dir():
            raise PreconditionError(
                "Folder with GitHub Pages files doesn't exist: "
                f"{self.config.gh_pages_path}"
            )

        if not await is_results_dir_ok(self.config.results_dir):
            raise PreconditionError(
                f"There were issues with the allure-results in "
                f"{self.config.results_dir}, see error above."
            )

    async def _link_history(self, report_type_dir: Path) -> str | None:
        """Seed the results with the history of the previous generation."""
        git_hash = self.config.prev_git_hash or self.context.sha
        previous_id = await find_previous_report_generation_id(
            report_type_dir, git_hash
        )
        if previous_id is None:
            logger.info("Starting a fresh trend history")
            return None

        logger.info(f"Previous report generation: {previous_id}")
        await seed_history(report_type_dir, previous_id, self.config.results_dir)
        return previous_id

    async def _cleanup(self, report_type_dir: Path) -> CleanupResult | None:
        """Run the retention policy; a failure is logged and otherwise ignored."""
        if self.config.max_reports <= 0:
            logger.info("Cleanup of outdated reports is disabled")
            return None

        result = await cleanup_outdated_reports(
            report_type_dir, self.config.max_reports
        )
        if not result.success:
            logger.warning(f"Cleanup of outdated reports failed: {result.error}")
        return result
