"""Link a new report generation to the trend history of a previous one."""

import logging
import shutil
from pathlib import Path

from boostsec.allure_report_action.models.report_generation import (
    InvalidReportGenerationIdError,
    ReportGenerationId,
    decode_report_generation_id,
)

logger = logging.getLogger(__name__)

HISTORY_DIR_NAME = "history"


async def find_previous_report_generation_id(
    report_type_dir: Path, git_hash: str
) -> str | None:
    """Find the most recent report generation built for a commit.

    Args:
        report_type_dir: Directory holding one subdirectory per report generation
        git_hash: Commit hash to match

    Returns:
        Report generation id with the latest run timestamp, or None if the
        directory doesn't exist or no generation matches

    """
    if not report_type_dir.is_dir():
        logger.info(f"Report type directory doesn't exist yet: {report_type_dir}")
        return None

    latest: ReportGenerationId | None = None
    latest_name: str | None = None
    for entry in report_type_dir.iterdir():
        if not entry.is_dir():
            continue
        try:
            info = decode_report_generation_id(entry.name)
        except InvalidReportGenerationIdError:
            logger.warning(f"Skipping unrecognized report directory: {entry}")
            continue

        if info.git_hash != git_hash:
            continue
        if latest is None or info.run_timestamp > latest.run_timestamp:
            latest = info
            latest_name = entry.name

    if latest_name is None:
        logger.info(f"No previous report found for commit {git_hash}")
        return None

    return latest_name


async def seed_history(
    report_type_dir: Path, previous_report_generation_id: str, results_dir: Path
) -> bool:
    """Copy the history of a previous report into the results directory.

    Allure merges results_dir/history into the history of the new report,
    which keeps the trend graphs continuous across generations.

    Args:
        report_type_dir: Directory holding one subdirectory per report generation
        previous_report_generation_id: Generation to take the history from
        results_dir: allure-results directory of the new generation

    Returns:
        True if history was copied, False if the previous report has none

    """
    source = report_type_dir / previous_report_generation_id / HISTORY_DIR_NAME
    if not source.is_dir():
        logger.warning(f"Previous report has no history directory: {source}")
        return False

    destination = results_dir / HISTORY_DIR_NAME
    logger.info(f"Copying history from {source} to {destination}")
    shutil.copytree(source, destination, dirs_exist_ok=True)
    return True
