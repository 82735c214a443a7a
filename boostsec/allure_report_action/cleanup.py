"""Retention policy for published report generations."""

import logging
import shutil
from collections.abc import Sequence
from pathlib import Path

from boostsec.allure_report_action.metadata import RECORD_FILE_NAME
from boostsec.allure_report_action.models.publish_result import CleanupResult
from boostsec.allure_report_action.models.report_generation import (
    InvalidReportGenerationIdError,
    ReportGenerationId,
    decode_report_generation_id,
)

logger = logging.getLogger(__name__)

INDEX_FILE_NAME = "index.html"
RECORD_REDIRECT_HTML = (
    f"<head><meta http-equiv='refresh' content='0; URL=./{RECORD_FILE_NAME}'></head>\n"
)
# A pruned report holds record.json and index.html only
PRUNED_REPORT_MAX_ENTRIES = 2


def is_active_report(report_dir: Path) -> bool:
    """Tell whether a report directory still holds a full rendered report."""
    return len(list(report_dir.iterdir())) > PRUNED_REPORT_MAX_ENTRIES


def _decode_report_ids(
    report_generation_ids: Sequence[str],
) -> tuple[dict[str, ReportGenerationId], list[str]]:
    """Decode directory names, separating out the unrecognized ones."""
    decoded: dict[str, ReportGenerationId] = {}
    invalid: list[str] = []
    for report_generation_id in report_generation_ids:
        try:
            decoded[report_generation_id] = decode_report_generation_id(
                report_generation_id
            )
        except InvalidReportGenerationIdError:
            invalid.append(report_generation_id)
    return decoded, invalid


def determine_reports_to_cleanup(
    report_generation_ids: Sequence[str], max_active_reports: int
) -> list[str]:
    """Select the active report generations to prune.

    The most recent generation of each of the max_active_reports most recently
    built commits is kept; every other generation is returned. Identifiers that
    cannot be decoded are neither kept nor returned.

    Args:
        report_generation_ids: Names of the active report directories
        max_active_reports: Number of distinct commits to keep, 0 keeps all

    Returns:
        Report generation ids to prune, in input order

    """
    if max_active_reports <= 0:
        return []

    decoded, invalid = _decode_report_ids(report_generation_ids)
    for name in invalid:
        logger.warning(f"Ignoring unrecognized report directory: {name}")

    by_recency = sorted(
        decoded.items(), key=lambda item: item[1].run_timestamp, reverse=True
    )
    git_hashes_to_keep: set[str] = set()
    ids_to_keep: set[str] = set()
    for report_generation_id, info in by_recency:
        if info.git_hash in git_hashes_to_keep:
            continue
        git_hashes_to_keep.add(info.git_hash)
        ids_to_keep.add(report_generation_id)
        if len(git_hashes_to_keep) >= max_active_reports:
            break

    return [
        report_generation_id
        for report_generation_id in report_generation_ids
        if report_generation_id in decoded and report_generation_id not in ids_to_keep
    ]


def cleanup_report(report_dir: Path) -> None:
    """Prune a report down to record.json and a redirect to it.

    Without record.json the directory is emptied and no redirect is written.
    """
    logger.info(f"Cleaning up report: {report_dir}")
    for entry in report_dir.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        elif entry.name != RECORD_FILE_NAME:
            entry.unlink()

    if (report_dir / RECORD_FILE_NAME).is_file():
        (report_dir / INDEX_FILE_NAME).write_text(
            RECORD_REDIRECT_HTML, encoding="utf-8"
        )
    else:
        logger.warning(f"No {RECORD_FILE_NAME} in {report_dir}, nothing left to link")


async def cleanup_outdated_reports(
    report_type_dir: Path, max_active_reports: int
) -> CleanupResult:
    """Apply the retention policy to a report type directory.

    Failures are logged and reported in the result, never raised, so a failed
    cleanup cannot fail a published report.

    Args:
        report_type_dir: Directory holding one subdirectory per report generation
        max_active_reports: Number of distinct commits to keep active

    Returns:
        Pruned and skipped directories and the first error encountered

    """
    try:
        report_dirs = [entry for entry in report_type_dir.iterdir() if entry.is_dir()]
        active_dirs = {
            report_dir.name: report_dir
            for report_dir in report_dirs
            if is_active_report(report_dir)
        }
    except OSError as e:
        logger.exception("Cleanup of outdated reports failed")
        return CleanupResult(success=False, error=str(e))

    logger.info(
        f"Found {len(active_dirs)} active reports of {len(report_dirs)} "
        f"in {report_type_dir}"
    )
    active_ids = sorted(active_dirs)
    _, skipped = _decode_report_ids(active_ids)
    to_cleanup = determine_reports_to_cleanup(active_ids, max_active_reports)

    cleaned: list[str] = []
    error: str | None = None
    for report_generation_id in to_cleanup:
        try:
            cleanup_report(active_dirs[report_generation_id])
        except OSError as e:
            logger.error(f"Failed to clean up report {report_generation_id}: {e}")
            error = error or str(e)
            continue
        cleaned.append(report_generation_id)

    logger.info(f"Cleaned up {len(cleaned)} reports")
    return CleanupResult(
        success=error is None, cleaned=cleaned, skipped=skipped, error=error
    )
