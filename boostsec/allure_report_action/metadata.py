"""Write the descriptor files consumed and produced around an Allure run."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from boostsec.allure_report_action.models.executor import ExecutorInfo
from boostsec.allure_report_action.models.summary import (
    AllureSummary,
    Record,
    RecordBase,
    RecordResults,
    RecordSummary,
    SummaryStatistic,
    TestOutcome,
)

logger = logging.getLogger(__name__)

EXECUTOR_FILE_NAME = "executor.json"
ENVIRONMENT_FILE_NAME = "environment.properties"
RECORD_FILE_NAME = "record.json"
SUMMARY_FILE_PATH = Path("widgets") / "summary.json"

TEST_RESULT_ICONS: dict[str, str] = {
    "PASS": "✅",
    "FAIL": "❌",
}
UNKNOWN_TEST_RESULT_ICON = "❔"


class RecordError(RuntimeError):
    """Raised when record.json cannot be produced for a rendered report."""


async def write_executor_json(
    results_dir: Path,
    report_name: str,
    report_generation_id: str,
    build_order: int,
    build_url: str,
    report_url: str,
) -> Path:
    """Write executor.json so Allure links the report to its CI run."""
    executor = ExecutorInfo(
        report_name=report_name,
        build_name=f"Run {report_generation_id}",
        build_url=build_url,
        report_url=report_url,
        build_order=build_order,
    )
    data_file = results_dir / EXECUTOR_FILE_NAME
    data_file.write_text(
        json.dumps(executor.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info(f"Wrote {data_file}")
    return data_file


async def write_environment_file(
    results_dir: Path, env_info: Mapping[str, str]
) -> Path:
    """Write environment.properties, one key=value per line.

    Keys and values are written as-is; they must not contain '=' or newlines.
    """
    data_file = results_dir / ENVIRONMENT_FILE_NAME
    data_file.write_text(
        "\n".join(f"{key}={value}" for key, value in env_info.items()),
        encoding="utf-8",
    )
    logger.info(f"Wrote {data_file}")
    return data_file


def load_environment_extras(environment_file: Path) -> dict[str, str]:
    """Load extra environment.properties entries from a YAML mapping.

    Args:
        environment_file: YAML file with a flat mapping of names to values

    Returns:
        Mapping with values converted to strings

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the YAML is invalid or is not a mapping

    """
    if not environment_file.exists():
        raise FileNotFoundError(f"Environment file not found: {environment_file}")

    try:
        with environment_file.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {environment_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Environment file must contain a mapping: {environment_file}")

    return {
        str(key): "" if value is None else str(value) for key, value in data.items()
    }


def get_test_result(statistic: SummaryStatistic) -> TestOutcome:
    """Derive the overall outcome from the summary counts."""
    if statistic.failed + statistic.broken > 0:
        return "FAIL"
    if statistic.passed > 0:
        return "PASS"
    return "UNKNOWN"


def get_test_result_icon(test_result: TestOutcome) -> str:
    """Return the icon displayed for a test outcome."""
    return TEST_RESULT_ICONS.get(test_result, UNKNOWN_TEST_RESULT_ICON)


async def read_allure_summary(report_dir: Path) -> AllureSummary:
    """Read widgets/summary.json from a rendered report.

    Raises:
        RecordError: If the summary is missing or malformed

    """
    summary_file = report_dir / SUMMARY_FILE_PATH
    try:
        raw = summary_file.read_text(encoding="utf-8")
    except OSError as e:
        raise RecordError(f"Cannot read Allure summary {summary_file}: {e}") from e

    try:
        return AllureSummary.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        raise RecordError(f"Invalid Allure summary in {summary_file}: {e}") from e


async def write_record_json(report_dir: Path, record_base: RecordBase) -> RecordResults:
    """Write record.json next to the rendered report.

    Args:
        report_dir: Output directory of the rendered report
        record_base: Repository and identity fields of the record

    Returns:
        Computed outcome with passed, failed and total counts

    Raises:
        RecordError: If the Allure summary is missing or malformed, or the
            record cannot be written

    """
    summary = await read_allure_summary(report_dir)
    statistic = summary.statistic
    test_result = get_test_result(statistic)

    record = Record(
        **record_base.model_dump(),
        test_result=test_result,
        summary=RecordSummary(statistic=statistic, time=summary.time),
    )
    record_file = report_dir / RECORD_FILE_NAME
    try:
        record_file.write_text(
            json.dumps(record.model_dump(by_alias=True), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise RecordError(f"Cannot write {record_file}: {e}") from e
    logger.info(f"Wrote {record_file} with test result {test_result}")

    return RecordResults(
        test_result=test_result,
        passed=statistic.passed,
        failed=statistic.failed + statistic.broken,
        total=statistic.total,
    )
