"""Tests for executor, environment and record descriptors."""

import json
from pathlib import Path
from typing import Any

import pytest

from boostsec.allure_report_action.metadata import (
    RecordError,
    get_test_result,
    get_test_result_icon,
    load_environment_extras,
    write_environment_file,
    write_executor_json,
    write_record_json,
)
from boostsec.allure_report_action.models.summary import RecordBase, SummaryStatistic


def _write_summary(report_dir: Path, statistic: dict[str, int]) -> None:
    widgets = report_dir / "widgets"
    widgets.mkdir(parents=True, exist_ok=True)
    summary: dict[str, Any] = {
        "reportName": "Allure Report",
        "testRuns": [],
        "statistic": statistic,
        "time": {
            "start": 1700000000000,
            "stop": 1700000005000,
            "duration": 5000,
            "minDuration": 5,
            "maxDuration": 2000,
            "sumDuration": 4800,
        },
    }
    (widgets / "summary.json").write_text(json.dumps(summary))


@pytest.fixture
def record_base() -> RecordBase:
    """Create the record fields known before rendering."""
    return RecordBase(
        repo_name="my-repo",
        git_hash="abc123",
        branch_name="feature_login",
        report_generation_id="abc123_17_1700000000000",
    )


@pytest.mark.parametrize(
    ("statistic", "expected"),
    [
        (SummaryStatistic(failed=1, broken=0, passed=5, total=6), "FAIL"),
        (SummaryStatistic(failed=0, broken=2, passed=5, total=7), "FAIL"),
        (SummaryStatistic(failed=0, broken=0, passed=5, total=5), "PASS"),
        (SummaryStatistic(failed=0, broken=0, passed=0, skipped=3, total=3), "UNKNOWN"),
        (SummaryStatistic(), "UNKNOWN"),
    ],
)
def test_get_test_result(statistic: SummaryStatistic, expected: str) -> None:
    """Failures or broken tests fail, any pass passes, otherwise unknown."""
    assert get_test_result(statistic) == expected


@pytest.mark.parametrize(
    ("test_result", "icon"),
    [("PASS", "✅"), ("FAIL", "❌"), ("UNKNOWN", "❔")],
)
def test_get_test_result_icon(test_result: Any, icon: str) -> None:
    """Each outcome has its own icon."""
    assert get_test_result_icon(test_result) == icon


async def test_write_executor_json(tmp_path: Path) -> None:
    """write_executor_json writes the fixed executor shape."""
    path = await write_executor_json(
        tmp_path,
        report_name="e2e",
        report_generation_id="abc123_17_100",
        build_order=17,
        build_url="https://github.com/org/repo/actions/runs/17",
        report_url="https://org.github.io/pages/repo/e2e/abc123_17_100",
    )

    assert path == tmp_path / "executor.json"
    data = json.loads(path.read_text())
    assert data == {
        "reportName": "e2e",
        "type": "github",
        "name": "GitHub Actions",
        "buildName": "Run abc123_17_100",
        "buildUrl": "https://github.com/org/repo/actions/runs/17",
        "reportUrl": "https://org.github.io/pages/repo/e2e/abc123_17_100",
        "buildOrder": 17,
    }


async def test_write_executor_json_propagates_errors(tmp_path: Path) -> None:
    """A missing results directory is a fatal error."""
    with pytest.raises(OSError):
        await write_executor_json(
            tmp_path / "missing",
            report_name="e2e",
            report_generation_id="abc123_17_100",
            build_order=17,
            build_url="https://github.com/org/repo/actions/runs/17",
            report_url="https://org.github.io/pages/repo/e2e/abc123_17_100",
        )


async def test_write_environment_file_keeps_order(tmp_path: Path) -> None:
    """write_environment_file writes key=value lines in insertion order."""
    path = await write_environment_file(
        tmp_path,
        {"GitRepo": "my-repo", "BranchName": "main", "CommitHash": "abc123"},
    )

    assert path.read_text() == "GitRepo=my-repo\nBranchName=main\nCommitHash=abc123"


async def test_write_record_json(tmp_path: Path, record_base: RecordBase) -> None:
    """write_record_json writes record.json and returns the outcome."""
    _write_summary(
        tmp_path,
        {
            "failed": 1,
            "broken": 2,
            "skipped": 0,
            "passed": 7,
            "unknown": 0,
            "total": 10,
        },
    )

    results = await write_record_json(tmp_path, record_base)

    assert results.test_result == "FAIL"
    assert results.passed == 7
    assert results.failed == 3
    assert results.total == 10

    record = json.loads((tmp_path / "record.json").read_text())
    assert record["repoName"] == "my-repo"
    assert record["gitHash"] == "abc123"
    assert record["branchName"] == "feature_login"
    assert record["reportGenerationId"] == "abc123_17_1700000000000"
    assert record["testResult"] == "FAIL"
    assert record["summary"]["statistic"]["broken"] == 2
    assert record["summary"]["time"]["duration"] == 5000
    assert record["summary"]["time"]["maxDuration"] == 2000


async def test_write_record_json_missing_summary(
    tmp_path: Path, record_base: RecordBase
) -> None:
    """A report without widgets/summary.json is incomplete."""
    with pytest.raises(RecordError, match="Cannot read Allure summary"):
        await write_record_json(tmp_path, record_base)

    assert not (tmp_path / "record.json").exists()


async def test_write_record_json_malformed_summary(
    tmp_path: Path, record_base: RecordBase
) -> None:
    """Invalid JSON in the summary is fatal."""
    (tmp_path / "widgets").mkdir()
    (tmp_path / "widgets" / "summary.json").write_text("{not json")

    with pytest.raises(RecordError, match="Invalid Allure summary"):
        await write_record_json(tmp_path, record_base)


async def test_write_record_json_summary_without_statistic(
    tmp_path: Path, record_base: RecordBase
) -> None:
    """A summary missing its statistic block is fatal."""
    (tmp_path / "widgets").mkdir()
    (tmp_path / "widgets" / "summary.json").write_text('{"reportName": "x"}')

    with pytest.raises(RecordError):
        await write_record_json(tmp_path, record_base)


def test_load_environment_extras(tmp_path: Path) -> None:
    """load_environment_extras reads a flat YAML mapping as strings."""
    env_file = tmp_path / "environment.yaml"
    env_file.write_text("Browser: chromium\nWorkers: 4\nHeadless: true\nEmpty:\n")

    assert load_environment_extras(env_file) == {
        "Browser": "chromium",
        "Workers": "4",
        "Headless": "True",
        "Empty": "",
    }


def test_load_environment_extras_empty_file(tmp_path: Path) -> None:
    """An empty file has no extras."""
    env_file = tmp_path / "environment.yaml"
    env_file.write_text("")

    assert load_environment_extras(env_file) == {}


def test_load_environment_extras_rejects_list(tmp_path: Path) -> None:
    """The YAML document must be a mapping."""
    env_file = tmp_path / "environment.yaml"
    env_file.write_text("- a\n- b\n")

    with pytest.raises(ValueError, match="must contain a mapping"):
        load_environment_extras(env_file)


def test_load_environment_extras_invalid_yaml(tmp_path: Path) -> None:
    """Invalid YAML raises ValueError."""
    env_file = tmp_path / "environment.yaml"
    env_file.write_text("key: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        load_environment_extras(env_file)


def test_load_environment_extras_missing_file(tmp_path: Path) -> None:
    """A missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_environment_extras(tmp_path / "missing.yaml")
