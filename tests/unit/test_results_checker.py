"""Tests for the allure-results precondition check."""

import logging
from pathlib import Path

import pytest

from boostsec.allure_report_action.results_checker import is_results_dir_ok


async def test_missing_directory_is_not_ok(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """is_results_dir_ok returns False and logs when the directory is missing."""
    missing = tmp_path / "allure-results"

    with caplog.at_level(logging.ERROR):
        assert await is_results_dir_ok(missing) is False

    assert "doesn't exist" in caplog.text
    assert str(missing) in caplog.text


async def test_directory_with_only_log_file_is_not_ok(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """is_results_dir_ok returns False without .json or .xml files."""
    (tmp_path / "output.log").write_text("log")

    with caplog.at_level(logging.ERROR):
        assert await is_results_dir_ok(tmp_path) is False

    assert "no json or xml files" in caplog.text


async def test_directory_with_json_result_is_ok(tmp_path: Path) -> None:
    """is_results_dir_ok returns True with a .json result file."""
    (tmp_path / "result1.json").write_text("{}")

    assert await is_results_dir_ok(tmp_path) is True


@pytest.mark.parametrize("file_name", ["junit.xml", "RESULT.JSON", "Suite.Xml"])
async def test_extension_match_is_case_insensitive(
    tmp_path: Path, file_name: str
) -> None:
    """is_results_dir_ok accepts .json and .xml in any case."""
    (tmp_path / file_name).write_text("")

    assert await is_results_dir_ok(tmp_path) is True


async def test_nested_result_files_are_ignored(tmp_path: Path) -> None:
    """Only top-level files count."""
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "result1.json").write_text("{}")

    assert await is_results_dir_ok(tmp_path) is False


async def test_directory_named_like_result_is_ignored(tmp_path: Path) -> None:
    """A directory ending in .json is not a result file."""
    (tmp_path / "fake.json").mkdir()

    assert await is_results_dir_ok(tmp_path) is False
