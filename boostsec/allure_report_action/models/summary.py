"""Models for the Allure summary and the record artifact."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TestOutcome = Literal["PASS", "FAIL", "UNKNOWN"]


class SummaryStatistic(BaseModel):
    """Test case counts from widgets/summary.json."""

    failed: int = Field(default=0, description="Failed test cases")
    broken: int = Field(default=0, description="Broken test cases")
    skipped: int = Field(default=0, description="Skipped test cases")
    passed: int = Field(default=0, description="Passed test cases")
    unknown: int = Field(default=0, description="Test cases with unknown status")
    total: int = Field(default=0, description="Total test cases")


class SummaryTime(BaseModel):
    """Timing block from widgets/summary.json."""

    model_config = ConfigDict(populate_by_name=True)

    start: int | None = Field(default=None, description="Start time in ms")
    stop: int | None = Field(default=None, description="Stop time in ms")
    duration: int | None = Field(default=None, description="Duration in ms")
    min_duration: int | None = Field(default=None, alias="minDuration")
    max_duration: int | None = Field(default=None, alias="maxDuration")
    sum_duration: int | None = Field(default=None, alias="sumDuration")


class AllureSummary(BaseModel):
    """Summary document written by Allure into widgets/summary.json."""

    model_config = ConfigDict(populate_by_name=True)

    report_name: str | None = Field(default=None, alias="reportName")
    test_runs: list[object] = Field(default_factory=list, alias="testRuns")
    statistic: SummaryStatistic = Field(..., description="Test case counts")
    time: SummaryTime = Field(default_factory=SummaryTime, description="Timing")


class RecordSummary(BaseModel):
    """Summary embedded in record.json."""

    statistic: SummaryStatistic
    time: SummaryTime


class RecordBase(BaseModel):
    """Fields of record.json known before the report is rendered."""

    model_config = ConfigDict(populate_by_name=True)

    repo_name: str = Field(..., alias="repoName", description="Repository name")
    git_hash: str = Field(..., alias="gitHash", description="Commit hash")
    branch_name: str = Field(..., alias="branchName", description="Branch name")
    report_generation_id: str = Field(
        ..., alias="reportGenerationId", description="Report generation identifier"
    )


class Record(RecordBase):
    """Durable record of a report generation, kept after the report is pruned."""

    test_result: TestOutcome = Field(..., alias="testResult")
    summary: RecordSummary


class RecordResults(BaseModel):
    """Outcome of a rendered report returned to the caller."""

    test_result: TestOutcome = Field(..., description="Computed test outcome")
    passed: int = Field(..., description="Passed test cases")
    failed: int = Field(..., description="Failed plus broken test cases")
    total: int = Field(..., description="Total test cases")
