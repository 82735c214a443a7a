"""Models for the outcome of publishing and cleaning up reports."""

from pathlib import Path

from pydantic import BaseModel, Field

from boostsec.allure_report_action.models.summary import TestOutcome


class CleanupResult(BaseModel):
    """Outcome of a retention pass; cleanup never raises."""

    success: bool = Field(..., description="Whether every selected report was pruned")
    cleaned: list[str] = Field(
        default_factory=list, description="Report generation ids pruned"
    )
    skipped: list[str] = Field(
        default_factory=list, description="Directories ignored as undecodable"
    )
    error: str | None = Field(default=None, description="First error encountered")


class PublishResult(BaseModel):
    """Values published as step outputs."""

    report_url: str = Field(..., description="URL of the rendered report")
    report_history_url: str = Field(
        ..., description="URL of the report type directory holding all generations"
    )
    test_result: TestOutcome = Field(..., description="Computed test outcome")
    test_result_icon: str = Field(..., description="Icon for the test outcome")
    test_result_passed: int = Field(..., description="Passed test cases")
    test_result_failed: int = Field(..., description="Failed plus broken test cases")
    test_result_total: int = Field(..., description="Total test cases")
    report_generation_id: str = Field(..., description="Report generation identifier")
    report_path: Path = Field(..., description="Local report output directory")
    previous_report_generation_id: str | None = Field(
        default=None, description="Generation whose history seeded this report"
    )
    cleanup: CleanupResult | None = Field(
        default=None, description="Retention pass outcome, None when disabled"
    )
