"""Data models for report identity, configuration, and Allure artifacts."""

from boostsec.allure_report_action.models.action_config import (
    ActionConfig,
    PipelineContext,
)
from boostsec.allure_report_action.models.executor import ExecutorInfo
from boostsec.allure_report_action.models.publish_result import (
    CleanupResult,
    PublishResult,
)
from boostsec.allure_report_action.models.report_generation import (
    InvalidReportGenerationIdError,
    ReportGenerationId,
    decode_report_generation_id,
    encode_report_generation_id,
)
from boostsec.allure_report_action.models.summary import (
    AllureSummary,
    Record,
    RecordBase,
    RecordResults,
    RecordSummary,
    SummaryStatistic,
    SummaryTime,
    TestOutcome,
)

__all__ = [
    "ActionConfig",
    "AllureSummary",
    "CleanupResult",
    "ExecutorInfo",
    "InvalidReportGenerationIdError",
    "PipelineContext",
    "PublishResult",
    "Record",
    "RecordBase",
    "RecordResults",
    "RecordSummary",
    "ReportGenerationId",
    "SummaryStatistic",
    "SummaryTime",
    "TestOutcome",
    "decode_report_generation_id",
    "encode_report_generation_id",
]
