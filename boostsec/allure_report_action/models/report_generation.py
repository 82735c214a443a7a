"""Report generation identifier model and codec."""

from pydantic import BaseModel, Field

REPORT_GENERATION_ID_SEPARATOR = "_"


class InvalidReportGenerationIdError(ValueError):
    """Raised when a string is not a valid report generation identifier."""


class ReportGenerationId(BaseModel):
    """Identity of a single report generation."""

    git_hash: str = Field(..., description="Commit hash the report was built for")
    run_id: str = Field(..., description="CI run identifier")
    run_timestamp: int = Field(
        ..., description="Milliseconds since epoch captured at the start of the run"
    )

    def encode(self) -> str:
        """Return the directory name for this report generation."""
        return encode_report_generation_id(
            self.git_hash, self.run_id, self.run_timestamp
        )


def encode_report_generation_id(git_hash: str, run_id: str, run_timestamp: int) -> str:
    """Join the identity fields into a report generation identifier.

    None of the fields may contain the separator; the commit hash and run id
    provided by GitHub Actions never do.
    """
    return REPORT_GENERATION_ID_SEPARATOR.join(
        [git_hash, run_id, str(run_timestamp)]
    )


def decode_report_generation_id(report_generation_id: str) -> ReportGenerationId:
    """Split a report generation identifier back into its fields.

    Args:
        report_generation_id: Identifier, usually a report directory name

    Returns:
        Decoded identity

    Raises:
        InvalidReportGenerationIdError: If the identifier does not have three
            non-empty fields or the timestamp is not an integer

    """
    parts = report_generation_id.split(REPORT_GENERATION_ID_SEPARATOR)
    if len(parts) != 3 or not all(parts):
        raise InvalidReportGenerationIdError(
            f"Invalid report generation id: {report_generation_id!r}"
        )

    git_hash, run_id, run_timestamp = parts
    try:
        timestamp = int(run_timestamp)
    except ValueError as e:
        raise InvalidReportGenerationIdError(
            f"Invalid run timestamp in report generation id: {report_generation_id!r}"
        ) from e

    return ReportGenerationId(git_hash=git_hash, run_id=run_id, run_timestamp=timestamp)
