"""Model for the Allure executor.json file."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ExecutorInfo(BaseModel):
    """CI provenance shown by Allure and used for trend navigation."""

    model_config = ConfigDict(populate_by_name=True)

    report_name: str = Field(..., alias="reportName")
    # Allure fails with a NullPointerException when type is missing
    type: Literal["github"] = "github"
    name: str = "GitHub Actions"
    build_name: str = Field(..., alias="buildName")
    build_url: str = Field(..., alias="buildUrl", description="Link to the CI run")
    report_url: str = Field(
        ..., alias="reportUrl", description="Required to open previous reports in TREND"
    )
    build_order: int = Field(..., alias="buildOrder")
