"""Configuration models for the report action."""

from pathlib import Path

from pydantic import BaseModel, Field

DEFAULT_ALLURE_PATH = "/allure-commandline/bin/allure"


class ActionConfig(BaseModel):
    """Validated inputs of the report action."""

    results_dir: Path = Field(..., description="Directory with allure-results")
    gh_pages_path: Path = Field(..., description="Checkout of the GitHub Pages branch")
    gh_pages_url: str = Field(..., description="Base URL the pages are served from")
    report_type: str = Field(..., description="Report type label, e.g. 'e2e'")
    prev_git_hash: str | None = Field(
        default=None,
        description="Commit hash whose latest report seeds the trend history",
    )
    max_reports: int = Field(
        default=0, ge=0, description="Active reports to keep, 0 disables cleanup"
    )
    allure_path: str = Field(
        default=DEFAULT_ALLURE_PATH, description="Path to the allure executable"
    )
    single_file: bool = Field(
        default=False, description="Generate the report as a single HTML file"
    )
    environment_extras: dict[str, str] = Field(
        default_factory=dict,
        description="Additional entries for environment.properties",
    )


class PipelineContext(BaseModel):
    """GitHub Actions context of the current workflow run."""

    sha: str = Field(..., description="Commit hash being built")
    run_id: str = Field(..., pattern=r"^\d+$", description="Workflow run identifier")
    ref: str = Field(..., description="Git ref that triggered the run")
    head_ref: str | None = Field(
        default=None, description="Pull request head branch, when triggered by a PR"
    )
    owner: str = Field(..., description="Repository owner")
    repo: str = Field(..., description="Repository name")
    server_url: str = Field(
        default="https://github.com", description="GitHub server URL"
    )
