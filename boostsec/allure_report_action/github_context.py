"""Read the GitHub Actions run context and publish step outputs."""

import json
import logging
import uuid
from collections.abc import Mapping
from pathlib import Path

import typer

from boostsec.allure_report_action.models.action_config import PipelineContext

logger = logging.getLogger(__name__)


def normalize_branch_name(branch_name: str) -> str:
    """Make a branch name safe to use as a single path component."""
    return branch_name.replace("/", "_").replace(".", "_")


def get_branch_name(ref: str, head_ref: str | None = None) -> str:
    """Get the branch name of the run.

    Args:
        ref: Git ref that triggered the run (e.g., "refs/heads/main")
        head_ref: Head branch of the pull request, if any

    Returns:
        Normalized branch name

    """
    branch_name = head_ref or ref.removeprefix("refs/heads/")
    return normalize_branch_name(branch_name)


def _read_pull_request_head_ref(event_path: str | None) -> str | None:
    """Read pull_request.head.ref from the webhook event payload."""
    if not event_path:
        return None

    path = Path(event_path)
    if not path.is_file():
        logger.warning(f"GitHub event payload not found: {event_path}")
        return None

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid GitHub event payload in {event_path}: {e}")
        return None

    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not pull_request:
        return None
    head_ref: str | None = pull_request.get("head", {}).get("ref")
    return head_ref


def load_pipeline_context(environ: Mapping[str, str]) -> PipelineContext:
    """Build the pipeline context from GitHub Actions environment variables.

    Raises:
        ValueError: If a required variable is missing or GITHUB_REPOSITORY is
            not in owner/repo form

    """
    required = ["GITHUB_SHA", "GITHUB_RUN_ID", "GITHUB_REF", "GITHUB_REPOSITORY"]
    missing = [name for name in required if not environ.get(name)]
    if missing:
        raise ValueError(
            f"Missing GitHub Actions environment variables: {', '.join(missing)}"
        )

    owner, _, repo = environ["GITHUB_REPOSITORY"].partition("/")
    if not owner or not repo:
        raise ValueError(
            f"Invalid GITHUB_REPOSITORY: {environ['GITHUB_REPOSITORY']}. "
            "Expected owner/repo"
        )

    return PipelineContext(
        sha=environ["GITHUB_SHA"],
        run_id=environ["GITHUB_RUN_ID"],
        ref=environ["GITHUB_REF"],
        head_ref=_read_pull_request_head_ref(environ.get("GITHUB_EVENT_PATH")),
        owner=owner,
        repo=repo,
        server_url=environ.get("GITHUB_SERVER_URL") or "https://github.com",
    )


def format_output(name: str, value: object) -> str:
    """Format a step output in the GITHUB_OUTPUT file syntax."""
    text = str(value)
    if "\n" not in text:
        return f"{name}={text}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{text}\n{delimiter}\n"


def set_output(name: str, value: object, environ: Mapping[str, str]) -> None:
    """Publish a step output.

    Appends to the file named by GITHUB_OUTPUT, or prints to stdout when the
    variable is unset (local runs).
    """
    line = format_output(name, value)
    output_file = environ.get("GITHUB_OUTPUT")
    if not output_file:
        typer.echo(line, nl=False)
        return

    with Path(output_file).open("a", encoding="utf-8") as f:
        f.write(line)
