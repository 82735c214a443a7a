"""CLI entry point for the Allure report action."""

import asyncio
import logging
import os
import sys
from pathlib import Path

import typer

from boostsec.allure_report_action.allure import AllureGenerationError
from boostsec.allure_report_action.github_context import (
    load_pipeline_context,
    set_output,
)
from boostsec.allure_report_action.metadata import (
    RecordError,
    load_environment_extras,
)
from boostsec.allure_report_action.models.action_config import (
    DEFAULT_ALLURE_PATH,
    ActionConfig,
)
from boostsec.allure_report_action.models.publish_result import PublishResult
from boostsec.allure_report_action.publisher import PreconditionError, ReportPublisher

# Configure logging - force reconfiguration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,  # Force reconfiguration even if already set up
)
logger = logging.getLogger(__name__)

app = typer.Typer()


def _fail(message: str) -> typer.Exit:
    """Report a fatal error and return the exit to raise."""
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


@app.command()
def main(
    results_dir: Path = typer.Option(  # noqa: B008
        ..., help="Path to the allure-results directory"
    ),
    gh_pages_path: Path = typer.Option(  # noqa: B008
        ..., help="Path to the GitHub Pages checkout"
    ),
    gh_pages_url: str = typer.Option(..., help="Base URL of the GitHub Pages site"),
    report_type: str = typer.Option(..., help="Report type label (e.g., e2e)"),
    prev_git_hash: str = typer.Option(
        "", help="Commit hash whose latest report seeds the trend history"
    ),
    max_reports: int = typer.Option(
        0, min=0, help="Active reports to keep per report type, 0 disables cleanup"
    ),
    allure_path: str = typer.Option(
        DEFAULT_ALLURE_PATH, help="Path to the allure executable"
    ),
    single_file: bool = typer.Option(
        False, help="Generate the report as a single HTML file"
    ),
    environment_file: Path | None = typer.Option(  # noqa: B008
        None, help="YAML mapping of extra environment.properties entries"
    ),
) -> None:
    """Generate an Allure report and publish it to GitHub Pages."""
    logger.info("=" * 80)
    logger.info("Allure Report Action - Starting")
    logger.info("=" * 80)
    logger.info(f"Results directory: {results_dir}")
    logger.info(f"GitHub Pages path: {gh_pages_path}")
    logger.info(f"GitHub Pages URL: {gh_pages_url}")
    logger.info(f"Report type: {report_type}")
    logger.info(f"Previous git hash: {prev_git_hash or '(current commit)'}")
    logger.info(f"Max reports: {max_reports}")

    try:
        context = load_pipeline_context(os.environ)
        environment_extras = (
            load_environment_extras(environment_file) if environment_file else {}
        )
        config = ActionConfig(
            results_dir=results_dir,
            gh_pages_path=gh_pages_path,
            gh_pages_url=gh_pages_url,
            report_type=report_type,
            prev_git_hash=prev_git_hash or None,
            max_reports=max_reports,
            allure_path=allure_path,
            single_file=single_file,
            environment_extras=environment_extras,
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Invalid configuration: {e}")
        raise _fail(str(e))

    logger.info(f"Repository: {context.owner}/{context.repo}")
    logger.info(f"Commit: {context.sha}")
    logger.info(f"Run ID: {context.run_id}")

    publisher = ReportPublisher(config, context)
    try:
        result = asyncio.run(publisher.publish())
    except PreconditionError as e:
        logger.error(str(e))
        raise _fail(str(e))
    except AllureGenerationError as e:
        logger.error(f"Report generation failed: {e}")
        raise _fail(str(e))
    except RecordError as e:
        logger.error(f"Writing the report record failed: {e}")
        raise _fail(str(e))
    except Exception as e:
        logger.exception("Report publishing failed")
        raise _fail(str(e))

    _publish_outputs(result)

    logger.info("=" * 80)
    logger.info(f"Test result: {result.test_result_icon} {result.test_result}")
    logger.info(
        f"Passed: {result.test_result_passed}, Failed: {result.test_result_failed}, "
        f"Total: {result.test_result_total}"
    )
    logger.info(f"Report URL: {result.report_url}")
    logger.info("=" * 80)


def _publish_outputs(result: PublishResult) -> None:
    """Write the step outputs of a published report."""
    outputs = {
        "report_url": result.report_url,
        "report_history_url": result.report_history_url,
        "test_result": result.test_result,
        "test_result_icon": result.test_result_icon,
        "test_result_passed": result.test_result_passed,
        "test_result_failed": result.test_result_failed,
        "test_result_total": result.test_result_total,
        "report_generation_id": result.report_generation_id,
        "report_path": result.report_path,
    }
    for name, value in outputs.items():
        set_output(name, value, os.environ)


if __name__ == "__main__":  # pragma: no cover
    app()
