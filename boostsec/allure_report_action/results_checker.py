"""Check that an allure-results directory can be rendered."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

ALLURE_RESULT_EXTENSIONS = (".json", ".xml")


async def is_results_dir_ok(results_dir: Path) -> bool:
    """Check that the results directory exists and holds result files.

    Only top-level files are considered; extensions match case-insensitively.

    Args:
        results_dir: Path to the allure-results directory

    Returns:
        True if at least one .json or .xml file is present, False otherwise

    """
    if not results_dir.is_dir():
        logger.error(f"allure-results folder doesn't exist: {results_dir}")
        return False

    result_files = [
        entry
        for entry in results_dir.iterdir()
        if entry.is_file() and entry.name.lower().endswith(ALLURE_RESULT_EXTENSIONS)
    ]
    if not result_files:
        logger.error(f"allure-results folder has no json or xml files: {results_dir}")
        return False

    logger.info(f"Found {len(result_files)} result files in {results_dir}")
    return True
