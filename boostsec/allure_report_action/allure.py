"""Run the Allure command line to render a report."""

import asyncio
import contextlib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

OUTPUT_CHUNK_SIZE = 64 * 1024


class AllureGenerationError(RuntimeError):
    """Raised when allure generate fails or cannot be started."""

    def __init__(self, message: str, exit_code: int | None = None) -> None:
        """Initialize with the failure message and the process exit code."""
        super().__init__(message)
        self.exit_code = exit_code


def build_allure_command(
    allure_path: str, results_dir: Path, report_dir: Path, single_file: bool = False
) -> list[str]:
    """Build the allure generate command line."""
    command = [allure_path, "generate", "--clean"]
    if single_file:
        command.append("--single-file")
    command.extend([str(results_dir), "-o", str(report_dir)])
    return command


async def spawn_allure(
    allure_path: str,
    results_dir: Path,
    report_dir: Path,
    single_file: bool = False,
) -> None:
    """Render a report from allure-results and wait for allure to exit.

    The combined stdout and stderr of allure is forwarded to the log line by
    line. No timeout is applied.

    Args:
        allure_path: Path to the allure executable
        results_dir: allure-results directory to render
        report_dir: Output directory, wiped by --clean
        single_file: Render a single self-contained HTML file

    Raises:
        AllureGenerationError: If allure cannot be started or exits non-zero

    """
    command = build_allure_command(allure_path, results_dir, report_dir, single_file)
    logger.info(f"Running: {' '.join(command)}")

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
        )
    except OSError as e:
        raise AllureGenerationError(f"Failed to start allure: {e}") from e

    try:
        if process.stdout is not None:
            await _log_output(process.stdout)
    except BaseException:
        if process.returncode is None:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
        await process.wait()
        raise

    returncode = await process.wait()
    if returncode != 0:
        logger.error(f"allure generate failed with exit code {returncode}")
        raise AllureGenerationError(
            f"allure generate failed with exit code {returncode}",
            exit_code=returncode,
        )

    logger.info(f"Report generated in {report_dir}")


async def _log_output(stream: asyncio.StreamReader) -> None:
    """Log process output line by line, whatever the line length."""
    pending = b""
    while chunk := await stream.read(OUTPUT_CHUNK_SIZE):
        *lines, pending = (pending + chunk).split(b"\n")
        for line in lines:
            _log_line(line)
    if pending:
        _log_line(pending)


def _log_line(line: bytes) -> None:
    logger.info(f"allure: {line.decode(errors='replace').rstrip()}")
