"""Report file writers."""

import json
from pathlib import Path

from tradelens.libraries.performance.models import PerformanceReport
from tradelens.system import LoggerFactory

logger = LoggerFactory.get_logger()


def write_json_report(report: PerformanceReport, output_path: Path | str) -> Path:
    """
    Write a performance report as JSON.

    Decimals are written as strings to keep their exact value; dates and
    timestamps as ISO-8601. Parent directories are created as needed.

    Args:
        report: Report to write
        output_path: Destination file

    Returns:
        Path of the written file
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(report.model_dump(mode="json"), f, indent=2)

    logger.info("reporting.json_written", path=str(path), trades=report.summary.total_trades)
    return path
