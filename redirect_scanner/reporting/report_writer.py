"""
Grouped redirect report.

Format (UTF-8, groups sorted by final host, members in stored order, one
blank line between groups):

    bar.com redirects
    foo.com

    c.com redirects
    a.com
    b.com
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from redirect_scanner.constants import REPORT_GROUP_HEADER
from redirect_scanner.errors import ReportWriteError

logger = logging.getLogger(__name__)


def render_report(grouped: Mapping[str, Sequence[str]]) -> str:
    """
    Render the grouping as report text.

    Args:
        grouped: Final host -> origin domains

    Returns:
        Report text ("" when there are no groups)
    """
    blocks = []
    for final_host in sorted(grouped):
        lines = [REPORT_GROUP_HEADER.format(host=final_host)]
        lines.extend(grouped[final_host])
        blocks.append("\n".join(lines) + "\n")
    return "\n".join(blocks)


def write_report(grouped: Mapping[str, Sequence[str]], destination: str | Path) -> Path:
    """
    Write the report, overwriting destination.

    Args:
        grouped: Final host -> origin domains
        destination: Output path

    Returns:
        Path written

    Raises:
        ReportWriteError: If destination cannot be created or written
    """
    path = Path(destination)
    try:
        path.write_text(render_report(grouped), encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(f"cannot write {path}: {e}") from e

    logger.debug(f"Wrote {len(grouped)} groups to {path}")
    return path
