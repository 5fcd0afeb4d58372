"""JSON report output."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from viewdiff.models.screenshot import ResultSet

logger = logging.getLogger(__name__)

REPORT_FILENAME = "log.json"


def write_report(
    results: ResultSet,
    destination_dir: str | Path,
    indent: Optional[int] = None,
) -> Path:
    """Write the comparison results to ``{destination_dir}/log.json``.

    Without ``indent`` the output is compact, e.g. ``"difference":12.5,``.
    """
    destination_dir = Path(destination_dir)
    destination_dir.mkdir(parents=True, exist_ok=True)
    output_path = destination_dir / REPORT_FILENAME

    records = [r.model_dump() for r in results]
    separators = (",", ":") if indent is None else None
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(records, f, indent=indent, separators=separators)

    logger.info("Wrote report with %d entries to %s", len(records), output_path)
    return output_path
