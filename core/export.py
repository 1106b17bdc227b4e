"""CSV and JSON snapshots of a grading result."""

import csv
import io
import json
import os
from typing import Any, Dict, Optional

import config
from utils.logger import get_logger
from utils.error_handler import GradingError

logger = get_logger()

CSV_HEADER = ['Submission Link', 'Assignment Type', 'Accessibility', 'Required Files', 'Structure', 'Score']
EXPORT_FORMATS = ('csv', 'json')

def _pass_fail(result: Dict[str, Any], key: str) -> str:
    return 'Pass' if result['results'][key]['passed'] else 'Fail'

def to_csv(result: Dict[str, Any]) -> str:
    """Renders the header row and one data row, every field double-quoted."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    writer.writerow([
        result['link'],
        result['assignmentType'],
        _pass_fail(result, 'accessibility'),
        _pass_fail(result, 'requiredFiles'),
        _pass_fail(result, 'structure'),
        result['score'],
    ])
    return buffer.getvalue().rstrip('\n')

def to_json(result: Dict[str, Any]) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)

def export_result(result: Optional[Dict[str, Any]], fmt: str, directory: str = config.EXPORT_DIR) -> Optional[str]:
    """Writes result.csv or result.json into `directory`.

    Returns:
        The written file path, or None when there is no result to export.

    Raises:
        GradingError: If the format is not csv or json.
    """
    fmt = fmt.lower()
    if fmt not in EXPORT_FORMATS:
        raise GradingError(f"Unsupported export format '{fmt}'. Use one of: {', '.join(EXPORT_FORMATS)}.")
    if not result:
        logger.info("Export requested with no result available; nothing written.")
        return None

    content = to_csv(result) if fmt == 'csv' else to_json(result)
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, f"result.{fmt}")
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    logger.info(f"Exported result for {result.get('link')} to {path}")
    return path
