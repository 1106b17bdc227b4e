"""Capped list of the most recent grading results, kept in a JSON file."""

import json
import os
from typing import Any, Dict, List, Optional

import config
from utils.logger import get_logger

logger = get_logger()

class RecentResults:
    """Newest-first store holding at most `limit` result records."""

    def __init__(self, path: str = config.HISTORY_FILE, limit: int = config.RECENT_RESULTS_LIMIT):
        self.path = path
        self.limit = limit

    def load(self) -> List[Dict[str, Any]]:
        """Returns the stored records; a missing or unreadable file counts as empty."""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable history file {self.path}: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"History file {self.path} does not hold a list; ignoring it.")
            return []
        return records[:self.limit]

    def save(self, record: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Puts `record` first, drops anything past the limit and writes the file."""
        records = [record] + self.load()
        records = records[:self.limit]
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2)
        logger.debug(f"Saved result for {record.get('link')} to {self.path} ({len(records)} kept)")
        return records

    def get(self, index: int) -> Optional[Dict[str, Any]]:
        records = self.load()
        if 0 <= index < len(records):
            return records[index]
        return None

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
            logger.info(f"Cleared history file {self.path}")
