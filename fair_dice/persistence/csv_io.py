"""
csv_io.py
Persistence utilities for writing fair dice game summaries to CSV files.
Every writer goes through append_rows_to_csv, which writes the header only when the file is new or empty.
"""

import os
import csv
from typing import Any, Dict, Iterable, List, Optional

SUMMARY_HEADER = [
    "game_id", "game_index", "timestamp", "chooser", "first_mover",
    "user_die", "computer_die", "user_roll", "computer_roll", "outcome",
    "verified", "error",
]


def get_summary_header() -> List[str]:
    return SUMMARY_HEADER.copy()


def append_rows_to_csv(rows: Iterable[Dict[str, Any]], csv_path: str, header: Optional[List[str]] = None) -> int:
    """
    Append summary rows, creating the file (and its directory) on first use.
    Args:
        rows: Dicts keyed by header names; missing keys are written empty.
        csv_path (str): Target file.
        header (list[str]|None): Column order, defaults to the summary header.
    Returns:
        int: Number of rows written.
    """
    header = header or get_summary_header()
    folder = os.path.dirname(csv_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    needs_header = not os.path.exists(csv_path) or os.path.getsize(csv_path) == 0
    count = 0
    with open(csv_path, "a", newline='', encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header, restval="")
        if needs_header:
            writer.writeheader()
        for row in rows:
            writer.writerow(row)
            count += 1
    return count


def append_row_to_csv(row: Dict[str, Any], csv_path: str, header: Optional[List[str]] = None) -> int:
    return append_rows_to_csv([row], csv_path, header)


def read_rows_from_csv(csv_path: str) -> List[Dict[str, str]]:
    with open(csv_path, newline='', encoding="utf-8") as f:
        return list(csv.DictReader(f))


def summary_row(transcript, game_id: str, timestamp: str, chooser: str = "", game_index=None, verified=None) -> Dict[str, Any]:
    """Flatten a GameTranscript into one summary CSV row."""
    return {
        "game_id": game_id,
        "game_index": game_index,
        "timestamp": timestamp,
        "chooser": chooser,
        "first_mover": transcript.first_mover,
        "user_die": transcript.user_die_index,
        "computer_die": transcript.computer_die_index,
        "user_roll": transcript.user_roll.value,
        "computer_roll": transcript.computer_roll.value,
        "outcome": transcript.outcome,
        "verified": verified,
        "error": None,
    }
