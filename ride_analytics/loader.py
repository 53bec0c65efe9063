"""Loading ledger exports from disk."""

import csv
import logging
from pathlib import Path
from typing import Dict, List, Union

logger = logging.getLogger(__name__)


def load_ledger_csv(csv_path: Union[str, Path]) -> List[Dict[str, str]]:
    """Load ride rows from a CSV export of the ledger.

    The first row must hold the sheet headers. Cells are returned as raw
    strings; normalization happens later.

    Args:
        csv_path: Path to the CSV export

    Returns:
        List of row dictionaries keyed by header

    Raises:
        FileNotFoundError: If the file does not exist
    """
    csv_path = Path(csv_path)

    # utf-8-sig drops the BOM spreadsheet exports tend to add
    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        rows = [
            {key.strip(): value for key, value in row.items() if key is not None}
            for row in reader
        ]

    logger.debug(f"Loaded {len(rows)} rows from {csv_path}")
    return rows
