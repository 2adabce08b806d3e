"""Load exported round records from JSON"""

import json
import logging
from pathlib import Path
from typing import List, Union

from .round import Round
from putting_analyzer.utils.errors import RecordError

logger = logging.getLogger(__name__)


def load_rounds(path: Union[str, Path]) -> List[Round]:
    """
    Read rounds from a JSON export

    Accepts either a bare list of round records or an object with a
    ``rounds`` list.

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file is not valid JSON
        RecordError: If a record is malformed
    """
    path = Path(path)
    with path.open() as f:
        payload = json.load(f)

    if isinstance(payload, dict):
        payload = payload.get("rounds")
    if not isinstance(payload, list):
        raise RecordError("expected a list of rounds or {'rounds': [...]}", field="rounds", record="export")

    rounds = [Round.from_dict(raw) for raw in payload]
    logger.debug(f"Loaded {len(rounds)} rounds from {path}")
    return rounds
