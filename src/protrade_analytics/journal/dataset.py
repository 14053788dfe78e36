"""Journal dataset loading.

A dataset file is the JSON the journal app saves::

    {"trades": [...], "sessions": [...], "strategies": [...]}

A bare JSON list is read as the trades alone.  Keys may be camelCase
(as saved by the app) or snake_case.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from ..core.errors import DatasetError
from ..core.models import Dataset

logger = logging.getLogger(__name__)


def parse_dataset(raw: object) -> Dataset:
    """Validate decoded JSON into a :class:`Dataset`."""
    if isinstance(raw, list):
        raw = {"trades": raw}
    if not isinstance(raw, dict):
        raise DatasetError(f"Expected a JSON object or list, got {type(raw).__name__}")
    try:
        return Dataset.model_validate(raw)
    except ValidationError as exc:
        raise DatasetError(f"Invalid dataset: {exc}") from exc


def load_dataset(path: str | Path) -> Dataset:
    """Read and validate a dataset file.

    Raises:
        DatasetError: The file is missing, is not JSON or fails validation.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DatasetError(f"Cannot read dataset {path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Invalid JSON in {path}: {exc}") from exc

    dataset = parse_dataset(raw)
    logger.debug(
        "Loaded dataset %s: trades=%d sessions=%d strategies=%d",
        path, len(dataset.trades), len(dataset.sessions), len(dataset.strategies),
    )
    return dataset
