"""Parsing of the summary and readings documents.

The documents are produced by an external export job. Parsing is strict
about the top-level shape (an object for the summary, an array for the
readings) and lenient about individual records: a record that cannot be
validated is skipped and reported in a single warning.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pyfleetmap.exceptions import FleetMapDataError
from pyfleetmap.models.reading import SensorReading
from pyfleetmap.models.summary import SensorSummary

_logger = logging.getLogger(__name__)

SUMMARY = "summary"
READINGS = "readings"

# Observed export corruption: a stray ``git`` token after a record separator.
_STRAY_GIT = re.compile(r",git\s*\n")


def repair_text(text: str) -> str:
    """Undo known corruption in exported documents."""
    if ",git" not in text:
        return text
    _logger.warning("Found stray ',git' in document; cleaning")
    return _STRAY_GIT.sub(",\n", text)


def decode_json(text: str, *, document: str) -> Any:
    """Decode *text* as JSON after :func:`repair_text`.

    Raises
    ------
    FleetMapDataError
        The text is not valid JSON.
    """
    cleaned = repair_text(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        start = max(0, exc.pos - 50)
        _logger.debug("JSON error context in %s document: %r", document, cleaned[start : exc.pos + 50])
        raise FleetMapDataError(
            f"{document} document is not valid JSON: {exc.msg} at position {exc.pos}",
            document=document,
        ) from exc


def parse_summary(data: Any) -> SensorSummary:
    """Validate a decoded summary document."""
    if not isinstance(data, dict):
        raise FleetMapDataError("summary document must be a JSON object", document=SUMMARY)
    try:
        return SensorSummary.model_validate(data)
    except ValidationError as exc:
        raise FleetMapDataError(f"summary document has an unexpected shape: {exc}", document=SUMMARY) from exc


def parse_readings(data: Any) -> tuple[SensorReading, ...]:
    """Validate a decoded readings document, skipping invalid records."""
    if not isinstance(data, list):
        raise FleetMapDataError(
            "readings document is not in the expected format (expected array)",
            document=READINGS,
        )

    readings: list[SensorReading] = []
    skipped = 0
    for index, item in enumerate(data):
        try:
            readings.append(SensorReading.model_validate(item))
        except ValidationError as exc:
            skipped += 1
            _logger.debug("Skipping reading #%d: %s", index, exc)
    if skipped:
        _logger.warning("Skipped %d of %d readings that failed validation", skipped, len(data))
    _logger.debug("Parsed %d readings", len(readings))
    return tuple(readings)


def loads_summary(text: str) -> SensorSummary:
    return parse_summary(decode_json(text, document=SUMMARY))


def loads_readings(text: str) -> tuple[SensorReading, ...]:
    return parse_readings(decode_json(text, document=READINGS))


def load_summary_file(path: str | Path) -> SensorSummary:
    return loads_summary(Path(path).read_text(encoding="utf-8"))


def load_readings_file(path: str | Path) -> tuple[SensorReading, ...]:
    return loads_readings(Path(path).read_text(encoding="utf-8"))
